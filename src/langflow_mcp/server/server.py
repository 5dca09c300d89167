"""Expose a ToolDispatcher as an MCP server over stdio."""

from __future__ import annotations

import json
from contextlib import AsyncExitStack, asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from ..backend import LangflowClient, SupabaseFlowTable
from ..config import Settings
from ..core.exceptions import MissingArgumentsError, ToolValidationError, UnknownToolError
from ..core.logger import get_logger
from ..core.tools import ToolCallRequest, ToolDispatcher
from ..flows import FlowService, NodeService, build_registry
from ..version import VERSION

logger = get_logger(__name__)

__all__ = ["FlowMCPServer", "build_server"]


class FlowMCPServer:
    """MCP front end for a ``ToolDispatcher``.

    The ``tools/list`` and ``tools/call`` handlers are installed directly on
    the low-level server so that missing arguments, unknown tools and
    propagated validation errors reach the client as JSON-RPC errors, while
    every other outcome is an ordinary tool result.
    """

    def __init__(self, dispatcher: ToolDispatcher, name: str = "langflow-mcp", version: str = VERSION) -> None:
        """Initializes the server.

        Args:
            dispatcher: Dispatcher holding the tools of this deployment.
            name: Server name announced during initialization.
            version: Server version announced during initialization.
        """
        self.dispatcher = dispatcher
        self.server = Server(name, version=version)
        self.server.request_handlers[types.ListToolsRequest] = self._handle_list_tools
        self.server.request_handlers[types.CallToolRequest] = self._handle_call_tool

    def list_tools(self) -> list[types.Tool]:
        """Returns the advertised tools in registration order."""
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.parameters or {"type": "object"})
            for tool in self.dispatcher.list_tools()
        ]

    async def call_tool(self, name: str, arguments: Optional[Dict[str, Any]]) -> types.CallToolResult:
        """Invokes a tool.

        Args:
            name: Tool name.
            arguments: Raw arguments, None if the client sent none.

        Returns:
            The tool result with a single text block.

        Raises:
            McpError: For missing arguments, unknown tools and propagated
                validation errors.
        """
        try:
            response = await self.dispatcher.dispatch(ToolCallRequest(name=name, arguments=arguments))
        except MissingArgumentsError as exc:
            raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=exc.message)) from exc
        except UnknownToolError as exc:
            raise McpError(
                types.ErrorData(code=types.INVALID_PARAMS, message=exc.message, data={"tool": exc.tool_name})
            ) from exc
        except ToolValidationError as exc:
            issues = exc.issues()
            raise McpError(
                types.ErrorData(code=types.INVALID_PARAMS, message=f"Invalid input: {json.dumps(issues)}", data=issues)
            ) from exc

        return types.CallToolResult(
            content=[types.TextContent(type="text", text=block.text) for block in response.content]
        )

    async def _handle_list_tools(self, req: types.ListToolsRequest) -> types.ServerResult:
        return types.ServerResult(types.ListToolsResult(tools=self.list_tools()))

    async def _handle_call_tool(self, req: types.CallToolRequest) -> types.ServerResult:
        logger.debug("Tool call request: %s", req.params.model_dump_json())
        return types.ServerResult(await self.call_tool(req.params.name, req.params.arguments))

    async def run_stdio(self) -> None:
        """Serves requests over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("MCP server '%s' listening on stdio.", self.server.name)
            await self.server.run(read_stream, write_stream, self.server.create_initialization_options())


@asynccontextmanager
async def build_server(settings: Settings) -> AsyncIterator[FlowMCPServer]:
    """Composes backends, services and the variant's registry.

    Backend clients are closed when the context exits.

    Args:
        settings: Server configuration.

    Yields:
        The ready-to-run server.
    """
    async with AsyncExitStack() as stack:
        flow_service: Optional[FlowService] = None
        node_service: Optional[NodeService] = None

        if settings.variant in ("flows", "all"):
            table = await stack.enter_async_context(
                SupabaseFlowTable(settings.supabase_url, settings.supabase_key, table=settings.supabase_table)
            )
            flow_service = FlowService(table)
        if settings.variant in ("nodes", "all"):
            client = await stack.enter_async_context(LangflowClient(settings.langflow_url, api_key=settings.api_key))
            node_service = NodeService(client, settings.flow_id)

        registry = build_registry(settings.variant, flow_service=flow_service, node_service=node_service)
        yield FlowMCPServer(ToolDispatcher(registry))
        logger.debug("Shutting down MCP server.")
