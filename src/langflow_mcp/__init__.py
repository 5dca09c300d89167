"""Langflow MCP - tools over stored Langflow workflows and a live Langflow flow."""

from .version import VERSION
from .config import Settings
from .core import (
    ToolDefinition,
    ToolCallRequest,
    ToolResponse,
    ToolRegistry,
    ToolDispatcher,
    SchemaValidator,
    get_logger,
    setup_logging,
)
from .backend import LangflowClient, SupabaseFlowTable, StoreResponse
from .flows import FlowService, NodeService, build_registry
from .server import FlowMCPServer, build_server

__version__ = VERSION

__all__ = [
    "Settings",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolResponse",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
    "get_logger",
    "setup_logging",
    "LangflowClient",
    "SupabaseFlowTable",
    "StoreResponse",
    "FlowService",
    "NodeService",
    "build_registry",
    "FlowMCPServer",
    "build_server",
]
