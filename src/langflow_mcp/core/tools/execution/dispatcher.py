"""Dispatch tool invocations through lookup, validation, execution and rendering."""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import to_jsonable_python

from ...exceptions import LangflowMCPError, MissingArgumentsError, ToolValidationError
from ...logger import get_logger
from ..models import ToolCallRequest, ToolDefinition, ToolResponse
from ..registry import ToolRegistry
from ..schema import SchemaValidator

logger = get_logger(__name__)


class ToolDispatcher:
    """Routes a tool invocation to its handler and wraps the outcome.

    Missing arguments and unknown tool names are raised to the caller as
    protocol errors. Anything that goes wrong inside a known tool (invalid
    arguments, domain errors, backend failures) is rendered into a normal
    response whose text carries the tool's error label. Tools registered
    with ``propagate_validation_errors`` raise their validation errors instead.

    The dispatcher keeps no state between invocations, so concurrent calls
    need no coordination.
    """

    # Errors rendered into the response rather than raised.
    RECOVERABLE_ERRORS = (LangflowMCPError,)

    def __init__(self, registry: ToolRegistry) -> None:
        """Initialize the dispatcher.

        Args:
            registry: Registry used to resolve tool definitions.
        """
        self._registry = registry

    @property
    def registry(self) -> ToolRegistry:
        return self._registry

    def list_tools(self) -> list[ToolDefinition]:
        return self._registry.list_tools()

    async def dispatch(self, request: ToolCallRequest) -> ToolResponse:
        """Handle a single tool invocation.

        Args:
            request: The invocation with the tool name and raw arguments.

        Returns:
            A response envelope with exactly one text block.

        Raises:
            MissingArgumentsError: If the request carries no arguments.
            UnknownToolError: If the tool is not registered.
            ToolValidationError: If validation fails for a tool that propagates it.
        """
        logger.info(f"Handling tool call: {request.name}")

        if request.arguments is None:
            logger.warning(f"Tool call '{request.name}' rejected: no arguments.")
            raise MissingArgumentsError()

        tool = self._registry.get(request.name)

        try:
            args = SchemaValidator.validate(tool.args_model, request.arguments, tool_name=tool.name)
        except ToolValidationError as exc:
            if tool.propagate_validation_errors:
                raise
            logger.warning(f"Validation error for '{tool.name}': {exc.message}")
            return self._render(tool.error_label, exc.to_dict())

        try:
            result = await tool.handler(args)
        except self.RECOVERABLE_ERRORS as exc:
            logger.warning(f"Recoverable error in '{tool.name}': {exc} ({type(exc).__name__})")
            return self._render(tool.error_label, exc.to_dict())

        logger.info(f"Tool '{tool.name}' executed successfully.")
        return self._render(tool.success_label, result)

    @staticmethod
    def _render(label: str, payload: Any) -> ToolResponse:
        body = json.dumps(to_jsonable_python(payload), indent=2, ensure_ascii=False)
        return ToolResponse.from_text(f"{label}\n{body}")
