"""Public exports for the tool registry, validation and dispatch core."""

from .exceptions import (
    LangflowMCPError,
    ToolRegistrationError,
    MissingArgumentsError,
    UnknownToolError,
    ToolValidationError,
    Violation,
)
from .logger import get_logger, setup_logging
from .tools import (
    ToolDefinition,
    ToolCallRequest,
    ToolResponse,
    TextBlock,
    ToolRegistry,
    ToolDispatcher,
    SchemaValidator,
)

__all__ = [
    "LangflowMCPError",
    "ToolRegistrationError",
    "MissingArgumentsError",
    "UnknownToolError",
    "ToolValidationError",
    "Violation",
    "get_logger",
    "setup_logging",
    "ToolDefinition",
    "ToolCallRequest",
    "ToolResponse",
    "TextBlock",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
]
