from .models import ToolDefinition, ToolCallRequest, ToolResponse, TextBlock
from .registry import ToolRegistry
from .execution import ToolDispatcher
from .schema import SchemaValidator

__all__ = [
    "ToolDefinition",
    "ToolCallRequest",
    "ToolResponse",
    "TextBlock",
    "ToolRegistry",
    "ToolDispatcher",
    "SchemaValidator",
]
