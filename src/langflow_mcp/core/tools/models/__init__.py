"""Tool-related data models."""

from .models import ToolDefinition
from .tool_call import ToolCallRequest, ToolResponse, TextBlock

__all__ = ["ToolDefinition", "ToolCallRequest", "ToolResponse", "TextBlock"]
