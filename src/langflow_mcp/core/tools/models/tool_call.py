"""Data models for tool invocation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, Field


@dataclass(frozen=True)
class ToolCallRequest:
    """Represents a single incoming tool invocation."""

    name: str
    arguments: Optional[Any] = None


class TextBlock(BaseModel):
    """A typed content block carrying text."""

    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """The uniform envelope returned for every invocation, success or failure.

    There is no structural failure flag: a rendered failure is only
    recognizable by its text.
    """

    content: List[TextBlock] = Field(min_length=1)

    @classmethod
    def from_text(cls, text: str) -> "ToolResponse":
        return cls(content=[TextBlock(text=text)])

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)
