"""Uniform response envelope for tool calls."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolResponse(BaseModel):
    """Result of a tool call.

    Attributes:
        content: Human-readable rendering, as a list of text blocks.
        is_error: True when the call failed.
        data: Structured result of a successful call.
        error_type: Name of the error class of a failed call.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: list[TextContent] = Field(default_factory=list)
    is_error: bool = False
    data: Any = None
    error_type: str | None = None

    @classmethod
    def success(cls, text: str, data: Any = None) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], data=data)

    @classmethod
    def failure(cls, text: str, error_type: str) -> "ToolResponse":
        return cls(content=[TextContent(text=text)], is_error=True, error_type=error_type)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.text for block in self.content)

    def to_tool_result(self) -> dict[str, Any]:
        """Shape used in a tools/call reply: content blocks and the error flag."""
        return {
            "content": [block.model_dump() for block in self.content],
            "isError": self.is_error,
        }
