"""Tool executor contract — the browser capability the inspector consumes."""

from __future__ import annotations

from typing import Any, Literal, Optional, Protocol

from pydantic import BaseModel, Field


class ToolError(RuntimeError):
    """Raised when a tool call reports an error or the executor is unusable."""


class ToolContent(BaseModel):
    type: Literal["text", "image"] = "text"
    text: str = ""
    data: str = ""  # base64 payload for images
    mime_type: str = ""


class ToolCallResult(BaseModel):
    name: str
    text: str = ""
    is_error: bool = False
    content: list[ToolContent] = Field(default_factory=list)
    structured_content: Optional[Any] = None


class ToolExecutor(Protocol):
    async def call_tool(
        self, name: str, args: Optional[dict[str, Any]] = None
    ) -> ToolCallResult: ...


def tool_text_content(content: list[ToolContent]) -> str:
    """Join the text items of a tool response."""
    return "\n".join(item.text for item in content if item.type == "text")
