"""Response DTOs for the upstream provider APIs.

Only the fields the resolution layer reads are declared; everything else
in the payload is ignored.
"""

from typing import Any

from pydantic import BaseModel, Field

from .requests import GroqMessage


class GroqChoice(BaseModel):
    index: int = 0
    message: GroqMessage
    finish_reason: str | None = None


class GroqChatResponse(BaseModel):
    """Response body of POST /chat/completions."""

    id: str | None = None
    model: str | None = None
    choices: list[GroqChoice] = Field(default_factory=list)


class YelpResponseText(BaseModel):
    text: str
    tags: list[dict[str, Any]] = Field(default_factory=list)


class YelpChatResponse(BaseModel):
    """Response body of the Yelp AI chat endpoint."""

    response: YelpResponseText
    types: list[str] = Field(default_factory=list)
    chat_id: str | None = None


class ProviderErrorBody(BaseModel):
    """Best-effort decoding of an error payload from either provider."""

    message: str | None = None
    error: dict[str, Any] | None = None

    @property
    def detail(self) -> str | None:
        if self.error and isinstance(self.error.get("message"), str):
            return self.error["message"]
        return self.message
