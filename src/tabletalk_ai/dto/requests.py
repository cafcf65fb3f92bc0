"""Request DTOs for the upstream provider APIs."""

from typing import Literal

from pydantic import BaseModel, Field


class GroqMessage(BaseModel):
    """Single message of an OpenAI-compatible chat completion request."""

    role: Literal["system", "user", "assistant"]
    content: str


class GroqChatRequest(BaseModel):
    """Request body for POST /chat/completions."""

    model: str = Field(..., description="Model identifier")
    messages: list[GroqMessage] = Field(..., min_length=1)
    temperature: float = Field(0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(512, gt=0)


class YelpUserContext(BaseModel):
    """Locale and optional position of the asking user."""

    locale: str = "en_US"
    latitude: float | None = None
    longitude: float | None = None


class YelpChatRequest(BaseModel):
    """Request body for the Yelp AI chat endpoint."""

    query: str = Field(..., min_length=1)
    chat_id: str | None = Field(None, description="Continue an existing provider conversation")
    user_context: YelpUserContext = Field(default_factory=YelpUserContext)
