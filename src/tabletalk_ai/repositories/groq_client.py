"""Groq chat-completions client (primary provider).

Groq serves an OpenAI-compatible ``/chat/completions`` endpoint. This client
sends the system prompt, the prior turns and the new question as one
message list and returns the first choice's text.
"""

from collections.abc import Sequence

import httpx
from loguru import logger

from tabletalk_ai.config import settings
from tabletalk_ai.dto import GroqChatRequest, GroqChatResponse, GroqMessage
from tabletalk_ai.entities import ConversationTurn
from tabletalk_ai.errors import ProviderAuthError, ProviderMalformedResponse

from .http_errors import decode_response, network_error


class GroqChatClient:
    """Groq implementation of the ChatProvider protocol.

    This class satisfies the ChatProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = GroqChatClient.create()
        answer = await client.chat(
            "You are a helpful assistant for Thai Palace.",
            history=[],
            question="Is it good for a date?",
        )
        await client.aclose()
        ```
    """

    name = "groq"

    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Groq client.

        Args:
            api_key: Groq API key. Defaults to settings.groq_api_key.
            base_url: API base URL. Defaults to settings.groq_base_url.
            model: Model identifier. Defaults to settings.groq_model.
            timeout: Request timeout in seconds. Defaults to settings.provider_timeout.
            transport: Optional httpx transport (used by tests).
        """
        self._api_key = api_key or settings.groq_api_key
        self._base_url = (base_url or settings.groq_base_url).rstrip("/")
        self._model = model or settings.groq_model
        self._timeout = timeout or settings.provider_timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(
        cls,
        api_key: str | None = None,
        model: str | None = None,
    ) -> "GroqChatClient":
        """Factory method to create GroqChatClient with defaults.

        Args:
            api_key: API key. If None, uses settings.
            model: Model name. If None, uses settings.

        Returns:
            Configured GroqChatClient
        """
        return cls(api_key=api_key, model=model)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    @property
    def model_name(self) -> str:
        return self._model

    async def chat(
        self,
        system_prompt: str,
        history: Sequence[ConversationTurn],
        question: str,
        *,
        temperature: float = 0.7,
        max_tokens: int = 512,
    ) -> str:
        """Send one chat completion request.

        Args:
            system_prompt: Instructions and restaurant context
            history: Prior turns, oldest first
            question: The new user question
            temperature: Sampling temperature
            max_tokens: Upper bound on the answer length

        Returns:
            The stripped text of the first choice

        Raises:
            ProviderAuthError: If no API key is configured or it is rejected
            ProviderRateLimited: On HTTP 429
            ProviderServerError: On any other non-2xx status
            ProviderNetworkError: On timeouts and transport failures
            ProviderMalformedResponse: If the payload has no usable text
        """
        if not self._api_key:
            raise ProviderAuthError("GROQ_API_KEY is not set", self.name)

        messages = [GroqMessage(role="system", content=system_prompt)]
        messages.extend(GroqMessage(role=turn.role.value, content=turn.content) for turn in history)
        messages.append(GroqMessage(role="user", content=question))
        request = GroqChatRequest(
            model=self._model,
            messages=messages,
            temperature=temperature,
            max_tokens=max_tokens,
        )

        try:
            response = await self.client.post(
                "/chat/completions",
                json=request.model_dump(),
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as e:
            raise network_error(e, self.name) from e

        payload = decode_response(response, GroqChatResponse, self.name)
        if not payload.choices:
            raise ProviderMalformedResponse(
                "No response from Groq API", self.name, response.status_code
            )

        text = payload.choices[0].message.content.strip()
        if not text:
            raise ProviderMalformedResponse("Empty completion", self.name, response.status_code)

        logger.debug(f"groq answered with {len(text)} chars ({len(messages)} messages sent)")
        return text

    async def aclose(self) -> None:
        """Close the async HTTP client.

        Should be called when shutting down the application.
        """
        if self._client is not None:
            await self._client.aclose()
            self._client = None
