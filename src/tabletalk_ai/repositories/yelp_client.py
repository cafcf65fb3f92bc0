"""Yelp AI chat client (secondary provider).

The Yelp AI API answers natural-language questions about businesses. The
resolution layer uses it for factual questions (hours, menu, reservations)
and as the last resort when the conversational provider is down.
"""

import httpx
from loguru import logger

from tabletalk_ai.config import settings
from tabletalk_ai.dto import YelpChatRequest, YelpChatResponse, YelpUserContext
from tabletalk_ai.entities import FactsAnswer
from tabletalk_ai.errors import ProviderAuthError, ProviderMalformedResponse

from .http_errors import decode_response, network_error


class YelpAIClient:
    """Yelp implementation of the FactsProvider protocol.

    This class satisfies the FactsProvider protocol through structural
    typing - no explicit inheritance needed.

    Example:
        ```python
        client = YelpAIClient.create()
        answer = await client.ask("About Thai Palace: what are the hours?")
        print(answer.text)
        ```
    """

    name = "yelp"

    def __init__(
        self,
        api_key: str | None = None,
        url: str | None = None,
        timeout: float | None = None,
        locale: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Yelp AI client.

        Args:
            api_key: Yelp API key. Defaults to settings.yelp_api_key.
            url: Chat endpoint. Defaults to settings.yelp_ai_url.
            timeout: Request timeout in seconds. Defaults to settings.provider_timeout.
            locale: Default locale. Defaults to settings.default_locale.
            transport: Optional httpx transport (used by tests).
        """
        self._api_key = api_key or settings.yelp_api_key
        self._url = url or settings.yelp_ai_url
        self._timeout = timeout or settings.provider_timeout
        self._locale = locale or settings.default_locale
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @classmethod
    def create(cls, api_key: str | None = None, locale: str | None = None) -> "YelpAIClient":
        """Factory method to create YelpAIClient with defaults.

        Args:
            api_key: API key. If None, uses settings.
            locale: Default locale. If None, uses settings.

        Returns:
            Configured YelpAIClient
        """
        return cls(api_key=api_key, locale=locale)

    @property
    def client(self) -> httpx.AsyncClient:
        """Lazy-load the async HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self._timeout,
                headers={"Content-Type": "application/json"},
                transport=self._transport,
            )
        return self._client

    async def ask(
        self,
        query: str,
        *,
        locale: str | None = None,
        latitude: float | None = None,
        longitude: float | None = None,
        chat_id: str | None = None,
    ) -> FactsAnswer:
        """Ask a question, optionally continuing an earlier conversation.

        Args:
            query: The question, including the restaurant name
            locale: Locale of the user. Defaults to the client's locale.
            latitude: Optional latitude
            longitude: Optional longitude
            chat_id: Provider conversation id from an earlier answer

        Returns:
            FactsAnswer with the text, span tags and conversation id

        Raises:
            ProviderError: On any failure (see GroqChatClient.chat for the mapping)
        """
        if not self._api_key:
            raise ProviderAuthError("YELP_API_KEY is not set", self.name)

        request = YelpChatRequest(
            query=query,
            chat_id=chat_id,
            user_context=YelpUserContext(
                locale=locale or self._locale,
                latitude=latitude,
                longitude=longitude,
            ),
        )

        try:
            response = await self.client.post(
                self._url,
                json=request.model_dump(),
                headers={"Authorization": f"Bearer {self._api_key}"},
            )
        except httpx.HTTPError as e:
            raise network_error(e, self.name) from e

        payload = decode_response(response, YelpChatResponse, self.name)
        text = payload.response.text.strip()
        if not text:
            raise ProviderMalformedResponse("Empty answer", self.name, response.status_code)

        logger.debug(f"yelp answered with {len(text)} chars (chat_id={payload.chat_id})")
        return FactsAnswer(text=text, tags=tuple(payload.response.tags), chat_id=payload.chat_id)

    async def aclose(self) -> None:
        """Close the async HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
