"""Error taxonomy for the resolution layer.

Provider errors are recoverable by design of the callers: the resolution
engine falls back to templates or to the other provider. Persistence errors
are logged where they are caught and never reach the UI.
"""

from enum import Enum


class ProviderErrorKind(str, Enum):
    """Failure categories shared by both upstream providers."""

    AUTH = "auth"
    RATE_LIMIT = "rate_limit"
    SERVER = "server"
    NETWORK = "network"
    MALFORMED = "malformed"


class TableTalkError(Exception):
    """Base class for all errors raised by this package."""


class ProviderError(TableTalkError):
    """An upstream provider call failed.

    Attributes:
        kind: The failure category
        provider: Name of the provider that failed (e.g., "groq", "yelp")
        status_code: HTTP status code, when the provider answered at all
    """

    kind: ProviderErrorKind = ProviderErrorKind.SERVER

    def __init__(self, message: str, provider: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status_code = status_code

    def __str__(self) -> str:
        status = f" (HTTP {self.status_code})" if self.status_code is not None else ""
        return f"[{self.provider}:{self.kind.value}] {self.args[0]}{status}"


class ProviderAuthError(ProviderError):
    kind = ProviderErrorKind.AUTH


class ProviderRateLimited(ProviderError):
    kind = ProviderErrorKind.RATE_LIMIT


class ProviderServerError(ProviderError):
    kind = ProviderErrorKind.SERVER


class ProviderNetworkError(ProviderError):
    kind = ProviderErrorKind.NETWORK


class ProviderMalformedResponse(ProviderError):
    kind = ProviderErrorKind.MALFORMED


class CachePersistenceError(TableTalkError):
    """The key-value store failed to read, write or delete a record."""


class SessionBusyError(TableTalkError):
    """A message is already being sent in this conversation."""
