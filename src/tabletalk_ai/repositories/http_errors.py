"""Translation of HTTP outcomes into the provider error taxonomy."""

from typing import TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from tabletalk_ai.dto import ProviderErrorBody
from tabletalk_ai.errors import (
    ProviderAuthError,
    ProviderError,
    ProviderMalformedResponse,
    ProviderNetworkError,
    ProviderRateLimited,
    ProviderServerError,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def error_for_status(response: httpx.Response, provider: str) -> ProviderError:
    """Build the ProviderError matching a non-2xx response."""
    status = response.status_code
    detail: str | None = None
    try:
        detail = ProviderErrorBody.model_validate(response.json()).detail
    except (ValueError, ValidationError):
        pass

    if status in (401, 403):
        return ProviderAuthError(f"Invalid {provider} API key", provider, status)
    if status == 429:
        return ProviderRateLimited("Rate limit exceeded", provider, status)
    if status >= 500:
        return ProviderServerError(f"{provider} server error", provider, status)
    return ProviderServerError(f"API error: {detail or response.reason_phrase}", provider, status)


def network_error(exc: httpx.HTTPError, provider: str) -> ProviderNetworkError:
    """Wrap a transport-level failure (timeout, refused connection, ...)."""
    return ProviderNetworkError(f"Network error: {exc.__class__.__name__}: {exc}", provider)


def decode_response(response: httpx.Response, model: type[ModelT], provider: str) -> ModelT:
    """Validate a 2xx response body against ``model``.

    Raises:
        ProviderError: If the status is not 2xx
        ProviderMalformedResponse: If the body is not JSON or does not match
    """
    if not response.is_success:
        raise error_for_status(response, provider)
    try:
        return model.model_validate(response.json())
    except (ValueError, ValidationError) as e:
        raise ProviderMalformedResponse(
            f"Unexpected response format: {e.__class__.__name__}", provider, response.status_code
        ) from e
