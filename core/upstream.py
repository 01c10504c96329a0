# =============================================================================
# core/upstream.py  —  Shared plumbing for the live HTTP providers
# =============================================================================
#
# All live providers share ONE httpx.AsyncClient (connection pooling) and
# funnel their requests through request_json(), which turns every kind of
# upstream trouble into a ProviderError:
#
#   non-2xx response   → ProviderError(provider, <upstream "message">)
#   network / timeout  → ProviderError(provider, <transport error>)
#   body is not JSON   → ProviderError(provider, "malformed JSON payload")
# =============================================================================

from typing import Any

import httpx

from core.errors import ProviderError


def upstream_message(response: httpx.Response) -> str:
    """Best-effort human message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        # OpenWeatherMap: {"message": ...}; Google: {"error": {"message": ...}};
        # ExchangeRate-API: {"error-type": ...}
        error = body.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
        for key in ("message", "error-type", "error"):
            if body.get(key):
                return str(body[key])

    text = response.text.strip()
    return text[:200] if text else f"HTTP {response.status_code}"


async def request_json(
    client: httpx.AsyncClient,
    provider: str,
    method: str,
    url: str,
    *,
    timeout: float,
    **kwargs: Any,
) -> Any:
    """Perform one request and return the decoded JSON body."""
    try:
        response = await client.request(method, url, timeout=timeout, **kwargs)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise ProviderError(provider, upstream_message(exc.response)) from exc
    except httpx.TimeoutException as exc:
        raise ProviderError(provider, f"request timed out after {timeout:g}s") from exc
    except httpx.RequestError as exc:
        raise ProviderError(provider, str(exc) or type(exc).__name__) from exc

    try:
        return response.json()
    except ValueError as exc:
        raise ProviderError(provider, "malformed JSON payload") from exc


def malformed(provider: str, exc: Exception) -> ProviderError:
    """ProviderError for a JSON body that lacks the expected fields."""
    return ProviderError(provider, f"malformed payload ({type(exc).__name__}: {exc})")
