# metadata_enrichment/core/http.py
"""
HTTP client factory and error mapping for org API calls.

Usage:
    from metadata_enrichment.core.http import create_api_client, raise_for_status

    client = create_api_client(
        base_url="https://example.my.salesforce.com",
        api_key=access_token,
        timeout=120.0,
    )
    response = client.post("/services/data/...", json=payload)
    raise_for_status(response, provider="org", endpoint="/services/data/...")

Errors are converted to APIError subclasses so callers can record a single
readable message per failed request.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx

from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)


# =============================================================================
# Errors
# =============================================================================


@dataclass
class APIError(Exception):
    """
    Structured API error with details.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code (if available)
        provider: API provider name (e.g., "org")
        endpoint: API endpoint that failed
        details: Additional error details from the API response
        original_error: The original exception that caused this error
    """

    message: str
    status_code: Optional[int] = None
    provider: Optional[str] = None
    endpoint: Optional[str] = None
    details: Optional[str] = None
    original_error: Optional[Exception] = None

    def __str__(self) -> str:
        parts = [self.message]

        if self.status_code:
            parts.append(f"(HTTP {self.status_code})")

        if self.details:
            parts.append(f"- {self.details}")

        return " ".join(parts)


class RateLimitError(APIError):
    """Raised when the API rate limit is exceeded."""

    pass


class AuthenticationError(APIError):
    """Raised when the session is rejected."""

    pass


class NotFoundError(APIError):
    """Raised when the endpoint does not exist for this org."""

    pass


# =============================================================================
# Client Factory
# =============================================================================

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


def create_api_client(
    base_url: str,
    api_key: Optional[str],
    timeout: float,
    **kwargs: Any,
) -> httpx.Client:
    """
    Create an httpx client for the org's JSON REST API.

    Args:
        base_url: Org instance URL
        api_key: Access token, sent as a Bearer token when set
        timeout: Request timeout in seconds
        **kwargs: Passed through to httpx.Client (e.g. transport)
    """
    headers = dict(DEFAULT_HEADERS)
    if api_key:
        headers["Authorization"] = f"Bearer {api_key}"

    client = httpx.Client(base_url=base_url, headers=headers, timeout=timeout, **kwargs)
    logger.debug(f"{tags.HTTP} Created HTTP client for {base_url} (timeout={timeout}s)")
    return client


# =============================================================================
# Error Handling
# =============================================================================


def _extract_details(response: httpx.Response) -> Optional[str]:
    """Pull a readable error message out of an error response body."""
    try:
        error_data = response.json()
    except ValueError:
        return response.text[:200] if response.text else None

    # Org REST errors come back as a list of {"message", "errorCode"}
    if isinstance(error_data, list) and error_data and isinstance(error_data[0], dict):
        return error_data[0].get("message")
    if isinstance(error_data, dict):
        error = error_data.get("error")
        if isinstance(error, dict):
            return error.get("message")
        return error_data.get("message") or (error if isinstance(error, str) else None)
    return None


def handle_api_error(
    exc: Exception,
    provider: str = "unknown",
    endpoint: str = "",
) -> APIError:
    """
    Convert an httpx exception to a structured APIError.

    Args:
        exc: The original exception
        provider: Name of the API provider
        endpoint: The endpoint that was called

    Returns:
        Appropriate APIError subclass
    """
    if isinstance(exc, httpx.HTTPStatusError):
        status_code = exc.response.status_code
        details = _extract_details(exc.response)

        if status_code == 401:
            return AuthenticationError(
                message=f"{provider} authentication failed",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )
        elif status_code == 429:
            return RateLimitError(
                message=f"{provider} rate limit exceeded",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )
        elif status_code == 404:
            return NotFoundError(
                message=f"{provider} resource not found",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )
        else:
            return APIError(
                message=f"{provider} API request failed",
                status_code=status_code,
                provider=provider,
                endpoint=endpoint,
                details=details,
                original_error=exc,
            )

    if isinstance(exc, httpx.ConnectError):
        return APIError(
            message=f"Failed to connect to {provider}",
            provider=provider,
            endpoint=endpoint,
            details=str(exc),
            original_error=exc,
        )

    if isinstance(exc, httpx.TimeoutException):
        return APIError(
            message=f"{provider} request timed out",
            provider=provider,
            endpoint=endpoint,
            details="Consider increasing connection.timeout",
            original_error=exc,
        )

    return APIError(
        message=f"{provider} request failed: {exc}",
        provider=provider,
        endpoint=endpoint,
        original_error=exc,
    )


def raise_for_status(
    response: httpx.Response,
    provider: str = "unknown",
    endpoint: str = "",
) -> None:
    """
    Check response status and raise the matching APIError if it failed.

    Raises:
        APIError: If the response indicates an error
    """
    try:
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise handle_api_error(exc, provider=provider, endpoint=endpoint) from exc


__all__ = [
    "APIError",
    "AuthenticationError",
    "NotFoundError",
    "RateLimitError",
    "DEFAULT_HEADERS",
    "create_api_client",
    "handle_api_error",
    "raise_for_status",
]
