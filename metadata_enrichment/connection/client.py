# metadata_enrichment/connection/client.py
"""Org connection used to send enrichment requests."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

import httpx

from metadata_enrichment.config.schema import ConnectionConfig
from metadata_enrichment.core.exceptions import ConnectionConfigError
from metadata_enrichment.core.http import create_api_client, handle_api_error, raise_for_status
from metadata_enrichment.logging import get_logger, tags

logger = get_logger(__name__)

PROVIDER = "org"


@runtime_checkable
class Connection(Protocol):
    """What the enrichment handler needs from a connection."""

    def request_post(
        self,
        path: str,
        body: Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any: ...


class OrgConnection:
    """
    Authenticated JSON connection to an org instance.

    request_post() returns the decoded JSON body or raises an APIError;
    it never retries.
    """

    def __init__(self, config: ConnectionConfig, **client_kwargs: Any):
        """
        Args:
            config: Connection settings (instance URL and access token required)
            **client_kwargs: Passed through to httpx.Client (e.g. transport)

        Raises:
            ConnectionConfigError: If the instance URL or access token is missing
        """
        if not config.instance_url:
            raise ConnectionConfigError(
                "connection.instance_url is required (or set SF_INSTANCE_URL)"
            )
        if not config.access_token:
            raise ConnectionConfigError(
                "connection.access_token is required (or set SF_ACCESS_TOKEN)"
            )

        self.config = config
        self.client = create_api_client(
            base_url=config.instance_url,
            api_key=config.access_token,
            timeout=config.timeout,
            **client_kwargs,
        )

    @property
    def instance_url(self) -> str:
        return self.config.instance_url or ""

    def request_post(
        self,
        path: str,
        body: Any,
        headers: Optional[dict[str, str]] = None,
    ) -> Any:
        """
        POST a JSON body and return the decoded JSON response.

        Raises:
            APIError: On transport failure or non-2xx status
        """
        try:
            response = self.client.post(path, json=body, headers=headers)
        except httpx.HTTPError as e:
            raise handle_api_error(e, provider=PROVIDER, endpoint=path) from e

        raise_for_status(response, provider=PROVIDER, endpoint=path)
        logger.debug(f"{tags.HTTP} POST {path} -> {response.status_code}")

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise handle_api_error(e, provider=PROVIDER, endpoint=path) from e

    def close(self) -> None:
        """Close HTTP client."""
        self.client.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()


__all__ = ["Connection", "OrgConnection"]
