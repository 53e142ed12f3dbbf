# metadata_enrichment/core/__init__.py
"""Shared building blocks: error hierarchy and HTTP plumbing."""

from metadata_enrichment.core.exceptions import (
    ConfigError,
    ConnectionConfigError,
    EnrichmentError,
    MarkupError,
)
from metadata_enrichment.core.http import (
    APIError,
    AuthenticationError,
    NotFoundError,
    RateLimitError,
)

__all__ = [
    "APIError",
    "AuthenticationError",
    "ConfigError",
    "ConnectionConfigError",
    "EnrichmentError",
    "MarkupError",
    "NotFoundError",
    "RateLimitError",
]
