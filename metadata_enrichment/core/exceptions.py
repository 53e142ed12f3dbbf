# metadata_enrichment/core/exceptions.py
"""
Exceptions for metadata enrichment.

Hierarchy:
    EnrichmentError
    ├── ConfigError - Configuration missing or invalid
    ├── MarkupError - Configuration file could not be parsed or serialized
    └── ConnectionConfigError - Org connection cannot be built

Transport failures live in metadata_enrichment.core.http (APIError).
Per-component failures never escape the enrichment core; they end up in
the message and status of that component's record.
"""


class EnrichmentError(Exception):
    """Base error for metadata enrichment."""

    pass


class ConfigError(EnrichmentError):
    """Configuration is missing or invalid."""

    pass


class MarkupError(EnrichmentError):
    """Structured markup could not be parsed or serialized."""

    pass


class ConnectionConfigError(EnrichmentError):
    """Org connection settings are incomplete."""

    pass


__all__ = [
    "EnrichmentError",
    "ConfigError",
    "MarkupError",
    "ConnectionConfigError",
]
