# metadata_enrichment/config/__init__.py
"""Configuration schema and layered loader."""

from metadata_enrichment.config.loader import deep_merge, load_config
from metadata_enrichment.config.schema import AppConfig, ConnectionConfig, EnrichmentConfig

__all__ = [
    "AppConfig",
    "ConnectionConfig",
    "EnrichmentConfig",
    "deep_merge",
    "load_config",
]
