# metadata_enrichment/logging/__init__.py
"""Logging helpers for metadata_enrichment."""

from metadata_enrichment.logging.logger import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
