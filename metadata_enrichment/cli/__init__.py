# metadata_enrichment/cli/__init__.py
"""Command line interface."""

from metadata_enrichment.cli.cli import app

__all__ = ["app"]
