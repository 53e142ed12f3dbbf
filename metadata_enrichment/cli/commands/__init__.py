# metadata_enrichment/cli/commands/__init__.py
"""CLI commands."""
