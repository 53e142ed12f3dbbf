# metadata_enrichment/cli/ui/__init__.py
"""Terminal output helpers."""

from metadata_enrichment.cli.ui.console import console, error, success, warning
from metadata_enrichment.cli.ui.display import display_components, display_metrics

__all__ = ["console", "display_components", "display_metrics", "error", "success", "warning"]
