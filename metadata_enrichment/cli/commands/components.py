# metadata_enrichment/cli/commands/components.py
"""
Components command.

Usage:
    metadata-enrichment components ./force-app
"""

from __future__ import annotations

from pathlib import Path

import typer

from metadata_enrichment.cli.ui.console import error, warning
from metadata_enrichment.cli.ui.display import display_components
from metadata_enrichment.components.resolver import ComponentResolver


def command(project_dir: Path) -> None:
    if not project_dir.is_dir():
        error(f"Project directory not found: {project_dir}")
        raise typer.Exit(2)

    components = ComponentResolver(project_dir).discover()
    if not components:
        warning(f"No components found under {project_dir}")
        return

    display_components(components)
