# metadata_enrichment/cli/cli.py
"""
metadata-enrichment CLI - Main application.

Commands:
    metadata-enrichment enrich       Generate descriptions and write them into configuration files
    metadata-enrichment components   List project components and whether they can be enriched

NOTE: Commands use lazy loading - implementations are imported only when a command is invoked.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

app = typer.Typer(
    name="metadata-enrichment",
    help="Generate AI descriptions for Lightning Web Components and store them in their configuration files.",
    no_args_is_help=True,
    add_completion=False,
)


# =============================================================================
# LAZY COMMANDS
# =============================================================================


@app.command("enrich")
def enrich(
    project_dir: Path = typer.Argument(..., help="Project directory to scan for components."),
    metadata: Optional[List[str]] = typer.Option(
        None, "--metadata", "-m", help="Component to enrich, as Type or Type:Name. Repeatable."
    ),
    config: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to a config file."),
    as_json: bool = typer.Option(False, "--json", help="Print metrics as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress."),
) -> None:
    """Enrich components and write descriptions into their configuration files."""
    from metadata_enrichment.cli.commands import enrich as mod

    mod.command(
        project_dir=project_dir,
        metadata=metadata or [],
        config_path=config,
        as_json=as_json,
        verbose=verbose,
    )


@app.command("components")
def components(
    project_dir: Path = typer.Argument(..., help="Project directory to scan for components."),
) -> None:
    """List project components and their eligibility for enrichment."""
    from metadata_enrichment.cli.commands import components as mod

    mod.command(project_dir=project_dir)
