# metadata_enrichment/cli/commands/enrich.py
"""
Enrich command.

Usage:
    metadata-enrichment enrich ./force-app
    metadata-enrichment enrich ./force-app -m LightningComponentBundle:helloWorld
    metadata-enrichment enrich ./force-app -m LightningComponentBundle --json

Exit codes:
    0  every selected component succeeded or was skipped
    1  at least one component failed
    2  configuration, connection or argument error
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer

from metadata_enrichment.cli.ui.console import error, success, warning
from metadata_enrichment.cli.ui.display import display_metrics
from metadata_enrichment.components.resolver import ComponentResolver, parse_metadata_option
from metadata_enrichment.config.loader import load_config
from metadata_enrichment.connection.client import OrgConnection
from metadata_enrichment.core.exceptions import EnrichmentError
from metadata_enrichment.enrichment.runner import EnrichmentRunner
from metadata_enrichment.logging import configure_logging, get_logger, tags

logger = get_logger(__name__)

EXIT_FAILED = 1
EXIT_USAGE = 2


def command(
    project_dir: Path,
    metadata: List[str],
    config_path: Optional[Path] = None,
    as_json: bool = False,
    verbose: bool = False,
) -> None:
    configure_logging(logging.DEBUG if verbose else logging.WARNING)

    if not project_dir.is_dir():
        error(f"Project directory not found: {project_dir}")
        raise typer.Exit(EXIT_USAGE)

    try:
        requested = [parse_metadata_option(m) for m in metadata] or None
    except ValueError as e:
        error(str(e))
        raise typer.Exit(EXIT_USAGE)

    try:
        config = load_config(config_path=config_path, project_dir=project_dir)
        connection = OrgConnection(config.connection)
    except EnrichmentError as e:
        error(str(e))
        raise typer.Exit(EXIT_USAGE)

    components = ComponentResolver(project_dir).discover()
    logger.info(f"{tags.CLI} Found {len(components)} components in {project_dir}")

    with connection:
        result = EnrichmentRunner(connection, config).run(components, requested)

    metrics = result.metrics
    if as_json:
        typer.echo(json.dumps(metrics.to_dict(), indent=2))
    else:
        display_metrics(metrics)
        if metrics.has_failures:
            warning(f"{metrics.fail.count} component(s) failed")
        elif metrics.success.count:
            success(f"Enriched {metrics.success.count} component(s)")

    if metrics.has_failures:
        raise typer.Exit(EXIT_FAILED)
