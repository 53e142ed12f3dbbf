# metadata_enrichment/cli/ui/display.py
"""
Display functions for run metrics and component listings.
"""

from __future__ import annotations

from typing import Any, Sequence

from rich.table import Table

from metadata_enrichment.cli.ui.console import console
from metadata_enrichment.components.base import component_identity, component_type_name
from metadata_enrichment.enrichment.constants import LWC_METADATA_TYPE_NAME
from metadata_enrichment.enrichment.metrics import EnrichmentMetrics, MetricsBucket

_BUCKET_STYLES = (
    ("success", "Succeeded", "green"),
    ("fail", "Failed", "red"),
    ("skipped", "Skipped", "yellow"),
)


def display_metrics(metrics: EnrichmentMetrics) -> None:
    """Print a per-component outcome table followed by the totals."""
    table = Table(title="Enrichment results", show_header=True, header_style="bold cyan")
    table.add_column("Status", style="bold")
    table.add_column("Type", style="cyan")
    table.add_column("Component")
    table.add_column("Message", style="dim")

    for attr, label, style in _BUCKET_STYLES:
        bucket: MetricsBucket = getattr(metrics, attr)
        for status in bucket.components:
            table.add_row(
                f"[{style}]{label}[/{style}]",
                status.type_name,
                status.component_name,
                status.message,
            )

    console.print(table)
    console.print(
        f"Total: {metrics.total}  "
        f"[green]succeeded: {metrics.success.count}[/green]  "
        f"[red]failed: {metrics.fail.count}[/red]  "
        f"[yellow]skipped: {metrics.skipped.count}[/yellow]"
    )


def display_components(components: Sequence[Any]) -> None:
    """Print resolved components with their configuration file and eligibility."""
    table = Table(title="Project components", show_header=True, header_style="bold cyan")
    table.add_column("Type", style="cyan")
    table.add_column("Component")
    table.add_column("Configuration", style="dim")
    table.add_column("Eligible", justify="center")

    for component in components:
        xml = getattr(component, "xml", None)
        eligible = component_type_name(component) == LWC_METADATA_TYPE_NAME and bool(xml)
        table.add_row(
            component_type_name(component) or "?",
            component_identity(component) or "?",
            xml or "-",
            "[green]yes[/green]" if eligible else "[dim]no[/dim]",
        )

    console.print(table)
