# metadata_enrichment/cli/ui/console.py
"""Shared rich console and one-line status helpers."""

from __future__ import annotations

from rich.console import Console

console = Console()


def success(msg: str) -> None:
    console.print(f"[green]✓[/green] {msg}")


def warning(msg: str) -> None:
    console.print(f"[yellow]⚠[/yellow] {msg}")


def error(msg: str) -> None:
    console.print(f"[red]✗[/red] {msg}")
