"""Shared helpers for gitstamp CLI commands."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.markup import escape

from gitstamp.config import StampConfig
from gitstamp.models.provenance import ProvenanceRecord

PROJECT_ROOT_OPTION = typer.Option(
    None,
    "--project-root",
    "-C",
    help="Source checkout to stamp (default: GITSTAMP_PROJECT_ROOT or cwd).",
)


def load_config(project_root: Path | None = None, **overrides: object) -> StampConfig:
    """Build the config from the environment, then apply CLI overrides."""
    if project_root is not None:
        overrides["project_root"] = project_root
    return StampConfig(**overrides)


def record_lines(record: ProvenanceRecord) -> list[str]:
    """Rich-markup lines describing *record*."""
    status = (
        "[green]clean[/green]"
        if record.is_clean
        else f"[yellow]{len(record.status.splitlines())} changed path(s)[/yellow]"
    )
    return [
        f"[bold]Hash:[/bold]       {escape(record.hash) or '[red]unknown[/red]'}",
        f"[bold]Short hash:[/bold] {escape(record.hash_short) or '[red]unknown[/red]'}",
        f"[bold]Build time:[/bold] {escape(record.build_time) or '[red]unknown[/red]'}",
        f"[bold]Status:[/bold]     {status}",
    ]
