"""``gitstamp show`` — display the provenance a consumer would see."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from gitstamp.cli.commands._common import PROJECT_ROOT_OPTION, load_config
from gitstamp.core.provenance import ProvenanceContext

console = Console()


def show_cmd(
    project_root: Path = PROJECT_ROOT_OPTION,
    baked: bool = typer.Option(
        None,
        "--baked/--live",
        help="Read the baked files instead of querying git (default: GITSTAMP_MODE).",
        show_default=False,
    ),
) -> None:
    """Show hash, short hash, build time and working-tree status."""
    overrides = {} if baked is None else {"mode": "baked" if baked else "live"}
    config = load_config(project_root, **overrides)
    context = ProvenanceContext.from_config(config)
    record = context.record()

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Field", style="bold cyan")
    table.add_column("Value")
    table.add_row("Hash", escape(record.hash) or "[red]unknown[/red]")
    table.add_row("Short hash", escape(record.hash_short) or "[red]unknown[/red]")
    table.add_row("Build time", escape(record.build_time) or "[red]unknown[/red]")
    table.add_row(
        "Status",
        "[green]clean[/green]" if record.is_clean else f"[yellow]{escape(record.status)}[/yellow]",
    )

    source = "live (git)" if context.is_live else "baked"
    console.print(
        Panel(
            table,
            title=f"[bold]Build provenance[/bold] [dim]({source})[/dim]",
            border_style="green" if record.is_clean else "yellow",
            padding=(1, 2),
        )
    )
