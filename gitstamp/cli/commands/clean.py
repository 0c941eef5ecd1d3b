"""``gitstamp clean`` — post-build step: remove the transient provenance files.

Run this only after a successful build.  After a failed build the files
stay in place and the next ``gitstamp generate`` overwrites them.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from gitstamp.cli.commands._common import PROJECT_ROOT_OPTION, load_config
from gitstamp.core.bake import ProvenanceBaker
from gitstamp.routing.sinks import ArtifactsNotFoundError

console = Console()


def clean_cmd(project_root: Path = PROJECT_ROOT_OPTION) -> None:
    """Delete the provenance files written by ``gitstamp generate``."""
    config = load_config(project_root)
    baker = ProvenanceBaker.from_config(config)

    try:
        removed = baker.delete_transient_artifacts()
    except ArtifactsNotFoundError as exc:
        console.print("[bold red]Provenance artifacts not found:[/bold red]")
        for path in exc.missing:
            console.print(f"  [red]- {path}[/red]")
        console.print("[dim]Nothing was baked, or it was already cleaned.[/dim]")
        raise typer.Exit(code=1)

    console.print(f"[green]Removed provenance artifacts:[/green] {', '.join(removed)}")
