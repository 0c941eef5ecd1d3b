"""``gitstamp build -- CMD...`` — run a build between the two pipeline hooks.

Bakes provenance, runs CMD in the project root, and removes the
transient files only if CMD succeeded.  Exits with CMD's exit code.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from gitstamp.cli.commands._common import PROJECT_ROOT_OPTION, load_config
from gitstamp.core.bake import ProvenanceBaker
from gitstamp.core.build_hooks import run_build
from gitstamp.core.command_runner import CommandRunner
from gitstamp.core.git import GitCommandError
from gitstamp.routing.dispatcher import ProvenancePublishError

console = Console()


def build_cmd(
    command: list[str] = typer.Argument(
        ...,
        help="Build command to run, after '--'.",
    ),
    project_root: Path = PROJECT_ROOT_OPTION,
) -> None:
    """Bake provenance, run the build command, clean up on success."""
    config = load_config(project_root)
    baker = ProvenanceBaker.from_config(config)

    try:
        result = run_build(command, baker, CommandRunner(), config.project_root)
    except (GitCommandError, ProvenancePublishError) as exc:
        console.print(f"[bold red]Build aborted:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if result.stdout:
        typer.echo(result.stdout)
    if result.stderr:
        typer.echo(result.stderr, err=True)

    if result.ok:
        console.print("[green]Build succeeded; provenance artifacts removed.[/green]")
    else:
        console.print(
            f"[bold red]Build failed (exit {result.exit_code});[/bold red] "
            "provenance artifacts left in place."
        )
    raise typer.Exit(code=result.exit_code)
