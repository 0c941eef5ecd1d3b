"""``gitstamp generate`` — pre-build step: bake provenance into the build.

Queries git in the project root and writes gitHash, gitStatus and
buildTime to every configured sink.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from gitstamp.cli.commands._common import PROJECT_ROOT_OPTION, load_config, record_lines
from gitstamp.core.bake import ProvenanceBaker
from gitstamp.core.git import GitCommandError
from gitstamp.routing.dispatcher import ProvenancePublishError

console = Console()


def generate_cmd(
    project_root: Path = PROJECT_ROOT_OPTION,
    strict: bool = typer.Option(
        None,
        "--strict/--no-strict",
        help="Fail when git cannot be queried instead of baking empty values.",
        show_default=False,
    ),
) -> None:
    """Bake the current commit, status and build time into the build.

    The written files are transient: remove them with ``gitstamp clean``
    once the build has succeeded.
    """
    overrides = {} if strict is None else {"strict_git": strict}
    config = load_config(project_root, **overrides)
    baker = ProvenanceBaker.from_config(config)

    try:
        record = baker.generate_provenance_files()
    except GitCommandError as exc:
        console.print(
            f"[bold red]git failed (exit {exc.exit_code}):[/bold red] {escape(exc.errors)}"
        )
        raise typer.Exit(code=1)
    except ProvenancePublishError as exc:
        console.print(f"[bold red]Could not write provenance:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    sink_names = ", ".join(sink.sink_name for sink in baker.publisher.registered_sinks)
    console.print(
        Panel(
            "\n".join([
                *record_lines(record),
                "",
                f"[dim]Written to: {sink_names}[/dim]",
            ]),
            title="[bold]Provenance baked[/bold]",
            border_style="green" if record.hash and record.is_clean else "yellow",
            padding=(1, 2),
        )
    )
