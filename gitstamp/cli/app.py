"""Main Typer application — imports and registers all CLI commands.

Entry point: ``gitstamp`` (configured via pyproject.toml console_scripts).
"""

from __future__ import annotations

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from gitstamp.cli.commands.build import build_cmd
from gitstamp.cli.commands.clean import clean_cmd
from gitstamp.cli.commands.generate import generate_cmd
from gitstamp.cli.commands.show import show_cmd
from gitstamp.config import StampConfig

app = typer.Typer(
    name="gitstamp",
    help="gitstamp: stamp builds with git commit, working-tree status and build time.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="generate", help="Pre-build: bake provenance files.")(generate_cmd)
app.command(name="clean", help="Post-build: remove the baked provenance files.")(clean_cmd)
app.command(name="show", help="Show the provenance of this checkout or build.")(show_cmd)
app.command(name="build", help="Bake, run a build command, clean up on success.")(build_cmd)


def configure_logging(level: str) -> None:
    """Route log records through Rich on stderr."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        None,
        "--log-level",
        help="Logging level (default: GITSTAMP_LOG_LEVEL or INFO).",
        show_default=False,
    ),
) -> None:
    """gitstamp: stamp builds with git provenance."""
    configure_logging(log_level or StampConfig().log_level)


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
