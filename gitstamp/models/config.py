"""Sink target configuration models."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class SinkTarget(BaseModel):
    """One destination tree that receives the baked provenance files.

    ``root`` receives ``GitInfoInBuild/*.txt``.  ``cleanup_root`` is the
    tree removed after a successful build; when unset, only
    ``root/GitInfoInBuild`` is removed so the rest of ``root`` survives.
    Relative paths are resolved against the project root.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    root: Path
    cleanup_root: Path | None = None


DEFAULT_SINK_TARGETS: tuple[SinkTarget, ...] = (
    # Compiled into the package data read by the baked path.
    SinkTarget(
        name="resources",
        root=Path(".gitstamp/resources"),
        cleanup_root=Path(".gitstamp"),
    ),
    # Loose files shipped next to the build output.
    SinkTarget(name="bundle", root=Path("dist")),
)
