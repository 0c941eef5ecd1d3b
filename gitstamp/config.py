"""Runtime configuration — env-driven.

Centralized config using pydantic-settings.  Reads from a .env file and
GITSTAMP_* environment variables.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from gitstamp.models.config import DEFAULT_SINK_TARGETS, SinkTarget


class StampConfig(BaseSettings):
    """gitstamp configuration with environment variable overrides.

    All settings can be overridden via GITSTAMP_* environment variables
    or a .env file in the working directory.

    Examples
    --------
    Override via environment::

        export GITSTAMP_PROJECT_ROOT=/src/myapp
        export GITSTAMP_MODE=baked
        export GITSTAMP_RESOURCE_PACKAGE=myapp._provenance
        export GITSTAMP_STRICT_GIT=true

    Sinks are JSON::

        GITSTAMP_SINKS='[{"name": "bundle", "root": "dist"}]'
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GITSTAMP_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Source checkout
    project_root: Path = Path(".")
    git_executable: str = "git"
    git_timeout_seconds: float | None = 30.0
    strict_git: bool = False

    # Which provenance source consumers read from
    mode: Literal["live", "baked"] = "live"

    # Baked path: package data wins over a plain directory when set
    resource_package: str = ""
    resource_dir: Path = Path(".gitstamp/resources")

    # Bake destinations
    sinks: list[SinkTarget] = Field(
        default_factory=lambda: list(DEFAULT_SINK_TARGETS)
    )
    sidecar_suffix: str | None = ".meta"

    # Observability
    log_level: str = "INFO"

    def resolve(self, path: Path) -> Path:
        """Resolve *path* against the project root unless it is absolute."""
        if path.is_absolute():
            return path
        return self.project_root / path
