"""Build pipeline hooks around a provenance bake.

    pre_build          -> generate the provenance files
    <build command>
    post_build_success -> delete them (only when the build succeeded)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from gitstamp.core.bake import ProvenanceBaker
from gitstamp.core.command_runner import CommandResult, CommandRunner
from gitstamp.models.provenance import ProvenanceRecord
from gitstamp.routing.sinks import ArtifactsNotFoundError

logger = logging.getLogger(__name__)


def pre_build(baker: ProvenanceBaker) -> ProvenanceRecord:
    """Pre-build step: bake the current provenance."""
    return baker.generate_provenance_files()


def post_build_success(baker: ProvenanceBaker) -> list[str]:
    """Post-build step: remove the transient files.  Run only on success."""
    return baker.delete_transient_artifacts()


def run_build(
    command: Sequence[str],
    baker: ProvenanceBaker,
    runner: CommandRunner,
    working_directory: Path,
) -> CommandResult:
    """Bake, run *command*, and clean up if it succeeded.

    A failed build keeps the provenance files so they can be inspected;
    the next bake overwrites them.  Artifacts that vanished during a
    successful build are logged, not raised, so the build result is kept.
    """
    if not command:
        raise ValueError("No build command given")

    pre_build(baker)

    executable, *arguments = command
    result = runner.run(executable, arguments, working_directory)

    if result.ok:
        try:
            post_build_success(baker)
        except ArtifactsNotFoundError as exc:
            logger.warning("Build succeeded but cleanup found nothing to remove: %s", exc)
    else:
        logger.warning(
            "Build command exited with %d; provenance files left in place",
            result.exit_code,
        )
    return result
