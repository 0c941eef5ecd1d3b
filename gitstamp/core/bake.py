"""Bake provenance into a build, and remove the transient files afterwards.

Baking always reads the live source: it only happens as a build step run
from an editable checkout.  The files it writes are transient.  They are
removed after a successful build; a failed build leaves them in place
until the next bake overwrites them or the next cleanup removes them.

Add the sink trees to ``.gitignore``::

    .gitstamp/
    .gitstamp.meta
    dist/GitInfoInBuild/
    dist/GitInfoInBuild.meta
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gitstamp.core.provenance import LiveProvenance, git_client_from_config
from gitstamp.models.provenance import ProvenanceRecord
from gitstamp.routing.dispatcher import ProvenancePublisher

if TYPE_CHECKING:
    from gitstamp.config import StampConfig

logger = logging.getLogger(__name__)


class ProvenanceBaker:
    """Owns the generate and delete steps of the build pipeline.

    Parameters
    ----------
    live:
        Source queried at bake time.
    publisher:
        Fans the record out to every destination tree.
    """

    def __init__(self, live: LiveProvenance, publisher: ProvenancePublisher) -> None:
        self._live = live
        self._publisher = publisher

    @classmethod
    def from_config(cls, config: StampConfig) -> ProvenanceBaker:
        return cls(
            LiveProvenance(git_client_from_config(config)),
            ProvenancePublisher.from_config(config),
        )

    @property
    def publisher(self) -> ProvenancePublisher:
        return self._publisher

    def generate_provenance_files(self) -> ProvenanceRecord:
        """Read the current provenance and write it to every sink."""
        record = ProvenanceRecord(
            hash=self._live.hash() or "",
            status=self._live.status() or "",
            build_time=self._live.build_time() or "",
        )

        if not record.hash:
            logger.warning("No git hash included in build.")
        if not record.build_time:
            logger.warning("No git build time included in build.")
        if not record.is_clean:
            logger.warning(
                "Git status is not empty, you started a build with uncommitted changes."
            )

        self._publisher.publish(record)
        return record

    def delete_transient_artifacts(self) -> list[str]:
        """Remove every sink's artifact tree and sidecar.

        Raises :class:`~gitstamp.routing.sinks.ArtifactsNotFoundError`
        when some artifacts were already gone.
        """
        return self._publisher.cleanup()
