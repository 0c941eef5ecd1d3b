"""ProvenancePublisher — writes a provenance record to ALL configured sinks.

Every sink is attempted on publish and on cleanup, in registration order.
A failing sink does not stop the remaining ones, but a publish in which
any sink failed raises, since a partially stamped build must not ship.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from gitstamp.models.provenance import ProvenanceRecord
from gitstamp.routing.sinks import ArtifactsNotFoundError
from gitstamp.routing.sinks.local_file import TextFileSink

if TYPE_CHECKING:
    from gitstamp.config import StampConfig
    from gitstamp.routing.sinks import BaseSink

logger = logging.getLogger(__name__)


class ProvenancePublishError(RuntimeError):
    """Raised when one or more sinks fail to receive the record."""

    def __init__(self, errors: list[tuple[str, Exception]]) -> None:
        self.errors = list(errors)
        super().__init__(
            f"{len(self.errors)} sink(s) failed: "
            + "; ".join(f"{name}: {exc}" for name, exc in self.errors)
        )


class ProvenancePublisher:
    """Publishes provenance records to every registered sink.

    Usage
    -----
    >>> publisher = ProvenancePublisher()
    >>> publisher.register_sink(TextFileSink("build/resources", "resources"))
    >>> publisher.register_sink(TextFileSink("dist", "bundle"))
    >>> publisher.publish(record)
    ['resources', 'bundle']
    """

    def __init__(self, sinks: list[BaseSink] | None = None) -> None:
        self._sinks: list[BaseSink] = []
        for sink in sinks or []:
            self.register_sink(sink)

    @classmethod
    def from_config(cls, config: StampConfig) -> ProvenancePublisher:
        """Build one :class:`TextFileSink` per ``config.sinks`` entry."""
        sinks: list[BaseSink] = []
        for target in config.sinks:
            cleanup_root: Path | None = None
            if target.cleanup_root is not None:
                cleanup_root = config.resolve(target.cleanup_root)
            sinks.append(
                TextFileSink(
                    config.resolve(target.root),
                    target.name,
                    cleanup_root=cleanup_root,
                    sidecar_suffix=config.sidecar_suffix,
                )
            )
        return cls(sinks)

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: BaseSink) -> None:
        """Register a sink.  Duplicate registration is silently ignored."""
        if sink not in self._sinks:
            self._sinks.append(sink)
            logger.debug("Registered sink: %s", sink.sink_name)

    def unregister_sink(self, sink: BaseSink) -> None:
        """Remove a previously registered sink."""
        try:
            self._sinks.remove(sink)
            logger.debug("Unregistered sink: %s", sink.sink_name)
        except ValueError:
            pass

    @property
    def registered_sinks(self) -> list[BaseSink]:
        """Return a copy of the registered sink list."""
        return list(self._sinks)

    # ------------------------------------------------------------------
    # Publish / cleanup
    # ------------------------------------------------------------------

    def publish(self, record: ProvenanceRecord) -> list[str]:
        """Write *record* to ALL registered sinks.

        Returns the names of the sinks that received it.

        Raises
        ------
        ProvenancePublishError
            If any sink failed.  The other sinks were still written.
        """
        if not self._sinks:
            logger.warning("No sinks registered — provenance record not persisted")
            return []

        succeeded: list[str] = []
        errors: list[tuple[str, Exception]] = []

        for sink in self._sinks:
            try:
                sink.write(record)
                succeeded.append(sink.sink_name)
            except OSError as exc:
                logger.error("Sink %s failed to write provenance: %s", sink.sink_name, exc)
                errors.append((sink.sink_name, exc))

        if errors:
            raise ProvenancePublishError(errors)

        logger.info("Provenance written to %s", ", ".join(succeeded))
        return succeeded

    def cleanup(self) -> list[str]:
        """Remove the artifacts of ALL registered sinks.

        Returns the names of the sinks that were cleaned.

        Raises
        ------
        ArtifactsNotFoundError
            If any sink had nothing to remove.  The other sinks were
            still cleaned.
        """
        removed: list[str] = []
        missing: list[Path] = []

        for sink in self._sinks:
            try:
                sink.remove()
                removed.append(sink.sink_name)
            except ArtifactsNotFoundError as exc:
                logger.warning("Sink %s has no artifacts to remove", sink.sink_name)
                missing.extend(exc.missing)

        if missing:
            raise ArtifactsNotFoundError(missing)

        logger.info("Removed provenance artifacts from %s", ", ".join(removed))
        return removed
