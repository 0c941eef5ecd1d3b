"""Sink protocol for gitstamp provenance publishing.

All sinks implement the ``BaseSink`` protocol: a ``sink_name`` property,
a ``write(record)`` method called at bake time and a ``remove()`` method
called after a successful build.
"""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, runtime_checkable

from gitstamp.models.provenance import ProvenanceRecord


class ArtifactsNotFoundError(FileNotFoundError):
    """Raised by cleanup when baked artifacts are not where they should be.

    Attributes
    ----------
    missing : list[Path]
        Every artifact tree that was expected but absent.
    """

    def __init__(self, missing: list[Path]) -> None:
        self.missing = list(missing)
        super().__init__(
            "Provenance artifacts not found: "
            + ", ".join(str(path) for path in self.missing)
        )


@runtime_checkable
class BaseSink(Protocol):
    """Protocol that every provenance sink must implement.

    Attributes
    ----------
    sink_name : str
        A unique human-readable identifier for this sink instance
        (e.g. ``"resources"``, ``"bundle"``).
    """

    @property
    def sink_name(self) -> str:
        """Return the unique name of this sink."""
        ...

    def write(self, record: ProvenanceRecord) -> None:
        """Persist *record*, overwriting whatever a previous bake left."""
        ...

    def remove(self) -> None:
        """Delete the transient artifacts written by :meth:`write`.

        Raises
        ------
        ArtifactsNotFoundError
            If there is nothing to remove.
        """
        ...
