"""Text file sink — writes the provenance entries as plain text files.

Layout: {root}/GitInfoInBuild/{gitHash,gitStatus,buildTime}.txt

Cleanup removes ``cleanup_root`` (default ``{root}/GitInfoInBuild``) and
its directory sidecar ``{cleanup_root}.meta``, if one exists, for build
systems that keep a metadata file next to every directory.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from gitstamp.models.provenance import INFO_FOLDER_NAME, ProvenanceRecord
from gitstamp.routing.sinks import ArtifactsNotFoundError

logger = logging.getLogger(__name__)


class TextFileSink:
    """Writes a provenance record to one destination tree.

    Parameters
    ----------
    root:
        Directory that receives ``GitInfoInBuild/``.
    name:
        Sink name used in logs.
    cleanup_root:
        Tree deleted by :meth:`remove`.  Defaults to ``root/GitInfoInBuild``.
    sidecar_suffix:
        Suffix of the directory metadata file removed along with
        ``cleanup_root``.  ``None`` disables sidecar removal.
    """

    def __init__(
        self,
        root: Path | str,
        name: str = "text_file",
        *,
        cleanup_root: Path | str | None = None,
        sidecar_suffix: str | None = ".meta",
    ) -> None:
        self._root = Path(root)
        self._name = name
        self._cleanup_root = (
            Path(cleanup_root) if cleanup_root else self._root / INFO_FOLDER_NAME
        )
        self._sidecar_suffix = sidecar_suffix

    @property
    def sink_name(self) -> str:
        return self._name

    @property
    def root(self) -> Path:
        return self._root

    @property
    def cleanup_root(self) -> Path:
        return self._cleanup_root

    @property
    def sidecar_path(self) -> Path | None:
        if not self._sidecar_suffix:
            return None
        return self._cleanup_root.with_name(
            self._cleanup_root.name + self._sidecar_suffix
        )

    def write(self, record: ProvenanceRecord) -> None:
        """Write the three entries, creating missing directories first."""
        (self._root / INFO_FOLDER_NAME).mkdir(parents=True, exist_ok=True)
        for entry, text in record.entries().items():
            path = self._root / entry.relative_path
            path.write_text(text, encoding="utf-8")
            logger.debug("%s: wrote %s", self._name, path)

    def remove(self) -> None:
        """Delete the artifact tree and its sidecar.

        The sidecar is removed even when the tree itself is already gone.
        """
        sidecar = self.sidecar_path
        if sidecar is not None and sidecar.is_file():
            sidecar.unlink()

        if not self._cleanup_root.is_dir():
            raise ArtifactsNotFoundError([self._cleanup_root])

        shutil.rmtree(self._cleanup_root)
        logger.debug("%s: removed %s", self._name, self._cleanup_root)

    def read_entries(self) -> dict[str, str]:
        """Read back whatever entries are present, keyed by file name."""
        folder = self._root / INFO_FOLDER_NAME
        if not folder.is_dir():
            return {}
        return {
            path.name: path.read_text(encoding="utf-8")
            for path in sorted(folder.glob("*.txt"))
        }
