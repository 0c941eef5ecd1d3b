"""Read-only stores for baked provenance entries.

A store maps an extension-less logical key (``GitInfoInBuild/gitHash``)
to the text of ``<key>.txt``.  ``None`` means the entry is missing; an
empty string means it exists but is empty.  The distinction drives the
fallback policy of the baked provenance source.

An entry that exists but cannot be read or decoded as UTF-8 is logged and
reported as missing.
"""

from __future__ import annotations

import importlib
import logging
from importlib import resources
from pathlib import Path
from typing import Protocol, runtime_checkable

from gitstamp.models.provenance import ENTRY_FILE_EXTENSION

logger = logging.getLogger(__name__)


@runtime_checkable
class ResourceStore(Protocol):
    """Protocol for the persistence read side of the baked path."""

    def read_text(self, key: str) -> str | None:
        """Return the text stored under *key*, or ``None`` if it is missing."""
        ...


class PackageResourceStore:
    """Reads entries embedded as package data of an importable package.

    This is how a packaged application carries its baked provenance: the
    resources sink writes into a package directory, the build includes it
    as package data, and at runtime the files are read through
    :mod:`importlib.resources` whether the package lives on disk, in a
    wheel or in a zip archive.
    """

    def __init__(self, package: str) -> None:
        self._package = package

    @property
    def package(self) -> str:
        return self._package

    def read_text(self, key: str) -> str | None:
        try:
            root = resources.files(importlib.import_module(self._package))
        except ImportError as exc:
            logger.debug("Resource package %s not importable: %s", self._package, exc)
            return None

        resource = root
        for part in (key + ENTRY_FILE_EXTENSION).split("/"):
            resource = resource.joinpath(part)
        if not resource.is_file():
            return None
        try:
            return resource.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Unreadable resource %s in %s: %s", key, self._package, exc)
            return None


class DirectoryResourceStore:
    """Reads entries from ``<root>/<key>.txt`` on the filesystem."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root)

    @property
    def root(self) -> Path:
        return self._root

    def read_text(self, key: str) -> str | None:
        path = self._root / (key + ENTRY_FILE_EXTENSION)
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.error("Unreadable resource %s: %s", path, exc)
            return None
