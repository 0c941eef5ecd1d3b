"""Provenance record model and the persisted entry layout.

A provenance record is the hash/status/build-time triple that identifies
the source state a build was produced from.  Every sink writes the same
three entries under the same relative layout:

    GitInfoInBuild/gitHash.txt
    GitInfoInBuild/gitStatus.txt
    GitInfoInBuild/buildTime.txt
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from pathlib import PurePosixPath

from pydantic import BaseModel, ConfigDict

INFO_FOLDER_NAME = "GitInfoInBuild"
ENTRY_FILE_EXTENSION = ".txt"

HASH_SHORT_LENGTH = 8

# Numeric-only format: day/month order never depends on the locale.
BUILD_TIME_FORMAT = "%Y/%m/%d %H:%M:%S"


class ProvenanceEntry(str, Enum):
    """The three persisted entries of a provenance record."""

    HASH = "gitHash"
    STATUS = "gitStatus"
    BUILD_TIME = "buildTime"

    @property
    def key(self) -> str:
        """Extension-less logical key, e.g. ``GitInfoInBuild/gitHash``."""
        return f"{INFO_FOLDER_NAME}/{self.value}"

    @property
    def relative_path(self) -> PurePosixPath:
        """File path relative to a sink root."""
        return PurePosixPath(self.key + ENTRY_FILE_EXTENSION)


def truncate(value: str | None, length: int) -> str:
    """Return the first *length* characters of *value*, if possible.

    ``None`` becomes ``""``.
    """
    if value is None:
        return ""
    return value[:length]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_build_time(moment: datetime | None = None) -> str:
    """Format *moment* (default: now) as a UTC ``yyyy/MM/dd HH:mm:ss`` string.

    Naive datetimes are taken to be UTC already.
    """
    moment = moment or utc_now()
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime(BUILD_TIME_FORMAT)


class ProvenanceRecord(BaseModel):
    """Immutable hash/status/build-time triple for one build."""

    model_config = ConfigDict(frozen=True)

    hash: str = ""
    status: str = ""
    build_time: str = ""

    @property
    def hash_short(self) -> str:
        """The first 8 characters of the commit hash."""
        return truncate(self.hash, HASH_SHORT_LENGTH)

    @property
    def is_clean(self) -> bool:
        """Whether the working tree had no changed or untracked files."""
        return self.status == ""

    def entries(self) -> dict[ProvenanceEntry, str]:
        """Map each persisted entry to its text value."""
        return {
            ProvenanceEntry.HASH: self.hash,
            ProvenanceEntry.STATUS: self.status,
            ProvenanceEntry.BUILD_TIME: self.build_time,
        }
