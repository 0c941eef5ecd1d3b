"""Provenance sources and the consumer-facing accessor surface.

Two interchangeable sources provide the hash/status/build-time triple:

    LiveProvenance   — queries git on every call; used from an editable
                       source checkout.  Never caches.
    BakedProvenance  — reads the three entries persisted at bake time from
                       a resource store; used from a packaged build.  Loads
                       once, on first access, then serves the cached values.

The source is chosen once, when the :class:`ProvenanceContext` is built,
and the context is passed to whoever displays or reports provenance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from gitstamp.core.command_runner import CommandRunner
from gitstamp.core.git import GitClient
from gitstamp.core.resource_store import (
    DirectoryResourceStore,
    PackageResourceStore,
    ResourceStore,
)
from gitstamp.models.provenance import (
    HASH_SHORT_LENGTH,
    ProvenanceEntry,
    ProvenanceRecord,
    format_build_time,
    truncate,
    utc_now,
)

if TYPE_CHECKING:
    from gitstamp.config import StampConfig

logger = logging.getLogger(__name__)

MISSING_HASH = "0"
MISSING_STATUS = "Missing build git status"
MISSING_BUILD_TIME = "Missing build time"


@runtime_checkable
class ProvenanceSource(Protocol):
    """Protocol shared by the live and baked sources."""

    def hash(self) -> str | None: ...

    def status(self) -> str | None: ...

    def build_time(self) -> str | None: ...


class LiveProvenance:
    """Queries git directly.  Each call may spawn a new subprocess."""

    def __init__(
        self,
        git: GitClient,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._git = git
        self._clock = clock

    def hash(self) -> str | None:
        return self._git.rev_parse_head()

    def status(self) -> str | None:
        return self._git.status_porcelain()

    def build_time(self) -> str:
        # Not a git query: the current time, since nothing is baked yet.
        return format_build_time(self._clock())


class BakedProvenance:
    """Serves the provenance record baked into a packaged build.

    The first access to any field loads all three entries from *store*;
    later accesses return the cached values without touching the store.
    Missing or empty entries degrade to fixed fallback values and are
    logged, except an empty status, which is the normal clean-tree case.
    """

    def __init__(self, store: ResourceStore) -> None:
        self._store = store
        self._initialized = False
        self._hash = ""
        self._status = ""
        self._build_time = ""

    @property
    def store(self) -> ResourceStore:
        return self._store

    @property
    def initialized(self) -> bool:
        return self._initialized

    def hash(self) -> str:
        self._initialize()
        return self._hash

    def status(self) -> str:
        self._initialize()
        return self._status

    def build_time(self) -> str:
        self._initialize()
        return self._build_time

    def _initialize(self) -> None:
        if self._initialized:
            return

        text = self._store.read_text(ProvenanceEntry.HASH.key)
        if text is None:
            logger.error("Could not get a build git hash")
            self._hash = MISSING_HASH
        elif not text:
            logger.error("Build git hash text is empty string")
            self._hash = ""
        else:
            self._hash = text

        text = self._store.read_text(ProvenanceEntry.STATUS.key)
        if text is None:
            logger.error("Could not get a build git status")
            self._status = MISSING_STATUS
        else:
            self._status = text

        text = self._store.read_text(ProvenanceEntry.BUILD_TIME.key)
        if text is None:
            logger.error("Could not get a build time")
            self._build_time = MISSING_BUILD_TIME
        elif not text:
            logger.error("Build time text is empty string")
            self._build_time = ""
        else:
            self._build_time = text

        self._initialized = True


class ProvenanceContext:
    """Read-only provenance accessors for consumers.

    Construct once at startup, with the source that matches how the
    program runs, and pass it to anything that reports provenance.

    Usage
    -----
    >>> context = ProvenanceContext.from_config(StampConfig())
    >>> context.hash_short
    'a1b2c3d4'
    """

    def __init__(self, source: ProvenanceSource) -> None:
        self._source = source

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def live(cls, config: StampConfig) -> ProvenanceContext:
        """Context that queries git in ``config.project_root``."""
        return cls(LiveProvenance(git_client_from_config(config)))

    @classmethod
    def baked(cls, config: StampConfig) -> ProvenanceContext:
        """Context that reads the baked record.

        Uses ``config.resource_package`` when set, otherwise
        ``config.resource_dir``.
        """
        store: ResourceStore
        if config.resource_package:
            store = PackageResourceStore(config.resource_package)
        else:
            store = DirectoryResourceStore(config.resolve(config.resource_dir))
        return cls(BakedProvenance(store))

    @classmethod
    def from_config(cls, config: StampConfig) -> ProvenanceContext:
        if config.mode == "baked":
            return cls.baked(config)
        return cls.live(config)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def source(self) -> ProvenanceSource:
        return self._source

    @property
    def is_live(self) -> bool:
        return isinstance(self._source, LiveProvenance)

    @property
    def hash(self) -> str | None:
        """The full commit hash of this build."""
        return self._source.hash()

    @property
    def hash_short(self) -> str:
        """The first 8 characters of the commit hash."""
        return truncate(self.hash, HASH_SHORT_LENGTH)

    @property
    def status(self) -> str | None:
        """Uncommitted or untracked files; ``""`` for a clean tree."""
        return self._source.status()

    @property
    def build_time(self) -> str | None:
        """UTC build time as ``yyyy/MM/dd HH:mm:ss``."""
        return self._source.build_time()

    def record(self) -> ProvenanceRecord:
        """Snapshot the three values, with ``None`` read as ``""``."""
        return ProvenanceRecord(
            hash=self.hash or "",
            status=self.status or "",
            build_time=self.build_time or "",
        )


def git_client_from_config(config: StampConfig) -> GitClient:
    return GitClient(
        CommandRunner(timeout=config.git_timeout_seconds),
        config.project_root,
        executable=config.git_executable,
        strict=config.strict_git,
    )
