"""gitstamp data models — all Pydantic v2, all frozen (immutable)."""

from gitstamp.models.config import DEFAULT_SINK_TARGETS, SinkTarget
from gitstamp.models.provenance import (
    BUILD_TIME_FORMAT,
    HASH_SHORT_LENGTH,
    INFO_FOLDER_NAME,
    ProvenanceEntry,
    ProvenanceRecord,
    format_build_time,
    truncate,
)

__all__ = [
    # provenance
    "BUILD_TIME_FORMAT",
    "HASH_SHORT_LENGTH",
    "INFO_FOLDER_NAME",
    "ProvenanceEntry",
    "ProvenanceRecord",
    "format_build_time",
    "truncate",
    # config
    "DEFAULT_SINK_TARGETS",
    "SinkTarget",
]
