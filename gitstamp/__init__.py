"""gitstamp: stamp builds with git provenance.

Captures the commit hash, working-tree status and build time when a build
runs, bakes them into the build, and serves them back at runtime, either
live from git in a source checkout or from the baked files in a packaged
application.
"""

__version__ = "0.1.0"
__description__ = "Stamp builds with git commit, working-tree status and build time"

from gitstamp.config import StampConfig
from gitstamp.core.bake import ProvenanceBaker
from gitstamp.core.provenance import ProvenanceContext
from gitstamp.models.provenance import ProvenanceRecord

__all__ = [
    "ProvenanceBaker",
    "ProvenanceContext",
    "ProvenanceRecord",
    "StampConfig",
    "__version__",
]
