"""PyMirror - one-way mirroring of a source directory tree onto a target."""

from .exceptions import (
    ComparisonError,
    CopyError,
    MirrorError,
    SourceMissingError,
    StructuralError,
    SyncConfigError,
)
from .sync import SyncEngine, SyncPair, SyncReport, Syncher, synchronize

__all__ = [
    "SyncEngine",
    "Syncher",
    "SyncPair",
    "SyncReport",
    "synchronize",
    "MirrorError",
    "ComparisonError",
    "CopyError",
    "StructuralError",
    "SourceMissingError",
    "SyncConfigError",
]
