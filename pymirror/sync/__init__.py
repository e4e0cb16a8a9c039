"""Sync engine for pymirror - one-way mirroring of directory trees."""

from .comparator import FileComparator
from .config import load_sync_pairs_from_json
from .engine import SyncEngine, Syncher, synchronize
from .filesystem import FileSystem, LocalFileSystem, NodeKind
from .operations import SyncOperations
from .pair import SyncPair
from .report import SyncAction, SyncFailure, SyncReport
from .scanner import DirectoryScanner

__all__ = [
    "SyncEngine",
    "Syncher",
    "synchronize",
    "SyncPair",
    "SyncOperations",
    "load_sync_pairs_from_json",
    "DirectoryScanner",
    "FileComparator",
    "FileSystem",
    "LocalFileSystem",
    "NodeKind",
    "SyncAction",
    "SyncFailure",
    "SyncReport",
]
