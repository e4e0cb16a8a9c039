"""Outcome of a synchronization run."""

import threading
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional

from ..exceptions import MirrorError


class SyncAction(str, Enum):
    """Actions taken on a single target path."""

    COPY = "copy"
    """Target file did not exist and was copied from the source"""

    UPDATE = "update"
    """Target file differed from the source and was overwritten"""

    SKIP = "skip"
    """Target file already matched the source"""

    DELETE = "delete"
    """Obsolete or type-mismatched target entry was removed"""

    MKDIR = "mkdir"
    """Target directory was created"""


@dataclass(frozen=True)
class SyncFailure:
    """A path that could not be reconciled."""

    kind: str
    """Error kind ("comparison", "copy", "structural", "missing")"""

    path: Optional[Path]
    """Path the failure refers to"""

    message: str
    """Underlying failure description"""

    @classmethod
    def from_error(cls, error: MirrorError) -> "SyncFailure":
        return cls(kind=error.kind, path=error.path, message=error.message)

    def to_dict(self) -> dict:
        return {
            "kind": self.kind,
            "path": str(self.path) if self.path is not None else None,
            "message": self.message,
        }


@dataclass
class SyncReport:
    """Counts and failures collected while mirroring one tree.

    Worker threads record into the same report, so every mutation goes
    through the internal lock.
    """

    source: Path
    target: Path
    copied: int = 0
    updated: int = 0
    skipped: int = 0
    deleted: int = 0
    directories_created: int = 0
    bytes_copied: int = 0
    elapsed: float = 0.0
    failures: list[SyncFailure] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, repr=False, compare=False
    )

    def record(self, action: SyncAction, count: int = 1, size: int = 0) -> None:
        """Record a successful action."""
        with self._lock:
            if action == SyncAction.COPY:
                self.copied += count
            elif action == SyncAction.UPDATE:
                self.updated += count
            elif action == SyncAction.SKIP:
                self.skipped += count
            elif action == SyncAction.DELETE:
                self.deleted += count
            elif action == SyncAction.MKDIR:
                self.directories_created += count
            self.bytes_copied += size

    def fail(self, error: MirrorError) -> SyncFailure:
        """Record a failed path."""
        failure = SyncFailure.from_error(error)
        with self._lock:
            self.failures.append(failure)
        return failure

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def total_changes(self) -> int:
        return self.copied + self.updated + self.deleted + self.directories_created

    def to_dict(self) -> dict:
        """Return the report as a JSON-serializable dictionary."""
        with self._lock:
            return {
                "source": str(self.source),
                "target": str(self.target),
                "copied": self.copied,
                "updated": self.updated,
                "skipped": self.skipped,
                "deleted": self.deleted,
                "directories_created": self.directories_created,
                "bytes_copied": self.bytes_copied,
                "elapsed": round(self.elapsed, 3),
                "failures": [f.to_dict() for f in self.failures],
            }
