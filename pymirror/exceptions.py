"""Exception classes for pymirror."""

from pathlib import Path
from typing import Optional, Union


class MirrorError(Exception):
    """Base exception for all mirroring errors.

    Every error raised while reconciling a single path carries that path,
    so the engine can report it without aborting the rest of the run.
    """

    kind = "error"

    def __init__(self, message: str, path: Optional[Union[str, Path]] = None):
        self.message = message
        self.path = Path(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        if self.path is None:
            return self.message
        return f"{self.path}: {self.message}"


class ComparisonError(MirrorError):
    """Raised when a file cannot be read while checking for changes."""

    kind = "comparison"


class CopyError(MirrorError):
    """Raised when the source is unreadable or the target unwritable."""

    kind = "copy"


class StructuralError(MirrorError):
    """Raised when a directory cannot be created or an entry cannot be deleted."""

    kind = "structural"


class SourceMissingError(StructuralError):
    """Raised when a source entry disappears while it is being reconciled."""

    kind = "missing"


class SyncConfigError(MirrorError):
    """Raised when a sync configuration file is invalid."""

    kind = "config"
