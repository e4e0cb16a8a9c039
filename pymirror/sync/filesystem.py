"""Filesystem access used by the sync engine.

The engine never touches the disk directly. It goes through a
:class:`FileSystem`, which exposes the handful of primitives needed to
mirror a tree. :class:`LocalFileSystem` is the implementation backed by
the local disk; tests substitute an in-memory one.
"""

from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import BinaryIO

from ..exceptions import StructuralError


class NodeKind(str, Enum):
    """Kind of a filesystem entry at the moment it is inspected."""

    MISSING = "missing"
    """Nothing exists at the path"""

    FILE = "file"
    """A regular file"""

    DIRECTORY = "directory"
    """A directory"""


class FileSystem(ABC):
    """Primitive filesystem operations required for mirroring.

    Implementations must reflect the current state on every call; the
    engine relies on re-querying instead of caching.
    """

    @abstractmethod
    def kind(self, path: Path) -> NodeKind:
        """Return the kind of the entry at ``path``."""

    @abstractmethod
    def list_dir(self, path: Path) -> list[Path]:
        """Return the immediate children of directory ``path``."""

    @abstractmethod
    def make_dir(self, path: Path) -> None:
        """Create directory ``path``. The parent must exist."""

    @abstractmethod
    def remove_file(self, path: Path) -> None:
        """Remove the file at ``path``."""

    @abstractmethod
    def remove_dir(self, path: Path) -> None:
        """Remove the empty directory at ``path``."""

    @abstractmethod
    def open_read(self, path: Path) -> BinaryIO:
        """Open ``path`` for binary reading."""

    @abstractmethod
    def open_write(self, path: Path) -> BinaryIO:
        """Open ``path`` for binary writing, creating or truncating it."""


class LocalFileSystem(FileSystem):
    """FileSystem implementation for the local disk.

    Failures surface as the ``OSError`` subclasses raised by the OS.
    """

    def kind(self, path: Path) -> NodeKind:
        if path.is_dir():
            return NodeKind.DIRECTORY
        if path.exists():
            return NodeKind.FILE
        return NodeKind.MISSING

    def list_dir(self, path: Path) -> list[Path]:
        return list(path.iterdir())

    def make_dir(self, path: Path) -> None:
        path.mkdir()

    def remove_file(self, path: Path) -> None:
        path.unlink()

    def remove_dir(self, path: Path) -> None:
        path.rmdir()

    def open_read(self, path: Path) -> BinaryIO:
        return open(path, "rb")

    def open_write(self, path: Path) -> BinaryIO:
        return open(path, "wb")


def node_kind(fs: FileSystem, path: Path) -> NodeKind:
    """Return the kind of ``path`` as seen through ``fs``.

    Raises:
        StructuralError: If the entry cannot be inspected
    """
    try:
        return fs.kind(path)
    except OSError as e:
        raise StructuralError(f"cannot inspect path: {e}", path) from e
