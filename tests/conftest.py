"""Shared fixtures for the pymirror test suite."""

import errno
import io
import tempfile
import threading
from pathlib import Path
from typing import Optional

import pytest

from pymirror.sync.filesystem import FileSystem, NodeKind

SOURCE = Path("/mirror/src")
TARGET = Path("/mirror/dst")


class _MemoryWriter(io.BytesIO):
    """Write handle that commits its buffer to the filesystem on close."""

    def __init__(self, fs: "MemoryFileSystem", path: Path):
        super().__init__()
        self._fs = fs
        self._path = path

    def write(self, data) -> int:
        if self._path in self._fs.fail_write:
            raise OSError(errno.ENOSPC, "No space left on device", str(self._path))
        return super().write(data)

    def close(self) -> None:
        if not self.closed:
            self._fs._commit(self._path, self.getvalue())
        super().close()


class MemoryFileSystem(FileSystem):
    """In-memory FileSystem with optional failure injection.

    Paths listed in the ``fail_*`` sets raise ``OSError`` from the matching
    primitive. ``writes`` counts how many times a file was opened for
    writing.
    """

    def __init__(self) -> None:
        self.files: dict[Path, bytes] = {}
        self.dirs: set[Path] = {Path("/")}
        self.fail_read: set[Path] = set()
        self.fail_open_write: set[Path] = set()
        self.fail_write: set[Path] = set()
        self.fail_remove: set[Path] = set()
        self.fail_make_dir: set[Path] = set()
        self.fail_list: set[Path] = set()
        self.fail_kind: set[Path] = set()
        self.writes = 0
        self._lock = threading.RLock()

    # Test helpers

    def add_dir(self, path) -> Path:
        path = Path(path)
        with self._lock:
            for parent in reversed(path.parents):
                self.dirs.add(parent)
            self.dirs.add(path)
        return path

    def add_file(self, path, content: bytes = b"") -> Path:
        path = Path(path)
        self.add_dir(path.parent)
        with self._lock:
            self.files[path] = content
        return path

    def tree(self, root: Path) -> dict[str, Optional[bytes]]:
        """Return everything below root as {relative path: content}.

        Directories map to None.
        """
        with self._lock:
            result: dict[str, Optional[bytes]] = {}
            for d in self.dirs:
                if d != root and root in d.parents:
                    result[d.relative_to(root).as_posix()] = None
            for f, content in self.files.items():
                if root in f.parents:
                    result[f.relative_to(root).as_posix()] = content
            return result

    def _commit(self, path: Path, content: bytes) -> None:
        with self._lock:
            if path in self.files:
                self.files[path] = content

    def _children(self, path: Path) -> list[Path]:
        children = [d for d in self.dirs if d.parent == path and d != path]
        children.extend(f for f in self.files if f.parent == path)
        return children

    # FileSystem primitives

    def kind(self, path: Path) -> NodeKind:
        with self._lock:
            if path in self.fail_kind:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path in self.dirs:
                return NodeKind.DIRECTORY
            if path in self.files:
                return NodeKind.FILE
            return NodeKind.MISSING

    def list_dir(self, path: Path) -> list[Path]:
        with self._lock:
            if path in self.fail_list:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path in self.files:
                raise NotADirectoryError(errno.ENOTDIR, "Not a directory", str(path))
            if path not in self.dirs:
                raise FileNotFoundError(errno.ENOENT, "No such directory", str(path))
            return self._children(path)

    def make_dir(self, path: Path) -> None:
        with self._lock:
            if path in self.fail_make_dir:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path in self.dirs or path in self.files:
                raise FileExistsError(errno.EEXIST, "File exists", str(path))
            if path.parent not in self.dirs:
                raise FileNotFoundError(errno.ENOENT, "No such directory", str(path))
            self.dirs.add(path)

    def remove_file(self, path: Path) -> None:
        with self._lock:
            if path in self.fail_remove:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path not in self.files:
                raise FileNotFoundError(errno.ENOENT, "No such file", str(path))
            del self.files[path]

    def remove_dir(self, path: Path) -> None:
        with self._lock:
            if path in self.fail_remove:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path not in self.dirs:
                raise FileNotFoundError(errno.ENOENT, "No such directory", str(path))
            if self._children(path):
                raise OSError(errno.ENOTEMPTY, "Directory not empty", str(path))
            self.dirs.remove(path)

    def open_read(self, path: Path) -> io.BytesIO:
        with self._lock:
            if path in self.fail_read:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path in self.dirs:
                raise IsADirectoryError(errno.EISDIR, "Is a directory", str(path))
            if path not in self.files:
                raise FileNotFoundError(errno.ENOENT, "No such file", str(path))
            return io.BytesIO(self.files[path])

    def open_write(self, path: Path) -> _MemoryWriter:
        with self._lock:
            if path in self.fail_open_write:
                raise PermissionError(errno.EACCES, "Permission denied", str(path))
            if path in self.dirs:
                raise IsADirectoryError(errno.EISDIR, "Is a directory", str(path))
            if path.parent not in self.dirs:
                raise FileNotFoundError(errno.ENOENT, "No such directory", str(path))
            self.files[path] = b""
            self.writes += 1
            return _MemoryWriter(self, path)


@pytest.fixture
def memory_fs():
    """Provide an empty in-memory filesystem."""
    return MemoryFileSystem()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def write_tree(root: Path, tree: dict[str, Optional[bytes]]) -> None:
    """Create files (bytes) and directories (None) below root on disk."""
    for rel, content in tree.items():
        path = root / rel
        if content is None:
            path.mkdir(parents=True, exist_ok=True)
        else:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(content)


def read_tree(root: Path) -> dict[str, Optional[bytes]]:
    """Read everything below root on disk as {relative path: content}."""
    result: dict[str, Optional[bytes]] = {}
    for path in root.rglob("*"):
        rel = path.relative_to(root).as_posix()
        result[rel] = None if path.is_dir() else path.read_bytes()
    return result


@pytest.fixture
def disk_tree():
    """Provide helpers to write and read trees on disk."""
    return write_tree, read_tree
