"""Filesystem mutations performed while mirroring."""

import logging
from pathlib import Path

from ..exceptions import CopyError, StructuralError
from ..utils import BLOCK_SIZE
from .filesystem import FileSystem, NodeKind, node_kind

logger = logging.getLogger(__name__)


class SyncOperations:
    """Copy, create and delete operations with a common error interface.

    ``OSError`` raised by the filesystem is translated into the matching
    :class:`~pymirror.exceptions.MirrorError` subclass, carrying the path
    that failed.
    """

    def __init__(self, fs: FileSystem, block_size: int = BLOCK_SIZE):
        """Initialize sync operations.

        Args:
            fs: Filesystem to operate on
            block_size: Number of bytes copied per read/write step
        """
        self.fs = fs
        self.block_size = block_size

    def copy_file(self, source: Path, target: Path) -> int:
        """Copy a file's content over the target, replacing it entirely.

        If the copy fails after the target was opened, the partially
        written target is removed so a later run copies it again instead
        of comparing against a truncated file.

        Args:
            source: File to read
            target: File to create or truncate

        Returns:
            Number of bytes written

        Raises:
            CopyError: If the source cannot be read or the target written
        """
        try:
            src = self.fs.open_read(source)
        except OSError as e:
            raise CopyError(f"cannot open source: {e}", source) from e

        with src:
            try:
                dst = self.fs.open_write(target)
            except OSError as e:
                raise CopyError(f"cannot open target: {e}", target) from e

            written = 0
            try:
                with dst:
                    while True:
                        block = src.read(self.block_size)
                        if not block:
                            break
                        dst.write(block)
                        written += len(block)
            except OSError as e:
                self._discard_partial(target)
                raise CopyError(f"copy interrupted: {e}", source) from e

        logger.debug("Copied %s -> %s (%d bytes)", source, target, written)
        return written

    def _discard_partial(self, target: Path) -> None:
        try:
            self.fs.remove_file(target)
        except OSError as e:
            logger.warning("Could not remove partial copy %s: %s", target, e)

    def make_directory(self, target: Path) -> None:
        """Create a single directory whose parent already exists.

        Raises:
            StructuralError: If the directory cannot be created
        """
        try:
            self.fs.make_dir(target)
        except OSError as e:
            raise StructuralError(f"cannot create directory: {e}", target) from e
        logger.debug("Created directory %s", target)

    def delete_recursively(self, path: Path) -> int:
        """Delete a file, or a directory together with everything below it.

        Children of a directory are deleted depth-first before the
        directory itself is removed.

        Args:
            path: File or directory to delete

        Returns:
            Number of entries removed

        Raises:
            StructuralError: If any entry cannot be listed or removed
        """
        if node_kind(self.fs, path) == NodeKind.DIRECTORY:
            try:
                children = self.fs.list_dir(path)
            except OSError as e:
                raise StructuralError(f"cannot list directory: {e}", path) from e

            removed = 0
            for child in children:
                removed += self.delete_recursively(child)
            try:
                self.fs.remove_dir(path)
            except OSError as e:
                raise StructuralError(f"cannot remove directory: {e}", path) from e
            return removed + 1

        try:
            self.fs.remove_file(path)
        except OSError as e:
            raise StructuralError(f"cannot remove file: {e}", path) from e
        return 1
