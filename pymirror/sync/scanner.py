"""Directory listing utilities for sync operations."""

import logging
from pathlib import Path

from ..exceptions import StructuralError
from .filesystem import FileSystem, NodeKind, node_kind

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """Lists directory entries through a FileSystem.

    Listings are never cached: every call reflects the tree as it is on
    disk at that moment, including copies made earlier in the same run.

    Examples:
        >>> scanner = DirectoryScanner(LocalFileSystem())
        >>> entries = scanner.entries(Path("/sync/folder"))
        >>> sorted(entries)
        ['a.txt', 'sub']
    """

    def __init__(self, fs: FileSystem):
        """Initialize directory scanner.

        Args:
            fs: Filesystem used to list directories
        """
        self.fs = fs

    def entries(self, directory: Path) -> dict[str, Path]:
        """Map base names of the immediate children of a directory to paths.

        Args:
            directory: Directory to list

        Returns:
            Dictionary mapping each child's base name to its full path

        Raises:
            StructuralError: If the directory cannot be listed
        """
        try:
            children = self.fs.list_dir(directory)
        except OSError as e:
            raise StructuralError(f"cannot list directory: {e}", directory) from e
        return {child.name: child for child in children}

    def split_children(self, directory: Path) -> tuple[list[Path], list[Path]]:
        """Split the children of a directory into files and subdirectories.

        Children that vanish between listing and inspection, or that
        cannot be inspected at all, are kept with the files so that the
        reconciler reports them.

        Returns:
            Tuple of (files, directories), each sorted by name
        """
        files: list[Path] = []
        directories: list[Path] = []
        for child in sorted(self.entries(directory).values()):
            try:
                is_directory = node_kind(self.fs, child) == NodeKind.DIRECTORY
            except StructuralError as e:
                logger.debug("Deferring %s to the reconciler: %s", child, e)
                is_directory = False
            if is_directory:
                directories.append(child)
            else:
                files.append(child)
        return files, directories

    def obsolete_entries(self, source_dir: Path, target_dir: Path) -> list[Path]:
        """Find target entries that have no counterpart in the source.

        Only base names of immediate children are compared, never full
        paths.

        Args:
            source_dir: Source directory
            target_dir: Target directory mirroring ``source_dir``

        Returns:
            Paths of obsolete target children, sorted by name
        """
        source_names = set(self.entries(source_dir))
        target_entries = self.entries(target_dir)
        obsolete = [
            path
            for name, path in sorted(target_entries.items())
            if name not in source_names
        ]
        if obsolete:
            logger.debug(
                "Found %d obsolete entr(y/ies) in %s", len(obsolete), target_dir
            )
        return obsolete
