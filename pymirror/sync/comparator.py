"""File comparison logic for sync operations."""

import threading
from pathlib import Path

from ..exceptions import ComparisonError
from ..utils import BLOCK_SIZE
from .filesystem import FileSystem


class FileComparator:
    """Decides whether two existing files differ byte for byte.

    Both files are read in lockstep in fixed-size blocks. The comparison
    stops at the first block whose length or content differs, so large
    files that differ early are cheap to compare.
    """

    def __init__(self, fs: FileSystem, block_size: int = BLOCK_SIZE):
        """Initialize file comparator.

        Args:
            fs: Filesystem used to open both files
            block_size: Number of bytes read from each file per step
        """
        self.fs = fs
        self.block_size = block_size
        self.comparisons = 0
        self._lock = threading.Lock()

    def differs(self, source: Path, target: Path) -> bool:
        """Check whether two files have different content.

        Args:
            source: First file (the mirror source)
            target: Second file (the mirror target)

        Returns:
            True if the files differ in length or in any byte

        Raises:
            ComparisonError: If either file cannot be opened or read
        """
        with self._lock:
            self.comparisons += 1

        try:
            with self.fs.open_read(source) as src, self.fs.open_read(target) as dst:
                return self._streams_differ(src, dst)
        except OSError as e:
            raise ComparisonError(
                f"cannot evaluate change state: {e}", source
            ) from e

    def _streams_differ(self, src, dst) -> bool:
        # Blocks are fresh bytes objects sized to what was actually read, so
        # a short final block is compared on its real length only.
        while True:
            src_block = src.read(self.block_size)
            dst_block = dst.read(self.block_size)

            if len(src_block) != len(dst_block):
                return True
            if not src_block:
                return False
            if src_block != dst_block:
                return True
