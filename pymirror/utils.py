"""Utility functions for pymirror."""

from pathlib import Path

# =============================================================================
# Constants for file operations
# =============================================================================

# Block size for streaming copies and chunked comparison (4 KB)
BLOCK_SIZE: int = 4096

# Default number of worker threads for file reconciliation
DEFAULT_MAX_WORKERS: int = 4

# Upper bound accepted for --workers
MAX_WORKERS_LIMIT: int = 64


# =============================================================================
# Size formatting utilities
# =============================================================================


def format_size(size_bytes: int) -> str:
    """Format file size in human-readable format.

    Args:
        size_bytes: Size in bytes

    Returns:
        Formatted size string (e.g., "1.5 MB", "256 B")
    """
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / 1024 / 1024:.1f} MB"
    else:
        return f"{size_bytes / 1024 / 1024 / 1024:.1f} GB"


# =============================================================================
# Path utilities
# =============================================================================


def is_path_inside(child: Path, parent: Path) -> bool:
    """Check if child path is inside (or equal to) parent path.

    Both paths are resolved first, so relative paths and ``..`` components
    are compared by their absolute location.

    Args:
        child: Path that may be nested
        parent: Candidate ancestor path

    Returns:
        True if child equals parent or lies below it

    Examples:
        >>> is_path_inside(Path("/data/src/sub"), Path("/data/src"))
        True
        >>> is_path_inside(Path("/data/dst"), Path("/data/src"))
        False
    """
    try:
        child.resolve().relative_to(parent.resolve())
        return True
    except ValueError:
        return False


def format_duration(seconds: float) -> str:
    """Format an elapsed time for summaries.

    Examples:
        >>> format_duration(0.25)
        '0.25s'
        >>> format_duration(75)
        '1m 15s'
    """
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes, secs = divmod(int(seconds), 60)
    return f"{minutes}m {secs}s"
