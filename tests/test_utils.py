"""Unit tests for utility functions."""

from pathlib import Path

from pymirror.utils import format_duration, format_size, is_path_inside


class TestFormatSize:
    """Tests for format_size function."""

    def test_bytes(self):
        assert format_size(0) == "0 B"
        assert format_size(1023) == "1023 B"

    def test_kilobytes(self):
        assert format_size(1024) == "1.0 KB"
        assert format_size(1536) == "1.5 KB"

    def test_megabytes(self):
        assert format_size(5 * 1024 * 1024) == "5.0 MB"

    def test_gigabytes(self):
        assert format_size(3 * 1024 * 1024 * 1024) == "3.0 GB"


class TestFormatDuration:
    """Tests for format_duration function."""

    def test_seconds(self):
        assert format_duration(0.25) == "0.25s"
        assert format_duration(59.5) == "59.50s"

    def test_minutes(self):
        assert format_duration(75) == "1m 15s"
        assert format_duration(3600) == "60m 0s"


class TestIsPathInside:
    """Tests for is_path_inside function."""

    def test_child_inside_parent(self, temp_dir):
        assert is_path_inside(temp_dir / "a" / "b", temp_dir / "a") is True

    def test_same_path(self, temp_dir):
        assert is_path_inside(temp_dir, temp_dir) is True

    def test_sibling_not_inside(self, temp_dir):
        assert is_path_inside(temp_dir / "src", temp_dir / "dst") is False

    def test_prefix_is_not_parent(self, temp_dir):
        """A shared name prefix does not make one path contain the other."""
        assert is_path_inside(temp_dir / "data2", temp_dir / "data") is False

    def test_dot_dot_components_resolved(self, temp_dir):
        sneaky = temp_dir / "dst" / ".." / "src" / "inner"
        assert is_path_inside(sneaky, temp_dir / "src") is True

    def test_relative_paths(self):
        assert is_path_inside(Path("a/b"), Path("a")) is True
