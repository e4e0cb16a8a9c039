"""Source/target pair definitions for mirroring."""

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

_DRIVE_LETTER = re.compile(r"^[A-Za-z]$")


@dataclass
class SyncPair:
    """A source tree and the target tree that mirrors it.

    Examples:
        >>> pair = SyncPair(source="/data/photos", target="/backup/photos")
        >>> pair.source
        PosixPath('/data/photos')
        >>> pair = SyncPair.parse_literal("/data/photos:/backup/photos")
        >>> pair.target
        PosixPath('/backup/photos')
    """

    source: Path
    """Source path (never modified)"""

    target: Path
    """Target path made identical to the source"""

    alias: Optional[str] = None
    """Optional name used in output"""

    def __post_init__(self) -> None:
        if isinstance(self.source, str):
            self.source = Path(self.source)
        if isinstance(self.target, str):
            self.target = Path(self.target)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SyncPair":
        """Create a sync pair from a configuration dictionary.

        Args:
            data: Dictionary with "source", "target" and optional "alias"

        Returns:
            SyncPair instance

        Raises:
            ValueError: If required fields are missing
        """
        missing = [key for key in ("source", "target") if not data.get(key)]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        return cls(
            source=Path(data["source"]),
            target=Path(data["target"]),
            alias=data.get("alias"),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the sync pair to a configuration dictionary."""
        data: dict[str, Any] = {
            "source": str(self.source),
            "target": str(self.target),
        }
        if self.alias is not None:
            data["alias"] = self.alias
        return data

    @classmethod
    def parse_literal(cls, literal: str) -> "SyncPair":
        """Parse a ``source:target`` literal.

        Windows drive letters (``C:\\data``) are not treated as separators.

        Args:
            literal: String in the form ``/source/path:/target/path``

        Returns:
            SyncPair instance

        Raises:
            ValueError: If the literal is malformed or a path is empty
        """
        parts: list[str] = []
        for part in literal.split(":"):
            if parts and _DRIVE_LETTER.match(parts[-1]) and part.startswith(
                ("\\", "/")
            ):
                parts[-1] = f"{parts[-1]}:{part}"
            else:
                parts.append(part)

        if len(parts) != 2:
            raise ValueError(
                f"Invalid sync pair literal: {literal!r} "
                "(expected 'source:target')"
            )

        source, target = (p.strip() for p in parts)
        if not source or not target:
            raise ValueError("Source and target paths cannot be empty")

        return cls(source=Path(source), target=Path(target))

    def __str__(self) -> str:
        prefix = f"{self.alias}: " if self.alias else ""
        return f"{prefix}{self.source} -> {self.target}"
