"""Loading sync pairs from JSON configuration files."""

import json
import logging
from pathlib import Path
from typing import Union

from ..exceptions import SyncConfigError
from .pair import SyncPair

logger = logging.getLogger(__name__)


def load_sync_pairs_from_json(config_path: Union[str, Path]) -> list[SyncPair]:
    """Load sync pairs from a JSON file.

    The file holds a list of objects, each with ``source`` and ``target``
    keys and an optional ``alias``::

        [
            {"source": "/data/photos", "target": "/backup/photos"},
            {"source": "/data/docs", "target": "/backup/docs", "alias": "docs"}
        ]

    Relative paths are resolved against the directory containing the
    configuration file.

    Args:
        config_path: Path to the JSON file

    Returns:
        List of SyncPair objects in file order

    Raises:
        SyncConfigError: If the file cannot be read or is malformed
    """
    config_path = Path(config_path)
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except OSError as e:
        raise SyncConfigError(f"cannot read config file: {e}", config_path) from e
    except json.JSONDecodeError as e:
        raise SyncConfigError(f"invalid JSON: {e}", config_path) from e

    if not isinstance(data, list):
        raise SyncConfigError("expected a list of sync pairs", config_path)

    base_dir = config_path.parent
    pairs: list[SyncPair] = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            raise SyncConfigError(
                f"entry {index} must be an object, got {type(item).__name__}",
                config_path,
            )
        try:
            pair = SyncPair.from_dict(item)
        except ValueError as e:
            raise SyncConfigError(f"entry {index}: {e}", config_path) from e

        if not pair.source.is_absolute():
            pair.source = base_dir / pair.source
        if not pair.target.is_absolute():
            pair.target = base_dir / pair.target
        pairs.append(pair)

    logger.debug("Loaded %d sync pair(s) from %s", len(pairs), config_path)
    return pairs
