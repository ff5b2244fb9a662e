import json
import logging
import os
from typing import Any, Dict, List, Tuple

logger = logging.getLogger(__name__)

DATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data")


def data_path(filename: str) -> str:
    return os.path.join(DATA_DIR, filename)


def load_table(path: str) -> Any:
    """
    Load one of the static JSON tables.

    JSON lets a key appear twice in the same object. When that happens the last
    occurrence wins, matching plain dict assignment, but every duplicate is logged
    so the data file can be cleaned up.
    """
    if not os.path.isabs(path):
        path = data_path(path)

    if not os.path.exists(path):
        raise FileNotFoundError(f"Data table not found: {path}")

    duplicates: List[str] = []

    def _collect(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
        obj: Dict[str, Any] = {}
        for key, value in pairs:
            if key in obj and obj[key] != value:
                duplicates.append(f"{key!r}: {obj[key]!r} -> {value!r}")
            obj[key] = value
        return obj

    with open(path, "r", encoding="utf-8") as f:
        table = json.load(f, object_pairs_hook=_collect)

    for dup in duplicates:
        logger.warning("Duplicate key in %s, last value wins: %s", os.path.basename(path), dup)

    return table
