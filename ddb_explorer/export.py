"""Save one item as a pretty-printed JSON file."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Callable

from .client import TableInfo
from .codec import RawItem
from .errors import ExportError

logger = logging.getLogger(__name__)

# write(path, data) -> None; raises OSError on failure.
Sink = Callable[[Path, bytes], None]

_HOSTILE = ("/", " ", ":")


def write_file(path: Path, data: bytes) -> None:
    path.write_bytes(data)


def export_filename(table: TableInfo, raw: RawItem) -> str:
    """"<pk>.json" or "<pk>_<sk>.json" with path-hostile characters replaced."""
    name = f"{raw.get(table.partition_key)}"
    if table.sort_key:
        name = f"{name}_{raw.get(table.sort_key)}"
    for ch in _HOSTILE:
        name = name.replace(ch, "_")
    return f"{name}.json"


def serialize_item(raw: RawItem) -> bytes:
    try:
        return json.dumps(raw, indent=4, ensure_ascii=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise ExportError(f"Error saving JSON: {e}") from e


def export_item(table: TableInfo, raw: RawItem, directory: Path = Path("."), sink: Sink = write_file) -> Path:
    """Serialize `raw` and hand it to the sink.

    Returns:
        Path of the written file

    Raises:
        ExportError: Serialization or write failed.
    """
    path = Path(directory) / export_filename(table, raw)
    data = serialize_item(raw)
    try:
        sink(path, data)
    except OSError as e:
        raise ExportError(f"Error writing file: {e}", path=str(path)) from e
    logger.info("Exported item to %s (%d bytes)", path, len(data))
    return path
