"""
Flat JSON file persistence.

Both the activity snapshot and the token triple are whole-file documents.
Writes go to a sibling temp file that is renamed over the target, so a
reader only ever sees the previous or the new document.
"""

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def write_json_atomic(path: Path, payload: Any, indent: int | None = 2) -> None:
    """
    Replace `path` with the JSON encoding of `payload`.

    Creates the parent directory if needed.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=indent, ensure_ascii=False)
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
    logger.debug(f"Wrote {path}")


def read_json(path: Path) -> Any:
    """
    Load a JSON document.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the content is not valid JSON (json.JSONDecodeError)
    """
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)
