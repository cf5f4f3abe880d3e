"""JSON object files for the storage scopes."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from scamvigil.types import JsonValue


def read_json_object(path: Path) -> dict[str, JsonValue] | None:
    """Return the JSON object stored at ``path``, or None when the file is absent.

    Raises ``ValueError`` when the file is not valid JSON or not an object.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    payload = json.loads(text)
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")
    return {key: value for key, value in payload.items() if isinstance(key, str)}


def write_json_atomic(
    path: Path,
    payload: dict[str, JsonValue],
    *,
    temp_prefix: str,
    temp_suffix: str,
) -> None:
    """Replace ``path`` with ``payload`` so readers never observe a partial file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=temp_prefix, suffix=temp_suffix)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            json.dump(payload, handle, indent=2, sort_keys=True, ensure_ascii=False)
            handle.write("\n")
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
