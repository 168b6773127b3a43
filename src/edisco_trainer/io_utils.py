"""Utilities for reading and writing JSON/JSONL artifacts."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import orjson


def _coerce_path(path: str | Path) -> Path:
    """Convert input to a Path."""
    if isinstance(path, Path):
        return path
    return Path(path)


def write_jsonl(path: str | Path, rows: Iterable[Mapping[str, Any]]) -> None:
    """Write an iterable of mappings to JSON Lines format."""
    resolved_path = _coerce_path(path)
    resolved_path.parent.mkdir(parents=True, exist_ok=True)

    with resolved_path.open("wb") as handle:
        for row in rows:
            handle.write(orjson.dumps(dict(row)))
            handle.write(b"\n")


def read_jsonl(path: str | Path) -> list[dict[str, Any]]:
    """Read a JSON Lines file into a list of dictionaries."""
    resolved_path = _coerce_path(path)
    with resolved_path.open("rb") as handle:
        return [orjson.loads(line) for line in handle if line.strip()]


def replace_file(path: str | Path, data: bytes) -> None:
    """Write ``data`` to a temporary sibling, then rename it over ``path``.

    Readers never observe a half-written file. ``OSError`` propagates after
    the temporary file is cleaned up.
    """
    resolved_path = _coerce_path(path)
    resolved_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = resolved_path.with_name(resolved_path.name + ".tmp")
    try:
        temp_path.write_bytes(data)
        temp_path.replace(resolved_path)
    except OSError:
        if temp_path.exists():
            temp_path.unlink()
        raise


def parse_json_object(raw: str | bytes | None) -> dict[str, Any] | None:
    """Decode ``raw`` and return it only when it is a JSON object."""
    if not raw:
        return None
    try:
        parsed = orjson.loads(raw)
    except orjson.JSONDecodeError:
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed
