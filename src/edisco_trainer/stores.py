"""Key-value persistence backends for reviewer coding."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from loguru import logger

from .io_utils import replace_file


class KeyValueStore(Protocol):
    """Minimal string key-value interface, shaped like browser local storage."""

    def get_item(self, key: str) -> str | None:  # pragma: no cover - structural typing
        """Return the stored value or None when the key is absent."""

    def set_item(self, key: str, value: str) -> None:  # pragma: no cover - structural typing
        """Store ``value`` under ``key``, replacing any previous value."""

    def remove_item(self, key: str) -> None:  # pragma: no cover - structural typing
        """Delete ``key``; absent keys are ignored."""


@dataclass
class MemoryStore:
    """Process-local store used by tests and throwaway sessions."""

    items: dict[str, str] = field(default_factory=dict)

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove_item(self, key: str) -> None:
        self.items.pop(key, None)


@dataclass
class DirectoryStore:
    """Store each key as ``<root>/<key>.json``.

    Writes are atomic renames, so a crash mid-write leaves the previous value
    readable. Write failures raise ``OSError``.
    """

    root: Path

    def __post_init__(self) -> None:
        self.root = Path(self.root)

    def _path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"Invalid storage key '{key}'")
        return self.root / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("directory_store:read_error | path={} | error={}", path, exc)
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        replace_file(path, value.encode("utf-8"))
        logger.trace("directory_store:write | path={} | bytes={}", path, len(value))

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)
