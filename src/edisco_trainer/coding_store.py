"""Durable mapping of document ids to reviewer coding records."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

import orjson
from loguru import logger
from pydantic import ValidationError

from .io_utils import parse_json_object
from .schemas.coding import CodingForm, CodingRecord
from .stores import KeyValueStore

STORAGE_KEY = "mini-edisco-coding-v2"


class CodingPersistenceError(RuntimeError):
    """Raised when the coding mapping could not be written to the backend."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CodingStore:
    """Load, save and reset reviewer coding through a key-value backend.

    The whole mapping is stored as one JSON object under ``key``::

        {"DOC-0001": {"resp": "...", "priv": "...", "issues": "...",
                      "notes": "...", "savedAt": "2025-03-01T09:15:00.000Z"}}
    """

    def __init__(
        self,
        backend: KeyValueStore,
        key: str = STORAGE_KEY,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.backend = backend
        self.key = key
        self._clock = clock
        self._records: dict[str, CodingRecord] = self.load()

    def load(self) -> dict[str, CodingRecord]:
        """Read the stored mapping; anything unusable yields an empty mapping."""
        raw = self.backend.get_item(self.key)
        if raw is None:
            return {}

        payload = parse_json_object(raw)
        if payload is None:
            logger.warning("coding_store:load | key={} | stored value is not a JSON object, ignoring", self.key)
            return {}

        records: dict[str, CodingRecord] = {}
        for doc_id, entry in payload.items():
            if not isinstance(entry, dict):
                logger.warning("coding_store:load | skipping non-object entry for {}", doc_id)
                continue
            try:
                records[doc_id] = CodingRecord.model_validate(entry)
            except ValidationError as exc:
                logger.warning("coding_store:load | skipping invalid entry for {} | {}", doc_id, exc)
        logger.debug("coding_store:load | key={} | records={}", self.key, len(records))
        return records

    def _persist(self, records: Mapping[str, CodingRecord]) -> None:
        payload: dict[str, Any] = {doc_id: record.to_payload() for doc_id, record in records.items()}
        try:
            self.backend.set_item(self.key, orjson.dumps(payload).decode("utf-8"))
        except (OSError, orjson.JSONEncodeError) as exc:
            logger.error("coding_store:persist_error | key={} | {}", self.key, exc)
            raise CodingPersistenceError(f"Could not save coding under '{self.key}': {exc}") from exc

    def save(self, doc_id: str, form: CodingForm) -> CodingRecord:
        """Replace the record for ``doc_id`` with ``form`` and persist everything."""
        record = CodingRecord(
            resp=form.resp,
            priv=form.priv,
            issues=form.issues.strip(),
            notes=form.notes.strip(),
            saved_at=self._clock(),
        )
        updated = dict(self._records)
        updated[doc_id] = record
        self._persist(updated)
        self._records = updated
        logger.info("coding_store:save | doc_id={} | resp={} | priv={}", doc_id, record.resp, record.priv)
        return record

    def reset_all(self, confirm: Callable[[], bool]) -> bool:
        """Clear every record once ``confirm()`` agrees. Returns whether it did."""
        if not confirm():
            logger.info("coding_store:reset | declined")
            return False
        try:
            self.backend.remove_item(self.key)
        except OSError as exc:
            logger.error("coding_store:reset_error | key={} | {}", self.key, exc)
            raise CodingPersistenceError(f"Could not clear coding under '{self.key}': {exc}") from exc
        cleared = len(self._records)
        self._records = {}
        logger.info("coding_store:reset | cleared={}", cleared)
        return True

    def get(self, doc_id: str) -> CodingRecord | None:
        return self._records.get(doc_id)

    @property
    def records(self) -> dict[str, CodingRecord]:
        return dict(self._records)

    @property
    def coded_count(self) -> int:
        return len(self._records)

    def __contains__(self, doc_id: object) -> bool:
        return doc_id in self._records

    def __len__(self) -> int:
        return len(self._records)
