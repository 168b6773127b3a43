"""Shared fixtures for review trainer tests."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from edisco_trainer.coding_store import CodingStore
from edisco_trainer.schemas.documents import Document
from edisco_trainer.stores import MemoryStore


def make_document(doc_id: str, **overrides: object) -> Document:
    fields: dict[str, object] = {
        "id": doc_id,
        "title": f"Title for {doc_id}",
        "custodian": "A. Rivera",
        "doctype": "Memo",
        "tag": "Pricing",
        "date": date(2025, 3, 5),
        "body": f"Subject: Title for {doc_id}\n\nBody text.",
        "privilege": "Not Privileged",
        "responsive": "Unreviewed",
    }
    fields.update(overrides)
    return Document(**fields)


class TickingClock:
    """Deterministic clock that advances one second per call."""

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2025, 6, 1, 12, 0, 0, 123456, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(seconds=1)
        return value


@pytest.fixture
def three_docs() -> list[Document]:
    return [
        make_document("DOC-0001", tag="NDA"),
        make_document("DOC-0002", tag="Litigation Hold", title='The "hold" notice'),
        make_document("DOC-0003", tag="HR"),
    ]


@pytest.fixture
def backend() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def store(backend: MemoryStore, clock: TickingClock) -> CodingStore:
    return CodingStore(backend, clock=clock)
