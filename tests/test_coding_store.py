"""Tests for coding persistence."""

from datetime import datetime, timezone

import orjson
import pytest

from edisco_trainer.coding_store import STORAGE_KEY, CodingPersistenceError, CodingStore
from edisco_trainer.schemas.coding import CodingForm, CodingRecord
from edisco_trainer.stores import MemoryStore


class FailingStore(MemoryStore):
    def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")


@pytest.mark.parametrize(
    "raw",
    [None, "", "not json", "[1, 2, 3]", '"a string"', "42", "null", "{broken"],
)
def test_load_recovers_from_missing_or_malformed_state(raw) -> None:
    backend = MemoryStore()
    if raw is not None:
        backend.set_item(STORAGE_KEY, raw)
    store = CodingStore(backend)
    assert store.load() == {}
    assert store.coded_count == 0


def test_load_skips_bad_entries_and_keeps_good_ones() -> None:
    backend = MemoryStore()
    backend.set_item(
        STORAGE_KEY,
        orjson.dumps(
            {
                "DOC-0001": {"resp": "Responsive", "priv": "Unreviewed", "savedAt": "2025-02-03T04:05:06.789Z"},
                "DOC-0002": "not an object",
                "DOC-0003": {"resp": "Responsive", "savedAt": "yesterday-ish"},
            }
        ).decode(),
    )
    records = CodingStore(backend).load()
    assert list(records) == ["DOC-0001"]
    assert records["DOC-0001"].saved_at == "2025-02-03T04:05:06.789Z"
    assert records["DOC-0001"].saved_datetime == datetime(2025, 2, 3, 4, 5, 6, 789000, tzinfo=timezone.utc)


def test_save_trims_text_and_roundtrips_through_fresh_instance(backend, clock) -> None:
    store = CodingStore(backend, clock=clock)
    record = store.save(
        "DOC-0002",
        CodingForm(resp="Responsive", priv="Not Privileged", issues="  breach, NDA ", notes="\n ok \n"),
    )

    assert record.issues == "breach, NDA"
    assert record.notes == "ok"
    assert record.saved_at == "2025-06-01T12:00:00.123Z"

    reloaded = CodingStore(backend).load()
    assert reloaded == {"DOC-0002": record}


def test_storage_format_uses_saved_at_alias(store, backend) -> None:
    store.save("DOC-0001", CodingForm(resp="Responsive", priv="Privileged"))
    payload = orjson.loads(backend.get_item(STORAGE_KEY))
    assert payload == {
        "DOC-0001": {
            "resp": "Responsive",
            "priv": "Privileged",
            "issues": "",
            "notes": "",
            "savedAt": "2025-06-01T12:00:00.123Z",
        }
    }


def test_save_overwrites_wholesale_with_later_timestamp(store) -> None:
    first = store.save("DOC-0001", CodingForm(resp="Responsive", issues="one", notes="keep?"))
    second = store.save("DOC-0001", CodingForm(resp="Not Responsive"))

    assert store.coded_count == 1
    assert store.get("DOC-0001") == second
    assert second.notes == ""
    assert second.issues == ""
    assert second.saved_datetime > first.saved_datetime


def test_write_failure_is_surfaced_and_memory_unchanged(clock) -> None:
    store = CodingStore(FailingStore(), clock=clock)
    with pytest.raises(CodingPersistenceError):
        store.save("DOC-0001", CodingForm(resp="Responsive"))
    assert "DOC-0001" not in store
    assert len(store) == 0


def test_reset_requires_confirmation(store, backend) -> None:
    store.save("DOC-0001", CodingForm(resp="Responsive"))

    assert store.reset_all(lambda: False) is False
    assert store.coded_count == 1
    assert backend.get_item(STORAGE_KEY) is not None

    assert store.reset_all(lambda: True) is True
    assert store.coded_count == 0
    assert CodingStore(backend).load() == {}


def test_reset_does_not_touch_anything_before_confirm(store, backend) -> None:
    store.save("DOC-0001", CodingForm())
    seen = {}

    def confirm() -> bool:
        seen["count"] = store.coded_count
        seen["raw"] = backend.get_item(STORAGE_KEY)
        return True

    store.reset_all(confirm)
    assert seen["count"] == 1
    assert seen["raw"] is not None


def test_records_property_is_a_copy(store) -> None:
    store.save("DOC-0001", CodingForm())
    snapshot = store.records
    snapshot.clear()
    assert store.coded_count == 1


def test_record_to_form_defaults_blank_codes() -> None:
    form = CodingRecord(issues="x").to_form()
    assert form == CodingForm(resp="Unreviewed", priv="Unreviewed", issues="x", notes="")


def test_unencodable_text_is_surfaced_and_memory_unchanged(store, backend) -> None:
    store.save("DOC-0001", CodingForm(resp="Responsive"))
    before = backend.get_item(STORAGE_KEY)

    with pytest.raises(CodingPersistenceError):
        store.save("DOC-0002", CodingForm(notes="bad \udcff byte"))

    assert "DOC-0002" not in store
    assert store.coded_count == 1
    assert backend.get_item(STORAGE_KEY) == before


def test_load_keeps_entries_with_null_fields() -> None:
    backend = MemoryStore()
    backend.set_item(
        STORAGE_KEY,
        '{"DOC-0001": {"resp": null, "priv": "Privileged", "issues": null, "notes": null, "savedAt": null}}',
    )
    record = CodingStore(backend).get("DOC-0001")

    assert record == CodingRecord(priv="Privileged")
    assert record.saved_at is None
    assert record.to_form() == CodingForm(resp="Unreviewed", priv="Privileged")


def test_stored_timestamp_text_is_kept_verbatim() -> None:
    backend = MemoryStore()
    backend.set_item(
        STORAGE_KEY,
        '{"DOC-0001": {"resp": "Responsive", "savedAt": "2025-02-03T06:05:06.789123+02:00"}}',
    )
    record = CodingStore(backend).get("DOC-0001")

    assert record.saved_at == "2025-02-03T06:05:06.789123+02:00"
    assert record.saved_datetime == datetime(2025, 2, 3, 4, 5, 6, 789123, tzinfo=timezone.utc)
