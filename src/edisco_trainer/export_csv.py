"""CSV export of corpus metadata joined with reviewer coding."""

from __future__ import annotations

import csv
import io
from collections.abc import Iterable, Mapping
from datetime import date

from loguru import logger

from .schemas.coding import CodingRecord
from .schemas.documents import Document

CSV_HEADERS = [
    "doc_id",
    "title",
    "custodian",
    "doctype",
    "date",
    "tag",
    "resp_code",
    "priv_code",
    "issues",
    "notes",
    "saved_at",
]

EXPORT_PREFIX = "mini-edisco-coding"


def export_filename(today: date) -> str:
    """Download name for an export produced on ``today``."""
    return f"{EXPORT_PREFIX}-{today.isoformat()}.csv"


def _row(document: Document, record: CodingRecord | None) -> list[str]:
    if record is None:
        coding = ["", "", "", "", ""]
    else:
        coding = [
            record.resp,
            record.priv,
            record.issues,
            record.notes,
            record.saved_at or "",
        ]
    return [
        document.id,
        document.title,
        document.custodian,
        document.doctype,
        document.date.isoformat(),
        document.tag,
        *coding,
    ]


def build_coding_csv(corpus: Iterable[Document], records: Mapping[str, CodingRecord]) -> str:
    """Serialise one fully-quoted row per document, in corpus order."""
    buffer = io.StringIO()
    buffer.write(",".join(CSV_HEADERS) + "\n")
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    rows = 0
    for document in corpus:
        writer.writerow(_row(document, records.get(document.id)))
        rows += 1
    logger.debug("build_coding_csv:done | rows={} | coded={}", rows, len(records))
    return buffer.getvalue()

