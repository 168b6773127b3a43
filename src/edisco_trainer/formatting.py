"""Display formatting kept apart from the data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from .schemas.coding import CodingRecord

ENGLISH_MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)


@dataclass(frozen=True)
class DateFormat:
    """Pattern plus month names; ``pattern`` may use ``{year}``, ``{month}`` and ``{day}``."""

    pattern: str = "{month} {day:02d}, {year}"
    month_names: tuple[str, ...] = ENGLISH_MONTH_ABBREVIATIONS

    def __post_init__(self) -> None:
        if len(self.month_names) != 12:
            raise ValueError("month_names must list exactly 12 months")


DEFAULT_DATE_FORMAT = DateFormat()
ISO_DATE_FORMAT = DateFormat(pattern="{year}-{month_number:02d}-{day:02d}")


def format_display_date(value: date, fmt: DateFormat = DEFAULT_DATE_FORMAT) -> str:
    """Render ``value`` for display, e.g. ``Mar 05, 2025``."""
    return fmt.pattern.format(
        year=value.year,
        month=fmt.month_names[value.month - 1],
        month_number=value.month,
        day=value.day,
    )


def format_saved_status(record: CodingRecord | None) -> str:
    if record is None or record.saved_at is None:
        return "Not saved yet"
    return f"Saved {record.saved_at}"
