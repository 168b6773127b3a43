"""Schemas for reviewer coding decisions."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator

RESPONSIVENESS_CODES: tuple[str, ...] = ("Unreviewed", "Responsive", "Not Responsive")
PRIVILEGE_CODES: tuple[str, ...] = ("Unreviewed", "Privileged", "Not Privileged")
UNREVIEWED = "Unreviewed"

_DATETIME = TypeAdapter(datetime)


def format_timestamp(value: datetime) -> str:
    """Render ``value`` as ISO-8601 UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class CodingForm(BaseModel):
    """Snapshot of the reviewer's coding form for one document."""

    resp: str = Field(default=UNREVIEWED, description="Responsiveness code.")
    priv: str = Field(default=UNREVIEWED, description="Privilege code.")
    issues: str = Field(default="", description="Free-text issue tags.")
    notes: str = Field(default="", description="Free-text reviewer notes.")


class CodingRecord(BaseModel):
    """Persisted coding decision, as stored under the coding key.

    ``saved_at`` keeps the timestamp text exactly as stored so exports echo
    it unchanged; datetimes passed in are rendered with ``format_timestamp``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    resp: str = Field(default="", description="Responsiveness code.")
    priv: str = Field(default="", description="Privilege code.")
    issues: str = Field(default="", description="Trimmed issue tags.")
    notes: str = Field(default="", description="Trimmed notes.")
    saved_at: str | None = Field(
        default=None,
        alias="savedAt",
        description="ISO-8601 timestamp of the save.",
    )

    @field_validator("resp", "priv", "issues", "notes", mode="before")
    @classmethod
    def none_is_blank(cls, value: object) -> object:
        return "" if value is None else value

    @field_validator("saved_at", mode="before")
    @classmethod
    def normalize_saved_at(cls, value: object) -> object:
        if value is None or value == "":
            return None
        if isinstance(value, datetime):
            return format_timestamp(value)
        if isinstance(value, str):
            try:
                _DATETIME.validate_python(value)
            except ValidationError as exc:
                raise ValueError(f"savedAt is not an ISO-8601 timestamp: {value!r}") from exc
        return value

    @property
    def saved_datetime(self) -> datetime | None:
        if self.saved_at is None:
            return None
        return _DATETIME.validate_python(self.saved_at)

    def to_form(self) -> CodingForm:
        return CodingForm(
            resp=self.resp or UNREVIEWED,
            priv=self.priv or UNREVIEWED,
            issues=self.issues,
            notes=self.notes,
        )

    def to_payload(self) -> dict[str, str | None]:
        """Dump using the storage field names (``savedAt``)."""
        return self.model_dump(mode="json", by_alias=True)
