"""Schemas for filter criteria and session statistics."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

FILTER_FIELDS: tuple[str, ...] = ("custodian", "doctype", "tag", "privilege", "responsive")


class FilterCriteria(BaseModel):
    """Active filters. Empty strings are wildcards."""

    query: str = Field(default="", description="Case-insensitive free-text query.")
    custodian: str = Field(default="", description="Exact custodian match.")
    doctype: str = Field(default="", description="Exact doctype match.")
    tag: str = Field(default="", description="Exact tag match.")
    privilege: str = Field(default="", description="Exact privilege ground-truth match.")
    responsive: str = Field(default="", description="Exact responsiveness ground-truth match.")

    @field_validator("*", mode="before")
    @classmethod
    def none_is_wildcard(cls, value: object) -> object:
        return "" if value is None else value

    def is_empty(self) -> bool:
        return not self.query.strip() and not any(getattr(self, name) for name in FILTER_FIELDS)


class SessionStats(BaseModel):
    """Counters shown next to the document list."""

    showing: int = Field(..., ge=0, description="Documents in the filtered view.")
    total: int = Field(..., ge=0, description="Documents in the corpus.")
    coded: int = Field(..., ge=0, description="Documents with a saved coding record.")
