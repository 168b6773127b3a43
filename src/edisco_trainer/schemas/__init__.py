"""pydantic models shared across the review trainer."""

from .coding import CodingForm, CodingRecord, PRIVILEGE_CODES, RESPONSIVENESS_CODES
from .documents import Document, PRIVILEGE_LABELS, RESPONSIVE_LABELS
from .review import FILTER_FIELDS, FilterCriteria, SessionStats

__all__ = [
    "CodingForm",
    "CodingRecord",
    "Document",
    "FILTER_FIELDS",
    "FilterCriteria",
    "PRIVILEGE_CODES",
    "PRIVILEGE_LABELS",
    "RESPONSIVENESS_CODES",
    "RESPONSIVE_LABELS",
    "SessionStats",
]
