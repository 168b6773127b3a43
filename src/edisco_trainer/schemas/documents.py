"""Schemas for generated review documents."""

from __future__ import annotations

import datetime as dt
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PrivilegeLabel = Literal["Privileged", "Not Privileged"]
ResponsiveLabel = Literal["Responsive", "Unreviewed"]

PRIVILEGE_LABELS: tuple[str, ...] = ("Privileged", "Not Privileged")
RESPONSIVE_LABELS: tuple[str, ...] = ("Responsive", "Unreviewed")


class Document(BaseModel):
    """Synthetic review document. Immutable once generated."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., pattern=r"^DOC-\d{4,}$", description="Stable identifier, DOC-####.")
    title: str = Field(..., description="Subject line shown in the document list.")
    custodian: str = Field(..., description="Synthetic person the document was collected from.")
    doctype: str = Field(..., description="Synthetic document category.")
    tag: str = Field(..., description="Topical or legal-category training label.")
    date: dt.date = Field(..., description="Calendar date of the document.")
    body: str = Field(..., description="Full text, including the metadata preamble.")
    privilege: PrivilegeLabel = Field(..., description="Fixed-rule privilege ground truth.")
    responsive: ResponsiveLabel = Field(..., description="Fixed-rule responsiveness ground truth.")
