"""Filter evaluation over the document corpus."""

from __future__ import annotations

from collections.abc import Iterable

from .schemas.documents import PRIVILEGE_LABELS, RESPONSIVE_LABELS, Document
from .schemas.review import FILTER_FIELDS, FilterCriteria


def _haystack(document: Document) -> str:
    return f"{document.id} {document.title} {document.body}".lower()


def document_matches(document: Document, criteria: FilterCriteria) -> bool:
    """Return True when ``document`` satisfies every active criterion."""
    for field in FILTER_FIELDS:
        wanted = getattr(criteria, field)
        if wanted and getattr(document, field) != wanted:
            return False

    query = criteria.query.strip().lower()
    if query and query not in _haystack(document):
        return False
    return True


def filter_documents(corpus: Iterable[Document], criteria: FilterCriteria) -> list[Document]:
    """Return the documents matching ``criteria`` in corpus order."""
    return [document for document in corpus if document_matches(document, criteria)]


def filter_options(corpus: Iterable[Document]) -> dict[str, list[str]]:
    """Distinct values offered for each equality filter."""
    documents = list(corpus)
    return {
        "custodian": sorted({doc.custodian for doc in documents}),
        "doctype": sorted({doc.doctype for doc in documents}),
        "tag": sorted({doc.tag for doc in documents}),
        "privilege": list(PRIVILEGE_LABELS),
        "responsive": list(RESPONSIVE_LABELS),
    }
