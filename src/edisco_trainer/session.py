"""Review session state: filters, filtered view, selection and navigation."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date

from loguru import logger

from .coding_store import CodingStore
from .export_csv import build_coding_csv, export_filename
from .filters import filter_documents
from .schemas.coding import CodingForm, CodingRecord
from .schemas.documents import Document
from .schemas.review import FilterCriteria, SessionStats

NOT_CODED = "—"


@dataclass(frozen=True)
class CsvExport:
    """Export payload handed to the presentation layer."""

    filename: str
    content: str


class ReviewSession:
    """Owns the mutable review state for one corpus and one coding store.

    Whenever ``selected_id`` is set by a criteria change it refers to a
    document in ``filtered_view``. Direct selection may pick any corpus
    document; navigation only moves within the filtered view.
    """

    def __init__(self, corpus: Sequence[Document], store: CodingStore) -> None:
        self.corpus: tuple[Document, ...] = tuple(corpus)
        self.store = store
        self._by_id = {doc.id: doc for doc in self.corpus}
        self.criteria = FilterCriteria()
        self._filtered: list[Document] = list(self.corpus)
        self.selected_id: str | None = self.corpus[0].id if self.corpus else None

    @property
    def filtered_view(self) -> tuple[Document, ...]:
        return tuple(self._filtered)

    @property
    def selected_document(self) -> Document | None:
        if self.selected_id is None:
            return None
        return self._by_id[self.selected_id]

    @property
    def current_index(self) -> int:
        """Position of the selection in the filtered view, or -1."""
        if self.selected_id is None:
            return -1
        for index, doc in enumerate(self._filtered):
            if doc.id == self.selected_id:
                return index
        return -1

    @property
    def stats(self) -> SessionStats:
        return SessionStats(
            showing=len(self._filtered),
            total=len(self.corpus),
            coded=self.store.coded_count,
        )

    def get_document(self, doc_id: str) -> Document | None:
        return self._by_id.get(doc_id)

    def set_criteria(self, criteria: FilterCriteria) -> None:
        self.criteria = criteria
        self._filtered = filter_documents(self.corpus, criteria)
        if self.selected_id is not None and self.current_index < 0:
            logger.debug("session:selection_cleared | doc_id={}", self.selected_id)
            self.selected_id = None
        logger.debug("session:filter | showing={} | total={}", len(self._filtered), len(self.corpus))

    def clear_criteria(self) -> None:
        self.set_criteria(FilterCriteria())

    def select(self, doc_id: str | None) -> bool:
        """Select ``doc_id`` (or clear with None). Unknown ids are ignored."""
        if doc_id is not None and doc_id not in self._by_id:
            logger.warning("session:select_ignored | unknown doc_id={}", doc_id)
            return False
        self.selected_id = doc_id
        return True

    def next(self) -> str | None:
        if not self._filtered:
            return self.selected_id
        index = self.current_index
        target = 0 if index < 0 else min(index + 1, len(self._filtered) - 1)
        self.selected_id = self._filtered[target].id
        return self.selected_id

    def prev(self) -> str | None:
        if not self._filtered:
            return self.selected_id
        index = self.current_index
        target = 0 if index <= 0 else index - 1
        self.selected_id = self._filtered[target].id
        return self.selected_id

    def form_for(self, doc_id: str) -> CodingForm:
        """Form contents for ``doc_id``: its saved coding or the defaults."""
        record = self.store.get(doc_id)
        return record.to_form() if record is not None else CodingForm()

    def coding_summary(self, doc_id: str) -> str:
        record = self.store.get(doc_id)
        if record is None:
            return NOT_CODED
        return f"{record.resp or 'Unreviewed'} / {record.priv or 'Unreviewed'}"

    def list_meta(self) -> str:
        return f"{len(self._filtered)} of {len(self.corpus)} documents"

    def save_coding(self, form: CodingForm) -> CodingRecord | None:
        """Save ``form`` for the selected document; no-op without a selection."""
        if self.selected_id is None:
            logger.debug("session:save_skipped | no selection")
            return None
        return self.store.save(self.selected_id, form)

    def reset_coding(self, confirm: Callable[[], bool]) -> bool:
        return self.store.reset_all(confirm)

    def export_csv(self, today: date | None = None) -> CsvExport:
        """Build the export for the whole corpus, ignoring active filters."""
        export_day = today or date.today()
        return CsvExport(
            filename=export_filename(export_day),
            content=build_coding_csv(self.corpus, self.store.records),
        )
