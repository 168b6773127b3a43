"""Mini e-discovery review trainer: mock corpus, filters, coding and CSV export."""

from .coding_store import STORAGE_KEY, CodingPersistenceError, CodingStore
from .export_csv import CSV_HEADERS, build_coding_csv, export_filename
from .filters import document_matches, filter_documents, filter_options
from .hashing import fnv1a_32
from .session import CsvExport, ReviewSession
from .stores import DirectoryStore, KeyValueStore, MemoryStore
from .synth_corpus import build_document, generate_corpus, make_doc_id

__all__ = [
    "CSV_HEADERS",
    "CodingPersistenceError",
    "CodingStore",
    "CsvExport",
    "DirectoryStore",
    "KeyValueStore",
    "MemoryStore",
    "ReviewSession",
    "STORAGE_KEY",
    "build_coding_csv",
    "build_document",
    "document_matches",
    "export_filename",
    "filter_documents",
    "filter_options",
    "fnv1a_32",
    "generate_corpus",
    "make_doc_id",
]
