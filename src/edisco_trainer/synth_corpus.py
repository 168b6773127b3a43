"""Deterministic mock corpus generation."""

from __future__ import annotations

import datetime as dt
from collections.abc import Iterator, Sequence
from pathlib import Path
from typing import TypeVar

from loguru import logger

from .hashing import fnv1a_32
from .io_utils import read_jsonl, write_jsonl
from .schemas.documents import Document

DEFAULT_CORPUS_SIZE = 25
CORPUS_YEAR = 2025
END_MARKER = "— End of document —"

CUSTODIANS = ["A. Rivera", "B. Chen", "C. Patel", "D. Nguyen", "E. Johnson", "F. Smith"]

DOCTYPES = ["Email", "Memo", "Contract", "Invoice", "Meeting Notes", "Chat Log"]

TAGS = ["NDA", "Termination", "Pricing", "IP", "HR", "Compliance", "Litigation Hold"]

RESPONSIVE_TAGS = frozenset({"Litigation Hold", "Termination", "NDA"})

SUBJECTS = [
    "Follow-up on vendor terms",
    "Re: contract redlines",
    "Invoice discrepancy",
    "Project timeline update",
    "Termination discussion",
    "NDA execution status",
    "Privilege review note",
    "Compliance training schedule",
    "Breach of contract",
    "Contract modification request",
    "Hold notice acknowledgement",
    "IP assignment question",
]

BODIES = [
    "Please see the attached draft. Key issues: payment timing, confidentiality scope, and termination for convenience.",
    "Per our call, I’ve summarized the main points. We should confirm whether pricing is fixed or subject to annual adjustment.",
    "This looks like it may contain attorney-client material. Please route to counsel for privilege review.",
    "Reminder: do not delete documents potentially relevant to the matter. Preserve emails, chats, and shared drive files.",
    "I reviewed the redlines. The NDA definition of Confidential Information is broad; consider narrowing to written disclosures.",
    "Noted that the vendor has requested a 30-day cure period. We may want 10 days for non-payment defaults.",
    "The invoice includes an extra line item. Please confirm whether the fee was authorized under the SOW.",
    "If termination is contemplated, document the performance issues and ensure HR policy is followed.",
    "The agreement references IP ownership. Confirm whether work product is a ‘work made for hire’ where applicable.",
    "What time are we teeing off on Saturday?",
    "Can you share the project timeline with the team? Also, did you see the Falcons win last night? Unbelievable finish!",
]


T = TypeVar("T")


def _pick(items: Sequence[T], n: int) -> T:
    return items[n % len(items)]


def make_doc_id(index: int) -> str:
    """Return the stable identifier for the 1-based ``index``."""
    return f"DOC-{index:04d}"


def _synthetic_date(seed: int) -> dt.date:
    # Spread over the first eight months; day never exceeds 26.
    return dt.date(CORPUS_YEAR, seed % 8 + 1, seed % 26 + 1)


def _compose_body(
    subject: str,
    custodian: str,
    iso_date: str,
    doctype: str,
    tag: str,
    sentence: str,
) -> str:
    preamble = "\n".join(
        [
            f"Subject: {subject}",
            f"Custodian: {custodian}",
            f"Date: {iso_date}",
            f"Doc Type: {doctype}",
            f"Tag: {tag}",
        ]
    )
    return f"{preamble}\n\n{sentence}\n\n{END_MARKER}"


def build_document(doc_id: str) -> Document:
    """Derive one document from the hash of its identifier."""
    seed = fnv1a_32(doc_id)

    custodian = _pick(CUSTODIANS, seed)
    doctype = _pick(DOCTYPES, seed >> 1)
    tag = _pick(TAGS, seed >> 2)
    subject = _pick(SUBJECTS, seed >> 3)
    sentence = _pick(BODIES, seed >> 4)
    doc_date = _synthetic_date(seed)

    privilege = "Privileged" if doctype == "Email" and seed % 5 == 0 else "Not Privileged"
    responsive = "Responsive" if tag in RESPONSIVE_TAGS else "Unreviewed"

    return Document(
        id=doc_id,
        title=subject,
        custodian=custodian,
        doctype=doctype,
        tag=tag,
        date=doc_date,
        body=_compose_body(subject, custodian, doc_date.isoformat(), doctype, tag, sentence),
        privilege=privilege,
        responsive=responsive,
    )


def _doc_records(count: int) -> Iterator[Document]:
    for idx in range(1, count + 1):
        yield build_document(make_doc_id(idx))


def generate_corpus(count: int = DEFAULT_CORPUS_SIZE) -> list[Document]:
    """Generate ``count`` documents with ids ``DOC-0001`` onwards."""
    if count < 0:
        raise ValueError("count must be non-negative")

    corpus = list(_doc_records(count))
    logger.debug("generate_corpus:done | count={}", len(corpus))
    return corpus


def write_corpus(output_path: Path, count: int = DEFAULT_CORPUS_SIZE) -> list[Document]:
    """Generate the corpus and dump it as JSON Lines."""
    corpus = generate_corpus(count)
    write_jsonl(output_path, (doc.model_dump(mode="json") for doc in corpus))
    logger.info("write_corpus:done | count={} | path={}", len(corpus), output_path)
    return corpus


def load_corpus(input_path: Path) -> list[Document]:
    """Read a corpus previously written by ``write_corpus``."""
    corpus = [Document.model_validate(row) for row in read_jsonl(input_path)]
    logger.info("load_corpus:done | count={} | path={}", len(corpus), input_path)
    return corpus
