"""Tests for filter evaluation."""

from edisco_trainer.filters import document_matches, filter_documents, filter_options
from edisco_trainer.schemas.review import FilterCriteria
from edisco_trainer.synth_corpus import CUSTODIANS, generate_corpus

from conftest import make_document


def test_empty_criteria_returns_full_corpus_in_order() -> None:
    corpus = generate_corpus(25)
    result = filter_documents(corpus, FilterCriteria())
    assert result == corpus
    assert result is not corpus


def test_absent_custodian_yields_empty_result() -> None:
    corpus = generate_corpus(25)
    assert filter_documents(corpus, FilterCriteria(custodian="Z. Nobody")) == []


def test_equality_filters_use_and_semantics() -> None:
    corpus = generate_corpus(50)
    target = corpus[3]
    criteria = FilterCriteria(custodian=target.custodian, doctype=target.doctype, tag=target.tag)
    result = filter_documents(corpus, criteria)

    assert target in result
    assert all(
        doc.custodian == target.custodian and doc.doctype == target.doctype and doc.tag == target.tag
        for doc in result
    )
    positions = [corpus.index(doc) for doc in result]
    assert positions == sorted(positions)


def test_ground_truth_filters() -> None:
    corpus = generate_corpus(50)
    responsive = filter_documents(corpus, FilterCriteria(responsive="Responsive"))
    assert all(doc.responsive == "Responsive" for doc in responsive)
    not_priv = filter_documents(corpus, FilterCriteria(privilege="Not Privileged"))
    assert all(doc.privilege == "Not Privileged" for doc in not_priv)
    assert len(responsive) == sum(1 for doc in corpus if doc.responsive == "Responsive")


def test_query_is_case_insensitive_over_id_title_and_body() -> None:
    corpus = [
        make_document("DOC-0001", title="Vendor Terms"),
        make_document("DOC-0002", body="Please route to COUNSEL."),
        make_document("DOC-0003"),
    ]
    assert [d.id for d in filter_documents(corpus, FilterCriteria(query="doc-0003"))] == ["DOC-0003"]
    assert [d.id for d in filter_documents(corpus, FilterCriteria(query="vendor TERMS"))] == ["DOC-0001"]
    assert [d.id for d in filter_documents(corpus, FilterCriteria(query="  counsel "))] == ["DOC-0002"]


def test_query_substring_matches_id_prefix() -> None:
    corpus = generate_corpus(25)
    result = filter_documents(corpus, FilterCriteria(query="DOC-001"))
    assert [doc.id for doc in result] == [f"DOC-{i:04d}" for i in range(10, 20)]


def test_query_matching_every_body() -> None:
    corpus = generate_corpus(10)
    assert filter_documents(corpus, FilterCriteria(query="END OF DOCUMENT")) == corpus


def test_contradictory_criteria_is_empty_not_error() -> None:
    doc = make_document("DOC-0001", custodian="A. Rivera")
    criteria = FilterCriteria(custodian="A. Rivera", query="no such text anywhere")
    assert not document_matches(doc, criteria)
    assert filter_documents([doc], criteria) == []


def test_none_values_are_wildcards() -> None:
    criteria = FilterCriteria(query=None, tag=None)
    assert criteria.tag == ""
    assert criteria.is_empty()
    assert not FilterCriteria(tag="NDA").is_empty()


def test_filter_options_are_sorted_and_distinct() -> None:
    options = filter_options(generate_corpus(50))
    assert options["custodian"] == sorted(set(options["custodian"]))
    assert set(options["custodian"]) <= set(CUSTODIANS)
    assert options["privilege"] == ["Privileged", "Not Privileged"]
    assert options["responsive"] == ["Responsive", "Unreviewed"]
