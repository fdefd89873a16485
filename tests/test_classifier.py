"""Tests for system resource classification and filtering."""

import pytest

from conftest import CORE_RESOURCES, OWL, RDF, RDFS, XSD
from ontobrowse import classifier
from ontobrowse.sparql.terms import BlankNode, Literal, Uri


def _triple(s, p, o):
    return {"s": s, "p": p, "o": o}


def _system_row(n=0):
    return _triple(Uri(RDF + "type"), Uri(RDFS + "subClassOf"), Uri(OWL + f"Thing{n}"))


def _domain_row(n=0):
    return _triple(Uri(f"http://example.org/item/{n}"), Uri(RDF + "type"), Uri(OWL + "Thing"))


class TestIsSystemResource:
    """Tests for is_system_resource precedence."""

    @pytest.mark.parametrize("uri", CORE_RESOURCES)
    def test_core_resources_are_shown(self, uri, vocabulary):
        assert classifier.is_system_resource(uri, vocabulary) is False

    @pytest.mark.parametrize("uri", [
        RDF + "type",
        RDFS + "label",
        RDFS + "subClassOf",
        OWL + "sameAs",
        XSD + "string",
    ])
    def test_system_namespace_is_hidden(self, uri, vocabulary):
        assert classifier.is_system_resource(uri, vocabulary) is True

    @pytest.mark.parametrize("uri", [
        RDFS + "Property",
        OWL + "Property",
        "http://www.w3.org/2002/07/owl#x/ontology/thing",
        "http://www.w3.org/2000/01/rdf-schema#/resource/a",
        "http://www.w3.org/2001/XMLSchema#/class/b",
        "http://www.w3.org/2001/XMLSchema#/product/c",
        "http://www.w3.org/1999/02/22-rdf-syntax-ns#/schema.org/d",
    ])
    def test_domain_markers_override_namespace(self, uri, vocabulary):
        assert classifier.is_system_resource(uri, vocabulary) is False

    @pytest.mark.parametrize("uri", [None, "", 42, b"http://www.w3.org/2002/07/owl#sameAs"])
    def test_non_string_input(self, uri, vocabulary):
        assert classifier.is_system_resource(uri, vocabulary) is False

    def test_domain_uri_is_shown(self, vocabulary):
        assert classifier.is_system_resource("http://example.org/item/1", vocabulary) is False

    def test_idempotent(self, vocabulary):
        uri = OWL + "sameAs"
        results = {classifier.is_system_resource(uri, vocabulary) for _ in range(3)}
        assert results == {True}


class TestFilterSystemResources:
    """Tests for filter_system_resources safety valves and row rule."""

    def test_empty(self, vocabulary):
        assert classifier.filter_system_resources([], vocabulary) == []

    def test_small_result_unchanged(self, vocabulary):
        rows = [_system_row(n) for n in range(20)]
        assert classifier.filter_system_resources(rows, vocabulary) == rows

    def test_drops_all_system_rows(self, vocabulary):
        rows = [_system_row(n) for n in range(15)] + [_domain_row(n) for n in range(10)]
        filtered = classifier.filter_system_resources(rows, vocabulary)
        assert filtered == [_domain_row(n) for n in range(10)]

    def test_never_empties_result(self, vocabulary):
        rows = [_system_row(n) for n in range(30)]
        assert classifier.filter_system_resources(rows, vocabulary) == rows

    def test_rows_without_uris_kept(self, vocabulary):
        literal_rows = [{"name": Literal(f"row {n}")} for n in range(5)]
        rows = [_system_row(n) for n in range(20)] + literal_rows
        assert classifier.filter_system_resources(rows, vocabulary) == literal_rows

    def test_literal_cells_do_not_keep_row(self, vocabulary):
        mixed = _triple(Uri(RDF + "type"), Uri(RDFS + "label"), Literal("type", lang="en"))
        blank = _triple(BlankNode("b0"), Uri(RDF + "type"), Uri(OWL + "Restriction"))
        rows = [mixed, blank] + [_system_row(n) for n in range(19)] + [_domain_row()]
        assert classifier.filter_system_resources(rows, vocabulary) == [_domain_row()]

    def test_missing_cells_ignored(self, vocabulary):
        partial = {"s": Uri("http://example.org/x")}
        rows = [_system_row(n) for n in range(21)] + [partial]
        assert classifier.filter_system_resources(rows, vocabulary) == [partial]

    def test_custom_threshold(self, vocabulary):
        rows = [_system_row(), _domain_row()]
        assert classifier.filter_system_resources(rows, vocabulary, min_rows=1) == [_domain_row()]


class TestExtractUris:
    """Tests for extract_uris_from_results."""

    def test_distinct_in_order(self):
        rows = [
            {"s": Uri("http://ex/a"), "o": Literal("x")},
            {"s": Uri("http://ex/b"), "o": Uri("http://ex/a")},
            {"s": BlankNode("n1")},
        ]
        assert classifier.extract_uris_from_results(rows) == ["http://ex/a", "http://ex/b"]

    def test_empty(self):
        assert classifier.extract_uris_from_results([]) == []
