"""Shared fixtures: an in-code AppConfig and a fake label store."""

import re

import pytest

from ontobrowse.config import (
    AppConfig,
    FilterConfig,
    GraphDBConfig,
    LabelConfig,
    VocabularyConfig,
)
from ontobrowse.result import Ok
from ontobrowse.sparql.terms import Literal, Uri

RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS = "http://www.w3.org/2000/01/rdf-schema#"
OWL = "http://www.w3.org/2002/07/owl#"
XSD = "http://www.w3.org/2001/XMLSchema#"

CORE_RESOURCES = [
    RDFS + "Resource",
    RDFS + "Class",
    RDFS + "Literal",
    RDF + "Property",
    OWL + "Class",
    OWL + "ObjectProperty",
    OWL + "DatatypeProperty",
]

_VALUES_RE = re.compile(r"VALUES \?uri \{([^}]*)\}")
_IRI_RE = re.compile(r"<([^>]+)>")


@pytest.fixture
def vocabulary():
    return VocabularyConfig(
        system_namespaces=(RDF, RDFS, OWL, XSD),
        core_resources=frozenset(CORE_RESOURCES),
        domain_markers=(
            "/ontology", "/resource", "/class", "/product",
            "/schema.org", "/Property", "#Property",
        ),
    )


@pytest.fixture
def app_config(vocabulary):
    return AppConfig(
        graphdb=GraphDBConfig(endpoint="http://graphdb.test", repository="products"),
        vocabulary=vocabulary,
        labels=LabelConfig(
            batch_size=20,
            predicates=(
                RDFS + "label",
                "http://www.w3.org/2004/02/skos/core#prefLabel",
                "http://purl.org/dc/elements/1.1/title",
                "http://purl.org/dc/terms/title",
                "http://schema.org/name",
                "http://www.w3.org/2004/02/skos/core#altLabel",
            ),
            languages=("sv", "en"),
            query_limit=200,
        ),
        filter=FilterConfig(min_rows=20),
    )


def label_row(uri, label, lang=None):
    return {"uri": Uri(uri), "label": Literal(label, lang=lang)}


class FakeLabelStore:
    """Query runner answering label queries from an in-memory table.

    ``labels`` maps a URI to a list of ``(label, lang)`` pairs, returned in
    order for every URI named in the query's VALUES clause.
    """

    def __init__(self, labels=None):
        self.labels = labels or {}
        self.queries = []

    def requested(self, query):
        values = _VALUES_RE.search(query)
        return _IRI_RE.findall(values.group(1)) if values else []

    def __call__(self, graphdb, query):
        self.queries.append(query)
        rows = []
        for uri in self.requested(query):
            for label, lang in self.labels.get(uri, []):
                rows.append(label_row(uri, label, lang))
        return Ok(data=rows)


@pytest.fixture
def store():
    return FakeLabelStore()
