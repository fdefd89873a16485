# SPDX-License-Identifier: MIT
#
#  █████╗ ██████╗  █████╗ ███████╗
# ██╔══██╗██╔══██╗██╔══██╗██╔════╝
# ███████║██████╔╝███████║███████╗
# ██╔══██║██╔══██╗██╔══██║╚════██║
# ██║  ██║██║  ██║██║  ██║███████║
# ╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
# Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>
#
# Licensed under the MIT License.
# See LICENSE and THIRD_PARTY_LICENSES for details.

"""Query page orchestrator.

Runs the steps behind a SPARQL query page:
  1. Query: execute the user's SELECT against the repository
  2. Filter: optionally hide rows made only of system resources
  3. Labels: optionally resolve display labels for every URI in the rows

Only the query step can fail the page. Filtering and labels are
decoration and degrade instead of failing.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

from ontobrowse.classifier import extract_uris_from_results, filter_system_resources
from ontobrowse.config import AppConfig, GraphDBConfig
from ontobrowse.labels import QueryRunner, fetch_labels_for_uris, label_for
from ontobrowse.logger import PipelineSummary, get_logger
from ontobrowse.result import ErrorKind, Fail, Ok, Result
from ontobrowse.sparql.client import QueryResult, execute_query, execute_select
from ontobrowse.sparql.terms import BindingRow, BlankNode, RdfTerm, Uri

log = get_logger(__name__)

SelectRunner = Callable[[GraphDBConfig, str], Result[QueryResult]]


@dataclass
class QueryPage:
    """Everything a results view needs to render one query."""

    query: str
    headers: list[str]
    rows: list[BindingRow]
    labels: dict[str, str] = field(default_factory=dict)
    hidden: int = 0
    show_labels: bool = True

    def display(self, term: RdfTerm | None) -> str:
        """Render a cell: URIs as labels, blank nodes as ``_:id``.

        With ``show_labels`` off, URIs are shown raw.
        """
        if term is None:
            return ""
        if isinstance(term, Uri):
            return label_for(term.value, self.labels) if self.show_labels else term.value
        if isinstance(term, BlankNode):
            return f"_:{term.value}"
        return term.value


def _headers(result: QueryResult) -> list[str]:
    if result.variables:
        return result.variables
    return list(result.rows[0]) if result.rows else []


def run_query_page(
    config: AppConfig,
    query: str,
    hide_system: bool = True,
    show_labels: bool = True,
    run_select: SelectRunner = execute_select,
    run_query: QueryRunner = execute_query,
) -> Result[QueryPage]:
    """Run query -> filter -> labels for one page request."""
    if not query or not query.strip():
        return Fail(error="No query given", kind=ErrorKind.CONFIG)

    summary = PipelineSummary()

    # 1. Query
    select_result = run_select(config.graphdb, query)
    summary.counter("query").record(select_result.ok)
    if not select_result.ok:
        log.error("Query failed: %s", select_result.error)
        log.info(summary.report())
        return select_result  # type: ignore[return-value]

    result: QueryResult = select_result.data
    rows = result.rows

    # 2. Filter
    if hide_system:
        rows = filter_system_resources(rows, config.vocabulary, min_rows=config.filter.min_rows)
        summary.counter("filter").ok += 1

    page = QueryPage(
        query=query,
        headers=_headers(result),
        rows=rows,
        hidden=len(result.rows) - len(rows),
        show_labels=show_labels,
    )

    # 3. Labels
    if show_labels:
        uris = extract_uris_from_results(rows)
        page.labels = fetch_labels_for_uris(uris, config, run_query=run_query, summary=summary)

    if summary.failed:
        log.warning(summary.report())
    else:
        log.info(summary.report())
    return Ok(data=page)
