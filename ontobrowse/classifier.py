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

"""System resource classification and result-set filtering.

A URI is "system" when it belongs to the RDF/RDFS/OWL/XSD vocabularies and
should be hidden from end users. Checks run in a fixed order:

  1. core resources (exact match) are always shown
  2. URIs containing a domain marker are always shown
  3. anything under a system namespace is hidden
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ontobrowse.config import VocabularyConfig
from ontobrowse.logger import get_logger
from ontobrowse.sparql.terms import BindingRow, Uri

log = get_logger(__name__)

DEFAULT_MIN_ROWS = 20


def is_system_resource(uri: Any, vocabulary: VocabularyConfig) -> bool:
    """True if ``uri`` is a vocabulary-internal resource to hide."""
    if not isinstance(uri, str) or not uri:
        return False

    if uri in vocabulary.core_resources:
        return False

    if any(marker in uri for marker in vocabulary.domain_markers):
        return False

    return uri.startswith(vocabulary.system_namespaces)


def _all_uris_system(row: BindingRow, vocabulary: VocabularyConfig) -> bool:
    uris = [term.value for term in row.values() if isinstance(term, Uri)]
    return bool(uris) and all(is_system_resource(u, vocabulary) for u in uris)


def filter_system_resources(
    rows: Sequence[BindingRow],
    vocabulary: VocabularyConfig,
    min_rows: int = DEFAULT_MIN_ROWS,
) -> list[BindingRow]:
    """Drop rows whose URI cells are all system resources.

    Small result sets (``len(rows) <= min_rows``) are returned untouched, and
    if filtering would drop every row the original rows are returned instead.
    """
    if len(rows) <= min_rows:
        if rows:
            log.info("Only %d rows, skipping system resource filtering", len(rows))
        return list(rows)

    filtered = [row for row in rows if not _all_uris_system(row, vocabulary)]

    if not filtered:
        log.info("Filtering would remove all %d rows, returning original data", len(rows))
        return list(rows)

    log.info("Filtered %d of %d rows as system resources", len(rows) - len(filtered), len(rows))
    return filtered


def extract_uris_from_results(rows: Sequence[BindingRow]) -> list[str]:
    """Distinct URI values across all cells, in first-seen order."""
    seen: dict[str, None] = {}
    for row in rows:
        for term in row.values():
            if isinstance(term, Uri):
                seen.setdefault(term.value, None)
    return list(seen)
