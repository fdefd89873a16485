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

"""Human-readable label resolution for URIs.

Pipeline per call: dedup -> drop system resources -> batch -> (query ->
merge)* -> finalize. Batches run one after another so a large page never
fans out into parallel load on the store.

Language priority comes from LabelConfig.languages (``sv`` then ``en``),
with untagged literals last. Every URI that survives filtering gets a
label; when the store has none, or its batch failed, the last path segment
of the URI is used.

fetch_labels_for_uris never raises. Failures are kept as Fail values on
LabelResolution for callers that want to inspect them.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from ontobrowse.classifier import is_system_resource
from ontobrowse.config import AppConfig, GraphDBConfig
from ontobrowse.logger import PipelineSummary, get_logger
from ontobrowse.result import ErrorKind, Fail, Result
from ontobrowse.sparql.client import execute_query
from ontobrowse.sparql.queries import build_label_query, iri_ref
from ontobrowse.sparql.terms import BindingRow, Literal, Uri

log = get_logger(__name__)

QueryRunner = Callable[[GraphDBConfig, str], Result[list[BindingRow]]]

_SEPARATOR = re.compile(r"[/#]")


@dataclass
class LabelCandidates:
    """Best literal seen so far per language slot.

    ``slots[i]`` holds the label for ``languages[i]``; the extra last slot
    holds the untagged literal.
    """

    slots: list[str | None]

    def best(self) -> str | None:
        return next((label for label in self.slots if label), None)


@dataclass
class LabelResolution:
    labels: dict[str, str] = field(default_factory=dict)
    failures: list[Fail] = field(default_factory=list)
    batches: int = 0


def last_path_segment(uri: str) -> str:
    """Text after the last ``/`` or ``#``, or the whole URI if that is empty."""
    return _SEPARATOR.split(uri)[-1] or uri


def label_for(uri: str, labels: dict[str, str]) -> str:
    """Display label for ``uri``; a missing key falls back to its last segment."""
    return labels.get(uri) or last_path_segment(uri)


def _slot_index(lang: str | None, languages: Sequence[str]) -> int | None:
    if not lang:
        return len(languages)
    lang = lang.lower()
    for index, candidate in enumerate(languages):
        if lang == candidate.lower():
            return index
    return None


def merge_bindings(
    rows: Iterable[BindingRow],
    languages: Sequence[str],
    into: dict[str, LabelCandidates] | None = None,
) -> dict[str, LabelCandidates]:
    """Fold ``(uri, label)`` bindings into per-URI language slots.

    A binding only fills its slot while every higher-priority slot is still
    empty. The top-priority slot is always overwritten, so the last Swedish
    literal wins.
    """
    merged: dict[str, LabelCandidates] = {} if into is None else into
    for row in rows:
        uri_term = row.get("uri")
        label_term = row.get("label")
        if not isinstance(uri_term, Uri) or not isinstance(label_term, Literal):
            continue

        index = _slot_index(label_term.lang, languages)
        if index is None:
            continue

        candidates = merged.setdefault(
            uri_term.value, LabelCandidates(slots=[None] * (len(languages) + 1))
        )
        if not any(candidates.slots[:index]):
            candidates.slots[index] = label_term.value
    return merged


def _dedupe(uris: Iterable[Any] | None) -> list[str]:
    if not uris:
        return []
    if isinstance(uris, str):
        return [uris]
    return list(dict.fromkeys(u for u in uris if isinstance(u, str) and u))


def _batches(items: list[str], size: int) -> list[list[str]]:
    return [items[i:i + size] for i in range(0, len(items), size)]


def _resolve_batch(
    batch: list[str],
    config: AppConfig,
    run_query: QueryRunner,
    resolution: LabelResolution,
) -> bool:
    """Query one batch and write a label for every URI in it.

    Returns False if the batch query failed.
    """
    iris: list[str] = []
    for uri in batch:
        ref = iri_ref(uri)
        if ref.ok:
            iris.append(ref.data)
        else:
            log.warning("Skipping label lookup: %s", ref.error)
            resolution.failures.append(ref)

    candidates: dict[str, LabelCandidates] = {}
    succeeded = True
    if iris:
        query = build_label_query(iris, config.labels)
        try:
            result = run_query(config.graphdb, query)
        except Exception as exc:
            result = Fail(error=f"{type(exc).__name__}: {exc}", kind=ErrorKind.UNEXPECTED)
        if result.ok:
            merge_bindings(result.data, config.labels.languages, into=candidates)
        else:
            log.warning("Label batch of %d URIs failed: %s", len(batch), result.error)
            resolution.failures.append(result)
            succeeded = False

    for uri in batch:
        found = candidates.get(uri)
        best = found.best() if found else None
        resolution.labels[uri] = best or last_path_segment(uri)
    return succeeded


def resolve_labels(
    uris: Iterable[Any] | None,
    config: AppConfig,
    run_query: QueryRunner = execute_query,
    summary: PipelineSummary | None = None,
) -> LabelResolution:
    """Resolve labels batch by batch, recording failures instead of raising."""
    resolution = LabelResolution()
    vocabulary = config.vocabulary
    targets = [u for u in _dedupe(uris) if not is_system_resource(u, vocabulary)]
    if not targets:
        log.info("No non-system URIs to fetch labels for")
        return resolution

    batches = _batches(targets, config.labels.batch_size)
    log.info("Processing %d URIs in %d batches", len(targets), len(batches))
    counter = summary.counter("labels") if summary else None

    for batch in batches:
        ok = _resolve_batch(batch, config, run_query, resolution)
        resolution.batches += 1
        if counter:
            counter.record(ok)

    log.info("Resolved %d labels (%d failures)", len(resolution.labels), len(resolution.failures))
    return resolution


def fallback_labels(uris: Iterable[str]) -> dict[str, str]:
    """Last-path-segment label for every URI."""
    return {uri: last_path_segment(uri) for uri in uris}


def fetch_labels_for_uris(
    uris: Iterable[Any] | None,
    config: AppConfig,
    run_query: QueryRunner = execute_query,
    summary: PipelineSummary | None = None,
) -> dict[str, str]:
    """Map URIs to display labels. Never raises.

    System resources are left out of the result. On an unexpected error the
    map degrades to last-path-segment labels for every requested URI.
    """
    try:
        requested = _dedupe(uris)
    except TypeError:
        log.warning("Label lookup got a non-iterable input: %r", type(uris).__name__)
        return {}

    try:
        return resolve_labels(requested, config, run_query=run_query, summary=summary).labels
    except Exception as exc:
        log.exception("Label resolution failed, using fallback labels: %s", exc)

    try:
        targets = [u for u in requested if not is_system_resource(u, config.vocabulary)]
    except Exception:
        targets = requested
    return fallback_labels(targets)
