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

"""RDF terms and the SPARQL 1.1 JSON results parser.

Converts the wire format returned by the store into immutable Uri, Literal
and BlankNode values. Anything that does not match the expected shape is
rejected with a recoverable Fail.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ontobrowse.result import ErrorKind, Fail, Ok, Result


@dataclass(frozen=True, slots=True)
class Uri:
    value: str


@dataclass(frozen=True, slots=True)
class Literal:
    value: str
    lang: str | None = None
    datatype: str | None = None


@dataclass(frozen=True, slots=True)
class BlankNode:
    value: str


RdfTerm = Uri | Literal | BlankNode
BindingRow = dict[str, RdfTerm]


def _malformed(message: str, context: Any = None) -> Fail:
    return Fail(error=message, kind=ErrorKind.MALFORMED_RESPONSE, context=context)


def parse_term(raw: Any) -> Result[RdfTerm]:
    """Parse one ``{"type": ..., "value": ...}`` cell."""
    if not isinstance(raw, dict):
        return _malformed("Term is not an object", context=raw)

    value = raw.get("value")
    if not isinstance(value, str):
        return _malformed("Term has no string value", context=raw)

    kind = raw.get("type")
    if kind == "uri":
        return Ok(data=Uri(value))
    # "typed-literal" is the pre-1.1 spelling some stores still emit
    if kind in ("literal", "typed-literal"):
        return Ok(data=Literal(
            value=value,
            lang=raw.get("xml:lang") or None,
            datatype=raw.get("datatype") or None,
        ))
    if kind == "bnode":
        return Ok(data=BlankNode(value))

    return _malformed(f"Unknown term type: {kind!r}", context=raw)


def parse_row(raw: Any) -> Result[BindingRow]:
    """Parse one solution object into a BindingRow."""
    if not isinstance(raw, dict):
        return _malformed("Binding is not an object", context=raw)

    row: BindingRow = {}
    for var, cell in raw.items():
        term = parse_term(cell)
        if not term.ok:
            return Fail(error=f"Variable '{var}': {term.error}", kind=term.kind, context=term.context)
        row[var] = term.data
    return Ok(data=row)


def parse_results(payload: Any) -> Result[list[BindingRow]]:
    """Validate ``results.bindings`` and parse every row."""
    results = payload.get("results") if isinstance(payload, dict) else None
    bindings = results.get("bindings") if isinstance(results, dict) else None
    if not isinstance(bindings, list):
        return _malformed("Response has no results.bindings array")

    rows: list[BindingRow] = []
    for index, raw in enumerate(bindings):
        row = parse_row(raw)
        if not row.ok:
            return Fail(error=f"Row {index}: {row.error}", kind=row.kind, context=row.context)
        rows.append(row.data)
    return Ok(data=rows)


def head_vars(payload: Any) -> list[str]:
    """Result variable names from ``head.vars``, or [] when absent."""
    head = payload.get("head") if isinstance(payload, dict) else None
    names = head.get("vars") if isinstance(head, dict) else None
    if not isinstance(names, list):
        return []
    return [n for n in names if isinstance(n, str)]
