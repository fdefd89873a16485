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

"""SPARQL query builders.

Pure string construction. Every URI placed into a query goes through
iri_ref so a malformed value cannot break out of its angle brackets.
"""

from __future__ import annotations

import re
from collections.abc import Iterable

from ontobrowse.config import LabelConfig
from ontobrowse.result import ErrorKind, Fail, Ok, Result

# Characters SPARQL forbids inside an IRIREF, plus control chars and space.
_IRI_FORBIDDEN = re.compile(r'[<>"{}|^`\\\x00-\x20]')


def iri_ref(uri: str) -> Result[str]:
    """Wrap a URI as ``<uri>``, rejecting values SPARQL cannot express."""
    if not uri or _IRI_FORBIDDEN.search(uri):
        return Fail(error=f"Not a valid IRI reference: {uri!r}", kind=ErrorKind.INVALID_URI, context=uri)
    return Ok(data=f"<{uri}>")


def sanitize_sparql_string(text: str | None) -> str:
    """Escape backslashes and quotes for use inside a SPARQL string literal."""
    if not text:
        return ""
    return re.sub(r"""([\\"'])""", r"\\\1", text).replace("\x00", "\\0")


def build_label_query(iris: Iterable[str], config: LabelConfig) -> str:
    """SELECT ?uri ?label for already-wrapped IRIs, restricted to label predicates."""
    values = " ".join(iris)
    predicates = ",\n      ".join(f"<{p}>" for p in config.predicates)
    lang_filter = " || ".join(
        ['LANG(?label) = ""']
        + [f'LCASE(LANG(?label)) = "{lang.lower()}"' for lang in config.languages]
    )
    return (
        "SELECT ?uri ?label WHERE {\n"
        f"  VALUES ?uri {{ {values} }}\n"
        "  ?uri ?labelProperty ?label .\n"
        "  FILTER(?labelProperty IN (\n"
        f"      {predicates}\n"
        "  ))\n"
        f"  FILTER({lang_filter})\n"
        "}\n"
        f"LIMIT {config.query_limit}\n"
    )
