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
"""GraphDB SPARQL HTTP client using urllib.

Sends GET requests to a repository endpoint and returns parsed bindings.
No domain logic, pure transport layer. Never raises: every transport or
format problem comes back as a Fail with its ErrorKind.
"""

from __future__ import annotations

import base64
import http.client
import json
import ssl
import urllib.error
import urllib.parse
import urllib.request
from dataclasses import dataclass
from typing import Any

import certifi

from ontobrowse.config import GraphDBConfig
from ontobrowse.logger import get_logger
from ontobrowse.result import ErrorKind, Fail, Ok, Result
from ontobrowse.sparql.terms import BindingRow, head_vars, parse_results

log = get_logger(__name__)

_ssl_ctx = ssl.create_default_context(cafile=certifi.where())


@dataclass(frozen=True, slots=True)
class QueryResult:
    """Column names plus parsed rows of a SELECT."""

    variables: list[str]
    rows: list[BindingRow]


def repository_url(graphdb: GraphDBConfig) -> str:
    """``{endpoint}/repositories/{repository}`` with the name URL-quoted."""
    repo = urllib.parse.quote(graphdb.repository, safe="")
    return f"{graphdb.endpoint.rstrip('/')}/repositories/{repo}"


def _headers(graphdb: GraphDBConfig) -> dict[str, str]:
    headers = {"Accept": "application/sparql-results+json"}
    if graphdb.has_credentials:
        token = f"{graphdb.username}:{graphdb.password}".encode("utf-8")
        headers["Authorization"] = "Basic " + base64.b64encode(token).decode("ascii")
    return headers


def _fetch_json(graphdb: GraphDBConfig, query: str) -> Result[Any]:
    """Single GET round trip, decoded as JSON."""
    url = repository_url(graphdb) + "?" + urllib.parse.urlencode({"query": query})
    req = urllib.request.Request(url, headers=_headers(graphdb), method="GET")

    log.debug("SPARQL query -> %s\n%s", graphdb.repository, query)

    try:
        with urllib.request.urlopen(req, timeout=graphdb.timeout, context=_ssl_ctx) as resp:
            body = resp.read()
    except urllib.error.HTTPError as exc:
        detail = exc.read().decode("utf-8", errors="replace")[:500]
        if exc.code == 401:
            log.error("GraphDB rejected credentials for %s", graphdb.repository)
        return Fail(error=f"SPARQL HTTP {exc.code}: {exc.reason}", kind=ErrorKind.HTTP, context=detail)
    except urllib.error.URLError as exc:
        if isinstance(exc.reason, TimeoutError):
            return Fail(error=f"SPARQL timeout after {graphdb.timeout}s", kind=ErrorKind.TIMEOUT)
        return Fail(error=f"SPARQL connection error: {exc.reason}", kind=ErrorKind.CONNECTION)
    except TimeoutError:
        return Fail(error=f"SPARQL timeout after {graphdb.timeout}s", kind=ErrorKind.TIMEOUT)
    except OSError as exc:
        return Fail(error=f"SPARQL connection error: {exc}", kind=ErrorKind.CONNECTION)
    except http.client.HTTPException as exc:
        # IncompleteRead, BadStatusLine: not OSError subclasses
        return Fail(error=f"SPARQL connection error: {exc!r}", kind=ErrorKind.CONNECTION)

    try:
        return Ok(data=json.loads(body.decode("utf-8")))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        return Fail(
            error=f"SPARQL response is not JSON: {exc}",
            kind=ErrorKind.MALFORMED_RESPONSE,
            context=body[:500],
        )


def execute_select(graphdb: GraphDBConfig, query: str) -> Result[QueryResult]:
    """Run a SELECT and return its variables and parsed rows."""
    payload = _fetch_json(graphdb, query)
    if not payload.ok:
        return payload  # type: ignore[return-value]

    rows = parse_results(payload.data)
    if not rows.ok:
        return rows  # type: ignore[return-value]

    log.info("SPARQL returned %d bindings", len(rows.data))
    return Ok(data=QueryResult(variables=head_vars(payload.data), rows=rows.data))


def execute_query(graphdb: GraphDBConfig, query: str) -> Result[list[BindingRow]]:
    """Run a SELECT and return only the parsed binding rows."""
    result = execute_select(graphdb, query)
    if not result.ok:
        return result  # type: ignore[return-value]
    return Ok(data=result.data.rows)
