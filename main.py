# SPDX-License-Identifier: MIT
"""
█████╗ ██████╗  █████╗ ███████╗
██╔══██╗██╔══██╗██╔══██╗██╔════╝
███████║██████╔╝███████║███████╗
██╔══██║██╔══██╗██╔══██║╚════██║
██║  ██║██║  ██║██║  ██║███████║
╚═╝  ╚═╝╚═╝  ╚═╝╚═╝  ╚═╝╚══════╝
Copyright (C) 2026 Riza Emre ARAS <r.emrearas@proton.me>

Licensed under the MIT License.
See LICENSE and THIRD_PARTY_LICENSES for details.

Ontology Browser: command line front end

Runs SPARQL queries against a GraphDB repository, hides system
vocabulary rows and prints results with human-readable labels.

Usage:
    python main.py query "SELECT ?s ?p ?o WHERE { ?s ?p ?o } LIMIT 50"
    python main.py --config browser.yaml labels http://example.org/A
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from ontobrowse.config import load_config
from ontobrowse.labels import fetch_labels_for_uris
from ontobrowse.logger import get_logger, set_level
from ontobrowse.pipeline import run_query_page

log = get_logger("main")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ontobrowse",
        description="Browse a GraphDB repository: SPARQL -> filter -> labels",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=Path("browser.yaml"),
        help="Path to browser config YAML (default: browser.yaml)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log SPARQL queries (debug level)")
    commands = parser.add_subparsers(dest="command", required=True)

    query = commands.add_parser("query", help="Run a SELECT and print labelled rows")
    query.add_argument("sparql", help="SPARQL SELECT query, or @file to read it from a file")
    query.add_argument(
        "--show-system",
        action="store_true",
        help="Keep rows made only of RDF/RDFS/OWL/XSD resources",
    )
    query.add_argument("--no-labels", action="store_true", help="Print raw URIs")

    labels = commands.add_parser("labels", help="Print the display label of each URI")
    labels.add_argument("uris", nargs="+", help="URIs to resolve")
    return parser


def _read_query(arg: str) -> str:
    if arg.startswith("@"):
        return Path(arg[1:]).read_text(encoding="utf-8")
    return arg


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    if args.verbose:
        set_level(logging.DEBUG)

    cfg_result = load_config(args.config.resolve())
    if not cfg_result.ok:
        log.error(cfg_result.error)
        return 1
    config = cfg_result.data

    log.info("Repository: %s/%s", config.graphdb.endpoint, config.graphdb.repository)

    if args.command == "labels":
        labels = fetch_labels_for_uris(args.uris, config)
        for uri in args.uris:
            if uri in labels:
                print(f"{uri}\t{labels[uri]}")
        return 0

    try:
        query = _read_query(args.sparql)
    except OSError as exc:
        log.error("Cannot read query file: %s", exc)
        return 1

    result = run_query_page(
        config,
        query,
        hide_system=not args.show_system,
        show_labels=not args.no_labels,
    )
    if not result.ok:
        log.error("Query failed: %s", result.error)
        return 1

    page = result.data
    print("\t".join(page.headers))
    for row in page.rows:
        print("\t".join(page.display(row.get(h)) for h in page.headers))
    if page.hidden:
        log.info("%d system rows hidden", page.hidden)
    return 0


if __name__ == "__main__":
    sys.exit(main())
