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

"""Loads browser.yaml into frozen, typed dataclasses.

The resulting AppConfig is built once at startup and handed to every
component. Connection settings can be overridden from the environment
(or a .env file); credentials only ever come from there.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml
from dotenv import find_dotenv, load_dotenv

from ontobrowse.result import ErrorKind, Fail, Ok, Result


# ── GraphDB ────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class GraphDBConfig:
    endpoint: str
    repository: str
    username: str | None = None
    password: str | None = None
    timeout: float = 10.0

    @property
    def has_credentials(self) -> bool:
        return bool(self.username) and self.password is not None


# ── Vocabulary ─────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class VocabularyConfig:
    """Namespace set and allow-list used to hide system resources."""
    system_namespaces: tuple[str, ...]
    core_resources: frozenset[str]
    domain_markers: tuple[str, ...]


# ── Labels ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class LabelConfig:
    batch_size: int
    predicates: tuple[str, ...]
    languages: tuple[str, ...]
    query_limit: int


# ── Filter ─────────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class FilterConfig:
    # Result sets this small are never filtered.
    min_rows: int


# ── Top-level ──────────────────────────────────────────────────

@dataclass(frozen=True, slots=True)
class AppConfig:
    graphdb: GraphDBConfig
    vocabulary: VocabularyConfig
    labels: LabelConfig
    filter: FilterConfig


# ── Loader ─────────────────────────────────────────────────────

_ENV_OVERRIDES = {
    "GRAPHDB_ENDPOINT": "endpoint",
    "GRAPHDB_REPOSITORY": "repository",
    "GRAPHDB_USERNAME": "username",
    "GRAPHDB_PASSWORD": "password",
    "GRAPHDB_TIMEOUT": "timeout",
}


def _strings(raw: Any, key: str) -> tuple[str, ...]:
    if not isinstance(raw, list) or not all(isinstance(s, str) for s in raw):
        raise TypeError(f"'{key}' must be a list of strings")
    return tuple(raw)


def _positive_int(raw: Any, key: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int) or raw < 1:
        raise TypeError(f"'{key}' must be a positive integer")
    return raw


def _build_graphdb(raw: dict[str, Any]) -> GraphDBConfig:
    return GraphDBConfig(
        endpoint=str(raw["endpoint"]).rstrip("/"),
        repository=str(raw["repository"]).strip(),
        timeout=float(raw.get("timeout", 10.0)),
    )


def _build_vocabulary(raw: dict[str, Any]) -> VocabularyConfig:
    return VocabularyConfig(
        system_namespaces=_strings(raw["system_namespaces"], "system_namespaces"),
        core_resources=frozenset(_strings(raw["core_resources"], "core_resources")),
        domain_markers=_strings(raw["domain_markers"], "domain_markers"),
    )


def _build_labels(raw: dict[str, Any]) -> LabelConfig:
    return LabelConfig(
        batch_size=_positive_int(raw["batch_size"], "batch_size"),
        predicates=_strings(raw["predicates"], "predicates"),
        languages=_strings(raw["languages"], "languages"),
        query_limit=_positive_int(raw.get("query_limit", 200), "query_limit"),
    )


def apply_env_overrides(graphdb: GraphDBConfig) -> Result[GraphDBConfig]:
    """Overlay GRAPHDB_* environment variables onto the YAML values."""
    changes: dict[str, Any] = {}
    for var, attr in _ENV_OVERRIDES.items():
        value = os.getenv(var)
        if value is None or value == "":
            continue
        changes[attr] = value

    if "endpoint" in changes:
        changes["endpoint"] = changes["endpoint"].rstrip("/")
    if "repository" in changes:
        changes["repository"] = changes["repository"].strip()
    if "timeout" in changes:
        try:
            changes["timeout"] = float(changes["timeout"])
        except ValueError:
            return Fail(
                error=f"GRAPHDB_TIMEOUT is not a number: {changes['timeout']!r}",
                kind=ErrorKind.CONFIG,
            )

    return Ok(data=replace(graphdb, **changes))


def load_config(path: Path) -> Result[AppConfig]:
    """Load browser.yaml into AppConfig, then apply environment overrides."""
    if not path.is_file():
        return Fail(error=f"Config file not found: {path}", kind=ErrorKind.CONFIG)

    try:
        raw: dict[str, Any] = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        return Fail(error=f"Cannot read config file: {exc}", kind=ErrorKind.CONFIG, context=str(path))
    except yaml.YAMLError as exc:
        return Fail(error=f"YAML parse error: {exc}", kind=ErrorKind.CONFIG, context=str(path))

    try:
        graphdb = _build_graphdb(raw["graphdb"])
        config = AppConfig(
            graphdb=graphdb,
            vocabulary=_build_vocabulary(raw["vocabulary"]),
            labels=_build_labels(raw["labels"]),
            filter=FilterConfig(
                min_rows=int(raw.get("filter", {}).get("min_rows", 20)),
            ),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        return Fail(error=f"Config structure error: {exc}", kind=ErrorKind.CONFIG, context=str(path))

    load_dotenv(find_dotenv(usecwd=True))
    env_result = apply_env_overrides(config.graphdb)
    if not env_result.ok:
        return env_result  # type: ignore[return-value]

    return Ok(data=replace(config, graphdb=env_result.data))
