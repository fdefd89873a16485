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

"""Structured logger with per-step counters and a request summary.

Query, filter and label steps record ok/failed counts so a page request
can log one compact summary once it has been served.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass, field

_FMT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"
_ROOT = "ontobrowse"


def _default_level() -> int:
    level = logging.getLevelName(os.getenv("ONTOBROWSE_LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str) -> logging.Logger:
    """Return a stdlib logger configured with a consistent format."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FMT, datefmt="%H:%M:%S"))
        logger.addHandler(handler)
        logger.setLevel(_default_level())
    return logger


def set_level(level: int) -> None:
    """Change the level of every ontobrowse logger created so far."""
    for name, logger in logging.root.manager.loggerDict.items():
        if isinstance(logger, logging.Logger) and (name == "main" or name.startswith(_ROOT)):
            logger.setLevel(level)


@dataclass
class StepCounter:
    """Tracks success/fail counts for a single step."""

    name: str
    ok: int = 0
    failed: int = 0

    def record(self, succeeded: bool) -> None:
        if succeeded:
            self.ok += 1
        else:
            self.failed += 1


@dataclass
class PipelineSummary:
    """Accumulates counters across all steps of one request."""

    steps: dict[str, StepCounter] = field(default_factory=dict)

    def counter(self, name: str) -> StepCounter:
        """Get or create a counter for a named step."""
        if name not in self.steps:
            self.steps[name] = StepCounter(name=name)
        return self.steps[name]

    @property
    def failed(self) -> int:
        return sum(step.failed for step in self.steps.values())

    def report(self) -> str:
        """Format a human-readable summary block."""
        lines: list[str] = ["", "Request Summary", "=" * 40]
        for step in self.steps.values():
            parts = [f"{step.name}: {step.ok} ok"]
            if step.failed:
                parts.append(f"{step.failed} failed")
            lines.append("  ".join(parts))
        lines.append("=" * 40)
        return "\n".join(lines)
