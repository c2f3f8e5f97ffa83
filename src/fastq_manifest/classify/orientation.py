"""Infer forward/reverse read orientation from a file name.

Rules are tried in order and the first match wins. Several rules can match the
same name (``X_S1_L001_R1_001.fastq`` also satisfies the separator rule), so
the order below is part of the contract:

1. ``casava``: ``_R1_001`` / ``_R2_001`` right before the extension.
2. ``separator_r``: ``_R1`` / ``.R1`` (or ``R2``), optionally followed by
   more ``_``/``.``/``-`` tokens, then the extension.
3. ``sra_numeric``: ``_1`` / ``_2`` right before the extension.

Anything else is ``unknown``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

Orientation = Literal["forward", "reverse", "unknown"]
FORWARD: Orientation = "forward"
REVERSE: Orientation = "reverse"
UNKNOWN: Orientation = "unknown"

READ_EXTENSION = r"\.(?:fastq|fq)(?:\.gz)?"

_READ_NUMBER_TO_ORIENTATION: dict[str, Orientation] = {"1": FORWARD, "2": REVERSE}


@dataclass(frozen=True, slots=True)
class OrientationRule:
    """One naming convention; ``pattern`` captures the read number (1 or 2)."""

    name: str
    pattern: re.Pattern[str]

    def match(self, base_name: str) -> Orientation | None:
        found = self.pattern.search(base_name)
        if found is None:
            return None
        return _READ_NUMBER_TO_ORIENTATION[found.group("read")]


ORIENTATION_RULES: tuple[OrientationRule, ...] = (
    OrientationRule(
        name="casava",
        pattern=re.compile(rf"_R(?P<read>[12])_001{READ_EXTENSION}$", re.IGNORECASE),
    ),
    OrientationRule(
        name="separator_r",
        pattern=re.compile(rf"[_.]R(?P<read>[12])(?:[_.-].*)?{READ_EXTENSION}$", re.IGNORECASE),
    ),
    OrientationRule(
        name="sra_numeric",
        pattern=re.compile(rf"_(?P<read>[12]){READ_EXTENSION}$", re.IGNORECASE),
    ),
)


def match_orientation_rule(base_name: str) -> tuple[OrientationRule, Orientation] | None:
    """Return the first rule matching ``base_name`` with its verdict."""

    for rule in ORIENTATION_RULES:
        verdict = rule.match(base_name)
        if verdict is not None:
            return rule, verdict
    return None


def classify_orientation(base_name: str) -> Orientation:
    """Return ``forward``, ``reverse`` or ``unknown``; never raises."""

    matched = match_orientation_rule(base_name)
    return UNKNOWN if matched is None else matched[1]
