"""Enumerate candidate read files in an input directory."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from fastq_manifest.config import DEFAULT_FASTQ_PATTERN
from fastq_manifest.errors import InputDirectoryMissing, NoCandidateFiles

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CandidateFile:
    """A resolved read file awaiting classification."""

    path: Path
    base_name: str


def compile_pattern(pattern: str | re.Pattern[str]) -> re.Pattern[str]:
    """Compile a filename pattern case-insensitively."""

    if isinstance(pattern, re.Pattern):
        return pattern if pattern.flags & re.IGNORECASE else re.compile(pattern.pattern, re.IGNORECASE)
    try:
        return re.compile(pattern, re.IGNORECASE)
    except re.error as exc:
        raise ValueError(f"Invalid filename pattern {pattern!r}: {exc}") from exc


def list_candidate_files(
    root_dir: Path,
    pattern: str | re.Pattern[str] = DEFAULT_FASTQ_PATTERN,
    logger: logging.Logger | None = None,
) -> list[CandidateFile]:
    """List files directly under ``root_dir`` whose base name matches ``pattern``.

    Paths are resolved and deduplicated, so two entries pointing at the same file
    (for example a symlink next to its target) yield one candidate. The result is
    sorted by resolved path.
    """

    effective_logger = logger or LOGGER
    compiled = compile_pattern(pattern)
    if not root_dir.is_dir():
        raise InputDirectoryMissing(root_dir)

    seen: dict[Path, CandidateFile] = {}
    listed = 0
    for entry in root_dir.iterdir():
        listed += 1
        if compiled.search(entry.name) is None or not entry.is_file():
            continue
        resolved = entry.resolve(strict=True)
        if resolved in seen:
            effective_logger.debug("inventory.duplicate_path entry=%s resolved=%s", entry, resolved)
            continue
        seen[resolved] = CandidateFile(path=resolved, base_name=resolved.name)

    if not seen:
        raise NoCandidateFiles(root_dir, compiled.pattern)

    candidates = [seen[path] for path in sorted(seen)]
    effective_logger.info(
        "inventory.listed root=%s entries=%s candidates=%s",
        root_dir,
        listed,
        len(candidates),
    )
    return candidates
