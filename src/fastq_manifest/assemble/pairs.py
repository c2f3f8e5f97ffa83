"""Group classified files into manifest rows."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Sequence

from fastq_manifest.classify.classifier import ClassifiedFile
from fastq_manifest.classify.orientation import FORWARD, REVERSE, UNKNOWN
from fastq_manifest.errors import (
    DuplicateSampleFiles,
    IncompletePair,
    InvalidMode,
    NoForwardReads,
    UnclassifiableOrientation,
)

LOGGER = logging.getLogger(__name__)

ReadMode = Literal["paired", "single"]
READ_MODES: tuple[ReadMode, ...] = ("paired", "single")

SingleEndDuplicatePolicy = Literal["keep", "reject"]
SINGLE_END_DUPLICATE_POLICIES: tuple[SingleEndDuplicatePolicy, ...] = ("keep", "reject")


@dataclass(frozen=True, slots=True)
class SampleRow:
    """One manifest line; ``reverse_path`` is None in single-end mode."""

    sample_id: str
    forward_path: Path
    reverse_path: Path | None = None


@dataclass(frozen=True, slots=True)
class Manifest:
    """Sorted manifest rows for one read mode."""

    mode: ReadMode
    rows: tuple[SampleRow, ...]

    @property
    def sample_ids(self) -> list[str]:
        return [row.sample_id for row in self.rows]


@dataclass(slots=True)
class SampleGroup:
    """Forward and reverse paths collected for one sample id."""

    sample_id: str
    forward: set[Path] = field(default_factory=set)
    reverse: set[Path] = field(default_factory=set)


def parse_read_mode(value: object) -> ReadMode:
    """Normalize ``value`` to a read mode or raise ``InvalidMode``."""

    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in READ_MODES:
            return normalized  # type: ignore[return-value]
    raise InvalidMode(value)


def group_by_sample(files: Sequence[ClassifiedFile]) -> dict[str, SampleGroup]:
    """Collect forward/reverse paths per sample id."""

    unknown = [item.base_name for item in files if item.orientation == UNKNOWN]
    if unknown:
        raise UnclassifiableOrientation(unknown)

    groups: dict[str, SampleGroup] = {}
    for item in files:
        group = groups.setdefault(item.sample_id, SampleGroup(sample_id=item.sample_id))
        if item.orientation == FORWARD:
            group.forward.add(item.path)
        elif item.orientation == REVERSE:
            group.reverse.add(item.path)
    return groups


def _assemble_paired(groups: dict[str, SampleGroup]) -> list[SampleRow]:
    rows: list[SampleRow] = []
    for sample_id in sorted(groups):
        group = groups[sample_id]
        if len(group.forward) != 1 or len(group.reverse) != 1:
            raise IncompletePair(sample_id, sorted(group.forward), sorted(group.reverse))
        (forward_path,) = group.forward
        (reverse_path,) = group.reverse
        rows.append(SampleRow(sample_id=sample_id, forward_path=forward_path, reverse_path=reverse_path))
    return rows


def _assemble_single(
    groups: dict[str, SampleGroup],
    duplicates: SingleEndDuplicatePolicy,
    logger: logging.Logger,
) -> list[SampleRow]:
    rows: list[SampleRow] = []
    for sample_id in sorted(groups):
        forward_paths = sorted(groups[sample_id].forward)
        if not forward_paths:
            continue
        if len(forward_paths) > 1:
            if duplicates == "reject":
                raise DuplicateSampleFiles(sample_id, forward_paths)
            logger.warning(
                "assemble.single_end_duplicate sample_id=%s files=%s",
                sample_id,
                [str(path) for path in forward_paths],
            )
        rows.extend(SampleRow(sample_id=sample_id, forward_path=path) for path in forward_paths)
    return rows


def assemble_manifest(
    files: Sequence[ClassifiedFile],
    mode: ReadMode | str,
    single_end_duplicates: SingleEndDuplicatePolicy = "keep",
    logger: logging.Logger | None = None,
) -> Manifest:
    """Build manifest rows sorted by sample id.

    Paired mode requires exactly one forward and one reverse file per sample and
    stops at the first sample (in sorted order) that violates it. Single-end mode
    keeps forward files only; several distinct forward files under one sample
    are kept as separate rows or rejected depending on ``single_end_duplicates``.
    """

    effective_logger = logger or LOGGER
    read_mode = parse_read_mode(mode)
    if single_end_duplicates not in SINGLE_END_DUPLICATE_POLICIES:
        raise ValueError(
            f"single_end_duplicates must be one of {', '.join(SINGLE_END_DUPLICATE_POLICIES)}, "
            f"got: {single_end_duplicates!r}"
        )

    groups = group_by_sample(files)
    if read_mode == "paired":
        rows = _assemble_paired(groups)
    else:
        rows = _assemble_single(groups, single_end_duplicates, effective_logger)
        if not rows:
            raise NoForwardReads()

    effective_logger.info("assemble.done mode=%s samples=%s rows=%s", read_mode, len(groups), len(rows))
    return Manifest(mode=read_mode, rows=tuple(rows))
