"""Apply orientation and sample-id rules to a batch of candidate files."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

import polars as pl

from fastq_manifest.classify.orientation import (
    UNKNOWN,
    Orientation,
    match_orientation_rule,
)
from fastq_manifest.classify.sample_id import extract_sample_id, match_sample_id_rule
from fastq_manifest.errors import UnclassifiableOrientation
from fastq_manifest.ingest.inventory import CandidateFile

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClassifiedFile:
    """A candidate file with its orientation and sample id."""

    path: Path
    base_name: str
    sample_id: str
    orientation: Orientation


def _classification_schema() -> dict[str, pl.DataType]:
    return {
        "base_name": pl.String,
        "orientation": pl.String,
        "orientation_rule": pl.String,
        "sample_id": pl.String,
        "sample_id_rule": pl.String,
        "path": pl.String,
    }


def classify_files(
    candidates: Sequence[CandidateFile],
    logger: logging.Logger | None = None,
) -> list[ClassifiedFile]:
    """Classify every candidate or fail for the whole batch.

    All files with an unknown orientation are reported together in one
    ``UnclassifiableOrientation``. Sample ids are resolved afterwards, in input
    order, and the first unresolvable name raises ``UnresolvableSampleId``.
    """

    effective_logger = logger or LOGGER
    orientations: list[Orientation] = []
    unknown: list[str] = []
    for candidate in candidates:
        matched = match_orientation_rule(candidate.base_name)
        if matched is None:
            unknown.append(candidate.base_name)
            orientations.append(UNKNOWN)
        else:
            orientations.append(matched[1])

    if unknown:
        effective_logger.error("classify.unknown_orientation count=%s files=%s", len(unknown), unknown)
        raise UnclassifiableOrientation(unknown)

    classified = [
        ClassifiedFile(
            path=candidate.path,
            base_name=candidate.base_name,
            sample_id=extract_sample_id(candidate.base_name),
            orientation=orientation,
        )
        for candidate, orientation in zip(candidates, orientations)
    ]
    effective_logger.info(
        "classify.done files=%s samples=%s",
        len(classified),
        len({item.sample_id for item in classified}),
    )
    return classified


def classification_table(candidates: Sequence[CandidateFile]) -> pl.DataFrame:
    """Tabulate how each candidate is classified, without raising.

    Unknown orientations show as ``unknown`` and unresolvable sample ids as null,
    along with the name of the rule that decided each column.
    """

    rows: list[dict[str, object]] = []
    for candidate in candidates:
        orientation_match = match_orientation_rule(candidate.base_name)
        sample_match = match_sample_id_rule(candidate.base_name)
        rows.append(
            {
                "base_name": candidate.base_name,
                "orientation": UNKNOWN if orientation_match is None else orientation_match[1],
                "orientation_rule": None if orientation_match is None else orientation_match[0].name,
                "sample_id": None if sample_match is None else sample_match[1],
                "sample_id_rule": None if sample_match is None else sample_match[0].name,
                "path": str(candidate.path),
            }
        )
    if not rows:
        return pl.DataFrame(schema=_classification_schema())
    return pl.DataFrame(rows, schema_overrides=_classification_schema())
