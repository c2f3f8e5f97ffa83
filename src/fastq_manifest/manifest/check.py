"""Re-verify an existing manifest TSV before handing it downstream."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import polars as pl

from fastq_manifest.assemble.pairs import (
    SINGLE_END_DUPLICATE_POLICIES,
    ReadMode,
    SingleEndDuplicatePolicy,
    parse_read_mode,
)
from fastq_manifest.manifest.writer import MANIFEST_COLUMNS, SAMPLE_ID_COLUMN

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManifestCheckResult:
    """Outcome of a manifest check; ``issues`` is empty when the file is usable."""

    path: Path
    mode: ReadMode | None
    row_count: int
    issues: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.issues


def read_manifest_frame(path: Path) -> pl.DataFrame:
    """Read a manifest TSV with every column as an unquoted string."""

    return pl.read_csv(
        path,
        separator="\t",
        quote_char=None,
        infer_schema_length=0,
    )


def _infer_mode(columns: list[str]) -> ReadMode | None:
    for mode, expected in MANIFEST_COLUMNS.items():
        if tuple(columns) == expected:
            return mode
    return None


def _path_issues(sample_id: str, column: str, value: str | None) -> list[str]:
    if not value:
        return [f"sample '{sample_id}': empty {column}"]
    path = Path(value)
    if not path.is_absolute():
        return [f"sample '{sample_id}': {column} is not absolute: {value}"]
    if not path.is_file():
        return [f"sample '{sample_id}': {column} does not exist: {value}"]
    return []


def check_manifest(
    path: Path,
    mode: ReadMode | str | None = None,
    single_end_duplicates: SingleEndDuplicatePolicy = "keep",
    logger: logging.Logger | None = None,
) -> ManifestCheckResult:
    """Check header, sample ids, row order and file paths of a manifest TSV.

    When ``mode`` is omitted it is inferred from the header. Under the ``keep``
    policy a single-end manifest may repeat a sample id on adjacent rows, one
    row per forward file, as long as each repeated row names a different file.
    """

    effective_logger = logger or LOGGER
    if single_end_duplicates not in SINGLE_END_DUPLICATE_POLICIES:
        raise ValueError(
            f"single_end_duplicates must be one of {', '.join(SINGLE_END_DUPLICATE_POLICIES)}, "
            f"got: {single_end_duplicates!r}"
        )
    expected_mode = parse_read_mode(mode) if mode is not None else None
    if not path.is_file():
        return ManifestCheckResult(path=path, mode=expected_mode, row_count=0, issues=(f"manifest not found: {path}",))

    try:
        frame = read_manifest_frame(path)
    except pl.exceptions.PolarsError as exc:
        return ManifestCheckResult(path=path, mode=expected_mode, row_count=0, issues=(f"unreadable manifest: {exc}",))

    issues: list[str] = []
    header_mode = _infer_mode(frame.columns)
    if header_mode is None:
        issues.append(f"unrecognized header: {frame.columns}")
        return ManifestCheckResult(path=path, mode=expected_mode, row_count=frame.height, issues=tuple(issues))
    if expected_mode is not None and expected_mode != header_mode:
        issues.append(f"header describes a {header_mode} manifest, expected {expected_mode}")

    path_columns = MANIFEST_COLUMNS[header_mode][1:]
    allow_repeats = header_mode == "single" and single_end_duplicates == "keep"
    previous: str | None = None
    seen: set[str] = set()
    seen_rows: set[tuple[str | None, ...]] = set()
    for row in frame.iter_rows(named=True):
        sample_id = row[SAMPLE_ID_COLUMN] or ""
        row_key = tuple(row[column] for column in MANIFEST_COLUMNS[header_mode])
        if not sample_id:
            issues.append("empty sample-id")
        elif row_key in seen_rows:
            issues.append(f"duplicate row for sample-id: {sample_id}")
        elif sample_id in seen and not (allow_repeats and sample_id == previous):
            issues.append(f"duplicate sample-id: {sample_id}")
        elif previous is not None and sample_id < previous:
            issues.append(f"rows not sorted: '{sample_id}' after '{previous}'")
        seen.add(sample_id)
        seen_rows.add(row_key)
        previous = sample_id
        for column in path_columns:
            issues.extend(_path_issues(sample_id, column, row[column]))

    effective_logger.info(
        "check_manifest.done path=%s mode=%s rows=%s issues=%s",
        path,
        header_mode,
        frame.height,
        len(issues),
    )
    return ManifestCheckResult(path=path, mode=header_mode, row_count=frame.height, issues=tuple(issues))
