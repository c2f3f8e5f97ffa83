"""Serialize manifests as QIIME 2 FASTQ manifest TSV files."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import polars as pl

from fastq_manifest.assemble.pairs import Manifest, ReadMode
from fastq_manifest.errors import UnsafeManifestField
from fastq_manifest.utils.paths import atomic_temp_path

LOGGER = logging.getLogger(__name__)

SAMPLE_ID_COLUMN = "sample-id"
SINGLE_END_COLUMNS: tuple[str, ...] = (SAMPLE_ID_COLUMN, "absolute-filepath")
PAIRED_END_COLUMNS: tuple[str, ...] = (
    SAMPLE_ID_COLUMN,
    "forward-absolute-filepath",
    "reverse-absolute-filepath",
)
MANIFEST_COLUMNS: dict[ReadMode, tuple[str, ...]] = {
    "single": SINGLE_END_COLUMNS,
    "paired": PAIRED_END_COLUMNS,
}

_UNSAFE_CHARACTERS = ("\t", "\n", "\r")


def _row_fields(manifest: Manifest) -> list[tuple[str, ...]]:
    fields: list[tuple[str, ...]] = []
    for row in manifest.rows:
        if manifest.mode == "paired":
            values = (row.sample_id, str(row.forward_path), str(row.reverse_path))
        else:
            values = (row.sample_id, str(row.forward_path))
        for value in values:
            if any(character in value for character in _UNSAFE_CHARACTERS):
                raise UnsafeManifestField(row.sample_id, value)
        fields.append(values)
    return fields


def manifest_frame(manifest: Manifest) -> pl.DataFrame:
    """Return the manifest as a string-typed frame with QIIME column names."""

    columns = MANIFEST_COLUMNS[manifest.mode]
    schema = {column: pl.String for column in columns}
    rows = _row_fields(manifest)
    if not rows:
        return pl.DataFrame(schema=schema)
    return pl.DataFrame(rows, schema=schema, orient="row")


def render_manifest_tsv(manifest: Manifest) -> str:
    """Render the manifest TSV text without writing anything."""

    return manifest_frame(manifest).write_csv(
        separator="\t",
        line_terminator="\n",
        quote_style="never",
    )


def write_manifest_tsv(
    manifest: Manifest,
    output_path: Path,
    logger: logging.Logger | None = None,
) -> Path:
    """Write the manifest TSV atomically and return the output path.

    The frame is built (and every field checked) before the parent directory is
    created, so a rejected manifest leaves the filesystem untouched.
    """

    effective_logger = logger or LOGGER
    frame = manifest_frame(manifest)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = atomic_temp_path(output_path)
    try:
        frame.write_csv(
            temp_path,
            separator="\t",
            line_terminator="\n",
            quote_style="never",
        )
        os.replace(temp_path, output_path)
    finally:
        if temp_path.exists():
            temp_path.unlink()

    effective_logger.info(
        "manifest.written path=%s mode=%s rows=%s",
        output_path,
        manifest.mode,
        frame.height,
    )
    return output_path
