"""Manifest serialization and verification."""

from fastq_manifest.manifest.check import ManifestCheckResult, check_manifest, read_manifest_frame
from fastq_manifest.manifest.writer import (
    MANIFEST_COLUMNS,
    PAIRED_END_COLUMNS,
    SINGLE_END_COLUMNS,
    manifest_frame,
    render_manifest_tsv,
    write_manifest_tsv,
)

__all__ = [
    "MANIFEST_COLUMNS",
    "PAIRED_END_COLUMNS",
    "SINGLE_END_COLUMNS",
    "manifest_frame",
    "render_manifest_tsv",
    "write_manifest_tsv",
    "ManifestCheckResult",
    "check_manifest",
    "read_manifest_frame",
]
