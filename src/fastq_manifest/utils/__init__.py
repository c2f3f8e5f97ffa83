"""Shared utility helpers."""

from fastq_manifest.utils.paths import atomic_temp_path, sha256_text, write_text_atomically
from fastq_manifest.utils.time_utils import now_utc, utc_timestamp

__all__ = [
    "atomic_temp_path",
    "sha256_text",
    "write_text_atomically",
    "now_utc",
    "utc_timestamp",
]
