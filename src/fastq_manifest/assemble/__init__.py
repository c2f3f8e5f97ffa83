"""Sample grouping and pairing."""

from fastq_manifest.assemble.pairs import (
    READ_MODES,
    SINGLE_END_DUPLICATE_POLICIES,
    Manifest,
    ReadMode,
    SampleGroup,
    SampleRow,
    SingleEndDuplicatePolicy,
    assemble_manifest,
    group_by_sample,
    parse_read_mode,
)

__all__ = [
    "READ_MODES",
    "SINGLE_END_DUPLICATE_POLICIES",
    "ReadMode",
    "SingleEndDuplicatePolicy",
    "SampleRow",
    "SampleGroup",
    "Manifest",
    "parse_read_mode",
    "group_by_sample",
    "assemble_manifest",
]
