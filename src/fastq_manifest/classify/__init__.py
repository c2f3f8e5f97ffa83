"""Filename classification: read orientation and sample identifiers."""

from fastq_manifest.classify.classifier import ClassifiedFile, classification_table, classify_files
from fastq_manifest.classify.orientation import (
    FORWARD,
    ORIENTATION_RULES,
    REVERSE,
    UNKNOWN,
    Orientation,
    OrientationRule,
    classify_orientation,
    match_orientation_rule,
)
from fastq_manifest.classify.sample_id import (
    SAMPLE_ID_RULES,
    SampleIdRule,
    extract_sample_id,
    match_sample_id_rule,
)

__all__ = [
    "ClassifiedFile",
    "classify_files",
    "classification_table",
    "Orientation",
    "FORWARD",
    "REVERSE",
    "UNKNOWN",
    "OrientationRule",
    "ORIENTATION_RULES",
    "classify_orientation",
    "match_orientation_rule",
    "SampleIdRule",
    "SAMPLE_ID_RULES",
    "extract_sample_id",
    "match_sample_id_rule",
]
