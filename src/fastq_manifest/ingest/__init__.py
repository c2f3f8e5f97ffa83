"""Ingestion package for read-file discovery."""

from fastq_manifest.ingest.inventory import CandidateFile, compile_pattern, list_candidate_files

__all__ = [
    "CandidateFile",
    "compile_pattern",
    "list_candidate_files",
]
