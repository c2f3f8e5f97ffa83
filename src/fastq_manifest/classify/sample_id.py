"""Derive a sample identifier from a read file name.

Matching is case-insensitive but the captured text keeps its original case,
except for the fallback rule which upper-cases what it finds.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable

from fastq_manifest.classify.orientation import READ_EXTENSION
from fastq_manifest.errors import UnresolvableSampleId


@dataclass(frozen=True, slots=True)
class SampleIdRule:
    """A naming convention paired with the function that extracts the id."""

    name: str
    pattern: re.Pattern[str]
    extract: Callable[[re.Match[str]], str]

    def match(self, base_name: str) -> str | None:
        found = self.pattern.search(base_name)
        if found is None:
            return None
        sample_id = self.extract(found)
        # An empty capture (e.g. "_R1.fastq") does not count as a match.
        return sample_id or None


def _prefix(found: re.Match[str]) -> str:
    return found.group("prefix")


def _upper_token(found: re.Match[str]) -> str:
    return found.group(0).upper()


SAMPLE_ID_RULES: tuple[SampleIdRule, ...] = (
    # SAMPLE_S1_L001_R1_001.fastq.gz
    SampleIdRule(
        name="casava",
        pattern=re.compile(rf"^(?P<prefix>.*)_S\d+_L\d+_R[12]_001{READ_EXTENSION}$", re.IGNORECASE),
        extract=_prefix,
    ),
    # SAMPLE_R1.fastq.gz, SAMPLE.R1.fastq.gz, SAMPLE_R1_trimmed.fastq.gz
    SampleIdRule(
        name="separator_r",
        pattern=re.compile(rf"^(?P<prefix>.*?)[_.]R[12].*{READ_EXTENSION}$", re.IGNORECASE),
        extract=_prefix,
    ),
    # SAMPLE_1.fastq.gz
    SampleIdRule(
        name="sra_numeric",
        pattern=re.compile(rf"^(?P<prefix>.*)_[12]{READ_EXTENSION}$", re.IGNORECASE),
        extract=_prefix,
    ),
    # S1, Sample-12, sample_3 anywhere in the name
    SampleIdRule(
        name="sample_token",
        pattern=re.compile(r"s(?:ample)?[-_]?\d+", re.IGNORECASE),
        extract=_upper_token,
    ),
)


def match_sample_id_rule(base_name: str) -> tuple[SampleIdRule, str] | None:
    """Return the first rule yielding a non-empty id, with that id."""

    for rule in SAMPLE_ID_RULES:
        sample_id = rule.match(base_name)
        if sample_id is not None:
            return rule, sample_id
    return None


def extract_sample_id(base_name: str) -> str:
    """Return the sample id for ``base_name`` or raise ``UnresolvableSampleId``."""

    matched = match_sample_id_rule(base_name)
    if matched is None:
        raise UnresolvableSampleId(base_name)
    return matched[1]
