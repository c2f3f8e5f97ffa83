import pytest

from fastq_manifest.classify.sample_id import (
    SAMPLE_ID_RULES,
    extract_sample_id,
    match_sample_id_rule,
)
from fastq_manifest.errors import UnresolvableSampleId


@pytest.mark.parametrize(
    "name, expected",
    [
        ("SAMPLE1_S1_L001_R1_001.fastq.gz", "SAMPLE1"),
        ("Gut_A_S12_L002_R2_001.fq.gz", "Gut_A"),
        ("B_R1.fastq.gz", "B"),
        ("soil.core.R2.fastq", "soil.core"),
        ("Soil_Rep1_R1.fastq.gz", "Soil_Rep1"),
        ("mixedCase_r1_trimmed.fastq.gz", "mixedCase"),
        ("SRR123456_1.fastq.gz", "SRR123456"),
        ("SRR123456_2.fastq.gz", "SRR123456"),
        ("run-sample-12-forward.fastq", "SAMPLE-12"),
        ("xs7y.fastq", "S7"),
    ],
)
def test_extract_sample_id(name, expected):
    assert extract_sample_id(name) == expected


def test_rules_are_ordered():
    assert [rule.name for rule in SAMPLE_ID_RULES] == [
        "casava",
        "separator_r",
        "sra_numeric",
        "sample_token",
    ]


def test_casava_rule_takes_priority_over_fallback():
    matched = match_sample_id_rule("SAMPLE1_S1_L001_R1_001.fastq.gz")

    assert matched is not None
    rule, sample_id = matched
    assert rule.name == "casava"
    assert sample_id == "SAMPLE1"


def test_separator_rule_captures_up_to_first_token():
    matched = match_sample_id_rule("A_R1_B_R2.fastq")

    assert matched is not None
    assert matched[0].name == "separator_r"
    assert matched[1] == "A"


def test_fallback_is_only_used_when_structured_rules_fail():
    # sra_numeric keeps the original case; only the fallback upper-cases
    matched = match_sample_id_rule("s5_1.fastq")

    assert matched is not None
    assert matched == (SAMPLE_ID_RULES[2], "s5")


def test_empty_prefix_falls_through_to_next_rule():
    matched = match_sample_id_rule("_R1.fastq.gz")

    assert matched is None


def test_unresolvable_name_raises():
    with pytest.raises(UnresolvableSampleId) as excinfo:
        extract_sample_id("weird_name.fastq.gz")

    assert excinfo.value.file == "weird_name.fastq.gz"
