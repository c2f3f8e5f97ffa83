from pathlib import Path

import pytest

from fastq_manifest.classify.classifier import ClassifiedFile, classification_table, classify_files
from fastq_manifest.errors import UnclassifiableOrientation, UnresolvableSampleId
from fastq_manifest.ingest.inventory import CandidateFile


def _candidate(name: str) -> CandidateFile:
    return CandidateFile(path=Path("/data/fastq") / name, base_name=name)


def test_classify_files_joins_orientation_and_sample_id():
    classified = classify_files([_candidate("A_1.fastq.gz"), _candidate("B_R2.fastq.gz")])

    assert classified == [
        ClassifiedFile(
            path=Path("/data/fastq/A_1.fastq.gz"),
            base_name="A_1.fastq.gz",
            sample_id="A",
            orientation="forward",
        ),
        ClassifiedFile(
            path=Path("/data/fastq/B_R2.fastq.gz"),
            base_name="B_R2.fastq.gz",
            sample_id="B",
            orientation="reverse",
        ),
    ]


def test_unknown_orientation_rejects_whole_batch():
    with pytest.raises(UnclassifiableOrientation) as excinfo:
        classify_files([_candidate("A_1.fastq.gz"), _candidate("weird_name.fastq.gz")])

    assert excinfo.value.files == ("weird_name.fastq.gz",)


def test_every_unknown_file_is_listed():
    candidates = [
        _candidate("zeta.fastq"),
        _candidate("A_1.fastq"),
        _candidate("alpha.fastq"),
    ]

    with pytest.raises(UnclassifiableOrientation) as excinfo:
        classify_files(candidates)

    assert excinfo.value.files == ("alpha.fastq", "zeta.fastq")
    message = str(excinfo.value)
    assert "  - alpha.fastq" in message
    assert "  - zeta.fastq" in message
    assert "*_R1_001.fastq.gz" in message


def test_orientation_is_checked_before_sample_ids():
    # "_R1.fastq" has no sample id, but the unknown orientation is reported first
    with pytest.raises(UnclassifiableOrientation):
        classify_files([_candidate("_R1.fastq"), _candidate("weird.fastq")])


def test_unresolvable_sample_id_raises():
    with pytest.raises(UnresolvableSampleId) as excinfo:
        classify_files([_candidate("_R1.fastq.gz")])

    assert excinfo.value.file == "_R1.fastq.gz"


def test_classification_table_reports_rules_without_raising():
    table = classification_table(
        [
            _candidate("SAMPLE1_S1_L001_R1_001.fastq.gz"),
            _candidate("weird_name.fastq.gz"),
        ]
    )

    rows = table.to_dicts()
    assert rows[0]["orientation"] == "forward"
    assert rows[0]["orientation_rule"] == "casava"
    assert rows[0]["sample_id"] == "SAMPLE1"
    assert rows[0]["sample_id_rule"] == "casava"
    assert rows[1]["orientation"] == "unknown"
    assert rows[1]["orientation_rule"] is None
    assert rows[1]["sample_id"] is None


def test_classification_table_empty_input_keeps_schema():
    table = classification_table([])

    assert table.height == 0
    assert table.columns == [
        "base_name",
        "orientation",
        "orientation_rule",
        "sample_id",
        "sample_id_rule",
        "path",
    ]
