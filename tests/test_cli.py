import json
import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from fastq_manifest.cli import app


def _touch_fastq(path: Path):
    path.write_text("@SEQ\nACGT\n+\nIIII\n")
    return path


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def reset_root_handlers():
    yield
    # configure_logging binds handlers to the runner's streams; drop them between tests
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root_logger.removeHandler(handler)
            handler.close()


@pytest.fixture
def paired_dir(raw_dir):
    for name in ("A_1.fastq.gz", "A_2.fastq.gz", "B_R1.fastq.gz", "B_R2.fastq.gz"):
        _touch_fastq(raw_dir / name)
    return raw_dir


def _invoke(runner, settings_file, *args):
    return runner.invoke(app, [*args, "--config-file", str(settings_file)])


def test_build_paired(runner, settings_file, paired_dir, tmp_path):
    output = tmp_path / "manifests" / "manifest_paired.tsv"

    result = _invoke(runner, settings_file, "build", "--root-dir", str(paired_dir), "--mode", "paired", "--out", str(output))

    assert result.exit_code == 0, result.output
    assert f"Manifest written: {output}" in result.output
    lines = output.read_text().splitlines()
    assert lines[0] == "sample-id\tforward-absolute-filepath\treverse-absolute-filepath"
    assert [line.split("\t")[0] for line in lines[1:]] == ["A", "B"]
    assert (settings_file.parent.parent / "logs" / "fastq_manifest.log").exists()


def test_build_uses_mode_from_settings(runner, settings_file, paired_dir, tmp_path):
    output = tmp_path / "manifest.tsv"

    result = _invoke(runner, settings_file, "build", "--root-dir", str(paired_dir), "--out", str(output))

    assert result.exit_code == 0, result.output
    assert "mode: paired" in result.output


def test_build_incomplete_pair_exits_nonzero(runner, settings_file, raw_dir, tmp_path):
    _touch_fastq(raw_dir / "A_1.fastq.gz")
    _touch_fastq(raw_dir / "A_2.fastq.gz")
    _touch_fastq(raw_dir / "B_1.fastq.gz")
    output = tmp_path / "manifest.tsv"

    result = _invoke(runner, settings_file, "build", "--root-dir", str(raw_dir), "--mode", "paired", "--out", str(output))

    assert result.exit_code == 1
    assert "Sample 'B'" in result.output
    assert "B_1.fastq.gz" in result.output
    assert not output.exists()


def test_build_write_error_exits_nonzero(runner, settings_file, paired_dir, tmp_path):
    blocker = tmp_path / "blocker.txt"
    blocker.write_text("not a directory\n")
    output = blocker / "manifest.tsv"

    result = _invoke(runner, settings_file, "build", "--root-dir", str(paired_dir), "--out", str(output))

    assert result.exit_code == 1
    assert "ERROR:" in result.output
    assert "Traceback" not in result.output
    assert not output.exists()


def test_build_lists_every_unknown_file(runner, settings_file, raw_dir, tmp_path):
    _touch_fastq(raw_dir / "weird_name.fastq.gz")
    _touch_fastq(raw_dir / "other.fq")

    result = _invoke(runner, settings_file, "build", "--root-dir", str(raw_dir), "--out", str(tmp_path / "m.tsv"))

    assert result.exit_code == 1
    assert "weird_name.fastq.gz" in result.output
    assert "other.fq" in result.output


def test_build_rejects_bad_mode(runner, settings_file, paired_dir, tmp_path):
    result = _invoke(runner, settings_file, "build", "--root-dir", str(paired_dir), "--mode", "triple", "--out", str(tmp_path / "m.tsv"))

    assert result.exit_code == 2
    assert not (tmp_path / "m.tsv").exists()


def test_build_dry_run(runner, settings_file, paired_dir, tmp_path):
    output = tmp_path / "manifest.tsv"

    result = _invoke(runner, settings_file, "build", "--root-dir", str(paired_dir), "--out", str(output), "--dry-run")

    assert result.exit_code == 0, result.output
    assert "sample-id\tforward-absolute-filepath\treverse-absolute-filepath" in result.output
    assert "[dry-run]" in result.output
    assert not output.exists()


def test_build_single_end_with_summary(runner, settings_file, paired_dir, tmp_path):
    output = tmp_path / "manifest_single.tsv"
    summary = tmp_path / "summary.json"

    result = _invoke(
        runner,
        settings_file,
        "build",
        "--root-dir",
        str(paired_dir),
        "--mode",
        "single",
        "--out",
        str(output),
        "--summary-json",
        str(summary),
    )

    assert result.exit_code == 0, result.output
    assert output.read_text().splitlines()[0] == "sample-id\tabsolute-filepath"
    assert json.loads(summary.read_text())["row_count"] == 2


def test_classify_lists_rules(runner, settings_file, paired_dir):
    result = _invoke(runner, settings_file, "classify", "--root-dir", str(paired_dir))

    assert result.exit_code == 0, result.output
    assert "sra_numeric" in result.output
    assert "separator_r" in result.output


def test_classify_flags_unresolved(runner, settings_file, paired_dir):
    _touch_fastq(paired_dir / "weird_name.fastq.gz")

    result = _invoke(runner, settings_file, "classify", "--root-dir", str(paired_dir))

    assert result.exit_code == 1
    assert "unresolved files: 1" in result.output


def test_classify_missing_directory(runner, settings_file, tmp_path):
    result = _invoke(runner, settings_file, "classify", "--root-dir", str(tmp_path / "missing"))

    assert result.exit_code == 1
    assert "does not exist" in result.output


def test_check_manifest_roundtrip(runner, settings_file, paired_dir, tmp_path):
    output = tmp_path / "manifest.tsv"
    _invoke(runner, settings_file, "build", "--root-dir", str(paired_dir), "--out", str(output))

    ok = _invoke(runner, settings_file, "check-manifest", "--manifest", str(output))
    mismatch = _invoke(runner, settings_file, "check-manifest", "--manifest", str(output), "--mode", "single")

    assert ok.exit_code == 0, ok.output
    assert "status: ok" in ok.output
    assert mismatch.exit_code == 1


def test_check_manifest_accepts_kept_single_end_duplicates(runner, settings_file, raw_dir, tmp_path):
    for name in ("A_R1.fq", "A_R1_rerun.fq", "B_R1.fq"):
        _touch_fastq(raw_dir / name)
    output = tmp_path / "manifest_single.tsv"
    built = _invoke(runner, settings_file, "build", "--root-dir", str(raw_dir), "--mode", "single", "--out", str(output))

    kept = _invoke(runner, settings_file, "check-manifest", "--manifest", str(output))
    rejected = _invoke(
        runner,
        settings_file,
        "check-manifest",
        "--manifest",
        str(output),
        "--single-end-duplicates",
        "reject",
    )

    assert built.exit_code == 0, built.output
    assert [line.split("\t")[0] for line in output.read_text().splitlines()[1:]] == ["A", "A", "B"]
    assert kept.exit_code == 0, kept.output
    assert "status: ok" in kept.output
    assert rejected.exit_code == 1
    assert "duplicate sample-id: A" in rejected.output


def test_show_config(runner, settings_file):
    result = _invoke(runner, settings_file, "show-config")

    assert result.exit_code == 0, result.output
    assert "read_mode: paired" in result.output
