"""Typer CLI entrypoint for fastq_manifest."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import polars as pl
import typer
import yaml

from fastq_manifest.assemble.pairs import READ_MODES, SINGLE_END_DUPLICATE_POLICIES
from fastq_manifest.classify.classifier import classification_table
from fastq_manifest.config import AppSettings, load_settings
from fastq_manifest.errors import ManifestBuildError
from fastq_manifest.ingest.inventory import compile_pattern, list_candidate_files
from fastq_manifest.logging_utils import configure_logging
from fastq_manifest.manifest.check import check_manifest
from fastq_manifest.pipeline import ManifestBuilder, ManifestBuildOptions

app = typer.Typer(
    add_completion=False,
    help="Build QIIME 2 FASTQ manifests from a directory of read files.",
    no_args_is_help=True,
)


def _load_and_optionally_configure_logger(
    config_file: Path | None,
    configure: bool,
) -> tuple[AppSettings, logging.Logger]:
    settings = load_settings(config_file=config_file)
    if configure:
        logger = configure_logging(settings.paths.logs_root / "fastq_manifest.log", level=settings.logging.level)
    else:
        logger = logging.getLogger("fastq_manifest")
    return settings, logger


def _normalize_choice(value: str | None, *, allowed: tuple[str, ...], option_name: str) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in allowed:
        raise typer.BadParameter(f"{option_name} must be one of: {','.join(allowed)}")
    return normalized


def _fail(logger: logging.Logger, event: str, exc: Exception) -> NoReturn:
    logger.error("%s %s", event, exc)
    typer.echo(f"ERROR: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings, _ = _load_and_optionally_configure_logger(config_file, configure=False)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


@app.command("build")
def build(
    root_dir: Path = typer.Option(
        ...,
        "--root-dir",
        help="Directory containing FASTQ(.gz) files.",
    ),
    out: Path = typer.Option(
        ...,
        "--out",
        help="Output manifest TSV path.",
        dir_okay=False,
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        help="Read layout: paired or single (default from settings).",
    ),
    pattern: str | None = typer.Option(
        None,
        "--pattern",
        help=r"Regex matched case-insensitively against file names (default: \.(fastq|fq)(\.gz)?$).",
    ),
    single_end_duplicates: str | None = typer.Option(
        None,
        "--single-end-duplicates",
        help="Single-end only: keep or reject several forward files for one sample.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Validate and print the manifest without writing it.",
    ),
    summary_json: Path | None = typer.Option(
        None,
        "--summary-json",
        help="Optional path for a JSON run summary.",
        dir_okay=False,
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Classify read files, pair them per sample and write the manifest."""

    normalized_mode = _normalize_choice(mode, allowed=READ_MODES, option_name="mode")
    normalized_duplicates = _normalize_choice(
        single_end_duplicates,
        allowed=SINGLE_END_DUPLICATE_POLICIES,
        option_name="single-end-duplicates",
    )
    if pattern is not None:
        try:
            compile_pattern(pattern)
        except ValueError as exc:
            raise typer.BadParameter(str(exc)) from exc

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    options = ManifestBuildOptions.from_settings(
        settings,
        root_dir=root_dir,
        output_path=out.absolute(),
        read_mode=normalized_mode,
        pattern=pattern,
        single_end_duplicates=normalized_duplicates,
        dry_run=dry_run,
        summary_path=summary_json.absolute() if summary_json is not None else None,
    )

    try:
        result = ManifestBuilder(options, logger=logger).build()
    except (ManifestBuildError, OSError) as exc:
        _fail(logger, "build.failed", exc)

    if dry_run:
        typer.echo(result.manifest_text, nl=False)
        typer.echo(f"[dry-run] would write {result.manifest.mode} manifest: {options.output_path}")
        return

    typer.echo(f"mode: {result.manifest.mode}")
    typer.echo(f"samples: {result.summary['sample_count']}")
    typer.echo(f"rows: {result.summary['row_count']}")
    if result.summary_path is not None:
        typer.echo(f"summary_json: {result.summary_path}")
    typer.echo(f"Manifest written: {result.manifest_path}")


@app.command("classify")
def classify(
    root_dir: Path = typer.Option(
        ...,
        "--root-dir",
        help="Directory containing FASTQ(.gz) files.",
    ),
    pattern: str | None = typer.Option(
        None,
        "--pattern",
        help="Regex matched case-insensitively against file names (default from settings).",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Show how each file would be classified; exit 1 if any file is unresolved."""

    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    try:
        candidates = list_candidate_files(root_dir, pattern or settings.inventory.pattern, logger=logger)
    except ManifestBuildError as exc:
        _fail(logger, "classify.failed", exc)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    table = classification_table(candidates)
    with pl.Config(tbl_rows=-1, fmt_str_lengths=120):
        typer.echo(str(table.drop("path")))

    unresolved = table.filter((pl.col("orientation") == "unknown") | pl.col("sample_id").is_null())
    logger.info("classify.summary files=%s unresolved=%s", table.height, unresolved.height)
    if unresolved.height > 0:
        typer.echo(f"unresolved files: {unresolved.height}", err=True)
        raise typer.Exit(code=1)


@app.command("check-manifest")
def check_manifest_cmd(
    manifest: Path = typer.Option(
        ...,
        "--manifest",
        help="Manifest TSV to verify.",
        dir_okay=False,
    ),
    mode: str | None = typer.Option(
        None,
        "--mode",
        help="Expected read layout: paired or single (default: inferred from header).",
    ),
    single_end_duplicates: str | None = typer.Option(
        None,
        "--single-end-duplicates",
        help="Single-end only: keep accepts adjacent rows per sample, reject flags them (default from settings).",
    ),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Verify header, sample ids, ordering and file paths of a manifest."""

    normalized_mode = _normalize_choice(mode, allowed=READ_MODES, option_name="mode")
    normalized_duplicates = _normalize_choice(
        single_end_duplicates,
        allowed=SINGLE_END_DUPLICATE_POLICIES,
        option_name="single-end-duplicates",
    )
    settings, logger = _load_and_optionally_configure_logger(config_file, configure=True)
    result = check_manifest(
        manifest,
        mode=normalized_mode,
        single_end_duplicates=normalized_duplicates or settings.manifest.single_end_duplicates,
        logger=logger,
    )

    typer.echo(f"manifest: {result.path}")
    typer.echo(f"mode: {result.mode or 'unknown'}")
    typer.echo(f"rows: {result.row_count}")
    if result.ok:
        typer.echo("status: ok")
        return
    for issue in result.issues:
        typer.echo(f"  - {issue}", err=True)
    typer.echo(f"status: {len(result.issues)} issue(s)", err=True)
    raise typer.Exit(code=1)


def main() -> None:
    """CLI script entrypoint."""

    app()


if __name__ == "__main__":
    main()
