"""Manifest build orchestration: inventory, classify, assemble, write."""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any
from uuid import uuid4

from fastq_manifest.assemble.pairs import (
    SINGLE_END_DUPLICATE_POLICIES,
    Manifest,
    ReadMode,
    SingleEndDuplicatePolicy,
    assemble_manifest,
    parse_read_mode,
)
from fastq_manifest.classify.classifier import ClassifiedFile, classify_files
from fastq_manifest.classify.orientation import FORWARD, REVERSE
from fastq_manifest.config import DEFAULT_FASTQ_PATTERN, AppSettings
from fastq_manifest.errors import NoForwardReads
from fastq_manifest.ingest.inventory import CandidateFile, compile_pattern, list_candidate_files
from fastq_manifest.manifest.writer import render_manifest_tsv, write_manifest_tsv
from fastq_manifest.utils.paths import sha256_text, write_text_atomically
from fastq_manifest.utils.time_utils import now_utc, utc_timestamp

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ManifestBuildOptions:
    """Everything one manifest build needs, fixed before the build starts."""

    root_dir: Path
    read_mode: ReadMode | str
    output_path: Path
    pattern: str = DEFAULT_FASTQ_PATTERN
    single_end_duplicates: SingleEndDuplicatePolicy = "keep"
    dry_run: bool = False
    summary_path: Path | None = None

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings,
        *,
        root_dir: Path,
        output_path: Path,
        read_mode: str | None = None,
        pattern: str | None = None,
        single_end_duplicates: str | None = None,
        dry_run: bool = False,
        summary_path: Path | None = None,
    ) -> "ManifestBuildOptions":
        """Fill unset values from settings."""

        return cls(
            root_dir=root_dir,
            read_mode=read_mode or settings.manifest.read_mode,
            output_path=output_path,
            pattern=pattern or settings.inventory.pattern,
            single_end_duplicates=single_end_duplicates or settings.manifest.single_end_duplicates,  # type: ignore[arg-type]
            dry_run=dry_run,
            summary_path=summary_path,
        )


@dataclass(frozen=True, slots=True)
class ManifestBuildResult:
    """Return object for a manifest build."""

    run_id: str
    manifest: Manifest
    manifest_text: str
    manifest_path: Path | None
    summary_path: Path | None
    summary: dict[str, Any]


class ManifestBuilder:
    """Build one manifest from an immutable set of options.

    Options are validated when the builder is created; nothing is read from the
    environment afterwards.
    """

    def __init__(self, options: ManifestBuildOptions, logger: logging.Logger | None = None) -> None:
        self.logger = logger or LOGGER
        self.read_mode: ReadMode = parse_read_mode(options.read_mode)
        if options.single_end_duplicates not in SINGLE_END_DUPLICATE_POLICIES:
            raise ValueError(
                f"single_end_duplicates must be one of {', '.join(SINGLE_END_DUPLICATE_POLICIES)}, "
                f"got: {options.single_end_duplicates!r}"
            )
        self.pattern: re.Pattern[str] = compile_pattern(options.pattern)
        self.options = options

    def inventory(self) -> list[CandidateFile]:
        return list_candidate_files(self.options.root_dir, self.pattern, logger=self.logger)

    def classify(self, candidates: list[CandidateFile] | None = None) -> list[ClassifiedFile]:
        return classify_files(candidates if candidates is not None else self.inventory(), logger=self.logger)

    def assemble(self, classified: list[ClassifiedFile] | None = None) -> Manifest:
        files = classified if classified is not None else self.classify()
        try:
            return assemble_manifest(
                files,
                self.read_mode,
                single_end_duplicates=self.options.single_end_duplicates,
                logger=self.logger,
            )
        except NoForwardReads as exc:
            raise NoForwardReads(self.options.root_dir) from exc

    def build(self) -> ManifestBuildResult:
        """Run the full chain and write the manifest unless this is a dry run.

        Every validation step finishes before the first write. The optional
        summary is written before the manifest and removed again if the manifest
        write fails, so the manifest only appears once the whole run succeeded.
        """

        run_id = f"manifest-{uuid4().hex[:12]}"
        started_ts = now_utc()
        options = self.options
        self.logger.info(
            "build.start run_id=%s root=%s mode=%s out=%s dry_run=%s",
            run_id,
            options.root_dir,
            self.read_mode,
            options.output_path,
            options.dry_run,
        )

        candidates = self.inventory()
        classified = self.classify(candidates)
        manifest = self.assemble(classified)
        manifest_text = render_manifest_tsv(manifest)

        summary = self._summary(
            run_id=run_id,
            started_ts=started_ts,
            candidates=candidates,
            classified=classified,
            manifest=manifest,
            manifest_text=manifest_text,
        )
        if options.dry_run:
            self.logger.info("build.dry_run run_id=%s rows=%s", run_id, len(manifest.rows))
            return ManifestBuildResult(
                run_id=run_id,
                manifest=manifest,
                manifest_text=manifest_text,
                manifest_path=None,
                summary_path=None,
                summary=summary,
            )

        summary_path: Path | None = None
        if options.summary_path is not None:
            summary_path = write_text_atomically(
                options.summary_path,
                json.dumps(summary, indent=2, sort_keys=True, default=str) + "\n",
            )
        try:
            manifest_path = write_manifest_tsv(manifest, options.output_path, logger=self.logger)
        except BaseException:
            if summary_path is not None:
                summary_path.unlink(missing_ok=True)
            raise

        self.logger.info(
            "build.done run_id=%s rows=%s manifest=%s summary=%s",
            run_id,
            len(manifest.rows),
            manifest_path,
            summary_path,
        )
        return ManifestBuildResult(
            run_id=run_id,
            manifest=manifest,
            manifest_text=manifest_text,
            manifest_path=manifest_path,
            summary_path=summary_path,
            summary=summary,
        )

    def _summary(
        self,
        *,
        run_id: str,
        started_ts: datetime,
        candidates: list[CandidateFile],
        classified: list[ClassifiedFile],
        manifest: Manifest,
        manifest_text: str,
    ) -> dict[str, Any]:
        written = not self.options.dry_run
        return {
            "run_id": run_id,
            "started_ts": utc_timestamp(started_ts),
            "finished_ts": utc_timestamp(),
            "root_dir": str(self.options.root_dir),
            "pattern": self.pattern.pattern,
            "read_mode": self.read_mode,
            "single_end_duplicates": self.options.single_end_duplicates,
            "candidate_files": len(candidates),
            "forward_files": sum(1 for item in classified if item.orientation == FORWARD),
            "reverse_files": sum(1 for item in classified if item.orientation == REVERSE),
            "sample_count": len(set(manifest.sample_ids)),
            "row_count": len(manifest.rows),
            "manifest_path": str(self.options.output_path) if written else None,
            "manifest_sha256": sha256_text(manifest_text) if written else None,
        }


def build_manifest(options: ManifestBuildOptions, logger: logging.Logger | None = None) -> ManifestBuildResult:
    """Convenience wrapper around ``ManifestBuilder(options).build()``."""

    return ManifestBuilder(options, logger=logger).build()
