"""Error kinds raised while building a manifest.

Every error is fatal to the current build. Messages carry the file names,
sample ids and counts an operator needs to fix the input directory.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

ORIENTATION_HINT = (
    "Expected patterns include: *_R1_001.fastq.gz / *_R2_001.fastq.gz, "
    "*_1.fastq.gz / *_2.fastq.gz, or *_R1.fastq.gz / *_R2.fastq.gz"
)


class ManifestBuildError(ValueError):
    """Base class for every manifest build failure."""


class InputDirectoryMissing(ManifestBuildError):
    def __init__(self, root: Path) -> None:
        self.root = root
        super().__init__(f"Input directory does not exist: {root}")


class NoCandidateFiles(ManifestBuildError):
    def __init__(self, root: Path, pattern: str) -> None:
        self.root = root
        self.pattern = pattern
        super().__init__(f"No FASTQ files found in {root} (pattern: {pattern})")


class UnclassifiableOrientation(ManifestBuildError):
    """One or more files carry no recognizable forward/reverse token."""

    def __init__(self, files: Sequence[str]) -> None:
        self.files: tuple[str, ...] = tuple(sorted(files))
        listing = "\n  - ".join(self.files)
        super().__init__(
            f"Could not infer forward/reverse from these files:\n  - {listing}\n{ORIENTATION_HINT}"
        )


class UnresolvableSampleId(ManifestBuildError):
    def __init__(self, file: str) -> None:
        self.file = file
        super().__init__(f"Could not infer sample-id from filename: {file}")


class IncompletePair(ManifestBuildError):
    """A paired-end sample does not have exactly one forward and one reverse file."""

    def __init__(
        self,
        sample_id: str,
        forward_paths: Sequence[Path],
        reverse_paths: Sequence[Path],
    ) -> None:
        self.sample_id = sample_id
        self.forward_paths: tuple[Path, ...] = tuple(forward_paths)
        self.reverse_paths: tuple[Path, ...] = tuple(reverse_paths)
        forward_rendered = ", ".join(str(path) for path in self.forward_paths) or "none"
        reverse_rendered = ", ".join(str(path) for path in self.reverse_paths) or "none"
        super().__init__(
            f"Sample '{sample_id}' does not have exactly one forward and one reverse FASTQ "
            f"(forward={self.forward_count}, reverse={self.reverse_count}).\n"
            f"Forward files: {forward_rendered}\n"
            f"Reverse files: {reverse_rendered}"
        )

    @property
    def forward_count(self) -> int:
        return len(self.forward_paths)

    @property
    def reverse_count(self) -> int:
        return len(self.reverse_paths)


class DuplicateSampleFiles(ManifestBuildError):
    """A single-end sample resolved to several distinct forward files."""

    def __init__(self, sample_id: str, paths: Sequence[Path]) -> None:
        self.sample_id = sample_id
        self.paths: tuple[Path, ...] = tuple(paths)
        rendered = ", ".join(str(path) for path in self.paths)
        super().__init__(
            f"Sample '{sample_id}' has {len(self.paths)} forward FASTQ files: {rendered}"
        )


class NoForwardReads(ManifestBuildError):
    def __init__(self, root: Path | None = None) -> None:
        self.root = root
        location = f" in {root}" if root is not None else ""
        super().__init__(f"No forward read files found{location}; a single-end manifest needs at least one.")


class InvalidMode(ManifestBuildError):
    def __init__(self, mode: object) -> None:
        self.mode = mode
        super().__init__(f"Read mode must be 'paired' or 'single', got: {mode!r}")


class UnsafeManifestField(ManifestBuildError):
    """A manifest field would break the unquoted TSV layout."""

    def __init__(self, sample_id: str, field: str) -> None:
        self.sample_id = sample_id
        self.field = field
        super().__init__(
            f"Manifest field for sample '{sample_id}' contains a tab or line break: {field!r}"
        )
