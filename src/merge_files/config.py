from __future__ import annotations

from enum import StrEnum, auto
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, computed_field

_ = Path()

HEADER_MARKER = "### File: "
NUMBERED_HEADER = "### File {index}: "
SEPARATOR = b"\n\n"

SNIFF_BYTES = 8192
CONTROL_CHAR_RATIO = 0.30

# Matched against the literal suffix, so ".PNG" is not excluded.
EXCLUDED_EXTENSIONS: frozenset[str] = frozenset({
    # images
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".bmp",
    ".webp",
    ".svg",
    ".tiff",
    ".ico",
    # fonts
    ".ttf",
    ".woff",
    ".woff2",
    # documents
    ".pdf",
    ".doc",
    ".docx",
    ".xls",
    ".xlsx",
    ".ppt",
    ".pptx",
    # archives
    ".zip",
    ".gz",
    ".tar",
    ".tgz",
    ".bz2",
    ".rar",
    ".7z",
    # compiled objects
    ".exe",
    ".dll",
    ".so",
    ".dylib",
    ".o",
    ".a",
    ".class",
    ".jar",
    ".war",
    ".ear",
    # audio/video
    ".mp3",
    ".mp4",
    ".avi",
    ".mov",
    ".wmv",
    ".flv",
    ".mkv",
    # databases
    ".sqlite",
    ".db",
})


class SkipReason(StrEnum):
    """Why a candidate was left out of the merged output."""

    IS_OUTPUT = "is the output file"
    EXCLUDED_EXTENSION = "excluded by extension"
    NOT_READABLE = "not readable"
    BINARY_CONTENT = "detected binary"


class OutcomeStatus(StrEnum):
    """Final state of a candidate once the pipeline has handled it."""

    WRITTEN = auto()
    SKIPPED = auto()
    FAILED = auto()


class Candidate(BaseModel):
    """A file discovered under the source directory.

    Attributes:
        path: Absolute path to the file on disk.
        rel: Path relative to the source root, with POSIX separators.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    path: Path = Field(..., description="Absolute file path")
    rel: str = Field(..., description="File path relative to the source root")


class FileOutcome(BaseModel):
    """What happened to one candidate."""

    model_config = ConfigDict(frozen=True)

    candidate: Candidate
    status: OutcomeStatus
    reason: SkipReason | None = None
    error: str = ""
    size: int = Field(default=0, ge=0, description="Content bytes copied into the output")


class MergeSummary(BaseModel):
    """Result of a merge run, one outcome per encountered candidate.

    `skipped` counts every candidate that did not end up in the output, write
    failures included, so `processed + skipped == encountered` always holds.
    `failed` is the write-failure subset of `skipped`.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    source: Path
    output: Path
    honors_ignore_rules: bool = False
    outcomes: list[FileOutcome] = Field(default_factory=list)

    @computed_field
    @property
    def encountered(self) -> int:
        return len(self.outcomes)

    @computed_field
    @property
    def processed(self) -> int:
        return sum(1 for o in self.outcomes if o.status is OutcomeStatus.WRITTEN)

    @computed_field
    @property
    def skipped(self) -> int:
        return self.encountered - self.processed

    @computed_field
    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if o.status is OutcomeStatus.FAILED)

    def written_paths(self) -> list[str]:
        """Relative paths of the files that were appended, in output order."""
        return [o.candidate.rel for o in self.outcomes if o.status is OutcomeStatus.WRITTEN]
