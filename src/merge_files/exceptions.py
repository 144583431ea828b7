from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MergeFilesError(Exception):
    """Base exception for errors in the merge_files module."""


@dataclass(frozen=True)
class UsageError(MergeFilesError):
    """Raised when a required positional argument is missing or empty."""

    message: str = "Usage: merge-files /path/to/source /path/to/output.txt"

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class SourceNotFoundError(MergeFilesError):
    """Raised when the source path is not an existing directory."""

    source: Path
    message: str = "Source directory not found or is not a directory."

    def __str__(self) -> str:
        return f"{self.message} ({self.source})"


@dataclass(frozen=True)
class OutputDirError(MergeFilesError):
    """Raised when the output directory cannot be created or is not writable."""

    directory: Path
    message: str = "Output directory is not writable."

    def __str__(self) -> str:
        return f"{self.message} ({self.directory})"


@dataclass(frozen=True)
class OutputInitError(MergeFilesError):
    """Raised when the output file cannot be created or truncated."""

    output: Path
    message: str = "Failed to initialize output file. Check permissions."

    def __str__(self) -> str:
        return f"{self.message} ({self.output})"


@dataclass(frozen=True)
class ExternalCommandError(MergeFilesError):
    """Raised when an external command fails."""

    command: str
    returncode: int
    stdout: str
    stderr: str

    def __str__(self) -> str:
        detail = self.stderr.strip() or self.stdout.strip()
        return f"`{self.command}` exited with {self.returncode}: {detail}"


@dataclass(frozen=True)
class GitCommandError(ExternalCommandError):
    """Raised when a git command fails."""


@dataclass(frozen=True)
class NotAGitRepositoryError(MergeFilesError):
    """Raised when the specified directory is not inside a Git work tree."""

    folder: Path
    message: str = "The specified directory is not inside a Git work tree."

    def __str__(self) -> str:
        return f"{self.message} ({self.folder})"


@dataclass(frozen=True)
class FileProcessingError(MergeFilesError):
    """Raised when a file cannot be appended to the output."""

    path: Path
    reason: str

    def __str__(self) -> str:
        return f"Failed to append {self.path}: {self.reason}"
