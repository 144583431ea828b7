"""Text/binary classification of file content."""

from __future__ import annotations

import codecs
import shutil
import subprocess  # noqa: S404
from typing import TYPE_CHECKING, Protocol

from merge_files.config import CONTROL_CHAR_RATIO, SNIFF_BYTES
from merge_files.exceptions import ExternalCommandError
from merge_files.file_manipulation import read_sample
from merge_files.logging import logger

if TYPE_CHECKING:
    from pathlib import Path

_TEXT_BYTES = frozenset({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)) - {0x7F})


class ContentClassifier(Protocol):
    """Decide whether a file's content is binary."""

    def is_binary(self, path: Path) -> bool: ...


def looks_binary(sample: bytes, *, control_ratio: float = CONTROL_CHAR_RATIO) -> bool:
    """Heuristic: detect if a sample of file content looks binary.

    - An empty sample is text.
    - Any NUL byte means binary.
    - A sample that decodes as UTF-8 is text. The decoder is incremental so a
      multi-byte character cut at the end of the sample is not an error.
    - Otherwise the sample is binary when control characters exceed `control_ratio`.

    Args:
        sample (bytes): leading bytes of the file
        control_ratio (float, optional): tolerated share of control characters.

    Returns:
        bool: True if the sample looks binary, False otherwise
    """
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    try:
        codecs.getincrementaldecoder("utf-8")().decode(sample, final=False)
    except UnicodeDecodeError:
        nontext = sum(b not in _TEXT_BYTES for b in sample)
        return (nontext / len(sample)) > control_ratio
    else:
        return False


class SniffingClassifier:
    """Classify a file by inspecting its first `sample_size` bytes."""

    def __init__(self, sample_size: int = SNIFF_BYTES) -> None:
        self.sample_size = sample_size

    def is_binary(self, path: Path) -> bool:
        return looks_binary(read_sample(path, self.sample_size))


class FileCommandClassifier:
    """Classify a file with the `file` utility's MIME encoding detection.

    `file` reports `binary` as the encoding of anything that is not text. When
    the utility is missing or fails on a file, the sniffing heuristic decides.
    """

    def __init__(self, fallback: ContentClassifier | None = None, executable: str = "file") -> None:
        self.executable = shutil.which(executable)
        self.fallback = fallback or SniffingClassifier()
        if self.executable is None:
            logger.warning("`file` utility not found, using content sniffing instead", executable=executable)

    def mime_encoding(self, path: Path) -> str:
        """Return the MIME encoding `file` reports for `path`.

        Raises:
            ExternalCommandError: if `file` is unavailable or exits non-zero.
        """
        if self.executable is None:
            raise ExternalCommandError(command="file", returncode=127, stdout="", stderr="not found")
        cmd = [self.executable, "--brief", "--mime-encoding", "--dereference", "--", str(path)]
        out = subprocess.run(cmd, capture_output=True, text=True, check=False)  # noqa: S603
        if out.returncode != 0:
            raise ExternalCommandError(
                command=" ".join(cmd),
                returncode=out.returncode,
                stdout=out.stdout,
                stderr=out.stderr,
            )
        return out.stdout.strip()

    def is_binary(self, path: Path) -> bool:
        if self.executable is None:
            return self.fallback.is_binary(path)
        # `file` reports an empty file as binary
        if path.stat().st_size == 0:
            return False
        try:
            encoding = self.mime_encoding(path)
        except ExternalCommandError as e:
            logger.warning("`file` failed, falling back to content sniffing", path=str(path), error=str(e))
            return self.fallback.is_binary(path)
        return encoding == "binary"
