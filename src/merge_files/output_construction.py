from __future__ import annotations

import os
import shutil
from typing import TYPE_CHECKING, BinaryIO

from merge_files.config import HEADER_MARKER, NUMBERED_HEADER, SEPARATOR
from merge_files.exceptions import FileProcessingError

if TYPE_CHECKING:
    from merge_files.config import Candidate


def format_header(rel: str, *, index: int | None = None) -> bytes:
    """Build the header line announcing a file in the merged output.

    The marker is a fixed literal followed by the relative path. Content that
    happens to contain a line of the same shape is not escaped.

    Args:
        rel (str): the path relative to the source root, POSIX separators
        index (int | None): 1-based position among written files; when set the
            numbered marker (`### File 3: `) is used instead of the plain one

    Returns:
        bytes: the header line, newline-terminated, in the filesystem encoding
    """
    marker = HEADER_MARKER if index is None else NUMBERED_HEADER.format(index=index)
    return os.fsencode(f"{marker}{rel}\n")


def append_file(
    out: BinaryIO,
    candidate: Candidate,
    *,
    index: int | None = None,
) -> int:
    """Append one header + raw content block to the output stream.

    The content is copied byte for byte. The source is opened before the
    header is written, so a file that cannot be opened leaves no trace in
    the output. The stream is flushed before returning so a failure is
    attributed to the file that caused it.

    Args:
        out (BinaryIO): the output artifact, opened for binary append
        candidate (Candidate): the file to copy
        index (int | None): header number, see `format_header`

    Raises:
        FileProcessingError: if reading the source or writing the output fails.

    Returns:
        int: number of content bytes copied
    """
    try:
        with candidate.path.open("rb") as src:
            out.write(format_header(candidate.rel, index=index))
            start = out.tell()
            shutil.copyfileobj(src, out)
            copied = out.tell() - start
        out.write(SEPARATOR)
        out.flush()
    except OSError as e:
        raise FileProcessingError(path=candidate.path, reason=e.strerror or str(e)) from e
    return copied
