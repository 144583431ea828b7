from __future__ import annotations

from typing import TYPE_CHECKING

from merge_files.config import EXCLUDED_EXTENSIONS, SkipReason
from merge_files.file_manipulation import is_readable, same_file

if TYPE_CHECKING:
    from pathlib import Path

    from merge_files.classification import ContentClassifier
    from merge_files.config import Candidate


def has_excluded_extension(path: Path) -> bool:
    """Check a path's literal suffix against the binary/archive/media denylist.

    This is a fast path that never opens the file. It is case-sensitive and
    only looks at the last suffix, so it can both miss binaries and drop text.

    Args:
        path (Path): the path to test

    Returns:
        bool: True if the suffix is denylisted, False otherwise
    """
    return path.suffix in EXCLUDED_EXTENSIONS


def check_candidate(
    candidate: Candidate,
    output: Path,
    classifier: ContentClassifier,
) -> SkipReason | None:
    """Decide whether a candidate is merged, stopping at the first check that matches.

    The checks run in this order:
    1) the candidate is the output file itself (after resolving symlinks),
    2) its extension is denylisted,
    3) it cannot be opened for reading,
    4) the classifier reports binary content.

    Args:
        candidate (Candidate): the file to check
        output (Path): the output artifact of the current run
        classifier (ContentClassifier): content sniffer used for the last check

    Returns:
        SkipReason | None: the reason to skip, or None to include the file
    """
    path = candidate.path
    if same_file(path, output):
        return SkipReason.IS_OUTPUT
    if has_excluded_extension(path):
        return SkipReason.EXCLUDED_EXTENSION
    if not is_readable(path):
        return SkipReason.NOT_READABLE
    try:
        binary = classifier.is_binary(path)
    except OSError:
        return SkipReason.NOT_READABLE
    if binary:
        return SkipReason.BINARY_CONTENT
    return None
