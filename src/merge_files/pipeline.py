"""Enumerate, filter and append files into the output artifact."""

from __future__ import annotations

from typing import TYPE_CHECKING

from merge_files.config import Candidate, FileOutcome, MergeSummary, OutcomeStatus
from merge_files.exceptions import FileProcessingError, OutputInitError
from merge_files.file_manipulation import relpath
from merge_files.filters import check_candidate
from merge_files.logging import logger
from merge_files.output_construction import append_file

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from merge_files.classification import ContentClassifier
    from merge_files.listing import FileLister


def iter_candidates(lister: FileLister, source: Path) -> Iterator[Candidate]:
    """Wrap the lister's absolute paths into candidates with their display path."""
    for path in lister.list_files():
        yield Candidate(path=path, rel=relpath(path, source))


def merge_files(
    source: Path,
    output: Path,
    *,
    lister: FileLister,
    classifier: ContentClassifier,
    numbered: bool = False,
) -> MergeSummary:
    """Append every text file found under `source` to `output`.

    `output` must already be initialized; it is opened in append mode and
    never read. Each candidate yields exactly one outcome. Write failures are
    logged and recorded but do not stop the run.

    Args:
        source (Path): the resolved source directory
        output (Path): the initialized output artifact
        lister (FileLister): where candidates come from
        classifier (ContentClassifier): binary content detection
        numbered (bool, optional): number the headers. Defaults to False.

    Raises:
        OutputInitError: if the output cannot be opened for appending.
        GitCommandError: if the git lister fails to list the source.

    Returns:
        MergeSummary: per-file outcomes and derived counts
    """
    summary = MergeSummary(source=source, output=output, honors_ignore_rules=lister.honors_ignore_rules)
    logger.info("Scanning for files...", source=str(source))

    try:
        out = output.open("ab")
    except OSError as e:
        raise OutputInitError(output=output, message="Failed to open output file for appending.") from e

    written = 0
    with out:
        for candidate in iter_candidates(lister, source):
            reason = check_candidate(candidate, output, classifier)
            if reason is not None:
                logger.info("Skipping file", path=candidate.rel, reason=str(reason))
                summary.outcomes.append(
                    FileOutcome(candidate=candidate, status=OutcomeStatus.SKIPPED, reason=reason),
                )
                continue

            index = written + 1
            logger.info("Processing", index=index, path=candidate.rel)
            try:
                size = append_file(out, candidate, index=index if numbered else None)
            except FileProcessingError as e:
                logger.error("Failed to append file. Disk full or permission issue?", path=candidate.rel, error=e.reason)
                summary.outcomes.append(
                    FileOutcome(candidate=candidate, status=OutcomeStatus.FAILED, error=e.reason),
                )
                continue
            written += 1
            summary.outcomes.append(FileOutcome(candidate=candidate, status=OutcomeStatus.WRITTEN, size=size))

    return summary
