from __future__ import annotations

from typing import TYPE_CHECKING

from merge_files.logging import logger

if TYPE_CHECKING:
    from merge_files.config import MergeSummary


def report_summary(summary: MergeSummary) -> None:
    """Log the final counts of a merge run.

    Zero counts are logged like any other. An empty merge is a warning, not an error.
    """
    logger.info(
        "Merge finished",
        encountered=summary.encountered,
        processed=summary.processed,
        skipped=summary.skipped,
        failed=summary.failed,
        bytes_written=sum(o.size for o in summary.outcomes),
        output=str(summary.output),
    )
    if summary.failed:
        logger.warning("Some files could not be appended", failed=summary.failed)
    if summary.processed == 0:
        logger.warning("No text files were found or processed", source=str(summary.source))
    else:
        logger.info(f"Merged {summary.processed} text files into {summary.output}")
