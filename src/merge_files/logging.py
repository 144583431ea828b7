from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from pathlib import Path

_LOGGING_CONFIGURED = False


def setup_logging(
    filename: str | Path | None = None,
    *,
    json_logs: bool = False,
    force: bool = False,
) -> structlog.BoundLogger:
    """Set up structured logging for the merge_files module.

    Console output is colored when stderr is a terminal, mirroring the
    `[INFO]`/`[WARN]`/`[ERROR]` status lines operators expect. The level is
    always rendered so automated callers can filter on severity.

    Args:
        filename: Optional path to a log file. If None, logs are written to stderr.
        json_logs: Render one JSON object per line instead of console text.
        force: Reconfigure even if logging was already set up in this process.

    Returns:
        A structlog logger instance configured for the merge_files module.
    """
    global _LOGGING_CONFIGURED  # noqa: PLW0603
    if not _LOGGING_CONFIGURED or force:
        handlers: list[logging.Handler] = []
        if filename:
            handlers.append(logging.FileHandler(str(filename), encoding="utf-8"))
            colors = False
        else:
            handlers.append(logging.StreamHandler(sys.stderr))
            colors = sys.stderr.isatty()

        processors: list[structlog.types.Processor] = [
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
        ]
        if json_logs:
            processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
        else:
            # ConsoleRenderer formats exceptions itself
            processors.append(structlog.dev.ConsoleRenderer(colors=colors))

        logging.basicConfig(
            level=logging.INFO,
            handlers=handlers,
            format="%(message)s",
            force=force,
        )
        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(logging.INFO),
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=False,
        )
        _LOGGING_CONFIGURED = True

    return structlog.get_logger("merge_files")


logger = setup_logging()
