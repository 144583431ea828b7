"""
merge_files — Concatenate the text files of a directory tree into one file.

Overview
--------
Every text file found under SOURCE_DIR is appended to OUTPUT_FILE, preceded
by a header line holding its path relative to SOURCE_DIR:

    ### File: src/app.py
    <raw content>

Discovery prefers `git ls-files` (tracked + untracked, honoring .gitignore)
and falls back to a plain directory walk when Git is unavailable or disabled
(`--no-git`), in which case ignore rules are NOT applied. Binary files are
left out by extension and by content sniffing, and the output file never
includes itself.

Usage
-----
    merge-files ./src snapshot.txt
    merge-files . out/all.txt --yes --numbered
    merge-files . out.txt --no-git --log-json --log-file merge.log

Exit status is 0 on success (also when nothing was merged or an overwrite was
declined) and 1 when the arguments or the output file cannot be used.
"""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING

from merge_files import __version__
from merge_files.classification import FileCommandClassifier, SniffingClassifier
from merge_files.exceptions import MergeFilesError
from merge_files.listing import choose_lister
from merge_files.logging import logger, setup_logging
from merge_files.pipeline import merge_files
from merge_files.preparation import assume_yes, initialize_output, prompt_overwrite, validate_arguments
from merge_files.reporting import report_summary
from merge_files.settings import Settings

if TYPE_CHECKING:
    from collections.abc import Sequence

    from merge_files.classification import ContentClassifier
    from merge_files.preparation import ConfirmFn


def parse_args(argv: Sequence[str] | None = None) -> Settings:
    """Parse command line arguments into settings.

    Positional arguments are optional at the parser level so that a missing
    one is reported as a usage error with exit status 1.

    Args:
        argv (Sequence[str] | None): arguments, defaults to `sys.argv[1:]`

    Returns:
        Settings: the parsed settings
    """
    p = argparse.ArgumentParser(
        prog="merge-files",
        description="Merge the text files of a directory into a single file.",
    )
    p.add_argument("source", nargs="?", default="", help="Source directory.")
    p.add_argument("output", nargs="?", default="", help="Output file.")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--no-git", action="store_true", help="Do not use git ls-files.")
    p.add_argument(
        "-y",
        "--yes",
        dest="assume_yes",
        action="store_true",
        help="Overwrite an existing output file without asking.",
    )
    p.add_argument(
        "--numbered",
        action="store_true",
        help="Number the file headers (### File 3: path).",
    )
    p.add_argument(
        "--file-command",
        action="store_true",
        help="Classify content with the `file` utility instead of sniffing.",
    )
    p.add_argument("--log-file", type=str, default="", help="Log file path.")
    p.add_argument("--log-json", action="store_true", help="Render logs as JSON lines.")
    args = p.parse_args(argv)
    return Settings(**vars(args))


def build_classifier(settings: Settings) -> ContentClassifier:
    if settings.file_command:
        return FileCommandClassifier()
    return SniffingClassifier()


def main(argv: Sequence[str] | None = None, *, confirm: ConfirmFn | None = None) -> int:
    """Run a merge from the command line.

    Args:
        argv (Sequence[str] | None): arguments, defaults to `sys.argv[1:]`
        confirm (ConfirmFn | None): overwrite confirmation; `--yes` or the
            interactive prompt when None

    Returns:
        int: the process exit status
    """
    settings = parse_args(argv)
    if settings.log_file or settings.log_json:
        setup_logging(settings.log_file or None, json_logs=settings.log_json, force=True)

    if confirm is None:
        confirm = assume_yes if settings.assume_yes else prompt_overwrite

    try:
        source, output = validate_arguments(settings.source, settings.output)
        logger.info("Starting file merge process.", source=str(source), output=str(output))

        if not initialize_output(output, confirm):
            logger.info("Operation cancelled. Output file left untouched.", output=str(output))
            return 0

        lister = choose_lister(source, no_git=settings.no_git)
        summary = merge_files(
            source,
            output,
            lister=lister,
            classifier=build_classifier(settings),
            numbered=settings.numbered,
        )
    except MergeFilesError as e:
        logger.error(str(e), error=type(e).__name__)
        return 1

    report_summary(summary)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
