"""Argument validation and output initialization, run before any file is merged."""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING

from merge_files.exceptions import OutputDirError, OutputInitError, SourceNotFoundError, UsageError
from merge_files.file_manipulation import strip_trailing_separator
from merge_files.logging import logger

if TYPE_CHECKING:
    from collections.abc import Callable

    ConfirmFn = Callable[[Path], bool]


def validate_arguments(source: str, output: str) -> tuple[Path, Path]:
    """Check the two positional arguments and the filesystem around them.

    The output's parent directory is created when missing; this is the only
    side effect.

    Args:
        source (str): the source directory as given on the command line
        output (str): the output file as given on the command line

    Raises:
        UsageError: if either argument is empty.
        SourceNotFoundError: if the source is not an existing directory.
        OutputDirError: if the output directory cannot be created or is not writable.

    Returns:
        tuple[Path, Path]: the resolved source directory and the output path
    """
    if not source or not output:
        raise UsageError

    source_dir = Path(strip_trailing_separator(source))
    if not source_dir.is_dir():
        raise SourceNotFoundError(source=source_dir)

    output_path = Path(output)
    output_dir = output_path.parent
    if not output_dir.is_dir():
        logger.info("Output directory does not exist. Creating it...", directory=str(output_dir))
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirError(directory=output_dir, message="Failed to create output directory.") from e
    if not os.access(output_dir, os.W_OK):
        raise OutputDirError(directory=output_dir)

    return source_dir.resolve(), output_path


def prompt_overwrite(path: Path) -> bool:
    """Ask the operator whether an existing output may be overwritten.

    Anything but `y`/`Y` declines, including an empty answer or end of input.
    Surrounding whitespace is ignored, so a stray space after `y` still accepts.
    """
    try:
        answer = input(f"Output file '{path}' already exists. Overwrite? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() == "y"


def assume_yes(_path: Path) -> bool:
    return True


def initialize_output(output: Path, confirm: ConfirmFn = prompt_overwrite) -> bool:
    """Create or truncate the output artifact.

    An existing output is only truncated once `confirm` agrees; a refusal
    leaves it untouched.

    Args:
        output (Path): the output file
        confirm (ConfirmFn, optional): overwrite confirmation. Defaults to an interactive prompt.

    Raises:
        OutputInitError: if the file cannot be created or truncated.

    Returns:
        bool: True if the output is ready (empty), False if the operator declined
    """
    if output.exists() and not confirm(output):
        return False
    logger.info("Initializing output file", output=str(output))
    try:
        with output.open("wb"):
            pass
    except OSError as e:
        raise OutputInitError(output=output) from e
    return True
