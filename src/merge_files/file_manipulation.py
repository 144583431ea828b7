from __future__ import annotations

import os
import stat
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


def relpath(path: Path, root: Path) -> str:
    """Send the relative path of path from root.

    Args:
        path (Path): the path to "relativise"
        root (Path): the root to relativise from

    Returns:
        str: the relative path from root to path, with POSIX separators.
            If path is not under root, returns the original path as a string.
    """
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return str(path)


def strip_trailing_separator(raw: str) -> str:
    """Remove trailing path separators, keeping a bare filesystem root intact.

    Args:
        raw (str): the path as typed by the operator

    Returns:
        str: the path without trailing separators
    """
    seps = os.sep + (os.altsep or "")
    return raw.rstrip(seps) or raw


def is_regular_file(path: Path, *, follow_symlinks: bool = True) -> bool:
    """Check if a file is regular.

    Args:
        path (Path): path to test.
        follow_symlinks (bool, optional): stat the link target rather than the link. Defaults to True.

    Returns:
        bool: True if the file is regular, False otherwise.
    """
    try:
        st = path.stat() if follow_symlinks else path.lstat()
    except OSError:
        return False
    return stat.S_ISREG(st.st_mode)


def is_readable(path: Path) -> bool:
    """Check that a file can actually be opened for reading."""
    try:
        with path.open("rb"):
            pass
    except OSError:
        return False
    return True


def read_sample(path: Path, nbytes: int) -> bytes:
    """Read at most `nbytes` from the start of a file."""
    with path.open("rb") as f:
        return f.read(nbytes)


def same_file(a: Path, b: Path) -> bool:
    """Compare two paths by their canonical, symlink-resolved location."""
    return a.resolve() == b.resolve()
