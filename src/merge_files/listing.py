"""Candidate discovery under the source directory."""

from __future__ import annotations

import os
import shutil
import subprocess  # noqa: S404
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from merge_files.exceptions import GitCommandError, NotAGitRepositoryError
from merge_files.file_manipulation import is_regular_file
from merge_files.logging import logger

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence


class FileLister(Protocol):
    """Produce absolute paths of the files under a source directory."""

    honors_ignore_rules: bool

    def list_files(self) -> Iterator[Path]: ...


def run_git(args: Sequence[str], cwd: Path) -> str:
    """Run a git command and return its stdout.

    Args:
        args (Sequence[str]): arguments after `git`
        cwd (Path): directory passed to `git -C`

    Raises:
        GitCommandError: if git exits with a non-zero status.

    Returns:
        str: the command's stdout, decoded with the filesystem encoding
    """
    cmd = ["git", "-C", str(cwd), *args]
    out = subprocess.run(cmd, capture_output=True, check=False)  # noqa: S603
    if out.returncode != 0:
        raise GitCommandError(
            command=" ".join(cmd),
            returncode=out.returncode,
            stdout=out.stdout.decode(errors="replace"),
            stderr=out.stderr.decode(errors="replace"),
        )
    return os.fsdecode(out.stdout)


def split_nul(output: str) -> list[str]:
    """Split NUL-delimited command output, dropping empty entries."""
    return [entry for entry in output.split("\0") if entry]


class GitFileLister:
    """List tracked and untracked-but-not-ignored files through `git ls-files`.

    Entries come back relative to the repository top level and NUL-delimited,
    so names containing newlines survive. Index entries that are not regular
    files on disk (deleted files, submodules) are dropped.
    """

    honors_ignore_rules = True

    def __init__(self, source: Path, toplevel: Path) -> None:
        self.source = source
        self.toplevel = toplevel

    @classmethod
    def for_directory(cls, source: Path) -> GitFileLister:
        """Build a lister for `source` if it lies inside a Git work tree.

        Raises:
            NotAGitRepositoryError: if git is unavailable or `source` is not in a work tree.

        Returns:
            GitFileLister: a lister rooted at the repository top level
        """
        if shutil.which("git") is None:
            raise NotAGitRepositoryError(folder=source, message="git executable not found.")
        try:
            inside = run_git(["rev-parse", "--is-inside-work-tree"], cwd=source).strip()
            if inside != "true":
                raise NotAGitRepositoryError(folder=source)
            toplevel = run_git(["rev-parse", "--show-toplevel"], cwd=source).strip()
        except GitCommandError as e:
            raise NotAGitRepositoryError(folder=source) from e
        return cls(source=source, toplevel=Path(toplevel))

    def list_files(self) -> Iterator[Path]:
        out = run_git(
            ["ls-files", "-c", "-o", "--exclude-standard", "--full-name", "-z", "--", str(self.source)],
            cwd=self.toplevel,
        )
        for name in dict.fromkeys(split_nul(out)):
            path = self.toplevel / name
            if not is_regular_file(path):
                logger.info("Ignoring index entry that is not a file on disk", path=str(path))
                continue
            yield path


class WalkFileLister:
    """Recursively walk the source directory, yielding every regular file.

    No ignore rules are applied. Directories and files are visited in sorted
    order so a given tree always produces the same sequence.
    """

    honors_ignore_rules = False

    def __init__(self, source: Path) -> None:
        self.source = source

    def list_files(self) -> Iterator[Path]:
        for root, dirs, files in os.walk(self.source):
            dirs.sort()
            for f in sorted(files):
                p = Path(root) / f
                if is_regular_file(p, follow_symlinks=False):
                    yield p


def choose_lister(source: Path, *, no_git: bool = False) -> FileLister:
    """Pick the version-control aware lister when possible, the walk otherwise.

    Args:
        source (Path): the resolved source directory
        no_git (bool, optional): skip git detection entirely. Defaults to False.

    Returns:
        FileLister: the lister to enumerate candidates with
    """
    if not no_git:
        try:
            lister = GitFileLister.for_directory(source)
        except NotAGitRepositoryError as e:
            logger.warning(
                "Git not found or source is not in a Git repository. "
                "Walking the directory instead: .gitignore files will NOT be processed.",
                source=str(source),
                detail=e.message,
            )
        else:
            logger.info(
                "Git repository detected. Using `git ls-files` for file discovery (respects .gitignore).",
                toplevel=str(lister.toplevel),
            )
            return lister
    else:
        logger.warning(
            "Git discovery disabled. Walking the directory: .gitignore files will NOT be processed.",
            source=str(source),
        )
    return WalkFileLister(source)
