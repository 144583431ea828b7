from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from merge_files import filters
from merge_files.config import Candidate, SkipReason
from merge_files.filters import check_candidate, has_excluded_extension

if TYPE_CHECKING:
    from pytest_mock import MockerFixture


class FixedClassifier:
    def __init__(self, *, binary: bool) -> None:
        self.binary = binary
        self.calls: list[Path] = []

    def is_binary(self, path: Path) -> bool:
        self.calls.append(path)
        return self.binary


def make_candidate(root: Path, rel: str, content: bytes = b"text") -> Candidate:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(content)
    return Candidate(path=path, rel=rel)


@pytest.mark.unit
def test_has_excluded_extension_is_case_sensitive() -> None:
    assert has_excluded_extension(Path("logo.png"))
    assert has_excluded_extension(Path("lib/libfoo.so"))
    assert has_excluded_extension(Path("archive.tar.gz"))
    assert not has_excluded_extension(Path("LOGO.PNG"))
    assert not has_excluded_extension(Path("main.py"))
    assert not has_excluded_extension(Path("Makefile"))


@pytest.mark.unit
def test_text_file_is_included(tmp_path: Path) -> None:
    candidate = make_candidate(tmp_path, "a.txt", b"hello")

    assert check_candidate(candidate, tmp_path / "out.txt", FixedClassifier(binary=False)) is None


@pytest.mark.unit
def test_output_file_is_skipped_before_any_other_check(tmp_path: Path) -> None:
    candidate = make_candidate(tmp_path, "merged.png", b"\x00")
    classifier = FixedClassifier(binary=True)

    reason = check_candidate(candidate, tmp_path / "merged.png", classifier)

    assert reason is SkipReason.IS_OUTPUT
    assert classifier.calls == []


@pytest.mark.unit
def test_output_reached_through_symlink_is_skipped(tmp_path: Path) -> None:
    candidate = make_candidate(tmp_path, "real/out.txt")
    alias = tmp_path / "alias.txt"
    alias.symlink_to(candidate.path)

    assert check_candidate(candidate, alias, FixedClassifier(binary=False)) is SkipReason.IS_OUTPUT


@pytest.mark.unit
def test_extension_skip_does_not_open_file(tmp_path: Path, mocker: MockerFixture) -> None:
    candidate = Candidate(path=tmp_path / "missing.jpg", rel="missing.jpg")
    readable = mocker.spy(filters, "is_readable")
    classifier = FixedClassifier(binary=False)

    reason = check_candidate(candidate, tmp_path / "out.txt", classifier)

    assert reason is SkipReason.EXCLUDED_EXTENSION
    readable.assert_not_called()
    assert classifier.calls == []


@pytest.mark.unit
def test_unreadable_file_is_skipped(tmp_path: Path, mocker: MockerFixture) -> None:
    candidate = make_candidate(tmp_path, "secret.txt")
    mocker.patch.object(filters, "is_readable", return_value=False)
    classifier = FixedClassifier(binary=False)

    reason = check_candidate(candidate, tmp_path / "out.txt", classifier)

    assert reason is SkipReason.NOT_READABLE
    assert classifier.calls == []


@pytest.mark.unit
def test_classifier_error_counts_as_not_readable(tmp_path: Path) -> None:
    candidate = make_candidate(tmp_path, "flaky.txt")

    class Raising:
        def is_binary(self, path: Path) -> bool:
            raise PermissionError(path)

    assert check_candidate(candidate, tmp_path / "out.txt", Raising()) is SkipReason.NOT_READABLE


@pytest.mark.unit
def test_binary_content_is_skipped(tmp_path: Path) -> None:
    candidate = make_candidate(tmp_path, "data.bin", b"\x00\x01")

    reason = check_candidate(candidate, tmp_path / "out.txt", FixedClassifier(binary=True))

    assert reason is SkipReason.BINARY_CONTENT
    assert str(reason) == "detected binary"
