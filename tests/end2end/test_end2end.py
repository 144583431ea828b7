from pathlib import Path

import pytest

from merge_files import cli

PNG_MAGIC = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"


def make_source(root: Path) -> Path:
    source = root / "project"
    (source / "pkg" / "sub").mkdir(parents=True)
    (source / "a.txt").write_text("hello", encoding="utf-8")
    (source / "logo.png").write_bytes(PNG_MAGIC)
    (source / "pkg" / "sub" / "mod.py").write_text("VALUE = 1\n", encoding="utf-8")
    (source / "pkg" / "data.bin").write_bytes(b"\x00\x00\x01")
    return source


def test_end_to_end_fresh_output(tmp_path: Path) -> None:
    source = make_source(tmp_path)
    output = tmp_path / "exports" / "nested" / "merged.txt"

    exit_code = cli.main([f"{source}/", str(output), "--no-git"])

    assert exit_code == 0
    assert output.read_bytes() == b"### File: a.txt\nhello\n\n### File: pkg/sub/mod.py\nVALUE = 1\n\n\n"


def test_end_to_end_minimal_scenario(tmp_path: Path) -> None:
    source = tmp_path / "src"
    source.mkdir()
    (source / "a.txt").write_text("hello", encoding="utf-8")
    (source / "logo.png").write_bytes(PNG_MAGIC)
    output = tmp_path / "out.txt"

    assert cli.main([str(source), str(output), "--no-git"]) == 0
    assert output.read_bytes() == b"### File: a.txt\nhello\n\n"


def test_end_to_end_rerun_with_overwrite_is_identical(tmp_path: Path) -> None:
    source = make_source(tmp_path)
    output = tmp_path / "merged.txt"

    assert cli.main([str(source), str(output), "--no-git"]) == 0
    first = output.read_bytes()
    assert cli.main([str(source), str(output), "--no-git"], confirm=lambda _p: True) == 0

    assert output.read_bytes() == first


def test_end_to_end_decline_keeps_existing_output(tmp_path: Path) -> None:
    source = make_source(tmp_path)
    output = tmp_path / "merged.txt"
    output.write_text("do not touch", encoding="utf-8")

    exit_code = cli.main([str(source), str(output), "--no-git"], confirm=lambda _p: False)

    assert exit_code == 0
    assert output.read_text(encoding="utf-8") == "do not touch"


def test_end_to_end_output_inside_source(tmp_path: Path) -> None:
    source = make_source(tmp_path)
    output = source / "merged.txt"

    assert cli.main([str(source), str(output), "--no-git", "--numbered"]) == 0

    content = output.read_bytes()
    assert content.startswith(b"### File 1: a.txt\nhello\n\n### File 2: pkg/sub/mod.py\n")
    assert b"merged.txt" not in content


def test_end_to_end_empty_source_still_succeeds(tmp_path: Path) -> None:
    source = tmp_path / "empty"
    source.mkdir()
    output = tmp_path / "out.txt"

    assert cli.main([str(source), str(output), "--no-git"]) == 0
    assert output.exists()
    assert output.read_bytes() == b""


@pytest.mark.parametrize("argv", [[], ["only-one"]])
def test_end_to_end_usage_error(argv: list[str]) -> None:
    assert cli.main(argv) == 1


def test_end_to_end_log_file(tmp_path: Path) -> None:
    source = make_source(tmp_path)
    log_file = tmp_path / "merge.log"

    exit_code = cli.main(
        [str(source), str(tmp_path / "out.txt"), "--no-git", "--log-file", str(log_file), "--log-json"],
    )

    assert exit_code == 0
    log_text = log_file.read_text(encoding="utf-8")
    assert "Merged 2 text files" in log_text
    assert '"reason": "excluded by extension"' in log_text
