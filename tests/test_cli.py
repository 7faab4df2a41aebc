from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from pypdf import PdfReader

from file_merger.cli import build_parser, main


def test_merge_md_directory_without_titles(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    source = tmp_path / "docs"
    source.mkdir()
    (source / "one.md").write_bytes(b"A")
    (source / "two.md").write_bytes(b"B")
    output = tmp_path / "merged.md"

    code = main(["merge-md", "-i", str(source), "-o", str(output), "--add-titles=false"])

    assert code == 0
    assert output.read_bytes() == b"A\n\nB"
    assert str(output) in capsys.readouterr().out


def test_merge_md_titles_default_to_true(tmp_path: Path) -> None:
    (tmp_path / "one.md").write_bytes(b"A")
    output = tmp_path / "out" / "merged.md"
    output.parent.mkdir()

    assert main(["merge-md", "--input", str(tmp_path), "--output", str(output)]) == 0
    assert output.read_bytes() == b"# one\n\nA"


def test_merge_md_files_flag_overrides_input_and_keeps_order(tmp_path: Path) -> None:
    z = tmp_path / "z.md"
    a = tmp_path / "a.md"
    z.write_bytes(b"Z")
    a.write_bytes(b"A")
    output = tmp_path / "merged.md"

    code = main(
        [
            "merge-md",
            "-i",
            str(tmp_path / "does-not-exist"),
            "-f",
            f"{z},{a}",
            "-o",
            str(output),
            "-t",
            "false",
            "-v",
        ]
    )

    assert code == 0
    assert output.read_bytes() == b"Z\n\nA"


def test_merge_pdf_with_repeated_files_flag(tmp_path: Path, make_pdf: Callable[..., Path]) -> None:
    first = make_pdf(tmp_path / "b.pdf", pages=1, width=120)
    second = make_pdf(tmp_path / "a.pdf", pages=2, width=240)
    output = tmp_path / "merged.pdf"

    code = main(["merge", "--files", str(first), "--files", str(second), "-o", str(output)])

    assert code == 0
    widths = [float(page.mediabox.width) for page in PdfReader(str(output)).pages]
    assert widths == [120, 240, 240]


def test_merge_missing_directory_exits_nonzero(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["merge", "-i", str(tmp_path / "missing"), "-o", str(tmp_path / "out.pdf")])

    assert code == 1
    assert capsys.readouterr().err.strip()
    assert not (tmp_path / "out.pdf").exists()


def test_relative_output_is_made_absolute(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "a.md").write_bytes(b"A")

    assert main(["merge-md", "-i", "docs", "-o", "merged.md"]) == 0
    assert (tmp_path / "merged.md").exists()
    assert str(tmp_path / "merged.md") in capsys.readouterr().out


def test_serve_arguments() -> None:
    args = build_parser().parse_args(["serve", "--port", "9090"])
    assert args.port == 9090
    assert args.command == "serve"


def test_invalid_boolean_is_rejected() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args(["merge-md", "--add-titles=maybe"])
