from __future__ import annotations

from pathlib import Path
from typing import Callable

from pypdf import PdfReader

from file_merger.core.errors import ErrorCode
from file_merger.models import ContentKind
from file_merger.services.merge_service import MergeOptions, MergeService, PDFMergeStrategy, get_merger


def _widths(path: Path) -> list[float]:
    return [float(page.mediabox.width) for page in PdfReader(str(path)).pages]


def test_directory_merge_concatenates_pages_in_sorted_order(
    tmp_path: Path, make_pdf: Callable[..., Path]
) -> None:
    source = tmp_path / "in"
    source.mkdir()
    make_pdf(source / "b.pdf", pages=2, width=200)
    make_pdf(source / "a.pdf", pages=1, width=100)
    make_pdf(source / "c.PDF", pages=1, width=300)
    (source / "notes.md").write_text("ignored", encoding="utf-8")
    output = tmp_path / "merged.pdf"

    result = MergeService().merge_directory(str(source), str(output), ContentKind.pdf)

    assert result.success
    assert result.merged_files == 3
    assert [Path(path).name for path in result.files_list] == ["a.pdf", "b.pdf", "c.PDF"]
    assert _widths(output) == [100, 200, 200, 300]


def test_explicit_list_merge_keeps_caller_order(tmp_path: Path, make_pdf: Callable[..., Path]) -> None:
    first = make_pdf(tmp_path / "z.pdf", width=400)
    second = make_pdf(tmp_path / "a.pdf", width=150)
    output = tmp_path / "merged.pdf"

    result = MergeService().merge_files([str(first), str(second)], str(output), ContentKind.pdf)

    assert result.success
    assert _widths(output) == [400, 150]


def test_add_titles_is_ignored_for_pdf(tmp_path: Path, make_pdf: Callable[..., Path]) -> None:
    source = make_pdf(tmp_path / "only.pdf", pages=2)
    output = tmp_path / "merged.pdf"

    result = MergeService().merge_files([str(source)], str(output), options=MergeOptions(add_titles=True))

    assert result.success
    assert len(PdfReader(str(output)).pages) == 2


def test_broken_pdf_is_reported_as_merge_failure(tmp_path: Path, make_pdf: Callable[..., Path]) -> None:
    good = make_pdf(tmp_path / "a.pdf")
    broken = tmp_path / "b.pdf"
    broken.write_bytes(b"this is not a pdf")
    output = tmp_path / "merged.pdf"

    result = PDFMergeStrategy().merge_ordered([str(good), str(broken)], str(output), MergeOptions())

    assert not result.success
    assert result.error_code is ErrorCode.merge_failed
    assert result.status_code == 500
    assert result.error_message


def test_strategy_dispatch_by_kind() -> None:
    assert get_merger(ContentKind.pdf).kind is ContentKind.pdf
    assert get_merger(ContentKind.markdown).kind is ContentKind.markdown


def test_strategy_refuses_empty_file_list(tmp_path: Path) -> None:
    output = tmp_path / "merged.pdf"

    result = PDFMergeStrategy().merge_ordered([], str(output), MergeOptions())

    assert not result.success
    assert result.error_code is ErrorCode.no_valid_files
    assert result.merged_files is None
    assert not output.exists()
