from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from fastapi.testclient import TestClient
from pypdf import PdfWriter

from file_merger.storage.workspace import TempWorkspace

PREFIX = "file-merger-tmp-"


def write_pdf(path: Path, pages: int = 1, width: float = 200) -> Path:
    writer = PdfWriter()
    for _ in range(pages):
        writer.add_blank_page(width=width, height=300)
    with path.open("wb") as handle:
        writer.write(handle)
    return path


@pytest.fixture
def make_pdf() -> Callable[..., Path]:
    return write_pdf


@pytest.fixture
def temp_root(tmp_path: Path) -> Path:
    root = tmp_path / "tmp-root"
    root.mkdir()
    return root


@pytest.fixture
def workspace(temp_root: Path) -> TempWorkspace:
    return TempWorkspace(root=temp_root, prefix=PREFIX)


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, workspace: TempWorkspace) -> TestClient:
    from file_merger.api import workspace as workspace_api
    from file_merger.main import app

    monkeypatch.setattr(workspace_api, "workspace", workspace)
    return TestClient(app)
