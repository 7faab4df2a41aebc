import mimetypes
from pathlib import Path
from typing import List

from fastapi import APIRouter, HTTPException, Query, status
from fastapi.responses import FileResponse

from file_merger.models import CandidateFile, ContentKind
from file_merger.services.resolver import FileSetResolver

router = APIRouter(prefix="/api", tags=["Files"])
resolver = FileSetResolver()


def _require_dir(directory: str) -> str:
    if not directory:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="يجب تحديد معامل المجلد '?dir=...'",
        )
    return directory


@router.get("/files", summary="قائمة ملفات PDF في مجلد مع عناوينها", response_model=List[CandidateFile])
def list_pdf_files(dir: str = Query(default="")) -> List[CandidateFile]:
    return resolver.list_candidates(_require_dir(dir), ContentKind.pdf)


@router.get("/md-files", summary="قائمة ملفات Markdown في مجلد مع عناوينها", response_model=List[CandidateFile])
def list_markdown_files(dir: str = Query(default="")) -> List[CandidateFile]:
    return resolver.list_candidates(_require_dir(dir), ContentKind.markdown)


@router.get("/download/{file_path:path}", summary="تنزيل ملف ناتج كمرفق")
def download(file_path: str) -> FileResponse:
    if not file_path:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="يجب تحديد مسار الملف.",
        )

    path = Path(file_path)
    if not path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"تعذر الوصول إلى الملف: {file_path}",
        )

    media_type, _ = mimetypes.guess_type(path.name)
    if path.suffix.lower() in (".md", ".markdown"):
        media_type = "text/markdown"
    return FileResponse(
        path,
        media_type=media_type or "application/octet-stream",
        filename=path.name,
    )
