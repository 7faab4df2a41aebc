from pathlib import Path
from typing import List, Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse

from file_merger.api.merge import result_response
from file_merger.core.config import get_settings
from file_merger.core.logging import configure_logging
from file_merger.models import ContentKind, MergeFilesRequest, TempDirRequest, UploadResult
from file_merger.services.merge_service import MergeOptions, MergeService
from file_merger.storage.workspace import TempWorkspace
from file_merger.utils.file_utils import detect_kind, ensure_supported, resolve_output_path

router = APIRouter(prefix="/api", tags=["Temp Workspace"])

logger = configure_logging()
workspace = TempWorkspace()
merge_service = MergeService()


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


def _member_path(temp_dir: str, name: str) -> str:
    """أسماء الملفات المطلوبة أسماء مجردة داخل المجلد المؤقت؛ المسارات الفرعية والصعود مرفوضة."""
    if not name or Path(name).name != name or name in (".", ".."):
        raise _bad_request(f"اسم ملف غير صالح: {name}")
    return str(Path(temp_dir) / name)


@router.post("/temp-dir", summary="إنشاء مجلد عمل مؤقت جديد")
def create_temp_dir() -> dict:
    path = workspace.create()
    logger.info("تم إنشاء مجلد مؤقت: %s", path)
    return {"tempDir": str(path), "message": "تم إنشاء المجلد المؤقت بنجاح."}


@router.delete("/temp-dir", summary="حذف مجلد عمل مؤقت أنشأه النظام")
def delete_temp_dir(payload: TempDirRequest) -> dict:
    if not payload.temp_dir:
        raise _bad_request("يجب تحديد مسار المجلد المؤقت.")

    workspace.destroy(payload.temp_dir)
    logger.info("تم حذف المجلد المؤقت: %s", payload.temp_dir)
    return {"message": "تم حذف المجلد المؤقت بنجاح."}


@router.post("/upload", summary="رفع ملف PDF أو Markdown إلى مجلد عمل مؤقت")
def upload_file(
    file: UploadFile = File(...),
    tempDir: Optional[str] = Form(default=None),
) -> dict:
    kind = ensure_supported(file.filename or "")
    saved = workspace.save(file.file, file.filename or "", tempDir or None)
    logger.info("تم رفع الملف %s (%d بايت) إلى %s", saved.path.name, saved.size, saved.workspace)

    result = UploadResult(
        success=True,
        file_path=str(saved.path),
        temp_dir=str(saved.workspace),
        file_name=saved.path.name,
        file_size=saved.size,
        file_type=kind,
    )
    return result.model_dump(by_alias=True, exclude_none=True, mode="json")


@router.get("/temp-files", summary="قائمة الملفات في مجلد عمل مؤقت مصنفة حسب النوع")
def list_temp_files(dir: str = "") -> dict:
    if not dir:
        raise _bad_request("يجب تحديد معامل المجلد المؤقت '?dir=...'")

    files = workspace.list(dir)
    pdf_files: List[str] = [path for path in files if detect_kind(path) is ContentKind.pdf]
    md_files: List[str] = [path for path in files if detect_kind(path) is ContentKind.markdown]

    return {
        "tempDir": dir,
        "allFiles": files,
        "pdfFiles": pdf_files,
        "mdFiles": md_files,
        "totalFiles": len(files),
    }


@router.post("/merge-files", summary="دمج الملفات المرفوعة إلى مجلد مؤقت حسب نوع أول ملف")
def merge_uploaded_files(payload: MergeFilesRequest) -> JSONResponse:
    if not payload.temp_dir:
        raise _bad_request("يجب تحديد المجلد المؤقت.")
    if not payload.output_file:
        raise _bad_request("يجب تحديد اسم ملف الإخراج.")

    settings = get_settings()
    output_path = resolve_output_path(payload.output_file, payload.output_file, settings.output_dir)

    if payload.file_names:
        files = [_member_path(payload.temp_dir, name) for name in payload.file_names]
    else:
        files = workspace.list(payload.temp_dir)

    if not files:
        raise _bad_request("لم يُعثر على ملفات للدمج.")

    result = merge_service.merge_files(files, output_path, options=MergeOptions(add_titles=payload.add_titles))
    if result.success:
        logger.info("تم دمج %s ملفات من %s في: %s", result.merged_files, payload.temp_dir, output_path)
    return result_response(result)
