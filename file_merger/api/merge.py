from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse

from file_merger.core.config import get_settings
from file_merger.core.logging import configure_logging
from file_merger.models import ContentKind, MergeMdRequest, MergeRequest, MergeResult
from file_merger.services.merge_service import MergeOptions, MergeService
from file_merger.utils.file_utils import resolve_output_path

router = APIRouter(prefix="/api", tags=["Merge"])

logger = configure_logging()
merge_service = MergeService()


def result_response(result: MergeResult) -> JSONResponse:
    return JSONResponse(status_code=result.status_code, content=result.to_response())


def _require_input_dir(payload: MergeRequest) -> None:
    if not payload.input_dir:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="يجب تحديد مجلد الإدخال.",
        )


@router.post("/merge", summary="دمج كل ملفات PDF في مجلد بترتيب أبجدي")
def merge_pdfs(payload: MergeRequest) -> JSONResponse:
    _require_input_dir(payload)
    settings = get_settings()
    output_path = resolve_output_path(payload.output_file, settings.default_pdf_output, settings.output_dir)

    result = merge_service.merge_directory(payload.input_dir, output_path, ContentKind.pdf)
    if result.success:
        logger.info("تم دمج %s ملفات PDF في: %s", result.merged_files, output_path)
    return result_response(result)


@router.post("/merge-md", summary="دمج كل ملفات Markdown في مجلد بترتيب أبجدي")
def merge_markdown(payload: MergeMdRequest) -> JSONResponse:
    _require_input_dir(payload)
    settings = get_settings()
    output_path = resolve_output_path(payload.output_file, settings.default_md_output, settings.output_dir)

    result = merge_service.merge_directory(
        payload.input_dir,
        output_path,
        ContentKind.markdown,
        MergeOptions(add_titles=payload.add_titles),
    )
    if result.success:
        logger.info("تم دمج %s ملفات Markdown في: %s", result.merged_files, output_path)
    return result_response(result)
