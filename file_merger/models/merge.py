from __future__ import annotations

from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field

from file_merger.core.errors import ErrorCode, FileMergerError, status_for


class MergeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    input_dir: str = Field(default="", alias="inputDir", description="المجلد الذي يحتوي ملفات PDF.")
    output_file: str = Field(default="", alias="outputFile", description="مسار الملف الناتج (اختياري).")


class MergeMdRequest(MergeRequest):
    add_titles: bool = Field(default=False, alias="addTitles", description="إضافة اسم الملف كعنوان قبل محتواه.")


class MergeFilesRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temp_dir: str = Field(default="", alias="tempDir", description="مجلد العمل المؤقت الذي رُفعت إليه الملفات.")
    file_names: List[str] = Field(
        default_factory=list,
        alias="fileNames",
        description="أسماء الملفات بالترتيب المطلوب؛ عند غيابها تُدمج كل ملفات المجلد.",
    )
    output_file: str = Field(default="", alias="outputFile", description="مسار الملف الناتج.")
    add_titles: bool = Field(default=False, alias="addTitles", description="خاص بملفات Markdown فقط.")


class MergeResult(BaseModel):
    """النتيجة الموحدة لكل عمليات الدمج، وهي الشكل الوحيد الذي تعتمد عليه واجهتا CLI وHTTP."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool
    output_path: Optional[str] = Field(default=None, alias="outputPath")
    merged_files: Optional[int] = Field(default=None, alias="mergedFiles")
    error_message: Optional[str] = Field(default=None, alias="errorMessage")
    files_list: Optional[List[str]] = Field(default=None, alias="filesList")
    error_code: Optional[ErrorCode] = Field(default=None, exclude=True)

    @classmethod
    def succeeded(cls, output_path: str, files: Sequence[str]) -> MergeResult:
        return cls(
            success=True,
            output_path=output_path,
            merged_files=len(files),
            files_list=list(files),
        )

    @classmethod
    def failed(cls, error: FileMergerError) -> MergeResult:
        return cls(success=False, error_message=error.message, error_code=error.code)

    @property
    def status_code(self) -> int:
        if self.success or self.error_code is None:
            return 200
        return status_for(self.error_code)

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
