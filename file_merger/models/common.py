from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ContentKind(str, Enum):
    pdf = "pdf"
    markdown = "markdown"

    @property
    def extensions(self) -> tuple[str, ...]:
        return KIND_EXTENSIONS[self]

    @property
    def label(self) -> str:
        return "PDF" if self is ContentKind.pdf else "Markdown"


KIND_EXTENSIONS: dict[ContentKind, tuple[str, ...]] = {
    ContentKind.pdf: (".pdf",),
    ContentKind.markdown: (".md", ".markdown"),
}


class CandidateFile(BaseModel):
    path: str
    title: str


class UploadResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    file_path: Optional[str] = Field(default=None, alias="filePath")
    temp_dir: Optional[str] = Field(default=None, alias="tempDir")
    file_name: Optional[str] = Field(default=None, alias="fileName")
    file_size: Optional[int] = Field(default=None, alias="fileSize")
    file_type: Optional[ContentKind] = Field(default=None, alias="fileType")


class TempDirRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    temp_dir: str = Field(default="", alias="tempDir", description="مسار مجلد العمل المؤقت.")
