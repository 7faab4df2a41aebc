import os
from pathlib import Path
from typing import Optional, Union

from file_merger.core.errors import ErrorCode, FileMergerError
from file_merger.models import KIND_EXTENSIONS, ContentKind

PathLike = Union[str, os.PathLike]


def detect_kind(path: PathLike) -> Optional[ContentKind]:
    """تحديد نوع المستند من امتداد الملف دون حساسية لحالة الأحرف."""
    suffix = Path(path).suffix.lower()
    for kind, extensions in KIND_EXTENSIONS.items():
        if suffix in extensions:
            return kind
    return None


def matches_kind(path: PathLike, kind: ContentKind) -> bool:
    return Path(path).suffix.lower() in kind.extensions


def title_for(path: PathLike) -> str:
    """اسم الملف بعد حذف امتداده، ويُستخدم عنوانًا في القوائم ودمج Markdown."""
    return Path(path).stem


def resolve_output_path(output_file: str, default: str, base_dir: PathLike) -> str:
    """مسار إخراج مطلق؛ المسارات النسبية تُحل بالنسبة إلى base_dir."""
    path = Path(output_file or default)
    if not path.is_absolute():
        path = Path(base_dir) / path
    return os.path.abspath(path)


def ensure_supported(filename: str) -> ContentKind:
    """التحقق من أن الملف المرفوع من نوع PDF أو Markdown."""
    kind = detect_kind(filename or "")
    if kind is None:
        raise FileMergerError(
            ErrorCode.unsupported_file_type,
            "نوع الملف غير مدعوم، يُسمح فقط برفع ملفات PDF أو Markdown.",
        )
    return kind
