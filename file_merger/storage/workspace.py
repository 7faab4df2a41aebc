import os
import shutil
import threading
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import IO, Dict, List, Optional, Union
from uuid import uuid4

from file_merger.core.config import get_settings
from file_merger.core.errors import ErrorCode, FileMergerError

CHUNK_SIZE = 1024 * 1024

PathLike = Union[str, os.PathLike]


@dataclass
class SavedUpload:
    path: Path
    size: int
    workspace: Path


class TempWorkspace:
    """مجلدات عمل مؤقتة لرفع الملفات قبل دمجها، مع حماية الحذف للمجلدات التي أنشأها النظام فقط."""

    _locks: Dict[str, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, root: Optional[Path] = None, prefix: Optional[str] = None) -> None:
        settings = get_settings()
        self.root = Path(root or settings.temp_root)
        self.prefix = prefix or settings.temp_dir_prefix

    def create(self) -> Path:
        timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
        path = self.root / f"{self.prefix}{timestamp}-{uuid4().hex[:6]}"
        try:
            path.mkdir(parents=True, exist_ok=False)
        except OSError as exc:
            raise FileMergerError(ErrorCode.create_failed, f"فشل إنشاء المجلد المؤقت: {exc}") from exc
        return path

    def save(self, stream: IO[bytes], filename: str, workspace_path: Optional[PathLike] = None) -> SavedUpload:
        """نسخ محتوى المرفوع إلى مجلد العمل، مع إنشاء مجلد جديد إن لم يُحدد."""
        name = Path(filename or "").name
        if not name:
            raise FileMergerError(ErrorCode.write_failed, "اسم الملف المرفوع فارغ.")

        if workspace_path:
            workspace = Path(workspace_path)
            self._ensure_owned(workspace)
        else:
            workspace = self.create()

        target_path = workspace / name
        with self._lock_for(workspace):
            try:
                size = self._copy_stream(stream, target_path)
            except OSError as exc:
                raise FileMergerError(ErrorCode.write_failed, f"فشل حفظ الملف المرفوع: {exc}") from exc

        return SavedUpload(path=target_path, size=size, workspace=workspace)

    def list(self, workspace_path: PathLike) -> List[str]:
        """الملفات العادية في المستوى الأول من المجلد مرتبة بالاسم."""
        workspace = Path(workspace_path)
        try:
            entries = sorted(os.scandir(workspace), key=lambda entry: entry.name)
        except NotADirectoryError as exc:
            raise FileMergerError(ErrorCode.access_failed, f"{workspace} ليس مجلدًا") from exc
        except OSError as exc:
            raise FileMergerError(
                ErrorCode.access_failed,
                f"تعذر الوصول إلى المجلد المؤقت: {exc}",
            ) from exc

        return [str(workspace / entry.name) for entry in entries if entry.is_file()]

    def destroy(self, workspace_path: PathLike) -> None:
        workspace = Path(workspace_path)
        self._ensure_owned(workspace)
        key = self._lock_key(workspace)
        with self._lock_for(workspace):
            try:
                shutil.rmtree(key)
            except OSError as exc:
                raise FileMergerError(ErrorCode.access_failed, f"فشل حذف المجلد المؤقت: {exc}") from exc

        with self._locks_guard:
            self._locks.pop(key, None)

    def is_owned(self, workspace_path: PathLike) -> bool:
        """المجلد ابن مباشر لجذر المجلدات المؤقتة بعد حل الروابط، واسمه يبدأ بالبادئة الثابتة."""
        resolved = Path(workspace_path).resolve()
        return resolved.parent == self.root.resolve() and resolved.name.startswith(self.prefix)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _ensure_owned(self, workspace: Path) -> None:
        if not self.is_owned(workspace):
            raise FileMergerError(ErrorCode.invalid_workspace, f"ليس مجلدًا مؤقتًا صالحًا: {workspace}")

    @staticmethod
    def _lock_key(workspace: Path) -> str:
        return str(workspace.resolve())

    @classmethod
    def _lock_for(cls, workspace: Path) -> threading.Lock:
        with cls._locks_guard:
            return cls._locks.setdefault(cls._lock_key(workspace), threading.Lock())

    @staticmethod
    def _copy_stream(stream: IO[bytes], target_path: Path) -> int:
        written = 0
        with target_path.open("wb") as buffer:
            while True:
                chunk = stream.read(CHUNK_SIZE)
                if not chunk:
                    break
                buffer.write(chunk)
                written += len(chunk)
        return written
