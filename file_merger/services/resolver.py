from __future__ import annotations

import os
import stat
from dataclasses import dataclass, field
from logging import Logger
from typing import List, Optional, Sequence

from file_merger.core.errors import ErrorCode, FileMergerError
from file_merger.core.logging import configure_logging
from file_merger.models import CandidateFile, ContentKind
from file_merger.utils.file_utils import detect_kind, matches_kind, title_for


@dataclass(frozen=True)
class ResolvedFileSet:
    kind: ContentKind
    files: List[str] = field(default_factory=list)


class FileSetResolver:
    """تحويل مجلد أو قائمة أسماء إلى مجموعة ملفات مرتبة ومتحقق منها من نوع واحد."""

    def __init__(self, logger: Logger | None = None) -> None:
        self.logger = logger or configure_logging()

    # ------------------------------------------------------------------
    # وضع المجلد: بحث متكرر ثم ترتيب معجمي
    # ------------------------------------------------------------------
    def resolve_directory(self, input_dir: str, kind: ContentKind, verbose: bool = False) -> ResolvedFileSet:
        files = sorted(self._walk(input_dir, kind))
        if not files:
            raise FileMergerError(
                ErrorCode.no_matching_files,
                f"لم يُعثر على ملفات {kind.label} في المجلد {input_dir}",
            )

        if verbose:
            self._log_files(files, kind)
        return ResolvedFileSet(kind=kind, files=files)

    def list_candidates(self, input_dir: str, kind: ContentKind) -> List[CandidateFile]:
        return [CandidateFile(path=path, title=title_for(path)) for path in sorted(self._walk(input_dir, kind))]

    # ------------------------------------------------------------------
    # وضع القائمة الصريحة: يحافظ على ترتيب المستدعي
    # ------------------------------------------------------------------
    def resolve_files(
        self,
        files: Sequence[str],
        kind: Optional[ContentKind] = None,
        verbose: bool = False,
    ) -> ResolvedFileSet:
        if not files:
            raise FileMergerError(ErrorCode.no_valid_files, "لم يتم تحديد أي ملفات للدمج.")

        if kind is None:
            kind = detect_kind(files[0])
            if kind is None:
                raise FileMergerError(
                    ErrorCode.unsupported_file_type,
                    "نوع الملف غير مدعوم، يمكن دمج ملفات PDF أو Markdown فقط.",
                )

        valid: List[str] = []
        for path in files:
            try:
                info = os.stat(path)
            except OSError as exc:
                self._skip(verbose, "تعذر الوصول إلى الملف %s: %s، تم تجاهله", path, exc)
                continue

            if stat.S_ISDIR(info.st_mode):
                self._skip(verbose, "%s مجلد وليس ملفًا، تم تجاهله", path)
                continue

            if not matches_kind(path, kind):
                self._skip(verbose, "%s ليس ملف %s، تم تجاهله", path, kind.label)
                continue

            valid.append(path)

        if not valid:
            raise FileMergerError(
                ErrorCode.no_valid_files,
                f"لا توجد ملفات {kind.label} صالحة للدمج.",
            )

        if verbose:
            self._log_files(valid, kind)
        return ResolvedFileSet(kind=kind, files=valid)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _walk(self, input_dir: str, kind: ContentKind) -> List[str]:
        self._check_directory(input_dir)

        def _raise(exc: OSError) -> None:
            raise exc

        matches: List[str] = []
        try:
            for root, _dirs, names in os.walk(input_dir, onerror=_raise):
                for name in names:
                    path = os.path.join(root, name)
                    if matches_kind(path, kind):
                        matches.append(path)
        except OSError as exc:
            raise FileMergerError(ErrorCode.access_failed, f"خطأ أثناء فحص المجلد: {exc}") from exc
        return matches

    @staticmethod
    def _check_directory(input_dir: str) -> None:
        try:
            info = os.stat(input_dir)
        except FileNotFoundError as exc:
            if os.path.isabs(input_dir):
                message = f"المجلد المحدد بمسار مطلق غير موجود: {input_dir}"
            else:
                message = f"المجلد المحدد غير موجود: {input_dir}"
            raise FileMergerError(ErrorCode.not_found, message) from exc
        except OSError as exc:
            raise FileMergerError(
                ErrorCode.access_failed,
                f"تعذر الوصول إلى المجلد {input_dir}: {exc}",
            ) from exc

        if not stat.S_ISDIR(info.st_mode):
            raise FileMergerError(ErrorCode.not_a_directory, f"{input_dir} ليس مجلدًا")

    def _skip(self, verbose: bool, message: str, *args) -> None:
        if verbose:
            self.logger.warning("تحذير: " + message, *args)

    def _log_files(self, files: Sequence[str], kind: ContentKind) -> None:
        self.logger.info("تم العثور على %d ملف %s، جارٍ التحضير للدمج...", len(files), kind.label)
        for index, path in enumerate(files, start=1):
            self.logger.info("%d: %s", index, path)

