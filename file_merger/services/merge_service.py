from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from logging import Logger
from pathlib import Path
from typing import Dict, Optional, Sequence, Type

from pypdf import PdfReader, PdfWriter
from pypdf.errors import PyPdfError

from file_merger.core.errors import ErrorCode, FileMergerError
from file_merger.core.logging import configure_logging
from file_merger.models import ContentKind, MergeResult
from file_merger.services.resolver import FileSetResolver, ResolvedFileSet
from file_merger.utils.file_utils import title_for

TITLE_SEPARATOR = b"\n\n---\n\n"
PLAIN_SEPARATOR = b"\n\n"


@dataclass(frozen=True)
class MergeOptions:
    """خيارات عملية دمج واحدة؛ تمرر صراحة لكل استدعاء بدل الحالة العامة."""

    add_titles: bool = False
    verbose: bool = False


class ContentMerger(ABC):
    """استراتيجية دمج لنوع مستند واحد تعيد دائمًا نتيجة موحدة."""

    kind: ContentKind

    def __init__(self, logger: Logger | None = None) -> None:
        self.logger = logger or configure_logging()

    def merge_ordered(self, files: Sequence[str], output_path: str, options: MergeOptions) -> MergeResult:
        try:
            if not files:
                raise FileMergerError(ErrorCode.no_valid_files, "لا توجد ملفات للدمج.")
            self._write(files, output_path, options)
        except FileMergerError as exc:
            self.logger.error("فشل دمج ملفات %s: %s", self.kind.label, exc.message)
            return MergeResult.failed(exc)

        if options.verbose:
            self.logger.info("تم دمج %d ملف %s في: %s", len(files), self.kind.label, output_path)
        return MergeResult.succeeded(output_path, files)

    @abstractmethod
    def _write(self, files: Sequence[str], output_path: str, options: MergeOptions) -> None:
        raise NotImplementedError


class PDFMergeStrategy(ContentMerger):
    """ضم صفحات ملفات PDF بالترتيب المعطى دون صفحات فاصلة."""

    kind = ContentKind.pdf

    def _write(self, files: Sequence[str], output_path: str, options: MergeOptions) -> None:
        writer = PdfWriter()
        try:
            for path in files:
                reader = PdfReader(path)
                for page in reader.pages:
                    writer.add_page(page)
            with open(output_path, "wb") as buffer:
                writer.write(buffer)
        except (PyPdfError, OSError, ValueError) as exc:
            raise FileMergerError(ErrorCode.merge_failed, f"فشل دمج ملفات PDF: {exc}") from exc


class MarkdownMergeStrategy(ContentMerger):
    """
    دمج ملفات Markdown كبايتات خام بالترتيب المعطى.

    عند تفعيل العناوين يسبق كل ملف عنوان من المستوى الأول باسم الملف،
    ويفصل بين الملفات خط أفقي. بدونها يفصل بينها سطر فارغ فقط.
    """

    kind = ContentKind.markdown

    def _write(self, files: Sequence[str], output_path: str, options: MergeOptions) -> None:
        try:
            output = open(output_path, "wb")
        except OSError as exc:
            raise FileMergerError(
                ErrorCode.output_create_failed,
                f"تعذر إنشاء ملف الإخراج: {exc}",
            ) from exc

        with output:
            for index, path in enumerate(files):
                try:
                    content = Path(path).read_bytes()
                except OSError as exc:
                    # لا تراجع: يبقى ملف الإخراج مكتوبًا جزئيًا
                    raise FileMergerError(
                        ErrorCode.file_read_failed,
                        f"فشل قراءة الملف {path}: {exc}",
                    ) from exc

                if options.add_titles:
                    if index > 0:
                        output.write(TITLE_SEPARATOR)
                    output.write(f"# {title_for(path)}\n\n".encode("utf-8"))
                elif index > 0:
                    output.write(PLAIN_SEPARATOR)

                output.write(content)


STRATEGIES: Dict[ContentKind, Type[ContentMerger]] = {
    ContentKind.pdf: PDFMergeStrategy,
    ContentKind.markdown: MarkdownMergeStrategy,
}


def get_merger(kind: ContentKind, logger: Logger | None = None) -> ContentMerger:
    return STRATEGIES[kind](logger)


class MergeService:
    """نقطة الدخول لعمليات الدمج: تحديد الملفات مرة واحدة ثم تشغيل الاستراتيجية المناسبة."""

    def __init__(self, resolver: FileSetResolver | None = None, logger: Logger | None = None) -> None:
        self.logger = logger or configure_logging()
        self.resolver = resolver or FileSetResolver(self.logger)

    # ------------------------------------------------------------------
    # دمج كل ملفات مجلد
    # ------------------------------------------------------------------
    def merge_directory(
        self,
        input_dir: str,
        output_path: str,
        kind: ContentKind,
        options: MergeOptions | None = None,
    ) -> MergeResult:
        options = options or MergeOptions()
        try:
            file_set = self.resolver.resolve_directory(input_dir, kind, verbose=options.verbose)
        except FileMergerError as exc:
            return self._resolution_failed(exc)
        return self._run(file_set, output_path, options)

    # ------------------------------------------------------------------
    # دمج قائمة ملفات محددة بترتيب المستدعي
    # ------------------------------------------------------------------
    def merge_files(
        self,
        files: Sequence[str],
        output_path: str,
        kind: Optional[ContentKind] = None,
        options: MergeOptions | None = None,
    ) -> MergeResult:
        options = options or MergeOptions()
        try:
            file_set = self.resolver.resolve_files(files, kind, verbose=options.verbose)
        except FileMergerError as exc:
            return self._resolution_failed(exc)
        return self._run(file_set, output_path, options)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _run(self, file_set: ResolvedFileSet, output_path: str, options: MergeOptions) -> MergeResult:
        merger = get_merger(file_set.kind, self.logger)
        return merger.merge_ordered(file_set.files, output_path, options)

    def _resolution_failed(self, exc: FileMergerError) -> MergeResult:
        self.logger.warning("تعذر تحديد الملفات المطلوب دمجها: %s", exc.message)
        return MergeResult.failed(exc)
