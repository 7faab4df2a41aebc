"""
أداة سطر الأوامر لدمج ملفات PDF وMarkdown وتشغيل خادم الواجهة البرمجية.

    file-merger merge -i ./docs -o merged.pdf
    file-merger merge-md -f b.md,a.md --add-titles=false
    file-merger serve --port 8080
"""
from __future__ import annotations

import argparse
import os
import sys
from typing import List, Optional, Sequence

from file_merger.core.config import get_settings
from file_merger.core.logging import configure_logging
from file_merger.models import ContentKind, MergeResult
from file_merger.services.merge_service import MergeOptions, MergeService

logger = configure_logging()


def _str2bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "t", "yes", "y", "on"):
        return True
    if lowered in ("0", "false", "f", "no", "n", "off"):
        return False
    raise argparse.ArgumentTypeError(f"قيمة منطقية غير صالحة: {value}")


def _split_files(values: Optional[List[str]]) -> List[str]:
    # يقبل "a.pdf,b.pdf" أو تكرار الخيار أكثر من مرة
    files: List[str] = []
    for value in values or []:
        files.extend(part.strip() for part in value.split(",") if part.strip())
    return files


def _add_common_arguments(parser: argparse.ArgumentParser, default_output: str, label: str) -> None:
    parser.add_argument("-i", "--input", default=".", help=f"المجلد الذي يحتوي ملفات {label} المراد دمجها")
    parser.add_argument("-o", "--output", default=default_output, help="اسم ملف الإخراج")
    parser.add_argument(
        "-f",
        "--files",
        action="append",
        help=f"قائمة ملفات {label} مفصولة بفواصل؛ عند توفرها يُتجاهل --input",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="عرض معلومات تفصيلية")


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="file-merger",
        description="دمج كل ملفات PDF أو Markdown في مجلد في ملف واحد بترتيب أبجدي، أو دمج قائمة ملفات محددة.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    merge = subparsers.add_parser("merge", help="دمج ملفات PDF")
    _add_common_arguments(merge, settings.default_pdf_output, "PDF")
    merge.set_defaults(handler=_run_merge, kind=ContentKind.pdf)

    merge_md = subparsers.add_parser("merge-md", help="دمج ملفات Markdown")
    _add_common_arguments(merge_md, settings.default_md_output, "Markdown")
    merge_md.add_argument(
        "-t",
        "--add-titles",
        type=_str2bool,
        nargs="?",
        const=True,
        default=True,
        help="إضافة عنوان لكل ملف من اسمه (true|false)",
    )
    merge_md.set_defaults(handler=_run_merge, kind=ContentKind.markdown)

    serve = subparsers.add_parser("serve", help="تشغيل خادم الواجهة البرمجية")
    serve.add_argument("--host", default=settings.host, help="عنوان الاستماع")
    serve.add_argument("-p", "--port", type=int, default=settings.port, help="منفذ الاستماع")
    serve.set_defaults(handler=_run_serve)

    return parser


def _run_merge(args: argparse.Namespace) -> int:
    kind: ContentKind = args.kind
    options = MergeOptions(add_titles=getattr(args, "add_titles", False), verbose=args.verbose)
    output_path = os.path.abspath(args.output)
    files = _split_files(args.files)

    if args.verbose:
        logger.info("ملف الإخراج: %s", output_path)
        if kind is ContentKind.markdown:
            logger.info("إضافة العناوين: %s", options.add_titles)

    service = MergeService(logger=logger)
    if files:
        if args.verbose:
            logger.info("سيتم دمج %d ملفات محددة", len(files))
        result = service.merge_files(files, output_path, kind, options)
    else:
        if args.verbose:
            logger.info("مجلد الإدخال: %s", args.input)
        result = service.merge_directory(args.input, output_path, kind, options)

    return _report(result, kind)


def _report(result: MergeResult, kind: ContentKind) -> int:
    if not result.success:
        print(f"خطأ: {result.error_message}", file=sys.stderr)
        return 1

    print(f"تم بنجاح! دُمج {result.merged_files} ملف {kind.label} في: {result.output_path}")
    return 0


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    logger.info("تشغيل خادم الواجهة البرمجية على http://%s:%d", args.host, args.port)
    uvicorn.run("file_merger.main:app", host=args.host, port=args.port)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    return args.handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
