from enum import Enum

from fastapi import status


class ErrorCode(str, Enum):
    not_found = "NotFound"
    not_a_directory = "NotADirectory"
    no_matching_files = "NoMatchingFiles"
    no_valid_files = "NoValidFiles"
    file_read_failed = "FileReadFailed"
    output_create_failed = "OutputCreateFailed"
    merge_failed = "MergeFailed"
    invalid_workspace = "InvalidWorkspace"
    create_failed = "CreateFailed"
    write_failed = "WriteFailed"
    access_failed = "AccessFailed"
    unsupported_file_type = "UnsupportedFileType"


# أخطاء مدخلات المستخدم تعاد بالرمز 400، وما عداها أعطال داخلية
_CLIENT_ERRORS = {
    ErrorCode.not_found,
    ErrorCode.not_a_directory,
    ErrorCode.no_matching_files,
    ErrorCode.no_valid_files,
    ErrorCode.invalid_workspace,
    ErrorCode.access_failed,
    ErrorCode.unsupported_file_type,
}


def status_for(code: ErrorCode) -> int:
    if code in _CLIENT_ERRORS:
        return status.HTTP_400_BAD_REQUEST
    return status.HTTP_500_INTERNAL_SERVER_ERROR


class FileMergerError(Exception):
    """خطأ موحد لعمليات تحديد الملفات والدمج ومساحات العمل المؤقتة."""

    def __init__(self, code: ErrorCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message

    @property
    def status_code(self) -> int:
        return status_for(self.code)

    def __repr__(self) -> str:
        return f"FileMergerError({self.code.value}, {self.message!r})"
