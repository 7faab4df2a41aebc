from .common import KIND_EXTENSIONS, CandidateFile, ContentKind, TempDirRequest, UploadResult
from .merge import MergeFilesRequest, MergeMdRequest, MergeRequest, MergeResult

__all__ = [
    "KIND_EXTENSIONS",
    "CandidateFile",
    "ContentKind",
    "MergeFilesRequest",
    "MergeMdRequest",
    "MergeRequest",
    "MergeResult",
    "TempDirRequest",
    "UploadResult",
]
