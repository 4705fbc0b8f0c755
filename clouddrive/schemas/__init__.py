from clouddrive.schemas.response import ListMeta, ApiResponse, ApiError, ErrorDetail, HealthCheck
from clouddrive.schemas.entry import (
    EntryCreate, EntryUpdate, EntryResponse, CategoryStats, StorageStats, EntryUrls,
    UploadBlob, FolderCreateRequest, MoveRequest, RenameRequest
)

__all__ = [
    "ListMeta",
    "ApiResponse",
    "ApiError",
    "ErrorDetail",
    "HealthCheck",
    "EntryCreate",
    "EntryUpdate",
    "EntryResponse",
    "CategoryStats",
    "StorageStats",
    "EntryUrls",
    "UploadBlob",
    "FolderCreateRequest",
    "MoveRequest",
    "RenameRequest",
]
