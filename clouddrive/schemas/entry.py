from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Any, Optional
from datetime import datetime

from clouddrive.consts.entry_kind import EntryKind
from clouddrive.consts.file_category import FileCategory


class EntryCreate(BaseModel):
    """Schema for creating a new entry (internal use with all fields)"""
    owner_id: str = Field(..., description="User who owns the entry")
    name: str = Field(..., description="Display name")
    kind: EntryKind = Field(..., description="file or folder")
    parent_id: Optional[str] = Field(None, description="Parent folder id, null at root")
    size: int = Field(0, ge=0, description="Size in bytes")
    mime_type: Optional[str] = Field(None, description="File MIME type")
    category: Optional[FileCategory] = Field(None, description="File category")
    blob_ref: Optional[str] = Field(None, description="Object name in MinIO")

    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "owner_id": "user_2abc",
                "name": "report.pdf",
                "kind": "file",
                "parent_id": "507f1f77bcf86cd799439011",
                "size": 1024000,
                "mime_type": "application/pdf",
                "category": "documents",
                "blob_ref": "user_2abc/5f0c8e1d9a2b4c3d8e7f6a5b4c3d2e1f.pdf"
            }
        }
    )


class EntryUpdate(BaseModel):
    """Only name and parent can change after creation"""
    name: Optional[str] = Field(None, min_length=1, max_length=255, description="New display name")
    parent_id: Optional[str] = Field(None, description="New parent folder id, null moves to root")


class EntryResponse(BaseModel):
    """Schema for returning entry information"""
    id: str = Field(..., description="Unique entry identifier")
    owner_id: str = Field(..., description="User who owns the entry")
    name: str = Field(..., description="Display name")
    kind: EntryKind = Field(..., description="file or folder")
    parent_id: Optional[str] = Field(None, description="Parent folder id")
    size: int = Field(0, description="Size in bytes")
    mime_type: Optional[str] = Field(None, description="File MIME type")
    category: Optional[FileCategory] = Field(None, description="File category")
    blob_ref: Optional[str] = Field(None, description="Object name in MinIO")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "507f1f77bcf86cd799439012",
                "owner_id": "user_2abc",
                "name": "report.pdf",
                "kind": "file",
                "parent_id": "507f1f77bcf86cd799439011",
                "size": 1024000,
                "mime_type": "application/pdf",
                "category": "documents",
                "blob_ref": "user_2abc/5f0c8e1d9a2b4c3d8e7f6a5b4c3d2e1f.pdf",
                "created_at": "2024-01-15T10:30:00Z",
                "updated_at": "2024-01-15T10:30:00Z"
            }
        }
    )

    @field_validator("id", mode="before")
    @classmethod
    def stringify_id(cls, v: Any) -> str:
        return str(v)

    @property
    def is_folder(self) -> bool:
        return self.kind == EntryKind.FOLDER


class CategoryStats(BaseModel):
    count: int = Field(0, ge=0, description="Number of files")
    size: int = Field(0, ge=0, description="Total bytes")


class StorageStats(BaseModel):
    """Per-user usage summary"""
    total_files: int = Field(0, ge=0, description="Total number of files")
    total_size: int = Field(0, ge=0, description="Total size in bytes")
    documents: CategoryStats = Field(default_factory=CategoryStats)
    images: CategoryStats = Field(default_factory=CategoryStats)
    videos: CategoryStats = Field(default_factory=CategoryStats)
    others: CategoryStats = Field(default_factory=CategoryStats)

    def add(self, category: FileCategory, size: int) -> None:
        self.total_files += 1
        self.total_size += size
        bucket = getattr(self, FileCategory(category).value)
        bucket.count += 1
        bucket.size += size


class EntryUrls(BaseModel):
    view_url: str = Field(..., description="Locator for viewing the file inline")
    download_url: str = Field(..., description="Locator for downloading the file")


class UploadBlob(BaseModel):
    """File content handed to the upload operation"""
    name: str = Field(..., min_length=1, description="Original file name")
    content_type: Optional[str] = Field(None, description="File MIME type")
    data: bytes = Field(..., description="Raw file content")

    @property
    def size(self) -> int:
        return len(self.data)


class FolderCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Folder name")
    parent_id: Optional[str] = Field(None, description="Parent folder id, null for root")


class MoveRequest(BaseModel):
    parent_id: Optional[str] = Field(None, description="Destination folder id, null for root")


class RenameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="New display name")
