from typing import Optional, Annotated
from beanie import Document, Indexed
from pydantic import Field
from pymongo import ASCENDING, DESCENDING, IndexModel
from clouddrive.consts.entry_kind import EntryKind
from clouddrive.consts.file_category import FileCategory
from clouddrive.models.time_mixin import TimeMixin


class Entry(Document, TimeMixin):
    """File or folder metadata in MongoDB; file bytes live in MinIO"""

    owner_id: Annotated[str, Indexed(str)] = Field(..., description="User who owns the entry")
    name: str = Field(..., description="Display name")
    kind: EntryKind = Field(..., description="file or folder")
    parent_id: Optional[str] = Field(None, description="Parent folder id, null at root")
    size: int = Field(0, ge=0, description="Size in bytes, always 0 for folders")
    mime_type: Optional[str] = Field(None, description="File MIME type")
    category: Optional[FileCategory] = Field(None, description="Category derived from the MIME type")
    blob_ref: Optional[str] = Field(None, description="Object name in MinIO")

    class Settings:
        name = "entries"
        indexes = [
            IndexModel([("owner_id", ASCENDING), ("parent_id", ASCENDING), ("updated_at", DESCENDING)]),
            IndexModel([("owner_id", ASCENDING), ("kind", ASCENDING), ("name", ASCENDING)]),
            IndexModel([("owner_id", ASCENDING), ("blob_ref", ASCENDING)]),
        ]
