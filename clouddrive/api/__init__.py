from clouddrive.api.entry import router as entry_router
from clouddrive.api.blob import router as blob_router

__all__ = ["entry_router", "blob_router"]
