from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, DESCENDING

from clouddrive.consts.entry_kind import EntryKind
from clouddrive.core.exceptions import AppError, BackendError, NotFoundError
from clouddrive.core.protocols import DocumentStore
from clouddrive.crud.base import BaseCRUD
from clouddrive.models.entry import Entry
from clouddrive.schemas.entry import EntryCreate, EntryResponse, EntryUpdate, StorageStats
from clouddrive.utils import get_logger
from clouddrive.utils.file_classifier import FileClassifier

logger = get_logger(__name__)


class EntryStore(BaseCRUD[Entry, EntryCreate, EntryUpdate]):
    def __init__(self):
        super().__init__(Entry)


class EntryCRUD:
    """Hierarchy queries over the entries collection.

    Builds store filters for the per-user tree and shapes records into
    ``EntryResponse``. Store failures surface as ``BackendError``; identity
    checks happen in the service layer before any of these are called.
    """

    def __init__(
        self,
        store: Optional[DocumentStore] = None,
        classifier: Optional[FileClassifier] = None,
        stats_scan_limit: Optional[int] = None,
        recent_files_limit: Optional[int] = None,
    ):
        from clouddrive.configs.settings import settings

        self.store = store or EntryStore()
        self.classifier = classifier or FileClassifier.from_settings(settings)
        self.stats_scan_limit = stats_scan_limit or settings.STORAGE_STATS_SCAN_LIMIT
        self.recent_files_limit = recent_files_limit or settings.STORAGE_RECENT_FILES_LIMIT

    async def _find(self, filter_: Dict[str, Any], sort=None, limit: Optional[int] = None) -> List[EntryResponse]:
        try:
            records = await self.store.find(filter_, sort=sort, limit=limit)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Entry query failed - filter: {filter_}, error: {str(e)}", exc_info=True)
            raise BackendError(f"Failed to query entries: {str(e)}")
        return [EntryResponse.model_validate(record) for record in records]

    async def list_children(self, user_id: str, parent_id: Optional[str] = None) -> List[EntryResponse]:
        """Direct children of a folder, or root-level entries when parent_id is None"""
        return await self._find(
            {"owner_id": user_id, "parent_id": parent_id},
            sort=[("updated_at", DESCENDING)],
        )

    async def list_folders(self, user_id: str) -> List[EntryResponse]:
        return await self._find(
            {"owner_id": user_id, "kind": EntryKind.FOLDER.value},
            sort=[("name", ASCENDING)],
        )

    async def list_recent_files(self, user_id: str, limit: Optional[int] = None) -> List[EntryResponse]:
        if limit is None:
            limit = self.recent_files_limit
        if limit < 1:
            # A zero limit means "no limit" to MongoDB
            return []
        return await self._find(
            {"owner_id": user_id, "kind": EntryKind.FILE.value},
            sort=[("updated_at", DESCENDING)],
            limit=limit,
        )

    async def has_children(self, user_id: str, folder_id: str) -> bool:
        children = await self._find({"owner_id": user_id, "parent_id": folder_id}, limit=1)
        return bool(children)

    async def aggregate_stats(self, user_id: str) -> StorageStats:
        """Usage totals over at most ``stats_scan_limit`` files"""
        files = await self._find(
            {"owner_id": user_id, "kind": EntryKind.FILE.value},
            limit=self.stats_scan_limit,
        )
        if len(files) >= self.stats_scan_limit:
            logger.warning(
                f"Stats scan hit the {self.stats_scan_limit} file cap for user {user_id}; totals may be low"
            )

        stats = StorageStats()
        for file in files:
            stats.add(self.classifier.classify(file.mime_type), file.size)
        return stats

    async def get(self, id: str) -> EntryResponse:
        try:
            record = await self.store.get_by_id(id)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Entry lookup failed - id: {id}, error: {str(e)}", exc_info=True)
            raise BackendError(f"Failed to load entry: {str(e)}")
        if record is None:
            raise NotFoundError("Entry not found", details={"entry_id": id})
        return EntryResponse.model_validate(record)

    async def get_by_blob_ref(self, user_id: str, blob_ref: str) -> EntryResponse:
        matches = await self._find(
            {"owner_id": user_id, "kind": EntryKind.FILE.value, "blob_ref": blob_ref},
            limit=1,
        )
        if not matches:
            raise NotFoundError("File not found", details={"blob_ref": blob_ref})
        return matches[0]

    async def insert(self, obj_in: EntryCreate) -> EntryResponse:
        try:
            record = await self.store.create(obj_in.model_dump(mode="json"))
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Entry insert failed - name: {obj_in.name}, error: {str(e)}", exc_info=True)
            raise BackendError(f"Failed to save entry: {str(e)}")
        return EntryResponse.model_validate(record)

    async def update(self, id: str, patch: EntryUpdate | Dict[str, Any]) -> EntryResponse:
        if isinstance(patch, EntryUpdate):
            patch = patch.model_dump(exclude_unset=True)
        try:
            record = await self.store.update(id, patch)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Entry update failed - id: {id}, error: {str(e)}", exc_info=True)
            raise BackendError(f"Failed to update entry: {str(e)}")
        if record is None:
            raise NotFoundError("Entry not found", details={"entry_id": id})
        return EntryResponse.model_validate(record)

    async def delete(self, id: str) -> None:
        try:
            deleted = await self.store.delete(id)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"Entry delete failed - id: {id}, error: {str(e)}", exc_info=True)
            raise BackendError(f"Failed to delete entry: {str(e)}")
        if not deleted:
            raise NotFoundError("Entry not found", details={"entry_id": id})
