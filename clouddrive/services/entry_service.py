from typing import List, Optional, Tuple

from clouddrive.consts.entry_kind import EntryKind
from clouddrive.core.exceptions import (
    AppError,
    AuthenticationError,
    BackendError,
    FileTooLargeError,
    FolderNotEmptyError,
    InconsistencyError,
    InvalidNameError,
    InvalidParentError,
    NotFoundError,
)
from clouddrive.core.protocols import BlobStore, IdentityProvider
from clouddrive.crud.entry import EntryCRUD
from clouddrive.schemas.entry import (
    EntryCreate,
    EntryResponse,
    EntryUpdate,
    EntryUrls,
    StorageStats,
    UploadBlob,
)
from clouddrive.services.quota_service import QuotaService
from clouddrive.services.reference_service import ReferenceResolver
from clouddrive.utils import get_logger
from clouddrive.utils.file_classifier import FileClassifier

logger = get_logger(__name__)


class EntryService:
    """Orchestrates the per-user file tree across MongoDB and the blob store.

    Build one per request. Every operation checks the caller identity first;
    entries owned by someone else are reported as not found.

    Uploads write the blob before the metadata and deletes remove the blob
    before the metadata. Neither pair is transactional: a failure between the
    two steps is surfaced (with the dangling reference in the error details)
    instead of being compensated.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        crud: Optional[EntryCRUD] = None,
        blob_store: Optional[BlobStore] = None,
        quota: Optional[QuotaService] = None,
        classifier: Optional[FileClassifier] = None,
        resolver: Optional[ReferenceResolver] = None,
        max_file_size: Optional[int] = None,
    ):
        from clouddrive.configs.settings import settings

        self.identity = identity
        self.crud = crud or EntryCRUD()
        if blob_store is None:
            from clouddrive.services.minio_client_service import MinIOBlobStore
            blob_store = MinIOBlobStore()
        self.blob_store = blob_store
        self.quota = quota or QuotaService(self.crud)
        self.classifier = classifier or self.crud.classifier
        self.resolver = resolver or ReferenceResolver(settings.STORAGE_PUBLIC_URL)
        self.max_file_size = max_file_size if max_file_size is not None else settings.STORAGE_MAX_FILE_SIZE

    # ---------------- helpers ----------------

    async def _require_user(self, user_id: Optional[str] = None) -> str:
        current = await self.identity.current_user()
        if user_id is not None and user_id != current:
            logger.warning(f"Identity mismatch - caller: {current}, requested user: {user_id}")
            raise AuthenticationError("Caller identity does not match the requested user")
        return current

    async def _get_owned(self, entry_id: str, user_id: str) -> EntryResponse:
        entry = await self.crud.get(entry_id)
        if entry.owner_id != user_id:
            raise NotFoundError("Entry not found", details={"entry_id": entry_id})
        return entry

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise InvalidNameError("Name is required", field="name")
        return cleaned

    async def _validate_parent(self, user_id: str, parent_id: Optional[str], moving_id: Optional[str] = None) -> None:
        """Parent must be an existing folder of the same user and, for moves, not inside the moved entry"""
        if parent_id is None:
            return

        try:
            parent = await self.crud.get(parent_id)
        except NotFoundError:
            raise InvalidParentError("Parent folder does not exist", field="parent_id")

        if parent.owner_id != user_id:
            raise InvalidParentError("Parent folder does not exist", field="parent_id")
        if not parent.is_folder:
            raise InvalidParentError("Parent is not a folder", field="parent_id")
        if moving_id is None:
            return

        # Walk up from the destination; meeting the moved entry means a cycle
        seen = set()
        current: Optional[EntryResponse] = parent
        while current is not None:
            if current.id == moving_id:
                raise InvalidParentError("Cannot move a folder into itself or its subfolders", field="parent_id")
            if current.parent_id is None or current.id in seen:
                break
            seen.add(current.id)
            try:
                current = await self.crud.get(current.parent_id)
            except NotFoundError:
                current = None

    def check_file_size(self, size: int) -> None:
        if size > self.max_file_size:
            raise FileTooLargeError(
                f"File exceeds the {self.max_file_size // (1024 * 1024)}MB limit",
                details={"size": size, "limit": self.max_file_size},
            )

    # ---------------- reads ----------------

    async def get_entry(self, entry_id: str) -> EntryResponse:
        user_id = await self._require_user()
        return await self._get_owned(entry_id, user_id)

    async def list_children(self, user_id: str, parent_id: Optional[str] = None) -> List[EntryResponse]:
        await self._require_user(user_id)
        return await self.crud.list_children(user_id, parent_id)

    async def list_folders(self, user_id: str) -> List[EntryResponse]:
        await self._require_user(user_id)
        return await self.crud.list_folders(user_id)

    async def list_recent_files(self, user_id: str, limit: Optional[int] = None) -> List[EntryResponse]:
        await self._require_user(user_id)
        return await self.crud.list_recent_files(user_id, limit)

    async def get_storage_stats(self, user_id: str) -> StorageStats:
        await self._require_user(user_id)
        return await self.crud.aggregate_stats(user_id)

    async def get_entry_urls(self, entry_id: str) -> EntryUrls:
        entry = await self.get_entry(entry_id)
        if entry.is_folder or not entry.blob_ref:
            raise NotFoundError("Folders have no file content", details={"entry_id": entry_id})
        return EntryUrls(
            view_url=self.resolver.view_url(entry.blob_ref),
            download_url=self.resolver.download_url(entry.blob_ref),
        )

    async def read_blob(self, blob_ref: str) -> Tuple[EntryResponse, bytes]:
        """Content of a file the caller owns, with its metadata"""
        user_id = await self._require_user()
        entry = await self.crud.get_by_blob_ref(user_id, blob_ref)
        try:
            data = await self.blob_store.get(blob_ref)
        except AppError:
            raise
        except Exception as e:
            raise BackendError(f"Failed to read file content: {str(e)}")
        return entry, data

    # ---------------- writes ----------------

    async def create_folder(self, name: str, user_id: str, parent_id: Optional[str] = None) -> EntryResponse:
        await self._require_user(user_id)
        folder_name = self._clean_name(name)
        await self._validate_parent(user_id, parent_id)

        logger.info(f"[FOLDER_CREATE] user_id: {user_id}, name: {folder_name}, parent_id: {parent_id}")
        folder = await self.crud.insert(EntryCreate(
            owner_id=user_id,
            name=folder_name,
            kind=EntryKind.FOLDER,
            parent_id=parent_id,
            size=0,
        ))
        logger.info(f"[FOLDER_CREATE] Created - id: {folder.id}")
        return folder

    async def upload_file(self, blob: UploadBlob, user_id: str, parent_id: Optional[str] = None) -> EntryResponse:
        await self._require_user(user_id)
        file_name = self._clean_name(blob.name)

        self.check_file_size(blob.size)

        await self._validate_parent(user_id, parent_id)
        await self.quota.check_capacity(user_id, blob.size)

        logger.info(
            f"[FILE_UPLOAD] Storing content - user_id: {user_id}, name: {file_name}, "
            f"size: {blob.size} bytes, type: {blob.content_type}"
        )
        try:
            blob_ref = await self.blob_store.put(blob.data, user_id, file_name, blob.content_type)
        except AppError:
            raise
        except Exception as e:
            logger.error(f"[FILE_UPLOAD] Blob store write failed - name: {file_name}, error: {str(e)}", exc_info=True)
            raise BackendError(f"Failed to store file content: {str(e)}")

        try:
            entry = await self.crud.insert(EntryCreate(
                owner_id=user_id,
                name=file_name,
                kind=EntryKind.FILE,
                parent_id=parent_id,
                size=blob.size,
                mime_type=blob.content_type or None,
                category=self.classifier.classify(blob.content_type),
                blob_ref=blob_ref,
            ))
        except AppError as e:
            # Blob is left behind with no record; report it for reconciliation
            logger.error(
                f"[FILE_UPLOAD] Metadata insert failed, orphaned blob: {blob_ref}",
                extra={"user_id": user_id, "blob_ref": blob_ref},
            )
            e.details = {**(e.details or {}), "orphaned_blob_ref": blob_ref, "owner_id": user_id}
            raise

        logger.info(
            f"[FILE_UPLOAD] Completed - id: {entry.id}, blob_ref: {blob_ref}",
            extra={"user_id": user_id, "entry_id": entry.id, "blob_ref": blob_ref},
        )
        return entry

    async def delete_entry(self, entry_id: str) -> None:
        user_id = await self._require_user()
        entry = await self._get_owned(entry_id, user_id)
        logger.info(f"[ENTRY_DELETE] Starting - id: {entry_id}, kind: {entry.kind.value}, name: {entry.name}")

        if entry.is_folder:
            if await self.crud.has_children(user_id, entry.id):
                raise FolderNotEmptyError("Cannot delete a folder that is not empty", details={"entry_id": entry_id})
            await self.crud.delete(entry.id)
            logger.info(f"[ENTRY_DELETE] Folder deleted - id: {entry_id}")
            return

        if entry.blob_ref:
            try:
                await self.blob_store.delete(entry.blob_ref)
            except AppError:
                raise
            except Exception as e:
                logger.error(f"[ENTRY_DELETE] Blob delete failed - blob_ref: {entry.blob_ref}", exc_info=True)
                raise BackendError(f"Failed to delete file content: {str(e)}")

        try:
            await self.crud.delete(entry.id)
        except AppError as e:
            logger.error(
                f"[ENTRY_DELETE] Blob removed but metadata delete failed - id: {entry_id}, "
                f"blob_ref: {entry.blob_ref}, error: {e.message}"
            )
            raise InconsistencyError(
                "File content was deleted but its record could not be removed",
                details={
                    "entry_id": entry_id,
                    "blob_ref": entry.blob_ref,
                    "owner_id": user_id,
                    "cause": e.message,
                },
            )
        logger.info(
            f"[ENTRY_DELETE] File deleted - id: {entry_id}",
            extra={"user_id": user_id, "entry_id": entry_id, "blob_ref": entry.blob_ref},
        )

    async def move_entry(self, entry_id: str, new_parent_id: Optional[str] = None) -> EntryResponse:
        user_id = await self._require_user()
        entry = await self._get_owned(entry_id, user_id)
        await self._validate_parent(user_id, new_parent_id, moving_id=entry.id)

        moved = await self.crud.update(entry.id, {"parent_id": new_parent_id})
        logger.info(f"[ENTRY_MOVE] id: {entry_id}, from: {entry.parent_id}, to: {new_parent_id}")
        return moved

    async def rename_entry(self, entry_id: str, new_name: str) -> EntryResponse:
        user_id = await self._require_user()
        entry = await self._get_owned(entry_id, user_id)
        renamed = await self.crud.update(entry.id, EntryUpdate(name=self._clean_name(new_name)))
        logger.info(f"[ENTRY_RENAME] id: {entry_id}, name: {renamed.name}")
        return renamed
