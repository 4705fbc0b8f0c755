"""Contracts for the external collaborators the hierarchy core talks to.

The default implementations live in ``clouddrive.crud.entry`` (MongoDB via
Beanie), ``clouddrive.services.minio_client_service`` (MinIO) and
``clouddrive.services.identity_service`` (verified JWT claims).
"""
from typing import Any, Dict, List, Optional, Protocol, Sequence, Tuple


SortSpec = Sequence[Tuple[str, int]]


class IdentityProvider(Protocol):
    async def current_user(self) -> str:
        """Return the caller's user id or raise AuthenticationError"""
        ...


class DocumentStore(Protocol):
    """Record storage for a single document type.

    Filters are equality dicts; a ``None`` value matches a null or missing
    field. ``sort`` is a list of ``(field, 1 | -1)`` pairs.
    """

    async def find(
        self,
        filter_: Dict[str, Any],
        sort: Optional[SortSpec] = None,
        limit: Optional[int] = None,
    ) -> List[Any]:
        ...

    async def get_by_id(self, id: str) -> Optional[Any]:
        ...

    async def create(self, data: Dict[str, Any]) -> Any:
        ...

    async def update(self, id: str, patch: Dict[str, Any]) -> Optional[Any]:
        ...

    async def delete(self, id: str) -> bool:
        ...


class BlobStore(Protocol):
    async def put(self, data: bytes, owner_id: str, file_name: str, content_type: Optional[str] = None) -> str:
        ...

    async def get(self, blob_ref: str) -> bytes:
        ...

    async def delete(self, blob_ref: str) -> None:
        ...

    def view_locator(self, blob_ref: str) -> str:
        ...

    def download_locator(self, blob_ref: str) -> str:
        ...
