"""In-memory stand-ins for MongoDB, MinIO and the identity provider."""

import asyncio
import itertools
import uuid
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from clouddrive.core.exceptions import AuthenticationError, NotFoundError
from clouddrive.services.reference_service import ReferenceResolver


class StoreUnavailable(ConnectionError):
    pass


class InMemoryDocumentStore:
    """Equality filters, multi-key sort and limit over plain dict records"""

    def __init__(self):
        self.records: Dict[str, Dict[str, Any]] = {}
        self.fail_on: set = set()
        self._ids = itertools.count(1)
        self._clock = datetime(2024, 1, 1)

    def _tick(self) -> datetime:
        # Strictly increasing timestamps keep ordering assertions stable
        self._clock += timedelta(seconds=1)
        return self._clock

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise StoreUnavailable(f"document store {operation} unavailable")

    async def find(self, filter_, sort=None, limit=None) -> List[Dict[str, Any]]:
        self._check("find")
        rows = [
            record for record in self.records.values()
            if all(record.get(key) == value for key, value in filter_.items())
        ]
        for field, direction in reversed(list(sort or [])):
            rows.sort(key=lambda record: record[field], reverse=direction < 0)
        if limit:
            rows = rows[:limit]
        return [dict(record) for record in rows]

    async def get_by_id(self, id: str) -> Optional[Dict[str, Any]]:
        self._check("get")
        record = self.records.get(id)
        return dict(record) if record is not None else None

    async def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        self._check("create")
        now = self._tick()
        record = {**data, "id": f"{next(self._ids):024x}", "created_at": now, "updated_at": now}
        self.records[record["id"]] = record
        return dict(record)

    async def update(self, id: str, patch: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        self._check("update")
        record = self.records.get(id)
        if record is None:
            return None
        record.update(patch)
        record["updated_at"] = self._tick()
        return dict(record)

    async def delete(self, id: str) -> bool:
        self._check("delete")
        return self.records.pop(id, None) is not None


class InMemoryBlobStore:
    def __init__(self, resolver: Optional[ReferenceResolver] = None):
        self.blobs: Dict[str, bytes] = {}
        self.fail_on: set = set()
        self.put_calls = 0
        self.resolver = resolver or ReferenceResolver("https://drive.example.com")

    async def put(self, data: bytes, owner_id: str, file_name: str, content_type: Optional[str] = None) -> str:
        self.put_calls += 1
        # Yield like a network write would, so concurrent uploads interleave
        await asyncio.sleep(0)
        if "put" in self.fail_on:
            raise StoreUnavailable("blob store put unavailable")
        blob_ref = f"{owner_id}/{uuid.uuid4().hex}"
        self.blobs[blob_ref] = data
        return blob_ref

    async def get(self, blob_ref: str) -> bytes:
        if blob_ref not in self.blobs:
            raise NotFoundError("File content not found")
        return self.blobs[blob_ref]

    async def delete(self, blob_ref: str) -> None:
        if "delete" in self.fail_on:
            raise StoreUnavailable("blob store delete unavailable")
        self.blobs.pop(blob_ref, None)

    def view_locator(self, blob_ref: str) -> str:
        return self.resolver.view_url(blob_ref)

    def download_locator(self, blob_ref: str) -> str:
        return self.resolver.download_url(blob_ref)


class StaticIdentity:
    def __init__(self, user_id: Optional[str]):
        self.user_id = user_id

    async def current_user(self) -> str:
        if not self.user_id:
            raise AuthenticationError("User not authenticated")
        return self.user_id
