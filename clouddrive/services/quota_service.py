from typing import Optional

from clouddrive.core.exceptions import QuotaExceededError
from clouddrive.crud.entry import EntryCRUD
from clouddrive.utils import get_logger

logger = get_logger(__name__)


class QuotaService:
    """Per-user storage ceiling.

    Usage is recomputed from the entries collection on every call. The check
    is not atomic with the write that follows it, so concurrent uploads from
    one user may together overshoot the ceiling.
    """

    def __init__(self, crud: EntryCRUD, max_total_storage: Optional[int] = None):
        if max_total_storage is None:
            from clouddrive.configs.settings import settings
            max_total_storage = settings.STORAGE_MAX_TOTAL_STORAGE
        self.crud = crud
        self.max_total_storage = max_total_storage

    async def get_usage(self, user_id: str) -> int:
        stats = await self.crud.aggregate_stats(user_id)
        return stats.total_size

    async def check_capacity(self, user_id: str, additional_bytes: int) -> int:
        """Raise QuotaExceededError if the upload would pass the ceiling; return current usage"""
        used = await self.get_usage(user_id)
        if used + additional_bytes > self.max_total_storage:
            logger.warning(
                f"[QUOTA] Rejected - user_id: {user_id}, used: {used}, "
                f"requested: {additional_bytes}, limit: {self.max_total_storage}"
            )
            raise QuotaExceededError(
                "Storage quota exceeded",
                details={
                    "used": used,
                    "requested": additional_bytes,
                    "limit": self.max_total_storage,
                },
            )
        return used
