import asyncio
import os
import uuid
from io import BytesIO
from typing import Optional

from minio import Minio
from minio.error import S3Error

from clouddrive.configs.settings import settings
from clouddrive.core.exceptions import BackendError, NotFoundError
from clouddrive.services.reference_service import ReferenceResolver
from clouddrive.utils import get_logger

logger = get_logger(__name__)


class MinIOBlobStore:
    """Blob store over a single MinIO bucket.

    Blob references are object names of the form ``{owner_id}/{uuid}{ext}``.
    Blocking client calls run in a worker thread.
    """

    def __init__(
        self,
        client: Optional[Minio] = None,
        bucket_name: Optional[str] = None,
        resolver: Optional[ReferenceResolver] = None,
    ):
        self.client = client or Minio(
            endpoint=settings.MINIO_URL.replace(
                "http://", "").replace("https://", ""),
            access_key=settings.MINIO_ACCESS_KEY,
            secret_key=settings.MINIO_SECRET_KEY,
            secure=settings.MINIO_SSL,
            region=settings.MINIO_REGION,
        )
        self.bucket_name = bucket_name or settings.MINIO_BUCKET
        self.resolver = resolver or ReferenceResolver(settings.STORAGE_PUBLIC_URL)

    @staticmethod
    def _object_name(owner_id: str, file_name: str) -> str:
        _, ext = os.path.splitext(file_name or "")
        return f"{owner_id}/{uuid.uuid4().hex}{ext.lower()}"

    async def ensure_bucket(self) -> None:
        """Create the bucket if it does not exist yet"""
        try:
            exists = await asyncio.to_thread(self.client.bucket_exists, self.bucket_name)
            if not exists:
                await asyncio.to_thread(self.client.make_bucket, self.bucket_name)
                logger.info(f"Created MinIO bucket {self.bucket_name}")
        except S3Error as e:
            logger.error(f"Error creating bucket {self.bucket_name}: {e}")
            raise BackendError(f"Failed to prepare bucket: {str(e)}")

    async def put(self, data: bytes, owner_id: str, file_name: str, content_type: Optional[str] = None) -> str:
        object_name = self._object_name(owner_id, file_name)

        def _upload():
            self.client.put_object(
                bucket_name=self.bucket_name,
                object_name=object_name,
                data=BytesIO(data),
                length=len(data),
                content_type=content_type or "application/octet-stream",
            )

        try:
            await asyncio.to_thread(_upload)
        except Exception as e:
            logger.error(f"Error uploading {self.bucket_name}/{object_name}: {e}")
            raise BackendError(f"Failed to store file content: {str(e)}")
        return object_name

    async def get(self, blob_ref: str) -> bytes:
        def _download():
            response = self.client.get_object(self.bucket_name, blob_ref)
            try:
                return response.read()
            finally:
                response.close()
                response.release_conn()

        try:
            return await asyncio.to_thread(_download)
        except S3Error as e:
            if e.code == "NoSuchKey":
                raise NotFoundError("File content not found", details={"blob_ref": blob_ref})
            logger.error(f"Error downloading {self.bucket_name}/{blob_ref}: {e}")
            raise BackendError(f"Failed to read file content: {str(e)}")
        except Exception as e:
            logger.error(f"Error downloading {self.bucket_name}/{blob_ref}: {e}")
            raise BackendError(f"Failed to read file content: {str(e)}")

    async def delete(self, blob_ref: str) -> None:
        try:
            await asyncio.to_thread(self.client.remove_object, self.bucket_name, blob_ref)
        except Exception as e:
            logger.error(f"Error deleting {self.bucket_name}/{blob_ref}: {e}")
            raise BackendError(f"Failed to delete file content: {str(e)}")

    def view_locator(self, blob_ref: str) -> str:
        return self.resolver.view_url(blob_ref)

    def download_locator(self, blob_ref: str) -> str:
        return self.resolver.download_url(blob_ref)
