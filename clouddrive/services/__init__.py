from .minio_client_service import MinIOBlobStore
from .reference_service import ReferenceResolver
from .identity_service import TokenIdentityProvider
from .quota_service import QuotaService
from .entry_service import EntryService
__all__ = ["MinIOBlobStore", "ReferenceResolver", "TokenIdentityProvider", "QuotaService", "EntryService"]
