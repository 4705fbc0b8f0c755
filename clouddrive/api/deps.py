from fastapi import Depends

from clouddrive.services.entry_service import EntryService
from clouddrive.services.identity_service import TokenIdentityProvider
from clouddrive.utils.verify_token import verify_token


async def get_entry_service(claims: dict = Depends(verify_token)) -> EntryService:
    """Fresh service per request, bound to the caller's identity"""
    return EntryService(identity=TokenIdentityProvider(claims))


async def get_current_user_id(service: EntryService = Depends(get_entry_service)) -> str:
    return await service.identity.current_user()
