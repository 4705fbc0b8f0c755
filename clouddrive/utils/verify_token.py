from typing import Optional

from fastapi import Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from clouddrive.core.exceptions import AuthenticationError
from clouddrive.utils.jwt_verification import decode_token

security = HTTPBearer(auto_error=False)

async def verify_token(authorization_credentials: Optional[HTTPAuthorizationCredentials] = Security(security)):
    """Verify the bearer JWT and return its claims"""
    if authorization_credentials is None:
        raise AuthenticationError("User not authenticated")
    return decode_token(authorization_credentials.credentials)
