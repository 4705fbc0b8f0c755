from typing import Any, Dict, Optional

from clouddrive.core.exceptions import AuthenticationError


class TokenIdentityProvider:
    """Caller identity backed by already verified JWT claims"""

    def __init__(self, claims: Optional[Dict[str, Any]]):
        self._claims = claims or {}

    async def current_user(self) -> str:
        user_id = self._claims.get("sub")
        if not user_id:
            raise AuthenticationError("User not authenticated")
        return str(user_id)
