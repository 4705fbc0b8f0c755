from functools import lru_cache
from typing import Dict, Any

import jwt
from jwt import PyJWKClient

from clouddrive.configs.settings import settings
from clouddrive.core.exceptions import AuthenticationError


@lru_cache(maxsize=4)
def _jwk_client(jwks_url: str) -> PyJWKClient:
    return PyJWKClient(jwks_url)


def decode_token(token: str) -> Dict[str, Any]:
    """Decode and verify a session JWT against the identity provider's JWKS"""
    if not settings.CLERK_JWKS_URL:
        raise AuthenticationError("Identity provider is not configured")

    try:
        signing_key = _jwk_client(settings.CLERK_JWKS_URL).get_signing_key_from_jwt(token)

        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=['RS256'],
            issuer=settings.CLERK_ISSUER or None,
            options={"verify_aud": False}
        )

        return payload

    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except jwt.InvalidTokenError as e:
        raise AuthenticationError(f"Invalid token: {str(e)}")
    except jwt.PyJWKClientError as e:
        raise AuthenticationError(f"Token verification failed: {str(e)}")
