"""
Authentication Utility - bearer token verification.

Tokens are issued by the external identity provider; this module only
checks the signature and expiry. Verification is skipped entirely while
settings.auth_enabled is false.
"""

from typing import Optional
from jose import JWTError, jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobmatch.core.config import Settings, settings_from_request
from jobmatch.core.errors import Unauthorized

# Bearer token extractor; auto_error off so a disabled check never rejects
bearer_scheme = HTTPBearer(auto_error=False)


def decode_token(token: str, settings: Settings) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


async def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(settings_from_request),
) -> Optional[dict]:
    """
    FastAPI dependency - reject requests without a valid bearer token.

    Usage:
        @router.get("/{uid}", dependencies=[Depends(verify_token)])
    """
    if not settings.auth_enabled:
        return None

    if credentials is None:
        raise Unauthorized("Missing token")

    payload = decode_token(credentials.credentials, settings)
    if not payload:
        raise Unauthorized("Invalid or expired token")

    return payload
