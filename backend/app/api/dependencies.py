"""
Shared route dependencies.
"""
import logging
from dataclasses import dataclass
from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from app.core.errors import AuthError
from app.core.security import verify_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentIdentity:
    """Verified identity every scoped operation runs under."""
    user_id: str
    email: Optional[str] = None


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> CurrentIdentity:
    """Resolve the bearer credential; anything but a valid token is 401."""
    if credentials is None or credentials.scheme.lower() != "bearer":
        logger.warning("Missing or invalid authorization header")
        raise AuthError("Missing or invalid authorization header")

    decoded = verify_token(credentials.credentials)
    if decoded is None:
        raise AuthError("Invalid or expired token")

    return CurrentIdentity(user_id=decoded["user_id"], email=decoded.get("email"))
