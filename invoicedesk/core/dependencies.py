"""
FastAPI dependency injection functions.
Provides get_db, get_current_user, and require_admin.
"""
from __future__ import annotations

from typing import Annotated, Any

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError

from invoicedesk.core.exceptions import InvalidTokenException, UnauthorizedException
from invoicedesk.core.security import decode_access_token
from invoicedesk.db.session import InMemoryDatabase, get_db
from invoicedesk.models.user import User
from invoicedesk.services.session_service import check_access

# Re-export get_db so routes can import from one place
__all__ = [
    "get_db",
    "get_current_user",
    "require_admin",
    "DBSession",
    "TokenPayload",
    "CurrentUser",
    "AdminUser",
]

bearer_scheme = HTTPBearer(auto_error=False)


async def get_token_payload(
    db: Annotated[InMemoryDatabase, Depends(get_db)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ] = None,
) -> dict[str, Any]:
    """Validate the bearer token and return its claims."""
    if credentials is None:
        raise UnauthorizedException("Missing authentication token")

    try:
        payload = decode_access_token(credentials.credentials)
    except JWTError:
        raise InvalidTokenException("Invalid or expired access token")

    if not payload.get("sub"):
        raise InvalidTokenException("Malformed token: missing subject")
    if payload.get("jti") in db.revoked_tokens:
        raise InvalidTokenException("Token has been revoked")
    return payload


async def get_current_user(
    db: Annotated[InMemoryDatabase, Depends(get_db)],
    payload: Annotated[dict[str, Any], Depends(get_token_payload)],
) -> User:
    """Resolve the user named by the access token."""
    user = db.users.get(payload["sub"])
    if user is None:
        raise UnauthorizedException("User not found")
    return user


async def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency that requires the current user to have the 'admin' role."""
    check_access(current_user, ("admin",))
    return current_user


# Convenience type aliases for route signatures
DBSession = Annotated[InMemoryDatabase, Depends(get_db)]
TokenPayload = Annotated[dict[str, Any], Depends(get_token_payload)]
CurrentUser = Annotated[User, Depends(get_current_user)]
AdminUser = Annotated[User, Depends(require_admin)]
