"""
Security utilities: JWT access tokens and the mock credential checks.

The password and e-mail verification checks compare against fixed sentinels
from settings. They stand in for a real credential verifier and must be
replaced before this runs against real accounts.
"""
from __future__ import annotations

import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from invoicedesk.core.config import settings


# ── Mock credential checks ────────────────────────────────────────────────────

def verify_password(plain_password: str) -> bool:
    """Return True if the password matches the configured sentinel."""
    return hmac.compare_digest(plain_password.encode(), settings.MOCK_PASSWORD.encode())


def verify_email_token(token: str) -> bool:
    """Return True if the e-mail verification token matches the sentinel."""
    return hmac.compare_digest(
        token.encode(), settings.MOCK_VERIFICATION_TOKEN.encode()
    )


# ── JWT helpers ───────────────────────────────────────────────────────────────

def create_access_token(user_id: str, role: str) -> str:
    """Create a short-lived JWT access token."""
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": user_id,
        "type": "access",
        "role": role,
        "iat": now,
        "exp": now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
        "jti": secrets.token_hex(16),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Decode and validate an access token.
    Raises JWTError on failure.
    """
    payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Invalid token type")
    return payload
