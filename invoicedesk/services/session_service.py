"""
Session wrapper.
Tracks which user, if any, is logged in and persists that user as JSON under
a fixed key in a key-value storage, so a later process can restore it.
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Literal, Protocol

from pydantic import ValidationError

from invoicedesk.core.config import settings
from invoicedesk.core.exceptions import ForbiddenException, UnauthorizedException
from invoicedesk.db.session import InMemoryDatabase
from invoicedesk.models.user import User
from invoicedesk.services.auth_service import auth_service

logger = logging.getLogger(__name__)

SessionState = Literal["anonymous", "authenticated"]


# ── Storage backends ──────────────────────────────────────────────────────────

class SessionStorage(Protocol):
    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """Process-local storage."""

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """All keys kept in one JSON object on disk."""

    def __init__(self, path: str | Path | None = None) -> None:
        self.path = Path(path or settings.SESSION_STORAGE_PATH)

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable session file %s: %s", self.path, exc)
            return {}
        return data if isinstance(data, dict) else {}

    def _dump(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._dump(data)

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self._dump(data)


# ── Role checks ───────────────────────────────────────────────────────────────

def has_role(user: User | None, role: str) -> bool:
    return user is not None and user.role == role


def check_access(user: User | None, allowed_roles: tuple[str, ...]) -> None:
    """Raise unless the user is present and holds one of the allowed roles."""
    if user is None:
        raise UnauthorizedException("Access denied. Please log in to continue.")
    if user.role not in allowed_roles:
        detail = "Access denied. You don't have permission to view this content."
        if user.role == "user":
            detail += " Administrator privileges required."
        raise ForbiddenException(detail)


# ── Session ───────────────────────────────────────────────────────────────────

class Session:
    """
    Two states: anonymous and authenticated. A failed login leaves the session
    anonymous; logout always returns to anonymous.
    """

    def __init__(
        self,
        db: InMemoryDatabase,
        storage: SessionStorage | None = None,
        *,
        key: str | None = None,
    ) -> None:
        self.db = db
        self.storage = storage if storage is not None else MemoryStorage()
        self.key = key or settings.SESSION_STORAGE_KEY
        self.current_user: User | None = None
        self.is_loading = False

    @property
    def state(self) -> SessionState:
        return "authenticated" if self.current_user is not None else "anonymous"

    @property
    def is_authenticated(self) -> bool:
        return self.current_user is not None

    def restore(self) -> User | None:
        """Reload the persisted user exactly as it was saved."""
        raw = self.storage.get_item(self.key)
        if raw is None:
            self.current_user = None
            return None
        try:
            self.current_user = User.model_validate_json(raw)
        except ValidationError as exc:
            logger.warning("Discarding corrupt session entry %r: %s", self.key, exc)
            self.storage.remove_item(self.key)
            self.current_user = None
        return self.current_user

    async def login(self, email: str, password: str) -> bool:
        self.is_loading = True
        try:
            user = await auth_service.authenticate(self.db, email=email, password=password)
        finally:
            self.is_loading = False

        if user is None:
            return False
        self._set_current_user(user)
        return True

    def logout(self) -> None:
        self._set_current_user(None)

    def update_current_user(self, user: User) -> None:
        """Replace the stored copy after the user edits their own profile."""
        if self.current_user is not None and self.current_user.id == user.id:
            self._set_current_user(user)

    def has_role(self, role: str) -> bool:
        return has_role(self.current_user, role)

    def require_role(self, *roles: str) -> User:
        check_access(self.current_user, roles)
        return self.current_user  # type: ignore[return-value]

    def _set_current_user(self, user: User | None) -> None:
        self.current_user = user
        if user is None:
            self.storage.remove_item(self.key)
        else:
            self.storage.set_item(self.key, user.model_dump_json())
