"""
Auth service and session tests.
Covers: authenticate, register, e-mail verification, login/logout state, persistence.
"""
from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from invoicedesk.core.config import settings
from invoicedesk.core.exceptions import (
    DuplicateEmailException,
    DuplicateUsernameException,
    ForbiddenException,
    UnauthorizedException,
)
from invoicedesk.db.session import InMemoryDatabase
from invoicedesk.schemas.user import UserRegister
from invoicedesk.services.auth_service import auth_service
from invoicedesk.services.session_service import FileStorage, MemoryStorage, Session

pytestmark = pytest.mark.asyncio


def _register_payload(**overrides: str) -> UserRegister:
    data = {
        "email": "newuser@example.com",
        "password": "secret1",
        "username": "new_user",
        "full_name": "Jane Q Public",
        "address": "789 Elm Street",
        "mobile": "+1 (555) 222-3333",
    }
    data.update(overrides)
    return UserRegister(**data)


class TestAuthenticate:
    async def test_valid_credentials(self, db: InMemoryDatabase) -> None:
        user = await auth_service.authenticate(db, email="user@company.com", password="password")
        assert user is not None
        assert user.id == "2"

    async def test_wrong_password(self, db: InMemoryDatabase) -> None:
        assert await auth_service.authenticate(db, email="user@company.com", password="nope") is None

    async def test_unknown_email(self, db: InMemoryDatabase) -> None:
        assert await auth_service.authenticate(db, email="x@company.com", password="password") is None


class TestRegister:
    async def test_register_defaults(self, db: InMemoryDatabase) -> None:
        user, needs_verification = await auth_service.register_user(
            db, user_in=_register_payload()
        )
        assert needs_verification is True
        assert user.role == "user"
        assert user.subscription_plan == "Free Plan"
        assert user.is_email_verified is False
        assert user.name == "Jane"
        assert db.users.get(user.id) == user

    async def test_duplicate_email(self, db: InMemoryDatabase) -> None:
        count = len(db.users)
        with pytest.raises(DuplicateEmailException) as exc_info:
            await auth_service.register_user(
                db, user_in=_register_payload(email="user@company.com")
            )
        assert exc_info.value.detail == "Email already registered"
        assert len(db.users) == count

    async def test_duplicate_username(self, db: InMemoryDatabase) -> None:
        count = len(db.users)
        with pytest.raises(DuplicateUsernameException):
            await auth_service.register_user(db, user_in=_register_payload(username="johndoe"))
        assert len(db.users) == count

    async def test_concurrent_duplicate_registrations(
        self, db: InMemoryDatabase, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        # Both coroutines must suspend in the latency sleep before either inserts.
        monkeypatch.setattr(settings, "SIMULATED_LATENCY_SECONDS", 0.01)
        results = await asyncio.gather(
            auth_service.register_user(db, user_in=_register_payload()),
            auth_service.register_user(db, user_in=_register_payload(username="other_name")),
            return_exceptions=True,
        )
        assert sum(isinstance(r, DuplicateEmailException) for r in results) == 1
        assert sum(isinstance(r, tuple) for r in results) == 1
        assert len(db.users.filter(email="newuser@example.com")) == 1


class TestEmailVerification:
    async def test_send_always_succeeds(self) -> None:
        assert await auth_service.send_verification_email("anyone@example.com") is True

    async def test_verify_with_sentinel_token(self, db: InMemoryDatabase) -> None:
        user, _ = await auth_service.register_user(db, user_in=_register_payload())
        assert await auth_service.verify_email(
            db, user_id=user.id, token="mock-verification-token"
        ) is True
        assert db.users.get(user.id).is_email_verified is True  # type: ignore[union-attr]

    async def test_verify_with_wrong_token(self, db: InMemoryDatabase) -> None:
        user, _ = await auth_service.register_user(db, user_in=_register_payload())
        assert await auth_service.verify_email(db, user_id=user.id, token="bad") is False
        assert db.users.get(user.id).is_email_verified is False  # type: ignore[union-attr]

    async def test_verify_unknown_user(self, db: InMemoryDatabase) -> None:
        assert await auth_service.verify_email(
            db, user_id="404", token="mock-verification-token"
        ) is False


class TestSession:
    async def test_starts_anonymous(self, db: InMemoryDatabase) -> None:
        session = Session(db)
        assert session.state == "anonymous"
        assert session.has_role("user") is False

    async def test_login_success(self, db: InMemoryDatabase) -> None:
        session = Session(db)
        assert await session.login("admin@company.com", "password") is True
        assert session.state == "authenticated"
        assert session.is_authenticated is True
        assert session.has_role("admin") is True
        assert session.has_role("user") is False
        assert session.is_loading is False

    async def test_login_failure_stays_anonymous(self, db: InMemoryDatabase) -> None:
        storage = MemoryStorage()
        session = Session(db, storage)
        assert await session.login("admin@company.com", "wrong") is False
        assert session.state == "anonymous"
        assert storage.get_item("currentUser") is None

    async def test_logout_clears_storage(self, db: InMemoryDatabase) -> None:
        storage = MemoryStorage()
        session = Session(db, storage)
        await session.login("user@company.com", "password")
        assert storage.get_item("currentUser") is not None
        session.logout()
        assert session.state == "anonymous"
        assert storage.get_item("currentUser") is None
        session.logout()
        assert session.state == "anonymous"

    async def test_restore_round_trip(self, db: InMemoryDatabase, tmp_path: Path) -> None:
        storage = FileStorage(tmp_path / "session.json")
        first = Session(db, storage)
        await first.login("user@company.com", "password")

        second = Session(db, FileStorage(tmp_path / "session.json"))
        restored = second.restore()
        assert restored is not None
        assert restored.model_dump() == first.current_user.model_dump()  # type: ignore[union-attr]
        assert second.state == "authenticated"

    async def test_restore_discards_corrupt_entry(self, db: InMemoryDatabase) -> None:
        storage = MemoryStorage()
        storage.set_item("currentUser", '{"id": 1}')
        session = Session(db, storage)
        assert session.restore() is None
        assert storage.get_item("currentUser") is None

    async def test_require_role(self, db: InMemoryDatabase) -> None:
        session = Session(db)
        with pytest.raises(UnauthorizedException):
            session.require_role("admin")
        await session.login("user@company.com", "password")
        with pytest.raises(ForbiddenException) as exc_info:
            session.require_role("admin")
        assert "Administrator privileges required" in exc_info.value.detail
        assert session.require_role("user", "admin").id == "2"

    async def test_update_current_user_persists(self, db: InMemoryDatabase) -> None:
        storage = MemoryStorage()
        session = Session(db, storage)
        await session.login("user@company.com", "password")
        updated = db.users.update("2", obj_in={"address": "1 New Road"})
        session.update_current_user(updated)  # type: ignore[arg-type]
        assert session.restore().address == "1 New Road"  # type: ignore[union-attr]
