"""
User administration service.
Keeps email and username unique across every write path and owns the
cascade from a deleted user to their invoices.
"""
from __future__ import annotations

import logging

from invoicedesk.core.exceptions import (
    BadRequestException,
    DuplicateEmailException,
    DuplicateUsernameException,
    NotFoundException,
)
from invoicedesk.db.session import InMemoryDatabase
from invoicedesk.models.user import User
from invoicedesk.schemas.user import UserAdminUpdate, UserCreate, UserUpdate
from invoicedesk.stores.user import display_name

logger = logging.getLogger(__name__)


class UserService:

    def _assert_unique(
        self,
        db: InMemoryDatabase,
        *,
        email: str | None,
        username: str | None,
        exclude_id: str | None = None,
    ) -> None:
        if email is not None:
            owner = db.users.get_by_email(email)
            if owner is not None and owner.id != exclude_id:
                raise DuplicateEmailException()
        if username is not None:
            owner = db.users.get_by_username(username)
            if owner is not None and owner.id != exclude_id:
                raise DuplicateUsernameException()

    def create_user(self, db: InMemoryDatabase, *, user_in: UserCreate) -> User:
        """Admin creation: role, plan and verification flag come from the caller."""
        self._assert_unique(db, email=user_in.email, username=user_in.username)
        user = db.users.create(obj_in=user_in)
        logger.info("Admin created user %s (%s, role=%s)", user.id, user.email, user.role)
        return user

    def update_user(
        self,
        db: InMemoryDatabase,
        *,
        user_id: str,
        user_in: UserUpdate | UserAdminUpdate,
    ) -> User:
        if db.users.get(user_id) is None:
            raise NotFoundException("User", user_id)

        self._assert_unique(
            db, email=user_in.email, username=user_in.username, exclude_id=user_id
        )

        changes = user_in.model_dump(exclude_unset=True, exclude_none=True)
        if changes.get("full_name"):
            changes["name"] = display_name(changes["full_name"])

        updated = db.users.update(user_id, obj_in=changes)
        if updated is None:
            raise NotFoundException("User", user_id)
        return updated

    def delete_user(
        self,
        db: InMemoryDatabase,
        *,
        user_id: str,
        acting_user: User,
        cascade: bool = True,
    ) -> int:
        """
        Delete a user and, by default, every invoice they created.
        Returns the number of invoices removed.
        """
        if user_id == acting_user.id:
            raise BadRequestException("You cannot delete your own account")
        if not db.users.delete(user_id):
            raise NotFoundException("User", user_id)

        removed = db.invoices.delete_by_user(user_id) if cascade else 0
        logger.info(
            "User %s deleted by %s; %d invoice(s) removed", user_id, acting_user.id, removed
        )
        return removed


user_service = UserService()
