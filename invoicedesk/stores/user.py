"""
User store.
Extends InMemoryStore with identity lookups, search and role stats.
"""
from __future__ import annotations

from typing import Any

from invoicedesk.models.user import User
from invoicedesk.schemas.user import UserAdminUpdate, UserCreate, UserStats
from invoicedesk.stores.base import InMemoryStore


def display_name(full_name: str) -> str:
    """First word of the full name, used as the short display name."""
    parts = full_name.split()
    return parts[0] if parts else full_name


class UserStore(InMemoryStore[User, UserCreate, UserAdminUpdate]):

    def _creation_stamp(self) -> dict[str, Any]:
        return {"id": self.new_id(), "created_at": self.clock()}

    def create(self, *, obj_in: UserCreate | dict[str, Any], **extra: Any) -> User:
        data = obj_in if isinstance(obj_in, dict) else obj_in.model_dump()
        data = {**data, **extra}
        if not data.get("name"):
            data["name"] = display_name(data["full_name"])
        if not data.get("subscription_plan"):
            data["subscription_plan"] = "Free Plan"
        return super().create(obj_in=data)

    def get_by_email(self, email: str) -> User | None:
        return self.find_one(email=email)

    def get_by_username(self, username: str) -> User | None:
        return self.find_one(username=username)

    def search(self, term: str | None) -> list[User]:
        """Case-insensitive substring match over name, email, username and full name."""
        if not term:
            return self.list_all()
        needle = term.lower()
        return [
            user
            for user in self._records.values()
            if needle in user.name.lower()
            or needle in user.email.lower()
            or needle in user.username.lower()
            or needle in user.full_name.lower()
        ]

    def stats(self) -> UserStats:
        users = self.list_all()
        return UserStats(
            total=len(users),
            admins=sum(1 for u in users if u.role == "admin"),
            users=sum(1 for u in users if u.role == "user"),
        )
