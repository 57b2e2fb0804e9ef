"""
User domain model.
Stores profile data, role and subscription information.
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, EmailStr

UserRole = Literal["user", "admin"]
SubscriptionPlan = Literal["Free Plan", "Pro Plan"]


class User(BaseModel):
    id: str
    email: EmailStr
    name: str
    username: str
    full_name: str
    address: str
    mobile: str
    role: UserRole = "user"
    subscription_plan: SubscriptionPlan = "Free Plan"
    created_at: datetime
    is_email_verified: bool = False
    avatar: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"<User id={self.id} email={self.email} role={self.role}>"
