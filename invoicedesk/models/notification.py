"""
Notification domain model.
In-app notifications with an optional call to action.
"""
from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

NotificationType = Literal["invoice", "user", "system", "payment", "activity"]
NotificationPriority = Literal["low", "medium", "high"]


class Notification(BaseModel):
    id: str
    type: NotificationType
    title: str
    message: str
    timestamp: datetime
    read: bool = False
    actionable: bool = False
    action_text: str | None = None
    action_view: str | None = None
    icon: str | None = None
    priority: NotificationPriority = "low"

    def __repr__(self) -> str:
        return f"<Notification id={self.id} type={self.type} read={self.read}>"
