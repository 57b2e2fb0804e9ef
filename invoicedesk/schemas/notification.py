"""
Notification Pydantic schemas.
"""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

from invoicedesk.schemas.pagination import PaginatedResponse


class NotificationRead(BaseModel):
    id: str
    type: str
    title: str
    message: str
    timestamp: datetime
    read: bool
    actionable: bool
    action_text: str | None
    action_view: str | None
    icon: str | None
    priority: str
    relative_time: str | None = None

    model_config = {"from_attributes": True}


class NotificationList(PaginatedResponse[NotificationRead]):
    unread_count: int
