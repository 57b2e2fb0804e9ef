"""
Notification routes.
"""
from __future__ import annotations

from fastapi import APIRouter, Query, status

from invoicedesk.core.dependencies import CurrentUser, DBSession
from invoicedesk.core.exceptions import NotFoundException
from invoicedesk.models.notification import Notification
from invoicedesk.schemas.notification import NotificationList, NotificationRead
from invoicedesk.stores.notification import format_relative_time

router = APIRouter(prefix="/notifications", tags=["Notifications"])


def _to_read(notification: Notification) -> NotificationRead:
    read = NotificationRead.model_validate(notification)
    read.relative_time = format_relative_time(notification.timestamp)
    return read


@router.get(
    "/",
    response_model=NotificationList,
    summary="List notifications, newest first",
)
async def list_notifications(
    _user: CurrentUser,
    db: DBSession,
    page: int = Query(default=1, ge=1),
    size: int = Query(default=20, ge=1, le=100),
    unread_only: bool = Query(default=False),
) -> NotificationList:
    store = db.notifications
    records = store.list_unread() if unread_only else store.list_all()
    return NotificationList.paginate(
        records,
        page=page,
        size=size,
        transform=_to_read,
        unread_count=store.unread_count(),
    )


@router.put(
    "/read-all",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Mark all notifications as read",
)
async def mark_all_read(
    _user: CurrentUser,
    db: DBSession,
) -> None:
    db.notifications.mark_all_read()


@router.put(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark a notification as read",
)
async def mark_as_read(
    notification_id: str,
    _user: CurrentUser,
    db: DBSession,
) -> NotificationRead:
    notification = db.notifications.mark_read(notification_id)
    if notification is None:
        raise NotFoundException("Notification", notification_id)
    return _to_read(notification)
