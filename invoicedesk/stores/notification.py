"""
Notification store.
Read-state transitions and time formatting for the notification panel.
"""
from __future__ import annotations

from datetime import datetime, timezone

from invoicedesk.models.notification import Notification
from invoicedesk.schemas.notification import NotificationRead
from invoicedesk.stores.base import InMemoryStore

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR
WEEK = 7 * DAY


class NotificationStore(InMemoryStore[Notification, NotificationRead, NotificationRead]):

    def list_all(self) -> list[Notification]:
        """Newest first. Re-sorted on every call."""
        return sorted(self._records.values(), key=lambda n: n.timestamp, reverse=True)

    def list_unread(self) -> list[Notification]:
        return [n for n in self.list_all() if not n.read]

    def unread_count(self) -> int:
        return sum(1 for n in self._records.values() if not n.read)

    def mark_read(self, notification_id: str) -> Notification | None:
        """Flip one notification to read. Returns None for an unknown id."""
        notification = self.get(notification_id)
        if notification is None:
            return None
        notification.read = True
        return notification

    def mark_all_read(self) -> int:
        """Mark every notification read. Returns how many were unread."""
        changed = 0
        for notification in self._records.values():
            if not notification.read:
                notification.read = True
                changed += 1
        return changed


def format_relative_time(timestamp: datetime, now: datetime | None = None) -> str:
    """
    Bucket elapsed time as "Just now", "Nm ago", "Nh ago" or "Nd ago".
    A week or more falls back to an en-US short date (M/D/YYYY).
    """
    if now is None:
        now = datetime.now(timezone.utc) if timestamp.tzinfo else datetime.now()
    elapsed = int((now - timestamp).total_seconds())

    if elapsed < MINUTE:
        return "Just now"
    if elapsed < HOUR:
        return f"{elapsed // MINUTE}m ago"
    if elapsed < DAY:
        return f"{elapsed // HOUR}h ago"
    if elapsed < WEEK:
        return f"{elapsed // DAY}d ago"
    return f"{timestamp.month}/{timestamp.day}/{timestamp.year}"
