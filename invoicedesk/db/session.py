"""
In-memory database: one store per entity plus revoked token ids.
Provides get_db dependency for FastAPI route injection.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from invoicedesk.core.config import settings
from invoicedesk.db.seed import seed_invoices, seed_notifications, seed_users
from invoicedesk.models.invoice import Invoice
from invoicedesk.models.notification import Notification
from invoicedesk.models.user import User
from invoicedesk.stores.base import utcnow
from invoicedesk.stores.invoice import InvoiceStore
from invoicedesk.stores.notification import NotificationStore
from invoicedesk.stores.user import UserStore

logger = logging.getLogger(__name__)


class InMemoryDatabase:
    """Process-wide collections. Each store exclusively owns its records."""

    def __init__(
        self, *, seed: bool = False, clock: Callable[[], datetime] = utcnow
    ) -> None:
        self.users = UserStore(User, seed_users() if seed else (), clock=clock)
        self.invoices = InvoiceStore(Invoice, seed_invoices() if seed else (), clock=clock)
        self.notifications = NotificationStore(
            Notification, seed_notifications(clock()) if seed else (), clock=clock
        )
        self.revoked_tokens: set[str] = set()


# ── Process-wide instance ─────────────────────────────────────────────────────
database = InMemoryDatabase(seed=settings.SEED_DATA)
logger.debug(
    "In-memory database ready: %d users, %d invoices, %d notifications",
    len(database.users),
    len(database.invoices),
    len(database.notifications),
)


def get_db() -> InMemoryDatabase:
    """FastAPI dependency that returns the process-wide database."""
    return database
