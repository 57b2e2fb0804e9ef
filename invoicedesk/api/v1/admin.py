"""
Admin-only dashboard routes.
"""
from __future__ import annotations

from fastapi import APIRouter
from pydantic import BaseModel

from invoicedesk.core.dependencies import AdminUser, DBSession
from invoicedesk.schemas.invoice import InvoiceStats
from invoicedesk.schemas.user import UserStats

router = APIRouter(prefix="/admin", tags=["Admin"])


class AdminStats(BaseModel):
    users: UserStats
    invoices: InvoiceStats
    unread_notifications: int


@router.get(
    "/stats",
    response_model=AdminStats,
    summary="Dashboard statistics",
)
async def get_stats(
    _admin: AdminUser,
    db: DBSession,
) -> AdminStats:
    return AdminStats(
        users=db.users.stats(),
        invoices=db.invoices.stats(),
        unread_notifications=db.notifications.unread_count(),
    )
