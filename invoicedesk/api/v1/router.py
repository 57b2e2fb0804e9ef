"""
Aggregates all v1 API routers into a single APIRouter.
"""
from __future__ import annotations

from fastapi import APIRouter

from invoicedesk.api.v1 import admin, auth, invoices, notifications, users

api_router = APIRouter()

api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(invoices.router)
api_router.include_router(notifications.router)
api_router.include_router(admin.router)
