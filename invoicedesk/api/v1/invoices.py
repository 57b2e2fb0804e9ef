"""
Invoice routes.
Full CRUD + search + status filter + pagination, plus stats and chart summaries.
"""
from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from invoicedesk.core.dependencies import CurrentUser, DBSession
from invoicedesk.models.invoice import InvoiceStatus
from invoicedesk.schemas.invoice import (
    InvoiceCharts,
    InvoiceCreate,
    InvoiceFilter,
    InvoiceNumber,
    InvoiceRead,
    InvoiceStats,
    InvoiceUpdate,
)
from invoicedesk.schemas.pagination import PaginatedResponse
from invoicedesk.services.chart_service import build_charts
from invoicedesk.services.invoice_service import invoice_service, to_read
from invoicedesk.stores.invoice import invoice_stats

router = APIRouter(prefix="/invoices", tags=["Invoices"])


def _invoice_filter_params(
    status: InvoiceStatus | None = Query(default=None),
    search: str | None = Query(default=None, max_length=200),
    page: int = Query(default=1, ge=1),
    size: int = Query(default=5, ge=1, le=100),
) -> InvoiceFilter:
    return InvoiceFilter(status=status, search=search, page=page, size=size)


@router.get(
    "/",
    response_model=PaginatedResponse[InvoiceRead],
    summary="List invoices with search, status filter and pagination",
)
async def list_invoices(
    current_user: CurrentUser,
    db: DBSession,
    filters: Annotated[InvoiceFilter, Depends(_invoice_filter_params)],
) -> PaginatedResponse[InvoiceRead]:
    invoices = invoice_service.list_invoices(db, filters=filters, current_user=current_user)
    return PaginatedResponse[InvoiceRead].paginate(
        invoices, page=filters.page, size=filters.size, transform=to_read
    )


@router.get(
    "/next-number",
    response_model=InvoiceNumber,
    summary="Preview the next invoice number for the current year",
)
async def next_invoice_number(
    _user: CurrentUser,
    db: DBSession,
) -> InvoiceNumber:
    return InvoiceNumber(invoice_number=db.invoices.generate_invoice_number())


@router.get(
    "/stats",
    response_model=InvoiceStats,
    summary="Totals for the invoices visible to the caller",
)
async def get_invoice_stats(
    current_user: CurrentUser,
    db: DBSession,
) -> InvoiceStats:
    return invoice_stats(invoice_service.visible_invoices(db, current_user=current_user))


@router.get(
    "/charts",
    response_model=InvoiceCharts,
    summary="Chart data for the invoices visible to the caller",
)
async def get_invoice_charts(
    current_user: CurrentUser,
    db: DBSession,
) -> InvoiceCharts:
    invoices = invoice_service.visible_invoices(db, current_user=current_user)
    return build_charts(invoices, include_top_clients=current_user.is_admin)


@router.post(
    "/",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new invoice",
)
async def create_invoice(
    invoice_in: InvoiceCreate,
    current_user: CurrentUser,
    db: DBSession,
) -> InvoiceRead:
    invoice = invoice_service.create_invoice(
        db, invoice_in=invoice_in, current_user=current_user
    )
    return to_read(invoice)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceRead,
    summary="Get an invoice by ID",
)
async def get_invoice(
    invoice_id: str,
    current_user: CurrentUser,
    db: DBSession,
) -> InvoiceRead:
    invoice = invoice_service.get_invoice(db, invoice_id=invoice_id, current_user=current_user)
    return to_read(invoice)


@router.put(
    "/{invoice_id}",
    response_model=InvoiceRead,
    summary="Update an invoice",
)
async def update_invoice(
    invoice_id: str,
    invoice_in: InvoiceUpdate,
    current_user: CurrentUser,
    db: DBSession,
) -> InvoiceRead:
    invoice = invoice_service.update_invoice(
        db, invoice_id=invoice_id, invoice_in=invoice_in, current_user=current_user
    )
    return to_read(invoice)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an invoice",
)
async def delete_invoice(
    invoice_id: str,
    current_user: CurrentUser,
    db: DBSession,
) -> None:
    invoice_service.delete_invoice(db, invoice_id=invoice_id, current_user=current_user)
