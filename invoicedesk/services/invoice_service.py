"""
Invoice business logic service.
Enforces ownership and invoice-number uniqueness, and shapes invoices for display.
"""
from __future__ import annotations

import logging
from datetime import date

from invoicedesk.core.exceptions import (
    BadRequestException,
    ConflictException,
    ForbiddenException,
    NotFoundException,
)
from invoicedesk.db.session import InMemoryDatabase
from invoicedesk.models.invoice import Invoice
from invoicedesk.models.user import User
from invoicedesk.schemas.invoice import InvoiceCreate, InvoiceFilter, InvoiceRead, InvoiceUpdate
from invoicedesk.stores.invoice import filter_invoices, format_currency, status_color

logger = logging.getLogger(__name__)


def to_read(invoice: Invoice, today: date | None = None) -> InvoiceRead:
    return InvoiceRead(
        **invoice.model_dump(),
        formatted_amount=format_currency(invoice.amount, invoice.currency),
        status_color=status_color(invoice.status),
        is_past_due=invoice.is_past_due(today),
    )


class InvoiceService:

    def visible_invoices(self, db: InMemoryDatabase, *, current_user: User) -> list[Invoice]:
        """Admins see every invoice; users see the ones they created."""
        if current_user.is_admin:
            return db.invoices.list_all()
        return db.invoices.list_by_user(current_user.id)

    def list_invoices(
        self,
        db: InMemoryDatabase,
        *,
        filters: InvoiceFilter,
        current_user: User,
    ) -> list[Invoice]:
        return filter_invoices(
            self.visible_invoices(db, current_user=current_user),
            search=filters.search,
            status=filters.status,
        )

    def get_invoice(
        self, db: InMemoryDatabase, *, invoice_id: str, current_user: User
    ) -> Invoice:
        invoice = db.invoices.get(invoice_id)
        if invoice is None:
            raise NotFoundException("Invoice", invoice_id)
        self._assert_can_access(invoice=invoice, user=current_user)
        return invoice

    def create_invoice(
        self, db: InMemoryDatabase, *, invoice_in: InvoiceCreate, current_user: User
    ) -> Invoice:
        """Create an invoice owned by the caller, numbering it if no number was given."""
        number = invoice_in.invoice_number or db.invoices.generate_invoice_number()
        if db.invoices.get_by_number(number) is not None:
            raise ConflictException(f"Invoice number {number} already exists")

        invoice = db.invoices.create(
            obj_in=invoice_in, invoice_number=number, created_by=current_user.id
        )
        logger.info("Invoice %s (%s) created by %s", invoice.id, number, current_user.id)
        return invoice

    def update_invoice(
        self,
        db: InMemoryDatabase,
        *,
        invoice_id: str,
        invoice_in: InvoiceUpdate,
        current_user: User,
    ) -> Invoice:
        """Only the owner or an admin may update."""
        invoice = self.get_invoice(db, invoice_id=invoice_id, current_user=current_user)

        changes = invoice_in.model_dump(exclude_unset=True, exclude_none=True)
        issue_date = changes.get("issue_date") or invoice.issue_date
        due_date = changes.get("due_date") or invoice.due_date
        if due_date < issue_date:
            raise BadRequestException("Due date must be after issue date")

        number = changes.get("invoice_number")
        if number and number != invoice.invoice_number:
            if db.invoices.get_by_number(number) is not None:
                raise ConflictException(f"Invoice number {number} already exists")

        updated = db.invoices.update(invoice.id, obj_in=changes)
        if updated is None:
            raise NotFoundException("Invoice", invoice_id)
        return updated

    def delete_invoice(
        self, db: InMemoryDatabase, *, invoice_id: str, current_user: User
    ) -> None:
        invoice = self.get_invoice(db, invoice_id=invoice_id, current_user=current_user)
        db.invoices.delete(invoice.id)
        logger.info("Invoice %s deleted by %s", invoice.id, current_user.id)

    # ── Permission helpers ────────────────────────────────────────────────────

    def _assert_can_access(self, *, invoice: Invoice, user: User) -> None:
        if user.is_admin or invoice.created_by == user.id:
            return
        raise ForbiddenException("You do not have access to this invoice")


invoice_service = InvoiceService()
