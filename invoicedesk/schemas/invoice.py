"""
Invoice Pydantic schemas.
Includes create/update/read variants, a filter schema for list endpoints,
and the stats and chart payloads.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator

from invoicedesk.core.config import settings
from invoicedesk.models.invoice import InvoiceStatus

INVOICE_NUMBER_PATTERN = r"^INV-\d{4}-\d{3,}$"


def _strip_required(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Field is required")
    return value


def _check_date_order(issue_date: date | None, due_date: date | None) -> None:
    if issue_date is not None and due_date is not None and due_date < issue_date:
        raise ValueError("Due date must be after issue date")


# ── Create ────────────────────────────────────────────────────────────────────

class InvoiceCreate(BaseModel):
    invoice_number: str | None = Field(default=None, pattern=INVOICE_NUMBER_PATTERN)
    client_name: str = Field(min_length=1, max_length=255)
    client_email: EmailStr
    amount: Decimal = Field(gt=0, max_digits=14, decimal_places=2)
    currency: str = Field(
        default_factory=lambda: settings.DEFAULT_CURRENCY, min_length=3, max_length=3
    )
    status: InvoiceStatus = "draft"
    issue_date: date = Field(default_factory=date.today)
    due_date: date
    description: str = Field(min_length=1, max_length=10000)

    @field_validator("client_name", "description")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)

    @model_validator(mode="after")
    def validate_dates(self) -> "InvoiceCreate":
        _check_date_order(self.issue_date, self.due_date)
        self.currency = self.currency.upper()
        return self


# ── Update ────────────────────────────────────────────────────────────────────

class InvoiceUpdate(BaseModel):
    invoice_number: str | None = Field(default=None, pattern=INVOICE_NUMBER_PATTERN)
    client_name: str | None = Field(default=None, min_length=1, max_length=255)
    client_email: EmailStr | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=14, decimal_places=2)
    currency: str | None = Field(default=None, min_length=3, max_length=3)
    status: InvoiceStatus | None = None
    issue_date: date | None = None
    due_date: date | None = None
    description: str | None = Field(default=None, min_length=1, max_length=10000)

    @field_validator("client_name", "description")
    @classmethod
    def strip_required(cls, v: str | None) -> str | None:
        return _strip_required(v) if v is not None else v

    @model_validator(mode="after")
    def validate_dates(self) -> "InvoiceUpdate":
        # Only checked when both ends are in the payload; the service re-checks
        # against the stored invoice.
        _check_date_order(self.issue_date, self.due_date)
        if self.currency is not None:
            self.currency = self.currency.upper()
        return self


# ── Read ──────────────────────────────────────────────────────────────────────

class InvoiceRead(BaseModel):
    id: str
    invoice_number: str
    client_name: str
    client_email: EmailStr
    amount: Decimal
    currency: str
    status: str
    issue_date: date
    due_date: date
    description: str
    created_by: str
    created_at: datetime
    updated_at: datetime
    formatted_amount: str | None = None
    status_color: str | None = None
    is_past_due: bool = False


class InvoiceNumber(BaseModel):
    invoice_number: str


# ── Filter ────────────────────────────────────────────────────────────────────

class InvoiceFilter(BaseModel):
    """Query parameters for filtering invoice list endpoints."""

    status: InvoiceStatus | None = None
    search: str | None = Field(default=None, max_length=200)
    page: int = Field(default=1, ge=1)
    size: int = Field(default=5, ge=1, le=100)


# ── Stats & charts ────────────────────────────────────────────────────────────

class InvoiceStats(BaseModel):
    total: int = 0
    paid: int = 0
    overdue: int = 0
    total_amount: Decimal = Decimal("0")
    paid_amount: Decimal = Decimal("0")


class StatusSlice(BaseModel):
    status: str
    label: str
    value: int


class MonthlyRevenue(BaseModel):
    month: str
    year: int
    revenue: Decimal


class ClientRevenue(BaseModel):
    client: str
    revenue: Decimal


class InvoiceCharts(BaseModel):
    status_distribution: list[StatusSlice]
    monthly_revenue: list[MonthlyRevenue]
    top_clients: list[ClientRevenue] = Field(default_factory=list)
