"""
Dashboard chart summaries.
Status distribution, trailing monthly revenue and top clients, each computed
from whatever invoice list the caller passes in.
"""
from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timezone
from decimal import Decimal

from invoicedesk.models.invoice import Invoice
from invoicedesk.schemas.invoice import (
    ClientRevenue,
    InvoiceCharts,
    MonthlyRevenue,
    StatusSlice,
)

MONTH_ABBREVIATIONS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

CHART_STATUSES = (
    ("paid", "Paid"),
    ("sent", "Sent"),
    ("overdue", "Overdue"),
    ("draft", "Draft"),
    ("cancelled", "Cancelled"),
)


def status_distribution(invoices: Sequence[Invoice]) -> list[StatusSlice]:
    """Invoice count per status, leaving out statuses with no invoices."""
    slices = [
        StatusSlice(
            status=status,
            label=label,
            value=sum(1 for inv in invoices if inv.status == status),
        )
        for status, label in CHART_STATUSES
    ]
    return [s for s in slices if s.value > 0]


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def monthly_revenue(
    invoices: Sequence[Invoice],
    now: datetime | None = None,
    months: int = 6,
) -> list[MonthlyRevenue]:
    """Revenue by issue month for the trailing window, oldest month first."""
    now = now or datetime.now(timezone.utc)
    result = []
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(now.year, now.month, -offset)
        revenue = sum(
            (
                inv.amount
                for inv in invoices
                if inv.issue_date.year == year and inv.issue_date.month == month
            ),
            Decimal("0"),
        )
        result.append(
            MonthlyRevenue(month=MONTH_ABBREVIATIONS[month - 1], year=year, revenue=revenue)
        )
    return result


def top_clients(invoices: Sequence[Invoice], limit: int = 5) -> list[ClientRevenue]:
    """Total invoiced amount per client, highest first."""
    totals: dict[str, Decimal] = {}
    for inv in invoices:
        if inv.client_name:
            totals[inv.client_name] = totals.get(inv.client_name, Decimal("0")) + inv.amount
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return [ClientRevenue(client=client, revenue=revenue) for client, revenue in ranked[:limit]]


def build_charts(
    invoices: Sequence[Invoice],
    *,
    include_top_clients: bool = False,
    now: datetime | None = None,
) -> InvoiceCharts:
    return InvoiceCharts(
        status_distribution=status_distribution(invoices),
        monthly_revenue=monthly_revenue(invoices, now=now),
        top_clients=top_clients(invoices) if include_top_clients else [],
    )
