"""
Invoice store.
Extends InMemoryStore with per-user listing, invoice numbering and stats,
plus the pure helpers the dashboard uses to render invoices.
"""
from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from invoicedesk.models.invoice import Invoice
from invoicedesk.schemas.invoice import InvoiceCreate, InvoiceStats, InvoiceUpdate
from invoicedesk.stores.base import InMemoryStore

INVOICE_PREFIX = "INV"

# en-US currency symbols; other codes render as "<CODE> 1,234.00".
CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
    "CAD": "CA$",
    "AUD": "A$",
    "CNY": "CN¥",
    "MXN": "MX$",
    "KRW": "₩",
}
ZERO_DECIMAL_CURRENCIES = frozenset({"JPY", "KRW"})
# Intl puts a non-breaking space between an ISO code and the number.
CODE_SEPARATOR = "\u00a0"

STATUS_COLORS: dict[str, str] = {
    "paid": "bg-green-100 text-green-800 dark:bg-green-900 dark:text-green-200",
    "sent": "bg-blue-100 text-blue-800 dark:bg-blue-900 dark:text-blue-200",
    "overdue": "bg-red-100 text-red-800 dark:bg-red-900 dark:text-red-200",
    "draft": "bg-gray-100 text-gray-800 dark:bg-gray-800 dark:text-gray-200",
    "cancelled": "bg-gray-100 text-gray-600 dark:bg-gray-800 dark:text-gray-400",
}
DEFAULT_STATUS_COLOR = "bg-gray-100 text-gray-800 dark:bg-gray-800 dark:text-gray-200"


class InvoiceStore(InMemoryStore[Invoice, InvoiceCreate, InvoiceUpdate]):

    def _creation_stamp(self) -> dict[str, Any]:
        now = self.clock()
        return {"id": self.new_id(), "created_at": now, "updated_at": now}

    def _update_stamp(self) -> dict[str, Any]:
        return {"updated_at": self.clock()}

    def list_by_user(self, user_id: str) -> list[Invoice]:
        """Invoices created by the given user, in store order."""
        return self.filter(created_by=user_id)

    def get_by_number(self, invoice_number: str) -> Invoice | None:
        return self.find_one(invoice_number=invoice_number)

    def delete_by_user(self, user_id: str) -> int:
        """Remove every invoice owned by the user. Returns how many were removed."""
        doomed = [inv.id for inv in self.list_by_user(user_id)]
        for invoice_id in doomed:
            self.delete(invoice_id)
        return len(doomed)

    def generate_invoice_number(self, now: datetime | None = None) -> str:
        """
        Next number in the current year's sequence: INV-<year>-<NNN>.
        Not reserved; two callers that generate before either creates get
        the same number.
        """
        year = (now or self.clock()).year
        pattern = re.compile(rf"^{INVOICE_PREFIX}-{year}-(\d+)$")
        suffixes = [
            int(match.group(1))
            for match in (pattern.match(inv.invoice_number) for inv in self._records.values())
            if match
        ]
        next_number = max(suffixes) + 1 if suffixes else 1
        return f"{INVOICE_PREFIX}-{year}-{next_number:03d}"

    def stats(self, invoices: Iterable[Invoice] | None = None) -> InvoiceStats:
        return invoice_stats(self.list_all() if invoices is None else invoices)


# ── Pure helpers ──────────────────────────────────────────────────────────────

def invoice_stats(invoices: Iterable[Invoice]) -> InvoiceStats:
    """
    Aggregate counts and sums for a list of invoices.
    total_amount covers every status; paid_amount only paid invoices.
    """
    stats = InvoiceStats()
    for invoice in invoices:
        stats.total += 1
        stats.total_amount += invoice.amount
        if invoice.status == "paid":
            stats.paid += 1
            stats.paid_amount += invoice.amount
        elif invoice.status == "overdue":
            stats.overdue += 1
    return stats


def filter_invoices(
    invoices: Sequence[Invoice],
    *,
    search: str | None = None,
    status: str | None = None,
) -> list[Invoice]:
    """Substring search over number, client name and client email, plus a status filter."""
    needle = (search or "").lower()
    return [
        invoice
        for invoice in invoices
        if (
            needle in invoice.invoice_number.lower()
            or needle in invoice.client_name.lower()
            or needle in invoice.client_email.lower()
        )
        and (status is None or invoice.status == status)
    ]


def format_currency(amount: Decimal | float | int, currency: str = "USD") -> str:
    """
    Format an amount the way en-US locales display currency, e.g. "$1,234.50"
    or "CHF 1,234.50" for codes without a local symbol.
    """
    code = currency.upper()
    places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    value = Decimal(str(amount)).quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    number = f"{abs(value):,.{places}f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    body = f"{symbol}{number}" if symbol else f"{code}{CODE_SEPARATOR}{number}"
    return f"-{body}" if value < 0 else body


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, DEFAULT_STATUS_COLOR)
