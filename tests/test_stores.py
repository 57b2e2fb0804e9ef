"""
Store-level tests.
Covers: user/invoice CRUD, invoice numbering, stats, display helpers, notification read state.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import Any

import pytest

from invoicedesk.db.session import InMemoryDatabase
from invoicedesk.models.invoice import Invoice
from invoicedesk.services.invoice_service import to_read
from invoicedesk.stores.invoice import (
    DEFAULT_STATUS_COLOR,
    filter_invoices,
    format_currency,
    invoice_stats,
    status_color,
)
from invoicedesk.stores.notification import format_relative_time

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _invoice_data(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "invoice_number": "INV-2024-010",
        "client_name": "Initech",
        "client_email": "ap@initech.com",
        "amount": Decimal("100.00"),
        "currency": "USD",
        "status": "draft",
        "issue_date": date(2024, 6, 1),
        "due_date": date(2024, 7, 1),
        "description": "Consulting",
        "created_by": "2",
    }
    data.update(overrides)
    return data


def _make_invoice(amount: str, status: str, number: int = 1) -> Invoice:
    return Invoice(
        id=str(number),
        created_at=NOW,
        updated_at=NOW,
        **_invoice_data(
            amount=Decimal(amount), status=status, invoice_number=f"INV-2024-{number:03d}"
        ),
    )


@pytest.fixture
def fixed_db() -> InMemoryDatabase:
    return InMemoryDatabase(seed=True, clock=lambda: NOW)


class TestUserStore:
    def test_seeded_users_in_insertion_order(self, db: InMemoryDatabase) -> None:
        assert [u.id for u in db.users.list_all()] == ["1", "2"]

    def test_create_then_get(self, db: InMemoryDatabase) -> None:
        user = db.users.create(
            obj_in={
                "email": "ops@company.com",
                "username": "ops",
                "full_name": "Olivia Ops",
                "address": "1 Ops Way",
                "mobile": "+15550001111",
                "role": "admin",
                "is_email_verified": True,
            }
        )
        assert user.id
        assert user.created_at is not None
        assert user.name == "Olivia"
        assert user.subscription_plan == "Free Plan"
        assert db.users.get(user.id) == user

    def test_update_merges_fields(self, db: InMemoryDatabase) -> None:
        updated = db.users.update("2", obj_in={"address": "New Address"})
        assert updated is not None
        assert updated.address == "New Address"
        assert updated.email == "user@company.com"

    def test_update_unknown_returns_none(self, db: InMemoryDatabase) -> None:
        assert db.users.update("missing", obj_in={"address": "x"}) is None

    def test_delete_and_unknown_delete(self, db: InMemoryDatabase) -> None:
        assert db.users.delete("2") is True
        assert db.users.get("2") is None
        assert "2" not in db.users
        count = len(db.users)
        assert db.users.delete("2") is False
        assert len(db.users) == count

    def test_stats(self, db: InMemoryDatabase) -> None:
        stats = db.users.stats()
        assert (stats.total, stats.admins, stats.users) == (2, 1, 1)

    def test_search_is_case_insensitive(self, db: InMemoryDatabase) -> None:
        assert [u.id for u in db.users.search("JOHN")] == ["2"]
        assert len(db.users.search(None)) == 2

    def test_malformed_id_is_a_miss(self, db: InMemoryDatabase) -> None:
        assert db.users.get(None) is None  # type: ignore[arg-type]


class TestInvoiceStore:
    def test_create_stamps_id_and_timestamps(self, fixed_db: InMemoryDatabase) -> None:
        invoice = fixed_db.invoices.create(obj_in=_invoice_data())
        assert invoice.id
        assert invoice.created_at == NOW
        assert invoice.updated_at == NOW
        assert fixed_db.invoices.get(invoice.id) == invoice

    def test_update_refreshes_updated_at(self) -> None:
        ticks = iter([NOW, NOW + timedelta(minutes=5)])
        db = InMemoryDatabase(clock=lambda: next(ticks))
        invoice = db.invoices.create(obj_in=_invoice_data())
        updated = db.invoices.update(invoice.id, obj_in={"status": "sent"})
        assert updated is not None
        assert updated.status == "sent"
        assert updated.created_at == NOW
        assert updated.updated_at == NOW + timedelta(minutes=5)

    def test_update_unknown_returns_none(self, db: InMemoryDatabase) -> None:
        assert db.invoices.update("nope", obj_in={"status": "paid"}) is None

    def test_store_accepts_due_before_issue(self, db: InMemoryDatabase) -> None:
        invoice = db.invoices.create(
            obj_in=_invoice_data(issue_date=date(2024, 5, 1), due_date=date(2024, 4, 1))
        )
        assert invoice.due_date < invoice.issue_date

    def test_list_by_user_keeps_store_order(self, db: InMemoryDatabase) -> None:
        assert [i.id for i in db.invoices.list_by_user("2")] == ["1", "2", "3"]
        assert [i.id for i in db.invoices.list_by_user("1")] == ["4"]
        assert db.invoices.list_by_user("nobody") == []

    def test_delete(self, db: InMemoryDatabase) -> None:
        assert db.invoices.delete("1") is True
        assert db.invoices.get("1") is None
        assert db.invoices.delete("1") is False
        assert len(db.invoices) == 3

    def test_delete_by_user(self, db: InMemoryDatabase) -> None:
        assert db.invoices.delete_by_user("2") == 3
        assert [i.id for i in db.invoices.list_all()] == ["4"]


class TestInvoiceNumber:
    def test_follows_highest_number_of_the_year(self, empty_db: InMemoryDatabase) -> None:
        empty_db.invoices.create(obj_in=_invoice_data(invoice_number="INV-2024-007"))
        assert (
            empty_db.invoices.generate_invoice_number(now=datetime(2024, 3, 1))
            == "INV-2024-008"
        )

    def test_starts_at_one_for_a_new_year(self, db: InMemoryDatabase) -> None:
        assert db.invoices.generate_invoice_number(now=datetime(2025, 1, 2)) == "INV-2025-001"

    def test_seeded_sequence(self, db: InMemoryDatabase) -> None:
        assert db.invoices.generate_invoice_number(now=datetime(2024, 2, 1)) == "INV-2024-005"

    def test_width_grows_past_999(self, empty_db: InMemoryDatabase) -> None:
        empty_db.invoices.create(obj_in=_invoice_data(invoice_number="INV-2024-999"))
        assert (
            empty_db.invoices.generate_invoice_number(now=datetime(2024, 1, 1))
            == "INV-2024-1000"
        )

    def test_ignores_other_years_and_non_numeric(self, empty_db: InMemoryDatabase) -> None:
        empty_db.invoices.create(obj_in=_invoice_data(invoice_number="INV-2023-050"))
        empty_db.invoices.create(obj_in=_invoice_data(invoice_number="INV-2024-abc"))
        assert (
            empty_db.invoices.generate_invoice_number(now=datetime(2024, 1, 1))
            == "INV-2024-001"
        )

    def test_uses_store_clock_by_default(self) -> None:
        db = InMemoryDatabase(clock=lambda: NOW)
        assert db.invoices.generate_invoice_number() == "INV-2024-001"


class TestInvoiceStats:
    def test_empty(self) -> None:
        stats = invoice_stats([])
        assert stats.total == 0
        assert stats.paid == 0
        assert stats.overdue == 0
        assert stats.total_amount == 0
        assert stats.paid_amount == 0

    def test_mixed_statuses(self) -> None:
        stats = invoice_stats(
            [
                _make_invoice("100", "draft", 1),
                _make_invoice("200", "paid", 2),
                _make_invoice("300", "paid", 3),
            ]
        )
        assert stats.total == 3
        assert stats.paid == 2
        assert stats.total_amount == Decimal("600")
        assert stats.paid_amount == Decimal("500")

    def test_overdue_count(self, db: InMemoryDatabase) -> None:
        stats = db.invoices.stats()
        assert stats.total == 4
        assert stats.overdue == 1
        assert stats.paid == 1
        assert stats.total_amount == Decimal("12000.00")
        assert stats.paid_amount == Decimal("2500.00")

    def test_user_scoped_subset(self, db: InMemoryDatabase) -> None:
        stats = db.invoices.stats(db.invoices.list_by_user("1"))
        assert stats.total == 1
        assert stats.total_amount == Decimal("4500.00")


class TestInvoiceHelpers:
    @pytest.mark.parametrize(
        ("amount", "currency", "expected"),
        [
            (Decimal("2500"), "USD", "$2,500.00"),
            (1234.5, "usd", "$1,234.50"),
            (Decimal("0.005"), "USD", "$0.01"),
            (Decimal("99.99"), "EUR", "€99.99"),
            (Decimal("1234.5"), "JPY", "¥1,235"),
            (Decimal("1000"), "CHF", "CHF\u00a01,000.00"),
            (Decimal("-42"), "USD", "-$42.00"),
        ],
    )
    def test_format_currency(self, amount: Any, currency: str, expected: str) -> None:
        assert format_currency(amount, currency) == expected

    def test_format_currency_defaults_to_usd(self) -> None:
        assert format_currency(5) == "$5.00"

    def test_status_color(self) -> None:
        assert "green" in status_color("paid")
        assert "red" in status_color("overdue")
        assert status_color("mystery") == DEFAULT_STATUS_COLOR

    def test_filter_invoices(self, db: InMemoryDatabase) -> None:
        invoices = db.invoices.list_all()
        assert [i.id for i in filter_invoices(invoices, search="acme")] == ["1"]
        assert [i.id for i in filter_invoices(invoices, search="BILLING@")] == ["1", "4"]
        assert [i.id for i in filter_invoices(invoices, status="draft")] == ["4"]
        assert filter_invoices(invoices, search="acme", status="draft") == []

    def test_past_due_is_computed_not_stored(self, db: InMemoryDatabase) -> None:
        sent = db.invoices.get("2")
        assert sent is not None
        assert sent.is_past_due(date(2024, 3, 1)) is True
        assert sent.is_past_due(date(2024, 2, 1)) is False
        assert db.invoices.get("2").status == "sent"  # type: ignore[union-attr]
        paid = db.invoices.get("1")
        assert paid.is_past_due(date(2030, 1, 1)) is False  # type: ignore[union-attr]

    def test_to_read_carries_display_fields(self, db: InMemoryDatabase) -> None:
        sent = db.invoices.get("2")
        assert sent is not None
        read = to_read(sent, today=date(2024, 3, 1))
        assert read.id == "2"
        assert read.amount == Decimal("1800.00")
        assert read.formatted_amount == "$1,800.00"
        assert "blue" in read.status_color  # type: ignore[operator]
        assert read.is_past_due is True
        assert to_read(sent, today=date(2024, 2, 1)).is_past_due is False


class TestNotificationStore:
    def test_list_sorted_newest_first(self, db: InMemoryDatabase) -> None:
        timestamps = [n.timestamp for n in db.notifications.list_all()]
        assert timestamps == sorted(timestamps, reverse=True)
        assert db.notifications.list_all()[0].id == "1"

    def test_mark_read(self, db: InMemoryDatabase) -> None:
        assert db.notifications.unread_count() == 2
        notification = db.notifications.mark_read("1")
        assert notification is not None and notification.read is True
        assert db.notifications.unread_count() == 1
        db.notifications.mark_read("1")
        assert db.notifications.unread_count() == 1

    def test_mark_read_unknown(self, db: InMemoryDatabase) -> None:
        assert db.notifications.mark_read("999") is None

    def test_mark_all_read_is_idempotent(self, db: InMemoryDatabase) -> None:
        assert db.notifications.mark_all_read() == 2
        assert db.notifications.unread_count() == 0
        assert db.notifications.mark_all_read() == 0
        assert db.notifications.unread_count() == 0


class TestRelativeTime:
    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [
            (timedelta(seconds=0), "Just now"),
            (timedelta(seconds=59), "Just now"),
            (timedelta(seconds=60), "1m ago"),
            (timedelta(seconds=3599), "59m ago"),
            (timedelta(seconds=3600), "1h ago"),
            (timedelta(hours=23, minutes=59), "23h ago"),
            (timedelta(days=1), "1d ago"),
            (timedelta(days=6, hours=23), "6d ago"),
        ],
    )
    def test_buckets(self, elapsed: timedelta, expected: str) -> None:
        assert format_relative_time(NOW - elapsed, now=NOW) == expected

    def test_week_or_older_shows_date(self) -> None:
        assert format_relative_time(NOW - timedelta(days=7), now=NOW) == "6/8/2024"
