"""
Demonstration data loaded into a fresh database.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

from invoicedesk.models.invoice import Invoice
from invoicedesk.models.notification import Notification
from invoicedesk.models.user import User


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


def seed_users() -> list[User]:
    return [
        User(
            id="1",
            email="admin@company.com",
            name="Admin User",
            username="admin",
            full_name="Administrator User",
            address="123 Admin Street, City, State 12345",
            mobile="+1 (555) 123-4567",
            role="admin",
            subscription_plan="Pro Plan",
            created_at=_day(2024, 1, 1),
            is_email_verified=True,
        ),
        User(
            id="2",
            email="user@company.com",
            name="John Doe",
            username="johndoe",
            full_name="John Michael Doe",
            address="456 User Avenue, City, State 67890",
            mobile="+1 (555) 987-6543",
            role="user",
            subscription_plan="Free Plan",
            created_at=_day(2024, 1, 15),
            is_email_verified=True,
        ),
    ]


def seed_invoices() -> list[Invoice]:
    rows = [
        ("1", "INV-2024-001", "Acme Corporation", "billing@acme.com", "2500.00", "paid",
         date(2024, 1, 15), date(2024, 2, 15), "Web development services", "2",
         _day(2024, 1, 15), _day(2024, 1, 20)),
        ("2", "INV-2024-002", "Tech Solutions Inc", "accounts@techsolutions.com", "1800.00", "sent",
         date(2024, 1, 20), date(2024, 2, 20), "UI/UX Design consultation", "2",
         _day(2024, 1, 20), _day(2024, 1, 20)),
        ("3", "INV-2024-003", "StartupXYZ", "finance@startupxyz.com", "3200.00", "overdue",
         date(2024, 1, 10), date(2024, 1, 25), "Mobile app development", "2",
         _day(2024, 1, 10), _day(2024, 1, 10)),
        ("4", "INV-2024-004", "Global Enterprises", "billing@global.com", "4500.00", "draft",
         date(2024, 1, 25), date(2024, 2, 25), "System integration project", "1",
         _day(2024, 1, 25), _day(2024, 1, 25)),
    ]
    return [
        Invoice(
            id=id_,
            invoice_number=number,
            client_name=client,
            client_email=email,
            amount=Decimal(amount),
            currency="USD",
            status=status,
            issue_date=issued,
            due_date=due,
            description=description,
            created_by=owner,
            created_at=created,
            updated_at=updated,
        )
        for (id_, number, client, email, amount, status, issued, due, description,
             owner, created, updated) in rows
    ]


def seed_notifications(now: datetime | None = None) -> list[Notification]:
    now = now or datetime.now(timezone.utc)
    return [
        Notification(
            id="1",
            type="invoice",
            title="Invoice Overdue",
            message="Invoice #INV-001 from Acme Corp is 5 days overdue",
            timestamp=now - timedelta(hours=2),
            read=False,
            actionable=True,
            action_text="View Invoice",
            action_view="invoices",
            priority="high",
        ),
        Notification(
            id="2",
            type="payment",
            title="Payment Received",
            message="Payment of $2,500 received for Invoice #INV-003",
            timestamp=now - timedelta(hours=4),
            read=False,
            priority="medium",
        ),
        Notification(
            id="3",
            type="user",
            title="New User Registered",
            message="Sarah Johnson has joined as a new user",
            timestamp=now - timedelta(hours=6),
            read=True,
            actionable=True,
            action_text="View Users",
            action_view="users",
            priority="low",
        ),
        Notification(
            id="4",
            type="invoice",
            title="Invoice Created",
            message="New invoice #INV-005 created for TechStart Inc",
            timestamp=now - timedelta(hours=8),
            read=True,
            priority="low",
        ),
        Notification(
            id="5",
            type="system",
            title="System Update",
            message="Invoice management system updated to v2.1.0",
            timestamp=now - timedelta(days=1),
            read=True,
            priority="medium",
        ),
        Notification(
            id="6",
            type="activity",
            title="Bulk Action Completed",
            message="Successfully updated 12 invoice statuses",
            timestamp=now - timedelta(days=2),
            read=True,
            actionable=True,
            action_text="Undo Changes",
            priority="low",
        ),
    ]
