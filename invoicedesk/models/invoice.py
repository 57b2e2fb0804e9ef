"""
Invoice domain model.
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

InvoiceStatus = Literal["draft", "sent", "paid", "overdue", "cancelled"]


class Invoice(BaseModel):
    id: str
    invoice_number: str
    client_name: str
    client_email: EmailStr
    amount: Decimal = Field(ge=0)
    currency: str = "USD"
    status: InvoiceStatus = "draft"
    issue_date: date
    due_date: date
    description: str = ""
    created_by: str
    created_at: datetime
    updated_at: datetime

    def is_past_due(self, today: date | None = None) -> bool:
        """
        Whether the due date has passed for an invoice that is still awaiting
        payment. Stored status is never changed by this check.
        """
        if self.status in ("paid", "cancelled", "draft"):
            return False
        today = today or date.today()
        return self.due_date < today

    def __repr__(self) -> str:
        return f"<Invoice id={self.id} number={self.invoice_number} status={self.status}>"
