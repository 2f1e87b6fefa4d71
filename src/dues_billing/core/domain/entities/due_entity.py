from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from dues_billing.core.domain.entities._base import EntityMixin
from dues_billing.core.domain.services.calendar import due_date_for


class DueStatus(str, Enum):
    PAID = "PAID"
    OVERDUE = "OVERDUE"
    PENDING = "PENDING"


class PaymentMethod(str, Enum):
    TRANSFER = "transfer"
    CASH = "cash"
    CARD = "card"
    BULK_IMPORT = "bulk-import"

    @classmethod
    def values(cls) -> list[str]:
        return [m.value for m in cls]


@dataclass(slots=True)
class DueEntity(EntityMixin):
    id: uuid.UUID
    member_id: uuid.UUID
    year: int
    month: int
    amount: Decimal
    paid: bool = False
    paid_at: date | None = None
    payment_method: str | None = None
    receipt_url: str | None = None
    notes: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def due_date(self) -> date:
        return due_date_for(self.year, self.month)

    @property
    def period(self) -> tuple[int, int]:
        return self.year, self.month
