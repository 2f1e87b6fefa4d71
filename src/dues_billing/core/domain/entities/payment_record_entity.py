from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from dues_billing.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class PaymentRecordEntity(EntityMixin):
    id: uuid.UUID
    due_id: uuid.UUID
    member_id: uuid.UUID
    amount: Decimal
    payment_method: str
    paid_at: date
    status: str
    receipt_url: str | None = None
    created_at: datetime | None = None
