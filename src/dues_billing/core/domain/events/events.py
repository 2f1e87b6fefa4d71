from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

# ╭──────────────────────────────────────────────╮
# │ 1. Ciclo de vida de la cuota                 │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class DueCreatedEvent(DomainEvent):
    due_id: uuid.UUID
    member_id: uuid.UUID
    year: int
    month: int
    amount: Decimal

@dataclass(frozen=True)
class DueDeletedEvent(DomainEvent):
    due_id: uuid.UUID
    member_id: uuid.UUID
    year: int
    month: int

# ╭──────────────────────────────────────────────╮
# │ 2. Pagos                                     │
# ╰──────────────────────────────────────────────╯
@dataclass(frozen=True)
class DuePaidEvent(DomainEvent):
    due_id: uuid.UUID
    member_id: uuid.UUID
    amount: Decimal
    payment_method: str
    paid_at: date
    receipt_url: str | None = None

@dataclass(frozen=True)
class DuePaymentRevertedEvent(DomainEvent):
    due_id: uuid.UUID
    member_id: uuid.UUID
