from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dues_billing.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class CreateDueCommand(CommandDTO):
    member_id: str
    year: int
    month: int
    amount: Decimal | None = None
    allow_before_enrollment: bool = False
    notes: str | None = None

@dataclass(frozen=True)
class MarkDuePaidCommand(CommandDTO):
    due_id: str
    payment_method: str
    paid_at: date | None = None
    receipt_url: str | None = None
    notes: str | None = None

@dataclass(frozen=True)
class UnmarkDuePaidCommand(CommandDTO):
    due_id: str

@dataclass(frozen=True)
class DeleteDueCommand(CommandDTO):
    due_id: str
