from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dues_billing.core.domain.entities._base import EntityMixin


@dataclass(slots=True)
class MemberEntity(EntityMixin):
    """
    Proyección del socio que el motor de cuotas necesita.
    `monthly_due_amount` ya viene resuelto (valor propio o valor por defecto).
    """
    id: uuid.UUID
    fiscal_id: str
    monthly_due_amount: Decimal
    enrollment_date: date
    active: bool = True
    first_name: str = ""
    last_name: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def enrollment_period(self) -> tuple[int, int]:
        return self.enrollment_date.year, self.enrollment_date.month
