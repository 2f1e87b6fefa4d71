from decimal import Decimal

from pydantic import BaseModel


class DueStatsDTO(BaseModel):
    total: int = 0
    paid: int = 0
    pending: int = 0
    overdue: int = 0
    amount_total: Decimal = Decimal("0")
    amount_paid: Decimal = Decimal("0")
    amount_pending: Decimal = Decimal("0")
