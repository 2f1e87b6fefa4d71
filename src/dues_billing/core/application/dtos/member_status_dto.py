from datetime import date
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel


class MemberStatusTag(str, Enum):
    CURRENT = "CURRENT"
    DELINQUENT = "DELINQUENT"
    NEVER_PAID = "NEVER_PAID"


class MemberSummaryDTO(BaseModel):
    member_id: str
    fiscal_id: str
    full_name: str
    total: int
    paid: int
    overdue: int
    pending: int
    overdue_amount: Decimal
    last_paid_at: date | None = None
    status: MemberStatusTag

    @property
    def is_delinquent(self) -> bool:
        return self.status is not MemberStatusTag.CURRENT
