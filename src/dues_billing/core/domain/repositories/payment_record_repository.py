from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from dues_billing.core.domain.entities.payment_record_entity import PaymentRecordEntity


class PaymentRecordRepository(ABC):
    """Historial de pagos confirmados (libro de pagos)."""

    @abstractmethod
    def record(
        self,
        *,
        due_id: str,
        member_id: str,
        amount: Decimal,
        payment_method: str,
        paid_at: date,
        receipt_url: str | None = None,
    ) -> PaymentRecordEntity:
        ...

    @abstractmethod
    def revert_for_due(self, due_id: str) -> int:
        """Marca como revertidos los pagos confirmados de la cuota. Retorna cuántos."""
        ...

    @abstractmethod
    def list_by_due(self, due_id: str) -> list[PaymentRecordEntity]:
        ...
