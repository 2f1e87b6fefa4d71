from datetime import date
from decimal import Decimal

from django.db import transaction

from dues_billing.core.domain.entities.payment_record_entity import PaymentRecordEntity
from dues_billing.core.domain.repositories.payment_record_repository import (
    PaymentRecordRepository,
)
from plugins.django_interface.models import PaymentRecord as PaymentRecordModel


class PaymentRecordRepoImpl(PaymentRecordRepository):
    """Implementación Django del libro de pagos."""

    @transaction.atomic
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
        obj = PaymentRecordModel.objects.create(
            due_id=due_id,
            member_id=member_id,
            amount=amount,
            payment_method=payment_method,
            paid_at=paid_at,
            receipt_url=receipt_url,
        )
        return PaymentRecordEntity.from_model(obj)

    @transaction.atomic
    def revert_for_due(self, due_id: str) -> int:
        return PaymentRecordModel.objects.filter(
            due_id=due_id, status=PaymentRecordModel.Status.CONFIRMED
        ).update(status=PaymentRecordModel.Status.REVERTED)

    def list_by_due(self, due_id: str) -> list[PaymentRecordEntity]:
        qs = PaymentRecordModel.objects.filter(due_id=due_id).order_by("created_at")
        return [PaymentRecordEntity.from_model(obj) for obj in qs]
