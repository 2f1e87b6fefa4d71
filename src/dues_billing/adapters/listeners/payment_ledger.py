import structlog

from dues_billing.core.domain.events.events import DuePaidEvent, DuePaymentRevertedEvent
from dues_billing.core.domain.repositories.payment_record_repository import (
    PaymentRecordRepository,
)

logger = structlog.get_logger(__name__)


class PaymentLedgerListener:
    """Refleja en el libro de pagos cada pago confirmado o revertido."""

    def __init__(self, repo: PaymentRecordRepository):
        self.repo = repo

    def on_paid(self, event: DuePaidEvent) -> None:
        record = self.repo.record(
            due_id=event.due_id,
            member_id=event.member_id,
            amount=event.amount,
            payment_method=event.payment_method,
            paid_at=event.paid_at,
            receipt_url=event.receipt_url,
        )
        logger.info("ledger.payment_recorded", due_id=str(event.due_id), record_id=str(record.id))

    def on_reverted(self, event: DuePaymentRevertedEvent) -> None:
        n = self.repo.revert_for_due(event.due_id)
        logger.info("ledger.payment_reverted", due_id=str(event.due_id), records=n)
