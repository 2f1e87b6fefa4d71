from __future__ import annotations

from dues_billing.core.application.cqrs import CommandHandler
from dues_billing.core.application.dtos.reconciliation_dto import ReconciliationReport
from dues_billing.core.application.services.reconciliation_service import ReconciliationService

from ..commands.reconciliation_commands import ReconcilePaymentsCommand


class ReconcilePaymentsHandler(CommandHandler[ReconcilePaymentsCommand]):
    def __init__(self, service: ReconciliationService):
        self.service = service

    def handle(self, cmd: ReconcilePaymentsCommand) -> ReconciliationReport:
        return self.service.reconcile(cmd.rows)
