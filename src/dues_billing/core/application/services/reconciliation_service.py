"""
Conciliación de pagos importados.

Cada fila identifica a un socio por RUT y trae columnas de período con la
fecha (o marca) de pago. Las filas se procesan en orden, cada una en su
propio savepoint; los errores se acumulan en el reporte y nunca cortan
la importación. Una cuota ya pagada jamás se modifica.
"""
from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date

import structlog
from django.db import DatabaseError, transaction

from dues_billing.adapters.observability.metrics import (
    RECONCILIATION_DURATION,
    RECONCILIATION_ROWS,
)
from dues_billing.core.application.dtos.outcome import OutcomeKind
from dues_billing.core.application.dtos.reconciliation_dto import (
    ReconciliationReport,
    RowError,
)
from dues_billing.core.application.services.import_layout import ImportLayout, parse_iso_date
from dues_billing.core.application.services.lifecycle_service import DuesLifecycleService
from dues_billing.core.domain.entities.due_entity import PaymentMethod
from dues_billing.core.domain.entities.member_entity import MemberEntity
from dues_billing.core.domain.repositories.due_repository import DueRepository
from dues_billing.core.domain.repositories.member_repository import MemberRepository
from dues_billing.core.domain.services.calendar import (
    Clock,
    Period,
    period_of,
    periods_between,
    shift_period,
)

logger = structlog.get_logger(__name__)


@dataclass
class _RowTally:
    created: int = 0
    updated: int = 0
    skipped: int = 0
    scheduled: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def successful(self) -> bool:
        return (self.created + self.updated) > 0


class ReconciliationService:
    def __init__(  # noqa: PLR0913
        self,
        lifecycle: DuesLifecycleService,
        due_repo: DueRepository,
        member_repo: MemberRepository,
        layout: ImportLayout,
        clock: Clock,
        max_lookahead_months: int = 12,
    ) -> None:
        self.lifecycle = lifecycle
        self.due_repo = due_repo
        self.member_repo = member_repo
        self.layout = layout
        self.clock = clock
        self.max_lookahead_months = max_lookahead_months

    # ─────────────────────────  API pública  ────────────────────────── #

    def reconcile(self, rows: Iterable[Mapping]) -> ReconciliationReport:
        report = ReconciliationReport()
        today = self.clock.today()

        with RECONCILIATION_DURATION.time():
            for number, raw in enumerate(rows, start=1):
                report.total_rows += 1
                row = self.layout.normalize_row(raw)
                try:
                    with transaction.atomic():
                        tally = self._process_row(row, today)
                except DatabaseError as exc:
                    logger.error("reconciliation.row_failed", row=number, error=str(exc))
                    tally = _RowTally(errors=[f"Error de base de datos: {exc}"])

                self._merge(report, number, tally)

        logger.info(
            "reconciliation.finished",
            total_rows=report.total_rows,
            successful_rows=report.successful_rows,
            created=report.created,
            updated=report.updated,
            skipped=report.skipped,
            scheduled=report.scheduled,
            errors=len(report.errors),
        )
        return report

    # ─────────────────────────  internos  ────────────────────────── #

    def _merge(self, report: ReconciliationReport, number: int, tally: _RowTally) -> None:
        report.created += tally.created
        report.updated += tally.updated
        report.skipped += tally.skipped
        report.scheduled += tally.scheduled
        for message in tally.errors:
            report.errors.append(RowError(row=number, message=message))
            logger.warning("reconciliation.row_error", row=number, message=message)
        if tally.successful:
            report.successful_rows += 1
        RECONCILIATION_ROWS.labels(result="ok" if tally.successful else "no_change").inc()

    def _process_row(self, row: dict[str, str], today: date) -> _RowTally:
        tally = _RowTally()

        fiscal_id = self.layout.fiscal_id(row)
        if not fiscal_id:
            tally.errors.append("Fila sin identificador de socio (RUT)")
            return tally
        member = self.member_repo.find_by_fiscal_id(fiscal_id)
        if member is None:
            tally.errors.append(f"Socio no encontrado: {fiscal_id}")
            return tally

        last_period: Period | None = None
        for column, period, value in self.layout.period_cells(row):
            try:
                paid_at = self.layout.parse_cell(value, period)
            except ValueError as exc:
                tally.errors.append(f"{column}: {exc}")
                continue
            if self._apply_cell(member, column, period, paid_at, today, tally):
                last_period = period

        next_raw = self.layout.next_payment(row)
        if next_raw:
            try:
                next_date = parse_iso_date(next_raw)
            except ValueError as exc:
                tally.errors.append(f"Próximo pago: {exc}")
            else:
                if next_date > today:
                    self._schedule(member, last_period, next_date, today, tally)
        return tally

    def _apply_cell(  # noqa: PLR0913
        self,
        member: MemberEntity,
        column: str,
        period: Period,
        paid_at: date,
        today: date,
        tally: _RowTally,
    ) -> bool:
        """Aplica una celda de pago. Retorna True si el período quedó procesado."""
        if paid_at > today:
            tally.errors.append(f"{column}: la fecha de pago {paid_at.isoformat()} es posterior a hoy")
            return False

        year, month = period
        due = self.due_repo.find_by_period(member.id, year, month)
        created = False
        if due is None:
            outcome = self.lifecycle.create_due(member.id, year, month, source="reconciliation")
            if outcome.kind is OutcomeKind.CONFLICT:
                due = outcome.value
            elif not outcome.is_ok:
                tally.errors.append(f"{column}: {outcome.message}")
                return False
            else:
                due, created = outcome.value, True

        if due.paid:
            tally.skipped += 1
            return True

        paid = self.lifecycle.mark_paid(due.id, PaymentMethod.BULK_IMPORT.value, paid_at)
        if paid.is_ok:
            if created:
                tally.created += 1
            else:
                tally.updated += 1
            return True
        if paid.kind is OutcomeKind.ALREADY_PAID:
            tally.skipped += 1
            return True
        tally.errors.append(f"{column}: {paid.message}")
        return False

    def _schedule(  # noqa: PLR0913
        self,
        member: MemberEntity,
        last_period: Period | None,
        next_date: date,
        today: date,
        tally: _RowTally,
    ) -> None:
        """Pre-crea cuotas impagas hasta el mes del próximo pago, con tope."""
        current = period_of(today)
        start = shift_period(*last_period, 1) if last_period else current
        limit = shift_period(*current, self.max_lookahead_months)
        end = min(period_of(next_date), limit)

        for year, month in periods_between(start, end):
            if (year, month) < member.enrollment_period:
                continue
            outcome = self.lifecycle.create_due(member.id, year, month, source="reconciliation")
            if outcome.is_ok:
                tally.scheduled += 1
            elif outcome.kind is not OutcomeKind.CONFLICT:
                tally.errors.append(f"Próximo pago {month:02d}/{year}: {outcome.message}")
