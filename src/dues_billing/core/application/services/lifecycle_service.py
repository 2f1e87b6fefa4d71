"""
Ciclo de vida de las cuotas.

Único escritor del almacén de cuotas: creación (manual, generación
mensual/anual, extensión automática, regularización de atrasos y
conciliación), marca y desmarca de pago, y eliminación protegida.

Toda operación devuelve un `Outcome`; los conflictos (cuota ya existente)
son un valor y no una excepción, de modo que los flujos masivos los
absorben sin capturar errores.
"""
from __future__ import annotations

import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

import structlog
from django.db import DatabaseError, transaction
from django.utils import timezone

from dues_billing.adapters.observability.metrics import DUES_CREATED, DUES_PAYMENTS
from dues_billing.core.application.dtos.generation_dto import (
    BackfillResultDTO,
    ExtensionResultDTO,
    FailedMonthDTO,
    GenerationResultDTO,
    MemberErrorDTO,
    YearGenerationResultDTO,
)
from dues_billing.core.application.dtos.outcome import Outcome
from dues_billing.core.application.services.due_status_classifier import classify
from dues_billing.core.application.services.import_layout import parse_iso_date
from dues_billing.core.domain.entities.due_entity import DueEntity, DueStatus, PaymentMethod
from dues_billing.core.domain.entities.member_entity import MemberEntity
from dues_billing.core.domain.events.events import (
    DueCreatedEvent,
    DueDeletedEvent,
    DuePaidEvent,
    DuePaymentRevertedEvent,
)
from dues_billing.core.domain.repositories.due_repository import DueRepository
from dues_billing.core.domain.repositories.generation_run_repository import (
    GenerationRunRepository,
)
from dues_billing.core.domain.repositories.member_repository import MemberRepository
from dues_billing.core.domain.services.calendar import (
    Clock,
    Period,
    iter_periods,
    period_of,
    periods_between,
)
from dues_billing.core.domain.services.event_dispatcher import EventDispatcher

logger = structlog.get_logger(__name__)

EXTENSION_MONTHS = 12


def _period_error(year, month) -> str | None:
    if not isinstance(year, int) or not 1000 <= year <= 9999:
        return f"Año inválido: {year!r}"
    if not isinstance(month, int) or not 1 <= month <= 12:
        return f"Mes inválido: {month!r}"
    return None


def _member_id_error(member_id) -> str | None:
    try:
        uuid.UUID(str(member_id))
    except ValueError:
        return f"Identificador de socio inválido: {member_id!r}"
    return None


def _payment_date(value, today: date) -> date:
    """Fecha calendario del pago; acepta date, datetime o texto ISO. ValueError si no."""
    if value is None:
        return today
    if isinstance(value, datetime):
        return timezone.localdate(value) if timezone.is_aware(value) else value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value)
    raise ValueError(f"fecha de pago no reconocida: {value!r}")


def _before_enrollment(member: MemberEntity, period: Period) -> bool:
    return period < member.enrollment_period


class DuesLifecycleService:
    def __init__(  # noqa: PLR0913
        self,
        due_repo: DueRepository,
        member_repo: MemberRepository,
        generation_repo: GenerationRunRepository,
        dispatcher: EventDispatcher,
        clock: Clock,
        default_amount: Decimal,
    ) -> None:
        self.due_repo = due_repo
        self.member_repo = member_repo
        self.generation_repo = generation_repo
        self.dispatcher = dispatcher
        self.clock = clock
        self.default_amount = Decimal(default_amount)

    # ─────────────────────────  creación  ────────────────────────── #

    def create_due(  # noqa: PLR0913
        self,
        member_id,
        year: int,
        month: int,
        amount=None,
        *,
        allow_before_enrollment: bool = False,
        notes: str | None = None,
        source: str = "manual",
    ) -> Outcome[DueEntity]:
        """
        Crea la cuota de un socio para un período.

        - valida año/mes, existencia del socio y monto positivo
        - rechaza períodos anteriores a la inscripción salvo
          `allow_before_enrollment=True` (uso administrativo)
        - si ya existe una cuota para la llave devuelve `conflict`
          con la cuota existente
        """
        if err := _period_error(year, month) or _member_id_error(member_id):
            return Outcome.invalid(err)

        member = self.member_repo.find_by_id(member_id)
        if member is None:
            return Outcome.not_found(f"Socio no encontrado: {member_id}")

        if amount is not None:
            try:
                amount = Decimal(str(amount))
            except InvalidOperation:
                return Outcome.invalid(f"Monto inválido: {amount!r}")
            if not amount.is_finite() or amount <= 0:
                return Outcome.invalid(f"El monto debe ser mayor que cero: {amount}")

        if not allow_before_enrollment and _before_enrollment(member, (year, month)):
            return Outcome.invalid(
                f"El período {month:02d}/{year} es anterior a la inscripción "
                f"del socio ({member.enrollment_date.isoformat()})"
            )

        return self._create_for(member, year, month, amount, notes=notes, source=source)

    def _create_for(  # noqa: PLR0913
        self,
        member: MemberEntity,
        year: int,
        month: int,
        amount: Decimal | None = None,
        *,
        notes: str | None = None,
        source: str,
    ) -> Outcome[DueEntity]:
        candidate = DueEntity(
            id=uuid.uuid4(),
            member_id=member.id,
            year=year,
            month=month,
            amount=amount if amount is not None else member.monthly_due_amount,
            notes=notes,
        )
        due, created = self.due_repo.create_if_absent(candidate)
        if not created:
            return Outcome.conflict(
                f"Ya existe una cuota para {month:02d}/{year} del socio {member.fiscal_id}",
                due,
            )

        self.dispatcher.dispatch(
            DueCreatedEvent(
                due_id=due.id,
                member_id=due.member_id,
                year=due.year,
                month=due.month,
                amount=due.amount,
            )
        )
        DUES_CREATED.labels(source=source).inc()
        logger.info(
            "due.created",
            due_id=str(due.id),
            member_id=str(due.member_id),
            period=f"{year}-{month:02d}",
            amount=str(due.amount),
            source=source,
        )
        return Outcome.ok(due)

    # ─────────────────────────  generación masiva  ────────────────────────── #

    def generate_for_period(self, year: int, month: int, overwrite: bool = False) -> Outcome[GenerationResultDTO]:
        """
        Asegura una cuota del período para cada socio activo.

        Con `overwrite` las cuotas impagas ya existentes reciben el valor
        vigente del socio; las pagadas nunca se tocan.
        """
        if err := _period_error(year, month):
            return Outcome.invalid(err)

        result = GenerationResultDTO(year=year, month=month)
        with transaction.atomic():
            for member in self.member_repo.list_active():
                if _before_enrollment(member, (year, month)):
                    result.not_enrolled += 1
                    continue
                try:
                    with transaction.atomic():
                        self._generate_one(member, year, month, overwrite, result)
                except DatabaseError as exc:
                    logger.error(
                        "due.generation_member_failed",
                        member_id=str(member.id),
                        period=f"{year}-{month:02d}",
                        error=str(exc),
                    )
                    result.errors.append(MemberErrorDTO(member_id=str(member.id), message=str(exc)))

            self.generation_repo.record(
                year=year,
                month=month,
                default_amount=self.default_amount,
                created=result.created,
                updated=result.updated,
                skipped=result.skipped,
                overwrite=overwrite,
            )

        logger.info(
            "dues.period_generated",
            period=f"{year}-{month:02d}",
            created=result.created,
            updated=result.updated,
            skipped=result.skipped,
            not_enrolled=result.not_enrolled,
            errors=len(result.errors),
        )
        return Outcome.ok(result)

    def _generate_one(
        self,
        member: MemberEntity,
        year: int,
        month: int,
        overwrite: bool,
        result: GenerationResultDTO,
    ) -> None:
        outcome = self._create_for(member, year, month, source="generation")
        if outcome.is_ok:
            result.created += 1
            return

        existing = outcome.value
        if overwrite and existing is not None and not existing.paid:
            self.due_repo.update_amount(existing.id, member.monthly_due_amount)
            result.updated += 1
        else:
            result.skipped += 1

    def generate_for_year(self, year: int, overwrite: bool = False) -> Outcome[YearGenerationResultDTO]:
        """Genera los 12 meses; cada mes en su propia transacción."""
        if err := _period_error(year, 1):
            return Outcome.invalid(err)

        result = YearGenerationResultDTO(year=year)
        for month in range(1, 13):
            try:
                outcome = self.generate_for_period(year, month, overwrite)
            except Exception as exc:
                logger.error(
                    "dues.month_generation_failed",
                    period=f"{year}-{month:02d}",
                    error=str(exc),
                    exc_info=True,
                )
                result.failed_months.append(FailedMonthDTO(month=month, message=str(exc)))
                continue

            if outcome.is_ok:
                result.months.append(outcome.value)
            else:
                result.failed_months.append(FailedMonthDTO(month=month, message=outcome.message))

        logger.info(
            "dues.year_generated",
            year=year,
            created=result.created,
            updated=result.updated,
            skipped=result.skipped,
            failed_months=[f.month for f in result.failed_months],
        )
        return Outcome.ok(result)

    def auto_extend(self, member_id, reference_date: date | None = None) -> Outcome[ExtensionResultDTO]:
        """
        Asegura cuotas para los 12 meses que comienzan en el mes de
        `reference_date` (hoy por defecto). Solo crea las que faltan.
        """
        if err := _member_id_error(member_id):
            return Outcome.invalid(err)
        member = self.member_repo.find_by_id(member_id)
        if member is None:
            return Outcome.not_found(f"Socio no encontrado: {member_id}")

        start = period_of(reference_date or self.clock.today())
        result = ExtensionResultDTO(member_id=str(member.id))
        with transaction.atomic():
            for year, month in iter_periods(start, EXTENSION_MONTHS):
                if _before_enrollment(member, (year, month)):
                    result.skipped += 1
                    continue
                outcome = self._create_for(member, year, month, source="extension")
                if outcome.is_ok:
                    result.created += 1
                    result.periods_created.append((year, month))
                else:
                    result.skipped += 1

        logger.info(
            "dues.extended",
            member_id=str(member.id),
            created=result.created,
            skipped=result.skipped,
        )
        return Outcome.ok(result)

    def backfill_arrears(self, as_of: date | None = None) -> Outcome[BackfillResultDTO]:
        """Crea las cuotas faltantes desde la inscripción de cada socio activo hasta `as_of`."""
        end = period_of(as_of or self.clock.today())
        result = BackfillResultDTO()
        for member in self.member_repo.list_active():
            result.members_processed += 1
            try:
                with transaction.atomic():
                    for year, month in periods_between(member.enrollment_period, end):
                        outcome = self._create_for(member, year, month, source="backfill")
                        if outcome.is_ok:
                            result.created += 1
                        else:
                            result.skipped += 1
            except DatabaseError as exc:
                logger.error("dues.backfill_member_failed", member_id=str(member.id), error=str(exc))
                result.errors.append(MemberErrorDTO(member_id=str(member.id), message=str(exc)))

        logger.info(
            "dues.backfilled",
            members=result.members_processed,
            created=result.created,
            skipped=result.skipped,
        )
        return Outcome.ok(result)

    # ─────────────────────────  pagos  ────────────────────────── #

    def mark_paid(  # noqa: PLR0913
        self,
        due_id,
        payment_method: str,
        paid_at: date | None = None,
        receipt_url: str | None = None,
        notes: str | None = None,
    ) -> Outcome[DueEntity]:
        method = str(payment_method or "")
        if method not in PaymentMethod.values():
            return Outcome.invalid(
                f"Método de pago inválido: {payment_method!r} (válidos: {', '.join(PaymentMethod.values())})"
            )
        today = self.clock.today()
        try:
            paid_at = _payment_date(paid_at, today)
        except ValueError as exc:
            return Outcome.invalid(f"Fecha de pago inválida: {exc}")
        if paid_at > today:
            return Outcome.invalid(f"La fecha de pago {paid_at.isoformat()} es posterior a hoy")

        # el libro de pagos se escribe en la misma transacción
        with transaction.atomic():
            due = self.due_repo.find_by_id(due_id, for_update=True)
            if due is None:
                return Outcome.not_found(f"Cuota no encontrada: {due_id}")
            if due.paid:
                return Outcome.already_paid(f"La cuota {due_id} ya está pagada", due)

            due.paid = True
            due.paid_at = paid_at
            due.payment_method = method
            if receipt_url is not None:
                due.receipt_url = receipt_url
            if notes is not None:
                due.notes = notes
            due = self.due_repo.save_payment(due)

            self.dispatcher.dispatch(
                DuePaidEvent(
                    due_id=due.id,
                    member_id=due.member_id,
                    amount=due.amount,
                    payment_method=method,
                    paid_at=paid_at,
                    receipt_url=due.receipt_url,
                )
            )

        DUES_PAYMENTS.labels(action="mark", method=method).inc()
        logger.info("due.paid", due_id=str(due.id), method=method, paid_at=paid_at.isoformat())
        return Outcome.ok(due)

    def unmark_paid(self, due_id) -> Outcome[DueEntity]:
        """Revierte un pago. Sobre una cuota impaga es un no-op exitoso."""
        with transaction.atomic():
            due = self.due_repo.find_by_id(due_id, for_update=True)
            if due is None:
                return Outcome.not_found(f"Cuota no encontrada: {due_id}")
            if not due.paid:
                return Outcome.ok(due)

            previous_method = due.payment_method
            due.paid = False
            due.paid_at = None
            due.payment_method = None
            due = self.due_repo.save_payment(due)
            self.dispatcher.dispatch(DuePaymentRevertedEvent(due_id=due.id, member_id=due.member_id))

        DUES_PAYMENTS.labels(action="unmark", method=previous_method).inc()
        logger.info("due.payment_reverted", due_id=str(due.id), previous_method=previous_method)
        return Outcome.ok(due)

    # ─────────────────────────  eliminación  ────────────────────────── #

    def delete_due(self, due_id) -> Outcome[DueEntity]:
        with transaction.atomic():
            due = self.due_repo.find_by_id(due_id, for_update=True)
            if due is None:
                return Outcome.not_found(f"Cuota no encontrada: {due_id}")
            if due.paid:
                return Outcome.forbidden(
                    f"No se puede eliminar la cuota {due_id}: está pagada", due
                )
            self.due_repo.delete(due.id)

        self.dispatcher.dispatch(
            DueDeletedEvent(due_id=due.id, member_id=due.member_id, year=due.year, month=due.month)
        )
        logger.info("due.deleted", due_id=str(due.id), period=f"{due.year}-{due.month:02d}")
        return Outcome.ok(due)

    # ─────────────────────────  lectura  ────────────────────────── #

    def classify(self, due: DueEntity, today: date | None = None) -> DueStatus:
        return classify(due, today or self.clock.today())


