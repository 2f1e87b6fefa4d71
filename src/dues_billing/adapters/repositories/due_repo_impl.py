from datetime import date
from decimal import Decimal
from typing import Any

import structlog
from django.core.exceptions import ValidationError
from django.db import IntegrityError, transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone

from dues_billing.core.application.cqrs import PagedResult
from dues_billing.core.domain.entities.due_entity import DueEntity
from dues_billing.core.domain.repositories.due_repository import DueRepository
from dues_billing.core.domain.services.calendar import DUE_DAY
from plugins.django_interface.models import Due as DueModel

logger = structlog.get_logger(__name__)

_ZERO = Decimal("0")


def _past_due_q(today: date) -> Q:
    """Períodos cuyo día de vencimiento ya pasó respecto de `today`."""
    q = Q(year__lt=today.year) | Q(year=today.year, month__lt=today.month)
    if today.day > DUE_DAY:
        q |= Q(year=today.year, month=today.month)
    return q


def overdue_q(today: date) -> Q:
    return Q(paid=False) & _past_due_q(today)


def pending_q(today: date) -> Q:
    return Q(paid=False) & ~_past_due_q(today)


class DueRepoImpl(DueRepository):
    """Implementación Django del DueRepository."""

    # ────────────────────────────────── #
    # Alta
    # ────────────────────────────────── #
    def create_if_absent(self, due: DueEntity) -> tuple[DueEntity, bool]:
        lookup = dict(member_id=due.member_id, year=due.year, month=due.month)
        try:
            with transaction.atomic():
                obj, created = DueModel.objects.get_or_create(
                    **lookup,
                    defaults=dict(id=due.id, amount=due.amount, notes=due.notes),
                )
        except IntegrityError:
            # carrera: otra transacción insertó la misma llave
            obj, created = DueModel.objects.get(**lookup), False
            logger.info("due.create_race_resolved", **{k: str(v) for k, v in lookup.items()})
        return DueEntity.from_model(obj), created

    # ────────────────────────────────── #
    # Consultas
    # ────────────────────────────────── #
    def find_by_id(self, due_id: str, *, for_update: bool = False) -> DueEntity | None:
        qs = DueModel.objects.select_for_update() if for_update else DueModel.objects
        try:
            return DueEntity.from_model(qs.get(id=due_id))
        except (DueModel.DoesNotExist, ValidationError, ValueError):
            return None

    def find_by_period(self, member_id: str, year: int, month: int) -> DueEntity | None:
        obj = DueModel.objects.filter(member_id=member_id, year=year, month=month).first()
        return DueEntity.from_model(obj) if obj else None

    def list_by_member(self, member_id: str, year: int | None = None) -> list[DueEntity]:
        qs = DueModel.objects.filter(member_id=member_id)
        if year is not None:
            qs = qs.filter(year=year)
        return [DueEntity.from_model(obj) for obj in qs.order_by("year", "month")]

    def _filtered(self, filtros: dict[str, Any] | None, today: date):
        filtros = dict(filtros or {})
        status = filtros.pop("status", None)
        qs = DueModel.objects.filter(
            **{k: v for k, v in filtros.items() if k in ("member_id", "year", "month") and v is not None}
        )
        if status == "paid":
            qs = qs.filter(paid=True)
        elif status == "pending":
            qs = qs.filter(pending_q(today))
        elif status == "overdue":
            qs = qs.filter(overdue_q(today))
        return qs

    def list(
        self, filtros: dict[str, Any] | None, page: int, page_size: int, *, today: date
    ) -> PagedResult[DueEntity]:
        """
        lista con paginación genérica.

        Ejemplo de `filtros`:
        ```
        {"year": 2025, "month": 3, "status": "overdue"}
        ```
        """
        qs = self._filtered(filtros, today)
        total = qs.count()
        offset = (page - 1) * page_size
        objs_page = qs.order_by("-year", "-month", "member__last_name")[offset : offset + page_size]
        items = [DueEntity.from_model(obj) for obj in objs_page]
        return PagedResult(items=items, total=total, page=page, page_size=page_size)

    def stats(self, filtros: dict[str, Any] | None, *, today: date) -> dict:
        overdue = overdue_q(today)
        pending = pending_q(today)
        agg = self._filtered(filtros, today).aggregate(
            total=Count("id"),
            paid=Count("id", filter=Q(paid=True)),
            pending=Count("id", filter=pending),
            overdue=Count("id", filter=overdue),
            amount_total=Sum("amount"),
            amount_paid=Sum("amount", filter=Q(paid=True)),
            amount_pending=Sum("amount", filter=Q(paid=False)),
        )
        for key in ("amount_total", "amount_paid", "amount_pending"):
            agg[key] = agg[key] or _ZERO
        return agg

    # ────────────────────────────────── #
    # Escritura
    # ────────────────────────────────── #
    def save_payment(self, due: DueEntity) -> DueEntity:
        DueModel.objects.filter(id=due.id).update(
            paid=due.paid,
            paid_at=due.paid_at,
            payment_method=due.payment_method,
            receipt_url=due.receipt_url,
            notes=due.notes,
            updated_at=timezone.now(),
        )
        return DueEntity.from_model(DueModel.objects.get(id=due.id))

    def update_amount(self, due_id: str, amount: Decimal) -> None:
        DueModel.objects.filter(id=due_id, paid=False).update(amount=amount, updated_at=timezone.now())

    def delete(self, due_id: str) -> None:
        DueModel.objects.filter(id=due_id).delete()
