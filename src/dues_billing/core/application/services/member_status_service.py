from __future__ import annotations

import uuid
from datetime import date
from decimal import Decimal

import structlog

from dues_billing.core.application.dtos.member_status_dto import (
    MemberStatusTag,
    MemberSummaryDTO,
)
from dues_billing.core.application.dtos.outcome import Outcome
from dues_billing.core.application.services.due_status_classifier import classify
from dues_billing.core.domain.entities.due_entity import DueEntity, DueStatus
from dues_billing.core.domain.entities.member_entity import MemberEntity
from dues_billing.core.domain.repositories.due_repository import DueRepository
from dues_billing.core.domain.repositories.member_repository import MemberRepository
from dues_billing.core.domain.services.calendar import Clock

logger = structlog.get_logger(__name__)

_ORDER = {
    MemberStatusTag.NEVER_PAID: 0,
    MemberStatusTag.DELINQUENT: 1,
    MemberStatusTag.CURRENT: 2,
}


def status_tag(paid: int, overdue: int) -> MemberStatusTag:
    """
    NEVER_PAID: hay vencidas y ninguna pagada.
    DELINQUENT: hay vencidas y al menos una pagada.
    CURRENT: sin vencidas (incluye socios sin cuotas).
    """
    if overdue == 0:
        return MemberStatusTag.CURRENT
    return MemberStatusTag.NEVER_PAID if paid == 0 else MemberStatusTag.DELINQUENT


class MemberStatusService:
    """Resumen de cuotas por socio. Solo lectura."""

    def __init__(self, member_repo: MemberRepository, due_repo: DueRepository, clock: Clock):
        self.member_repo = member_repo
        self.due_repo = due_repo
        self.clock = clock

    def summarize_member(self, member_id, as_of: date | None = None) -> Outcome[MemberSummaryDTO]:
        try:
            uuid.UUID(str(member_id))
        except ValueError:
            return Outcome.invalid(f"Identificador de socio inválido: {member_id!r}")
        member = self.member_repo.find_by_id(member_id)
        if member is None:
            return Outcome.not_found(f"Socio no encontrado: {member_id}")
        dues = self.due_repo.list_by_member(member.id)
        return Outcome.ok(self._summarize(member, dues, as_of or self.clock.today()))

    def list_statuses(
        self, as_of: date | None = None, status: MemberStatusTag | str | None = None
    ) -> list[MemberSummaryDTO]:
        today = as_of or self.clock.today()
        wanted = MemberStatusTag(status) if status else None

        summaries = []
        for member in self.member_repo.list_active():
            summary = self._summarize(member, self.due_repo.list_by_member(member.id), today)
            if wanted is None or summary.status is wanted:
                summaries.append(summary)

        summaries.sort(key=lambda s: (_ORDER[s.status], -s.overdue, s.full_name))
        logger.debug("member_status.listed", total=len(summaries), status=wanted)
        return summaries

    def _summarize(self, member: MemberEntity, dues: list[DueEntity], today: date) -> MemberSummaryDTO:
        paid = overdue = pending = 0
        overdue_amount = Decimal("0")
        last_paid_at: date | None = None

        for due in dues:
            state = classify(due, today)
            if state is DueStatus.PAID:
                paid += 1
                if due.paid_at and (last_paid_at is None or due.paid_at > last_paid_at):
                    last_paid_at = due.paid_at
            elif state is DueStatus.OVERDUE:
                overdue += 1
                overdue_amount += due.amount
            else:
                pending += 1

        return MemberSummaryDTO(
            member_id=str(member.id),
            fiscal_id=member.fiscal_id,
            full_name=member.full_name,
            total=len(dues),
            paid=paid,
            overdue=overdue,
            pending=pending,
            overdue_amount=overdue_amount,
            last_paid_at=last_paid_at,
            status=status_tag(paid, overdue),
        )
