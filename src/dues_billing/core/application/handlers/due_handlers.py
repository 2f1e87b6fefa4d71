from __future__ import annotations

from dues_billing.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from dues_billing.core.application.dtos.due_stats_dto import DueStatsDTO
from dues_billing.core.application.dtos.outcome import Outcome
from dues_billing.core.application.services.lifecycle_service import DuesLifecycleService
from dues_billing.core.domain.entities.due_entity import DueEntity
from dues_billing.core.domain.repositories.due_repository import DueRepository
from dues_billing.core.domain.services.calendar import Clock

from ..commands.due_commands import (
    CreateDueCommand,
    DeleteDueCommand,
    MarkDuePaidCommand,
    UnmarkDuePaidCommand,
)
from ..queries.due_queries import DueStatsQuery, GetDueQuery, ListDuesQuery


# ╭──────────────────────────────────────────────╮
# │ Comandos                                    │
# ╰──────────────────────────────────────────────╯
class CreateDueHandler(CommandHandler[CreateDueCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: CreateDueCommand) -> Outcome[DueEntity]:
        return self.lifecycle.create_due(
            cmd.member_id,
            cmd.year,
            cmd.month,
            cmd.amount,
            allow_before_enrollment=cmd.allow_before_enrollment,
            notes=cmd.notes,
        )


class MarkDuePaidHandler(CommandHandler[MarkDuePaidCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: MarkDuePaidCommand) -> Outcome[DueEntity]:
        return self.lifecycle.mark_paid(
            cmd.due_id,
            cmd.payment_method,
            paid_at=cmd.paid_at,
            receipt_url=cmd.receipt_url,
            notes=cmd.notes,
        )


class UnmarkDuePaidHandler(CommandHandler[UnmarkDuePaidCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: UnmarkDuePaidCommand) -> Outcome[DueEntity]:
        return self.lifecycle.unmark_paid(cmd.due_id)


class DeleteDueHandler(CommandHandler[DeleteDueCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: DeleteDueCommand) -> Outcome[DueEntity]:
        return self.lifecycle.delete_due(cmd.due_id)


# ╭──────────────────────────────────────────────╮
# │ Consultas                                   │
# ╰──────────────────────────────────────────────╯
class GetDueHandler(QueryHandler[GetDueQuery, DueEntity | None]):
    def __init__(self, repo: DueRepository):
        self.repo = repo

    def handle(self, q: GetDueQuery) -> DueEntity | None:
        return self.repo.find_by_id(q.due_id)


class ListDuesHandler(QueryHandler[ListDuesQuery, PagedResult[DueEntity]]):
    def __init__(self, repo: DueRepository, clock: Clock):
        self.repo = repo
        self.clock = clock

    def handle(self, q: ListDuesQuery) -> PagedResult[DueEntity]:
        return self.repo.list(q.filtros, q.page, q.page_size, today=self.clock.today())


class DueStatsHandler(QueryHandler[DueStatsQuery, DueStatsDTO]):
    def __init__(self, repo: DueRepository, clock: Clock):
        self.repo = repo
        self.clock = clock

    def handle(self, q: DueStatsQuery) -> DueStatsDTO:
        return DueStatsDTO(**self.repo.stats(q.filtros, today=self.clock.today()))
