from __future__ import annotations

from dues_billing.core.application.cqrs import QueryHandler
from dues_billing.core.application.dtos.member_status_dto import MemberSummaryDTO
from dues_billing.core.application.dtos.outcome import Outcome
from dues_billing.core.application.services.member_status_service import MemberStatusService

from ..queries.member_status_queries import ListMemberStatusesQuery, SummarizeMemberQuery


class SummarizeMemberHandler(QueryHandler[SummarizeMemberQuery, Outcome[MemberSummaryDTO]]):
    def __init__(self, service: MemberStatusService):
        self.service = service

    def handle(self, q: SummarizeMemberQuery) -> Outcome[MemberSummaryDTO]:
        return self.service.summarize_member(q.member_id, q.as_of)


class ListMemberStatusesHandler(QueryHandler[ListMemberStatusesQuery, list[MemberSummaryDTO]]):
    def __init__(self, service: MemberStatusService):
        self.service = service

    def handle(self, q: ListMemberStatusesQuery) -> list[MemberSummaryDTO]:
        return self.service.list_statuses(q.as_of, q.status)
