from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dues_billing.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class SummarizeMemberQuery(QueryDTO):
    member_id: str
    as_of: date | None = None

@dataclass(frozen=True)
class ListMemberStatusesQuery(QueryDTO):
    as_of: date | None = None
    status: str | None = None
