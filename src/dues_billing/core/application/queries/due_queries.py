from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dues_billing.core.application.cqrs import PaginatedQueryDTO, QueryDTO


@dataclass(frozen=True)
class GetDueQuery(QueryDTO):
    due_id: str

@dataclass(frozen=True)
class ListDuesQuery(PaginatedQueryDTO[dict[str, Any]]):
    """filtros: member_id, year, month, status (paid|pending|overdue)"""
    pass

@dataclass(frozen=True)
class DueStatsQuery(QueryDTO):
    filtros: dict[str, Any] = field(default_factory=dict)
