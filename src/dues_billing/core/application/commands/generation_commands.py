from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from dues_billing.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class GenerateDuesForPeriodCommand(CommandDTO):
    year: int
    month: int
    overwrite: bool = False

@dataclass(frozen=True)
class GenerateDuesForYearCommand(CommandDTO):
    year: int
    overwrite: bool = False

@dataclass(frozen=True)
class AutoExtendDuesCommand(CommandDTO):
    member_id: str
    reference_date: date | None = None

@dataclass(frozen=True)
class BackfillArrearsCommand(CommandDTO):
    as_of: date | None = None
