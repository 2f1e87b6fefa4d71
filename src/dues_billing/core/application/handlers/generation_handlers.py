from __future__ import annotations

from dues_billing.core.application.cqrs import CommandHandler
from dues_billing.core.application.dtos.generation_dto import (
    BackfillResultDTO,
    ExtensionResultDTO,
    GenerationResultDTO,
    YearGenerationResultDTO,
)
from dues_billing.core.application.dtos.outcome import Outcome
from dues_billing.core.application.services.lifecycle_service import DuesLifecycleService

from ..commands.generation_commands import (
    AutoExtendDuesCommand,
    BackfillArrearsCommand,
    GenerateDuesForPeriodCommand,
    GenerateDuesForYearCommand,
)


class GenerateDuesForPeriodHandler(CommandHandler[GenerateDuesForPeriodCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: GenerateDuesForPeriodCommand) -> Outcome[GenerationResultDTO]:
        return self.lifecycle.generate_for_period(cmd.year, cmd.month, cmd.overwrite)


class GenerateDuesForYearHandler(CommandHandler[GenerateDuesForYearCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: GenerateDuesForYearCommand) -> Outcome[YearGenerationResultDTO]:
        return self.lifecycle.generate_for_year(cmd.year, cmd.overwrite)


class AutoExtendDuesHandler(CommandHandler[AutoExtendDuesCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: AutoExtendDuesCommand) -> Outcome[ExtensionResultDTO]:
        return self.lifecycle.auto_extend(cmd.member_id, cmd.reference_date)


class BackfillArrearsHandler(CommandHandler[BackfillArrearsCommand]):
    def __init__(self, lifecycle: DuesLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, cmd: BackfillArrearsCommand) -> Outcome[BackfillResultDTO]:
        return self.lifecycle.backfill_arrears(cmd.as_of)
