from decimal import Decimal

from dues_billing.core.domain.entities.generation_run_entity import GenerationRunEntity
from dues_billing.core.domain.repositories.generation_run_repository import (
    GenerationRunRepository,
)
from plugins.django_interface.models import DuesGenerationRun as GenerationRunModel


class GenerationRunRepoImpl(GenerationRunRepository):
    def record(
        self,
        *,
        year: int,
        month: int,
        default_amount: Decimal,
        created: int,
        updated: int,
        skipped: int,
        overwrite: bool,
    ) -> GenerationRunEntity:
        obj, _ = GenerationRunModel.objects.update_or_create(
            year=year,
            month=month,
            defaults=dict(
                default_amount=default_amount,
                created=created,
                updated=updated,
                skipped=skipped,
                overwrite=overwrite,
            ),
        )
        return GenerationRunEntity.from_model(obj)

    def find(self, year: int, month: int) -> GenerationRunEntity | None:
        obj = GenerationRunModel.objects.filter(year=year, month=month).first()
        return GenerationRunEntity.from_model(obj) if obj else None
