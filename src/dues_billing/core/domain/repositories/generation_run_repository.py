from abc import ABC, abstractmethod
from decimal import Decimal

from dues_billing.core.domain.entities.generation_run_entity import GenerationRunEntity


class GenerationRunRepository(ABC):
    @abstractmethod
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
        """Registra (o reemplaza) la última generación masiva del período."""
        ...

    @abstractmethod
    def find(self, year: int, month: int) -> GenerationRunEntity | None:
        ...
