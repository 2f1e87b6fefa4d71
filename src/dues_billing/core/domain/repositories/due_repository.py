from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal

from dues_billing.core.application.cqrs import PagedResult
from dues_billing.core.domain.entities.due_entity import DueEntity


class DueRepository(ABC):
    @abstractmethod
    def create_if_absent(self, due: DueEntity) -> tuple[DueEntity, bool]:
        """
        Inserta la cuota salvo que ya exista una para (socio, año, mes).
        Retorna (cuota almacenada, creada?). La verificación y la inserción
        son un único paso protegido por la restricción de unicidad.
        """
        ...

    @abstractmethod
    def find_by_id(self, due_id: str, *, for_update: bool = False) -> DueEntity | None:
        """Recupera una cuota por ID, opcionalmente bloqueando la fila."""
        ...

    @abstractmethod
    def find_by_period(self, member_id: str, year: int, month: int) -> DueEntity | None:
        ...

    @abstractmethod
    def list_by_member(self, member_id: str, year: int | None = None) -> list[DueEntity]:
        """Cuotas del socio ordenadas por período."""
        ...

    @abstractmethod
    def list(self, filtros: dict, page: int, page_size: int, *, today: date) -> PagedResult[DueEntity]:
        """
        Lista paginada de cuotas.

        - filtros: member_id, year, month, status (paid|pending|overdue)
        - today: fecha de referencia para evaluar pending/overdue
        """
        ...

    @abstractmethod
    def stats(self, filtros: dict, *, today: date) -> dict:
        """Conteos y montos agregados (pagadas, pendientes, vencidas)."""
        ...

    @abstractmethod
    def save_payment(self, due: DueEntity) -> DueEntity:
        """Persiste solo los campos de pago de la cuota."""
        ...

    @abstractmethod
    def update_amount(self, due_id: str, amount: Decimal) -> None:
        ...

    @abstractmethod
    def delete(self, due_id: str) -> None:
        ...
