from abc import ABC, abstractmethod

from dues_billing.core.domain.entities.member_entity import MemberEntity


class MemberRepository(ABC):
    """
    Registro de socios visto desde el motor de cuotas: solo lectura.
    """

    @abstractmethod
    def find_by_id(self, member_id: str) -> MemberEntity | None:
        ...

    @abstractmethod
    def find_by_fiscal_id(self, fiscal_id: str) -> MemberEntity | None:
        """Busca por RUT; normaliza la entrada antes de comparar."""
        ...

    @abstractmethod
    def list_active(self) -> list[MemberEntity]:
        ...
