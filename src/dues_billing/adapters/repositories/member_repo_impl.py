from decimal import Decimal

from django.core.exceptions import ValidationError

from dues_billing.core.domain.entities.member_entity import MemberEntity
from dues_billing.core.domain.repositories.member_repository import MemberRepository
from dues_billing.core.utils.fiscal_id import normalize_fiscal_id
from plugins.django_interface.models import Member as MemberModel


class MemberRepoImpl(MemberRepository):
    """
    Lectura del registro de socios. Un socio sin valor de cuota propio
    se informa con el valor por defecto configurado.
    """

    def __init__(self, default_amount: Decimal):
        self.default_amount = Decimal(default_amount)

    def _to_entity(self, m: MemberModel) -> MemberEntity:
        amount = m.monthly_due_amount if m.monthly_due_amount is not None else self.default_amount
        return MemberEntity(
            id=m.id,
            fiscal_id=m.fiscal_id,
            monthly_due_amount=amount,
            enrollment_date=m.enrollment_date,
            active=m.active,
            first_name=m.first_name,
            last_name=m.last_name,
        )

    def find_by_id(self, member_id: str) -> MemberEntity | None:
        try:
            return self._to_entity(MemberModel.objects.get(id=member_id))
        except (MemberModel.DoesNotExist, ValidationError, ValueError):
            return None

    def find_by_fiscal_id(self, fiscal_id: str) -> MemberEntity | None:
        normalized = normalize_fiscal_id(fiscal_id)
        if not normalized:
            return None
        m = MemberModel.objects.filter(fiscal_id=normalized).first()
        return self._to_entity(m) if m else None

    def list_active(self) -> list[MemberEntity]:
        return [self._to_entity(m) for m in MemberModel.objects.filter(active=True)]
