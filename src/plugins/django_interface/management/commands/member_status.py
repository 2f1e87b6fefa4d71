from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from dues_billing.adapters.config.composition_root import setup_di_container_from_settings
from dues_billing.core.application.dtos.member_status_dto import MemberStatusTag
from dues_billing.core.application.queries.member_status_queries import (
    ListMemberStatusesQuery,
    SummarizeMemberQuery,
)
from dues_billing.core.domain.events.exceptions import DuesError


class Command(BaseCommand):
    help = "Muestra el estado de cuotas de un socio o de todos los socios activos."

    def add_arguments(self, parser):
        parser.add_argument("--member-id", help="UUID del socio; si se omite, lista todos")
        parser.add_argument("--status", choices=[t.value for t in MemberStatusTag])
        parser.add_argument("--as-of", type=date.fromisoformat, help="YYYY-MM-DD (por defecto, hoy)")

    def handle(self, *args, **opts):
        qb = setup_di_container_from_settings(settings).query_bus()

        if opts["member_id"]:
            try:
                summaries = [
                    qb.dispatch(SummarizeMemberQuery(member_id=opts["member_id"], as_of=opts["as_of"])).unwrap()
                ]
            except DuesError as exc:
                raise CommandError(str(exc)) from exc
        else:
            summaries = qb.dispatch(ListMemberStatusesQuery(as_of=opts["as_of"], status=opts["status"]))

        for s in summaries:
            last = s.last_paid_at.isoformat() if s.last_paid_at else "-"
            self.stdout.write(
                f"{s.fiscal_id:<12} {s.status.value:<11} pagadas={s.paid} vencidas={s.overdue} "
                f"pendientes={s.pending} deuda={s.overdue_amount} último_pago={last}  {s.full_name}"
            )
        self.stdout.write(self.style.SUCCESS(f"Socios: {len(summaries)}"))
