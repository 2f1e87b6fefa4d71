from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from dues_billing.adapters.config.composition_root import setup_di_container_from_settings
from dues_billing.core.application.commands.generation_commands import AutoExtendDuesCommand
from dues_billing.core.domain.events.exceptions import DuesError


class Command(BaseCommand):
    help = "Asegura las cuotas de los próximos 12 meses de un socio."

    def add_arguments(self, parser):
        parser.add_argument("--member-id", required=True, help="UUID del socio (Member.id)")
        parser.add_argument(
            "--from",
            dest="reference_date",
            type=date.fromisoformat,
            help="Mes inicial como fecha YYYY-MM-DD (por defecto, hoy)",
        )

    def handle(self, *args, **opts):
        bus = setup_di_container_from_settings(settings).command_bus()
        try:
            result = bus.dispatch(
                AutoExtendDuesCommand(member_id=opts["member_id"], reference_date=opts["reference_date"])
            ).unwrap()
        except DuesError as exc:
            raise CommandError(str(exc)) from exc

        periods = ", ".join(f"{m:02d}/{y}" for y, m in result.periods_created) or "-"
        self.stdout.write(
            self.style.SUCCESS(f"Creadas={result.created} omitidas={result.skipped} períodos: {periods}")
        )
