from datetime import date

from django.conf import settings
from django.core.management.base import BaseCommand

from dues_billing.adapters.config.composition_root import setup_di_container_from_settings
from dues_billing.core.application.commands.generation_commands import BackfillArrearsCommand


class Command(BaseCommand):
    help = "Crea todas las cuotas faltantes desde la inscripción de cada socio activo."

    def add_arguments(self, parser):
        parser.add_argument(
            "--as-of",
            type=date.fromisoformat,
            help="Fecha de corte YYYY-MM-DD (por defecto, hoy)",
        )

    def handle(self, *args, **opts):
        bus = setup_di_container_from_settings(settings).command_bus()
        result = bus.dispatch(BackfillArrearsCommand(as_of=opts["as_of"])).unwrap()

        for err in result.errors:
            self.stderr.write(self.style.WARNING(f"socio {err.member_id}: {err.message}"))
        self.stdout.write(
            self.style.SUCCESS(
                f"Socios={result.members_processed} creadas={result.created} omitidas={result.skipped}"
            )
        )
