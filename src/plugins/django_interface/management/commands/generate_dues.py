from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from dues_billing.adapters.config.composition_root import setup_di_container_from_settings
from dues_billing.core.application.commands.generation_commands import (
    GenerateDuesForPeriodCommand,
    GenerateDuesForYearCommand,
)
from dues_billing.core.domain.events.exceptions import DuesError


class Command(BaseCommand):
    help = "Genera las cuotas de un mes (o de un año completo) para todos los socios activos."

    def add_arguments(self, parser):
        parser.add_argument("--year", required=True, type=int)
        parser.add_argument("--month", type=int, help="Si se omite, genera los 12 meses del año")
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Actualiza el monto de las cuotas impagas ya existentes",
        )

    def handle(self, *args, **opts):
        bus = setup_di_container_from_settings(settings).command_bus()

        if opts["month"] is None:
            cmd = GenerateDuesForYearCommand(year=opts["year"], overwrite=opts["overwrite"])
        else:
            cmd = GenerateDuesForPeriodCommand(
                year=opts["year"], month=opts["month"], overwrite=opts["overwrite"]
            )

        try:
            result = bus.dispatch(cmd).unwrap()
        except DuesError as exc:
            raise CommandError(str(exc)) from exc

        if opts["month"] is None:
            for month in result.months:
                self._write_period(month)
            for failed in result.failed_months:
                self.stderr.write(self.style.ERROR(f"Mes {failed.month:02d}: {failed.message}"))
            self.stdout.write(
                self.style.SUCCESS(
                    f"Año {result.year}: creadas={result.created} "
                    f"actualizadas={result.updated} omitidas={result.skipped}"
                )
            )
        else:
            self._write_period(result)

    def _write_period(self, r):
        self.stdout.write(
            self.style.SUCCESS(
                f"{r.month:02d}/{r.year}: creadas={r.created} actualizadas={r.updated} "
                f"omitidas={r.skipped} no_inscritos={r.not_enrolled} errores={len(r.errors)}"
            )
        )
        for err in r.errors:
            self.stderr.write(self.style.WARNING(f"  socio {err.member_id}: {err.message}"))
