import pandas as pd
from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from dues_billing.adapters.config.composition_root import setup_di_container_from_settings
from dues_billing.core.application.commands.reconciliation_commands import ReconcilePaymentsCommand


class Command(BaseCommand):
    help = "Concilia una planilla CSV de pagos (RUT + columnas <mes>_<año>)."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Ruta del archivo CSV")
        parser.add_argument("--sep", default=",", help="Separador de columnas")
        parser.add_argument("--encoding", default="utf-8")

    def handle(self, *args, **opts):
        try:
            df = pd.read_csv(
                opts["path"],
                sep=opts["sep"],
                encoding=opts["encoding"],
                dtype=str,
                keep_default_na=False,
            )
        except (OSError, ValueError) as exc:
            raise CommandError(f"No se pudo leer {opts['path']}: {exc}") from exc

        df.columns = [str(c).strip().lower() for c in df.columns]
        rows = df.to_dict(orient="records")

        bus = setup_di_container_from_settings(settings).command_bus()
        report = bus.dispatch(ReconcilePaymentsCommand(rows=rows))

        for err in report.errors:
            self.stderr.write(self.style.WARNING(f"Fila {err.row}: {err.message}"))
        self.stdout.write(
            self.style.SUCCESS(
                f"Filas={report.total_rows} exitosas={report.successful_rows} "
                f"creadas={report.created} actualizadas={report.updated} "
                f"omitidas={report.skipped} programadas={report.scheduled} "
                f"errores={len(report.errors)}"
            )
        )
