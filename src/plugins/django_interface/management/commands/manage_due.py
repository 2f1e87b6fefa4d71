from datetime import date
from decimal import Decimal

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from dues_billing.adapters.config.composition_root import setup_di_container_from_settings
from dues_billing.core.application.commands.due_commands import (
    CreateDueCommand,
    DeleteDueCommand,
    MarkDuePaidCommand,
    UnmarkDuePaidCommand,
)
from dues_billing.core.domain.entities.due_entity import PaymentMethod
from dues_billing.core.domain.events.exceptions import DuesError

_REQUIRED = {
    "create": ("member_id", "year", "month"),
    "pay": ("due_id", "method"),
    "unpay": ("due_id",),
    "delete": ("due_id",),
}


class Command(BaseCommand):
    help = "Operaciones administrativas sobre una cuota: create, pay, unpay, delete."

    def add_arguments(self, parser):
        parser.add_argument("action", choices=sorted(_REQUIRED))
        parser.add_argument("--due-id", help="UUID de la cuota (Due.id)")
        parser.add_argument("--member-id", help="UUID del socio (Member.id)")
        parser.add_argument("--year", type=int)
        parser.add_argument("--month", type=int)
        parser.add_argument("--amount", type=Decimal)
        parser.add_argument(
            "--allow-before-enrollment",
            action="store_true",
            help="Permite crear una cuota anterior a la inscripción",
        )
        parser.add_argument("--method", choices=PaymentMethod.values())
        parser.add_argument("--paid-at", type=date.fromisoformat, help="YYYY-MM-DD (por defecto, hoy)")
        parser.add_argument("--receipt-url")
        parser.add_argument("--notes")

    def handle(self, *args, **opts):
        action = opts["action"]
        missing = [f"--{k.replace('_', '-')}" for k in _REQUIRED[action] if opts.get(k) is None]
        if missing:
            raise CommandError(f"'{action}' requiere: {', '.join(missing)}")

        bus = setup_di_container_from_settings(settings).command_bus()
        try:
            due = bus.dispatch(self._build(action, opts)).unwrap()
        except DuesError as exc:
            raise CommandError(str(exc)) from exc

        state = "pagada" if due.paid else "impaga"
        self.stdout.write(
            self.style.SUCCESS(f"{action}: cuota {due.id} {due.month:02d}/{due.year} ({state})")
        )

    def _build(self, action: str, opts: dict):
        if action == "create":
            return CreateDueCommand(
                member_id=opts["member_id"],
                year=opts["year"],
                month=opts["month"],
                amount=opts["amount"],
                allow_before_enrollment=opts["allow_before_enrollment"],
                notes=opts["notes"],
            )
        if action == "pay":
            return MarkDuePaidCommand(
                due_id=opts["due_id"],
                payment_method=opts["method"],
                paid_at=opts["paid_at"],
                receipt_url=opts["receipt_url"],
                notes=opts["notes"],
            )
        if action == "unpay":
            return UnmarkDuePaidCommand(due_id=opts["due_id"])
        return DeleteDueCommand(due_id=opts["due_id"])
