"""Fábricas de datos y armado de servicios con reloj fijo para los tests."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from dues_billing.adapters.listeners.payment_ledger import PaymentLedgerListener
from dues_billing.adapters.repositories.due_repo_impl import DueRepoImpl
from dues_billing.adapters.repositories.generation_run_repo_impl import GenerationRunRepoImpl
from dues_billing.adapters.repositories.member_repo_impl import MemberRepoImpl
from dues_billing.adapters.repositories.payment_record_repo_impl import PaymentRecordRepoImpl
from dues_billing.core.application.services.import_layout import ImportLayout
from dues_billing.core.application.services.lifecycle_service import DuesLifecycleService
from dues_billing.core.application.services.member_status_service import MemberStatusService
from dues_billing.core.application.services.reconciliation_service import ReconciliationService
from dues_billing.core.domain.events.events import DuePaidEvent, DuePaymentRevertedEvent
from dues_billing.core.domain.services.calendar import FixedClock
from dues_billing.core.domain.services.event_dispatcher import EventDispatcher
from plugins.django_interface.models import Due, Member

DEFAULT_AMOUNT = Decimal("6500")

_seq = 0


def make_member(**overrides) -> Member:
    global _seq  # noqa: PLW0603
    _seq += 1
    data = dict(
        fiscal_id=f"{10000000 + _seq}-{_seq % 10}",
        first_name="Socio",
        last_name=f"Prueba {_seq}",
        monthly_due_amount=Decimal("5000"),
        enrollment_date=date(2024, 1, 15),
        active=True,
    )
    data.update(overrides)
    return Member.objects.create(**data)


def make_due(member: Member, year: int, month: int, **overrides) -> Due:
    data = dict(member=member, year=year, month=month, amount=member.monthly_due_amount or DEFAULT_AMOUNT)
    data.update(overrides)
    return Due.objects.create(**data)


@dataclass
class Services:
    clock: FixedClock
    dispatcher: EventDispatcher
    due_repo: DueRepoImpl
    member_repo: MemberRepoImpl
    payment_repo: PaymentRecordRepoImpl
    lifecycle: DuesLifecycleService
    reconciliation: ReconciliationService
    member_status: MemberStatusService


def build_services(today: date = date(2025, 3, 10), generation_repo=None) -> Services:
    clock = FixedClock(today)
    dispatcher = EventDispatcher()
    due_repo = DueRepoImpl()
    member_repo = MemberRepoImpl(default_amount=DEFAULT_AMOUNT)
    payment_repo = PaymentRecordRepoImpl()

    ledger = PaymentLedgerListener(payment_repo)
    dispatcher.subscribe(DuePaidEvent, ledger.on_paid, propagate=True)
    dispatcher.subscribe(DuePaymentRevertedEvent, ledger.on_reverted, propagate=True)

    lifecycle = DuesLifecycleService(
        due_repo=due_repo,
        member_repo=member_repo,
        generation_repo=generation_repo or GenerationRunRepoImpl(),
        dispatcher=dispatcher,
        clock=clock,
        default_amount=DEFAULT_AMOUNT,
    )
    reconciliation = ReconciliationService(
        lifecycle=lifecycle,
        due_repo=due_repo,
        member_repo=member_repo,
        layout=ImportLayout(),
        clock=clock,
    )
    return Services(
        clock=clock,
        dispatcher=dispatcher,
        due_repo=due_repo,
        member_repo=member_repo,
        payment_repo=payment_repo,
        lifecycle=lifecycle,
        reconciliation=reconciliation,
        member_status=MemberStatusService(member_repo, due_repo, clock),
    )
