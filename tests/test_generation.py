"""Generación masiva, extensión automática y regularización de atrasos."""

from datetime import date
from decimal import Decimal

from django.test import TestCase

from dues_billing.adapters.repositories.generation_run_repo_impl import GenerationRunRepoImpl
from dues_billing.core.application.dtos.outcome import OutcomeKind
from plugins.django_interface.models import Due, DuesGenerationRun
from tests.helpers.factories import build_services, make_due, make_member


class _FailingMarchRunRepo(GenerationRunRepoImpl):
    def record(self, *, month, **kwargs):
        if month == 3:
            raise RuntimeError("fallo simulado en marzo")
        return super().record(month=month, **kwargs)


class GenerateForPeriodTests(TestCase):
    def setUp(self):
        self.svc = build_services(today=date(2025, 3, 10))
        self.ana = make_member(monthly_due_amount=Decimal("5000"))
        self.beto = make_member(monthly_due_amount=None)
        self.inactive = make_member(active=False)

    def test_creates_one_due_per_active_member(self):
        result = self.svc.lifecycle.generate_for_period(2025, 3).unwrap()

        self.assertEqual(result.created, 2)
        self.assertEqual(result.skipped, 0)
        self.assertFalse(Due.objects.filter(member=self.inactive).exists())
        self.assertEqual(Due.objects.get(member=self.beto).amount, Decimal("6500"))

    def test_is_idempotent_without_overwrite(self):
        self.svc.lifecycle.generate_for_period(2025, 3)
        before = list(Due.objects.order_by("id").values_list("id", "amount", "updated_at"))

        again = self.svc.lifecycle.generate_for_period(2025, 3).unwrap()

        self.assertEqual(again.created, 0)
        self.assertEqual(again.skipped, 2)
        after = list(Due.objects.order_by("id").values_list("id", "amount", "updated_at"))
        self.assertEqual(before, after)

    def test_overwrite_refreshes_unpaid_amounts_only(self):
        unpaid = make_due(self.ana, 2025, 3, amount=Decimal("4000"))
        paid = make_due(self.beto, 2025, 3, amount=Decimal("3000"))
        self.svc.lifecycle.mark_paid(paid.id, "cash", paid_at=date(2025, 3, 1))

        result = self.svc.lifecycle.generate_for_period(2025, 3, overwrite=True).unwrap()

        self.assertEqual(result.updated, 1)
        self.assertEqual(result.skipped, 1)
        unpaid.refresh_from_db()
        paid.refresh_from_db()
        self.assertEqual(unpaid.amount, Decimal("5000"))
        self.assertEqual(paid.amount, Decimal("3000"))

    def test_members_enrolled_later_are_counted_not_created(self):
        make_member(enrollment_date=date(2025, 5, 1))
        result = self.svc.lifecycle.generate_for_period(2025, 3).unwrap()
        self.assertEqual(result.created, 2)
        self.assertEqual(result.not_enrolled, 1)

    def test_records_generation_run(self):
        self.svc.lifecycle.generate_for_period(2025, 3)
        self.svc.lifecycle.generate_for_period(2025, 3)

        run = DuesGenerationRun.objects.get(year=2025, month=3)
        self.assertEqual(run.created, 0)
        self.assertEqual(run.skipped, 2)
        self.assertEqual(run.default_amount, Decimal("6500"))

    def test_invalid_month(self):
        out = self.svc.lifecycle.generate_for_period(2025, 13)
        self.assertFalse(out.is_ok)


class GenerateForYearTests(TestCase):
    def test_generates_twelve_months(self):
        svc = build_services(today=date(2025, 3, 10))
        member = make_member(enrollment_date=date(2024, 1, 1))

        result = svc.lifecycle.generate_for_year(2025).unwrap()

        self.assertEqual(len(result.months), 12)
        self.assertEqual(result.created, 12)
        self.assertEqual(Due.objects.filter(member=member, year=2025).count(), 12)

    def test_failing_month_does_not_abort_the_rest(self):
        svc = build_services(today=date(2025, 3, 10), generation_repo=_FailingMarchRunRepo())
        member = make_member(enrollment_date=date(2024, 1, 1))

        result = svc.lifecycle.generate_for_year(2025).unwrap()

        self.assertEqual([f.month for f in result.failed_months], [3])
        self.assertEqual(len(result.months), 11)
        months = set(Due.objects.filter(member=member, year=2025).values_list("month", flat=True))
        self.assertEqual(months, set(range(1, 13)) - {3})


class AutoExtendTests(TestCase):
    def setUp(self):
        self.svc = build_services(today=date(2025, 3, 10))
        self.member = make_member(enrollment_date=date(2024, 1, 1))

    def test_creates_twelve_months_from_reference(self):
        result = self.svc.lifecycle.auto_extend(self.member.id).unwrap()

        self.assertEqual(result.created, 12)
        self.assertEqual(result.periods_created[0], (2025, 3))
        self.assertEqual(result.periods_created[-1], (2026, 2))

    def test_creates_only_missing_months(self):
        make_due(self.member, 2025, 4)
        make_due(self.member, 2025, 12)

        result = self.svc.lifecycle.auto_extend(self.member.id, date(2025, 3, 1)).unwrap()

        self.assertEqual(result.created, 10)
        self.assertEqual(result.skipped, 2)
        self.assertNotIn((2025, 4), result.periods_created)
        self.assertEqual(Due.objects.filter(member=self.member).count(), 12)

    def test_second_run_creates_nothing(self):
        self.svc.lifecycle.auto_extend(self.member.id)
        result = self.svc.lifecycle.auto_extend(self.member.id).unwrap()
        self.assertEqual(result.created, 0)
        self.assertEqual(result.skipped, 12)

    def test_skips_months_before_enrollment(self):
        member = make_member(enrollment_date=date(2025, 6, 1))
        result = self.svc.lifecycle.auto_extend(member.id, date(2025, 3, 1)).unwrap()
        self.assertEqual(result.created, 9)
        self.assertEqual(result.periods_created[0], (2025, 6))

    def test_malformed_member_id_is_validation_error(self):
        out = self.svc.lifecycle.auto_extend("abc")
        self.assertIs(out.kind, OutcomeKind.VALIDATION_ERROR)
        self.assertFalse(Due.objects.exists())


class BackfillArrearsTests(TestCase):
    def test_fills_every_month_since_enrollment(self):
        svc = build_services(today=date(2025, 3, 10))
        member = make_member(enrollment_date=date(2024, 11, 20))
        make_due(member, 2025, 1)

        result = svc.lifecycle.backfill_arrears().unwrap()

        self.assertEqual(result.members_processed, 1)
        self.assertEqual(result.created, 4)
        self.assertEqual(result.skipped, 1)
        periods = set(Due.objects.filter(member=member).values_list("year", "month"))
        self.assertEqual(periods, {(2024, 11), (2024, 12), (2025, 1), (2025, 2), (2025, 3)})
