"""Conciliación de planillas de pagos."""

from datetime import date
from decimal import Decimal
from unittest import mock

from django.db import DatabaseError
from django.test import SimpleTestCase, TestCase

from dues_billing.core.application.services.import_layout import ImportLayout
from plugins.django_interface.models import Due, PaymentRecord
from tests.helpers.factories import build_services, make_due, make_member


class ImportLayoutTests(SimpleTestCase):
    def setUp(self):
        self.layout = ImportLayout()

    def test_period_columns_in_spanish_and_english(self):
        self.assertEqual(self.layout.period_for_column("marzo_2025"), (2025, 3))
        self.assertEqual(self.layout.period_for_column("Septiembre_2024"), (2024, 9))
        self.assertEqual(self.layout.period_for_column("setiembre_2024"), (2024, 9))
        self.assertEqual(self.layout.period_for_column("december_2025"), (2025, 12))

    def test_unrelated_columns_are_not_periods(self):
        for col in ("rut", "proximo_pago", "marzo", "marzo_25", "mars_2025"):
            self.assertIsNone(self.layout.period_for_column(col), col)

    def test_parse_cell(self):
        self.assertEqual(self.layout.parse_cell("YES", (2025, 3)), date(2025, 3, 1))
        self.assertEqual(self.layout.parse_cell("2025-03-17", (2025, 3)), date(2025, 3, 17))
        with self.assertRaises(ValueError):
            self.layout.parse_cell("pagado", (2025, 3))
        with self.assertRaises(ValueError):
            self.layout.parse_cell("17/03/2025", (2025, 3))

    def test_custom_paid_tokens(self):
        layout = ImportLayout(paid_tokens=["si", "x"])
        self.assertEqual(layout.parse_cell("Sí", (2025, 1)), date(2025, 1, 1))
        self.assertEqual(layout.parse_cell("x", (2025, 1)), date(2025, 1, 1))

    def test_normalize_row_and_identifier(self):
        row = self.layout.normalize_row({"RUT": " 12.345.678-5 ", "Próximo_Pago": None})
        self.assertEqual(self.layout.fiscal_id(row), "12.345.678-5")
        self.assertIsNone(self.layout.next_payment(row))


class ReconciliationTests(TestCase):
    def setUp(self):
        self.svc = build_services(today=date(2025, 4, 15))
        self.member = make_member(
            fiscal_id="12345678-5",
            enrollment_date=date(2024, 1, 10),
            monthly_due_amount=Decimal("6000"),
        )

    def reconcile(self, rows):
        return self.svc.reconciliation.reconcile(rows)

    def test_yes_cell_creates_paid_due_on_first_of_month(self):
        report = self.reconcile([{"rut": "12345678-5", "marzo_2025": "yes"}])

        self.assertEqual(report.total_rows, 1)
        self.assertEqual(report.successful_rows, 1)
        self.assertEqual(report.created, 1)
        self.assertEqual(report.updated, 0)
        self.assertEqual(report.errors, [])

        due = Due.objects.get(member=self.member, year=2025, month=3)
        self.assertTrue(due.paid)
        self.assertEqual(due.paid_at, date(2025, 3, 1))
        self.assertEqual(due.payment_method, "bulk-import")
        self.assertEqual(due.amount, Decimal("6000"))
        self.assertEqual(PaymentRecord.objects.filter(due=due).count(), 1)

    def test_resubmission_changes_nothing(self):
        rows = [{"rut": "12345678-5", "marzo_2025": "yes", "abril_2025": "2025-04-10"}]
        self.reconcile(rows)
        snapshot = list(Due.objects.order_by("id").values_list("id", "paid_at", "updated_at"))

        report = self.reconcile(rows)

        self.assertEqual(report.created, 0)
        self.assertEqual(report.updated, 0)
        self.assertEqual(report.skipped, 2)
        self.assertEqual(report.successful_rows, 0)
        self.assertEqual(report.errors, [])
        self.assertEqual(
            list(Due.objects.order_by("id").values_list("id", "paid_at", "updated_at")), snapshot
        )
        self.assertEqual(PaymentRecord.objects.count(), 2)

    def test_existing_unpaid_due_is_updated(self):
        due = make_due(self.member, 2025, 2)

        report = self.reconcile([{"rut": "12345678-5", "febrero_2025": "2025-02-03"}])

        self.assertEqual(report.updated, 1)
        self.assertEqual(report.created, 0)
        due.refresh_from_db()
        self.assertTrue(due.paid)
        self.assertEqual(due.paid_at, date(2025, 2, 3))

    def test_confirmed_payment_is_never_overwritten(self):
        due = make_due(self.member, 2025, 1)
        self.svc.lifecycle.mark_paid(due.id, "transfer", paid_at=date(2025, 1, 4))

        report = self.reconcile([{"rut": "12345678-5", "enero_2025": "2025-01-20"}])

        self.assertEqual(report.skipped, 1)
        self.assertEqual(report.errors, [])
        due.refresh_from_db()
        self.assertEqual(due.paid_at, date(2025, 1, 4))
        self.assertEqual(due.payment_method, "transfer")

    def test_unknown_member_is_row_error_and_batch_continues(self):
        report = self.reconcile(
            [
                {"rut": "99999999-9", "marzo_2025": "yes"},
                {"rut": "12.345.678-5", "marzo_2025": "yes"},
            ]
        )

        self.assertEqual(report.total_rows, 2)
        self.assertEqual(report.successful_rows, 1)
        self.assertEqual(len(report.errors), 1)
        self.assertEqual(report.errors[0].row, 1)
        self.assertIn("99999999-9", report.errors[0].message)

    def test_row_without_identifier(self):
        report = self.reconcile([{"marzo_2025": "yes"}])
        self.assertEqual(report.errors[0].row, 1)
        self.assertFalse(Due.objects.exists())

    def test_bad_cell_is_recorded_and_other_cells_processed(self):
        report = self.reconcile(
            [{"rut": "12345678-5", "enero_2025": "pagado", "febrero_2025": "yes", "marzo_2025": ""}]
        )

        self.assertEqual(report.created, 1)
        self.assertEqual(report.successful_rows, 1)
        self.assertEqual(len(report.errors), 1)
        self.assertIn("enero_2025", report.errors[0].message)
        self.assertFalse(Due.objects.filter(month=3).exists())

    def test_future_payment_date_is_cell_error(self):
        report = self.reconcile([{"rut": "12345678-5", "abril_2025": "2025-04-30"}])
        self.assertEqual(report.created, 0)
        self.assertEqual(len(report.errors), 1)
        self.assertFalse(Due.objects.exists())

    def test_period_before_enrollment_is_cell_error(self):
        report = self.reconcile([{"rut": "12345678-5", "diciembre_2023": "yes"}])
        self.assertEqual(report.created, 0)
        self.assertEqual(len(report.errors), 1)
        self.assertFalse(Due.objects.exists())

    def test_next_payment_pre_creates_unpaid_dues(self):
        report = self.reconcile(
            [{"rut": "12345678-5", "marzo_2025": "yes", "proximo_pago": "2025-07-05"}]
        )

        self.assertEqual(report.created, 1)
        self.assertEqual(report.scheduled, 4)
        scheduled = Due.objects.filter(member=self.member, paid=False).order_by("year", "month")
        self.assertEqual(
            [(d.year, d.month) for d in scheduled],
            [(2025, 4), (2025, 5), (2025, 6), (2025, 7)],
        )

    def test_next_payment_without_period_cells_starts_at_current_month(self):
        report = self.reconcile([{"rut": "12345678-5", "proximo_pago": "2025-05-20"}])
        self.assertEqual(report.scheduled, 2)
        self.assertEqual(report.successful_rows, 0)

    def test_next_payment_is_capped_at_twelve_months(self):
        report = self.reconcile([{"rut": "12345678-5", "proximo_pago": "2027-12-01"}])
        self.assertEqual(report.scheduled, 13)
        last = Due.objects.filter(member=self.member).order_by("-year", "-month").first()
        self.assertEqual((last.year, last.month), (2026, 4))

    def test_unparsable_next_payment_is_row_error(self):
        report = self.reconcile([{"rut": "12345678-5", "proximo_pago": "pronto"}])
        self.assertEqual(report.scheduled, 0)
        self.assertEqual(len(report.errors), 1)

    def test_next_payment_fills_every_month_after_an_old_last_period(self):
        report = self.reconcile(
            [{"rut": "12345678-5", "enero_2024": "yes", "proximo_pago": "2025-06-10"}]
        )

        self.assertEqual(report.created, 1)
        self.assertEqual(report.scheduled, 17)
        unpaid = Due.objects.filter(member=self.member, paid=False).order_by("year", "month")
        self.assertEqual((unpaid.first().year, unpaid.first().month), (2024, 2))
        self.assertEqual((unpaid.last().year, unpaid.last().month), (2025, 6))

    def test_ledger_failure_rolls_back_the_row(self):
        with mock.patch.object(
            self.svc.payment_repo, "record", side_effect=DatabaseError("libro no disponible")
        ):
            report = self.reconcile([{"rut": "12345678-5", "marzo_2025": "yes"}])

        self.assertEqual(report.created, 0)
        self.assertEqual(report.successful_rows, 0)
        self.assertEqual(len(report.errors), 1)
        self.assertFalse(Due.objects.exists())
        self.assertFalse(PaymentRecord.objects.exists())
