"""Comandos de consola sobre el contenedor DI real."""

import os
import tempfile
from datetime import date
from decimal import Decimal
from io import StringIO

from django.core.management import CommandError, call_command
from django.test import TestCase

from plugins.django_interface.models import Due, PaymentRecord
from tests.helpers.factories import make_due, make_member


def run(*args, **kwargs) -> str:
    out = StringIO()
    call_command(*args, stdout=out, stderr=StringIO(), **kwargs)
    return out.getvalue()


class GenerateDuesCommandTests(TestCase):
    def test_generates_single_period(self):
        member = make_member(enrollment_date=date(2024, 1, 1))
        output = run("generate_dues", "--year", "2025", "--month", "3")
        self.assertIn("creadas=1", output)
        self.assertTrue(Due.objects.filter(member=member, year=2025, month=3).exists())

    def test_generates_full_year(self):
        member = make_member(enrollment_date=date(2024, 1, 1))
        output = run("generate_dues", "--year", "2025")
        self.assertIn("Año 2025: creadas=12", output)
        self.assertEqual(Due.objects.filter(member=member).count(), 12)

    def test_invalid_month_raises_command_error(self):
        with self.assertRaises(CommandError):
            run("generate_dues", "--year", "2025", "--month", "14")


class BackfillAndExtendCommandTests(TestCase):
    def test_backfill_until_cutoff(self):
        member = make_member(enrollment_date=date(2024, 10, 1))
        run("backfill_dues", "--as-of", "2025-01-31")
        self.assertEqual(Due.objects.filter(member=member).count(), 4)

    def test_extend_from_date(self):
        member = make_member(enrollment_date=date(2024, 1, 1))
        output = run("extend_dues", "--member-id", str(member.id), "--from", "2025-01-01")
        self.assertIn("Creadas=12", output)

    def test_extend_unknown_member(self):
        with self.assertRaises(CommandError):
            run("extend_dues", "--member-id", "00000000-0000-0000-0000-000000000000")


class ManageDueCommandTests(TestCase):
    def setUp(self):
        self.member = make_member(enrollment_date=date(2024, 1, 1), monthly_due_amount=Decimal("6000"))

    def test_create_pay_unpay_delete(self):
        run("manage_due", "create", "--member-id", str(self.member.id), "--year", "2025", "--month", "2")
        due = Due.objects.get(member=self.member, year=2025, month=2)
        self.assertEqual(due.amount, Decimal("6000"))

        run("manage_due", "pay", "--due-id", str(due.id), "--method", "transfer", "--paid-at", "2025-02-04")
        due.refresh_from_db()
        self.assertTrue(due.paid)
        self.assertEqual(PaymentRecord.objects.filter(due=due).count(), 1)

        with self.assertRaises(CommandError):
            run("manage_due", "delete", "--due-id", str(due.id))

        run("manage_due", "unpay", "--due-id", str(due.id))
        due.refresh_from_db()
        self.assertFalse(due.paid)

        run("manage_due", "delete", "--due-id", str(due.id))
        self.assertFalse(Due.objects.filter(id=due.id).exists())

    def test_duplicate_create_is_command_error(self):
        make_due(self.member, 2025, 2)
        with self.assertRaises(CommandError):
            run("manage_due", "create", "--member-id", str(self.member.id), "--year", "2025", "--month", "2")

    def test_missing_arguments(self):
        with self.assertRaises(CommandError):
            run("manage_due", "pay", "--due-id", "00000000-0000-0000-0000-000000000000")


class ImportPaymentsCommandTests(TestCase):
    def setUp(self):
        self.member = make_member(fiscal_id="12345678-5", enrollment_date=date(2024, 1, 1))
        fd, self.path = tempfile.mkstemp(suffix=".csv")
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write("RUT,Marzo_2025,abril_2025\n")
            fh.write("12.345.678-5,yes,\n")
            fh.write("11111111-1,yes,yes\n")

    def tearDown(self):
        os.remove(self.path)

    def test_imports_csv(self):
        output = run("import_payments", self.path)

        self.assertIn("Filas=2 exitosas=1 creadas=1", output)
        due = Due.objects.get(member=self.member, year=2025, month=3)
        self.assertTrue(due.paid)
        self.assertEqual(due.paid_at, date(2025, 3, 1))
        self.assertFalse(Due.objects.filter(month=4).exists())

    def test_missing_file(self):
        with self.assertRaises(CommandError):
            run("import_payments", self.path + ".nope")


class MemberStatusCommandTests(TestCase):
    def test_lists_members(self):
        member = make_member(fiscal_id="7654321-0", enrollment_date=date(2024, 1, 1))
        make_due(member, 2025, 1)
        output = run("member_status", "--as-of", "2025-02-01")
        self.assertIn("7654321-0", output)
        self.assertIn("NEVER_PAID", output)
        self.assertIn("Socios: 1", output)

    def test_single_member(self):
        member = make_member(enrollment_date=date(2024, 1, 1))
        output = run("member_status", "--member-id", str(member.id))
        self.assertIn("CURRENT", output)


class MetricsEndpointTests(TestCase):
    def test_exposes_registry(self):
        member = make_member(enrollment_date=date(2024, 1, 1))
        run("manage_due", "create", "--member-id", str(member.id), "--year", "2025", "--month", "1")

        resp = self.client.get("/metrics/")

        self.assertEqual(resp.status_code, 200)
        self.assertIn(b"dues_created_total", resp.content)
