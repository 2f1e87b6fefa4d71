from datetime import date
from decimal import Decimal

from django.test import TestCase

from dues_billing.core.application.dtos.member_status_dto import MemberStatusTag
from dues_billing.core.application.dtos.outcome import OutcomeKind
from tests.helpers.factories import build_services, make_due, make_member


class SummarizeMemberTests(TestCase):
    def setUp(self):
        self.svc = build_services(today=date(2025, 3, 10))

    def summary(self, member, as_of=None):
        return self.svc.member_status.summarize_member(member.id, as_of).unwrap()

    def test_member_without_dues_is_current(self):
        s = self.summary(make_member())
        self.assertIs(s.status, MemberStatusTag.CURRENT)
        self.assertFalse(s.is_delinquent)
        self.assertEqual(s.total, 0)
        self.assertIsNone(s.last_paid_at)

    def test_overdue_without_payments_is_never_paid(self):
        member = make_member()
        make_due(member, 2025, 1, amount=Decimal("5000"))
        make_due(member, 2025, 2, amount=Decimal("5000"))

        s = self.summary(member)

        self.assertIs(s.status, MemberStatusTag.NEVER_PAID)
        self.assertTrue(s.is_delinquent)
        self.assertEqual(s.overdue, 2)
        self.assertEqual(s.overdue_amount, Decimal("10000"))

    def test_overdue_with_some_payment_is_delinquent(self):
        member = make_member()
        jan = make_due(member, 2025, 1)
        make_due(member, 2025, 2)
        self.svc.lifecycle.mark_paid(jan.id, "cash", paid_at=date(2025, 1, 3))

        s = self.summary(member)

        self.assertIs(s.status, MemberStatusTag.DELINQUENT)
        self.assertEqual(s.paid, 1)
        self.assertEqual(s.overdue, 1)
        self.assertEqual(s.last_paid_at, date(2025, 1, 3))

    def test_pending_dues_do_not_make_member_delinquent(self):
        member = make_member()
        make_due(member, 2025, 3)
        make_due(member, 2025, 4)

        s = self.summary(member, as_of=date(2025, 3, 5))

        self.assertIs(s.status, MemberStatusTag.CURRENT)
        self.assertEqual(s.pending, 2)
        self.assertEqual(s.overdue, 0)

    def test_as_of_moves_the_overdue_boundary(self):
        member = make_member()
        make_due(member, 2025, 3)
        self.assertIs(self.summary(member, date(2025, 3, 5)).status, MemberStatusTag.CURRENT)
        self.assertIs(self.summary(member, date(2025, 3, 6)).status, MemberStatusTag.NEVER_PAID)

    def test_unknown_member(self):
        out = self.svc.member_status.summarize_member("00000000-0000-0000-0000-000000000000")
        self.assertIs(out.kind, OutcomeKind.NOT_FOUND)

    def test_malformed_member_id_is_validation_error(self):
        out = self.svc.member_status.summarize_member("abc")
        self.assertIs(out.kind, OutcomeKind.VALIDATION_ERROR)


class ListMemberStatusesTests(TestCase):
    def setUp(self):
        self.svc = build_services(today=date(2025, 3, 10))
        self.current = make_member(last_name="Alfa")
        self.delinquent = make_member(last_name="Beta")
        self.never_paid = make_member(last_name="Gamma")
        make_member(last_name="Inactivo", active=False)

        paid = make_due(self.delinquent, 2025, 1)
        self.svc.lifecycle.mark_paid(paid.id, "card", paid_at=date(2025, 1, 2))
        make_due(self.delinquent, 2025, 2)
        make_due(self.never_paid, 2025, 2)

    def test_orders_never_paid_first_and_skips_inactive(self):
        statuses = self.svc.member_status.list_statuses()
        self.assertEqual(
            [s.member_id for s in statuses],
            [str(self.never_paid.id), str(self.delinquent.id), str(self.current.id)],
        )

    def test_filter_by_status(self):
        statuses = self.svc.member_status.list_statuses(status="DELINQUENT")
        self.assertEqual([s.member_id for s in statuses], [str(self.delinquent.id)])
