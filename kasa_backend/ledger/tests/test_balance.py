# ledger/tests/test_balance.py

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.test import TestCase

from banking.models import BankAccount
from common.exceptions import BusinessValidationError
from ledger.models import LedgerEntry
from ledger.services.balance import bank_balance, cash_balance, compute_balance_after
from ledger.services.recording import (
    delete_entry,
    record_bank_in,
    record_bank_out,
    record_cash_in,
    record_cash_out,
)
from ledger.services.reports import running_ledger

ACTOR = "user-onur"


class CashBalanceTests(TestCase):
    """
    GUARANTEES:
    - Only KASA entries move the cash balance
    - balance_after is the cash snapshot at insert time
    - Soft-deleted entries drop out of every total
    """

    def setUp(self):
        self.bank = BankAccount.objects.create(name="Yapı Kredi", initial_balance=Decimal("10000.00"))

    def test_cash_balance_counts_only_kasa_rows(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        record_cash_out(actor=ACTOR, iso_date="2026-01-06", amount="300.00")
        record_bank_in(actor=ACTOR, iso_date="2026-01-06", amount="5000.00", bank_account_id=self.bank.id)

        self.assertEqual(cash_balance(), Decimal("700.00"))

    def test_balance_after_snapshots(self):
        cash_in = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        cash_out = record_cash_out(actor=ACTOR, iso_date="2026-01-06", amount="300.00")
        bank_in = record_bank_in(
            actor=ACTOR, iso_date="2026-01-06", amount="5000.00", bank_account_id=self.bank.id
        )

        self.assertEqual(cash_in.balance_after, Decimal("1000.00"))
        self.assertEqual(cash_out.balance_after, Decimal("700.00"))
        # Bank rows carry the cash balance unchanged
        self.assertEqual(bank_in.balance_after, Decimal("700.00"))

    def test_backdated_entry_snapshot_ignores_later_rows(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-10", amount="1000.00")
        backdated = record_cash_in(actor=ACTOR, iso_date="2026-01-04", amount="50.00")

        self.assertEqual(backdated.balance_after, Decimal("50.00"))
        self.assertEqual(cash_balance(), Decimal("1050.00"))

    def test_as_of_and_before(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        record_cash_out(actor=ACTOR, iso_date="2026-01-06", amount="300.00")

        self.assertEqual(cash_balance(as_of="2026-01-05"), Decimal("1000.00"))
        self.assertEqual(cash_balance(before="2026-01-05"), Decimal("0.00"))
        self.assertEqual(cash_balance(as_of="2026-01-06"), Decimal("700.00"))

    def test_deleted_entry_leaves_the_balance(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        cash_out = record_cash_out(actor=ACTOR, iso_date="2026-01-06", amount="300.00")

        delete_entry(cash_out.id, actor=ACTOR)

        self.assertEqual(cash_balance(), Decimal("1000.00"))

    def test_bank_balance_uses_initial_balance_and_deltas(self):
        record_bank_in(actor=ACTOR, iso_date="2026-01-05", amount="5000.00", bank_account_id=self.bank.id)
        record_bank_out(actor=ACTOR, iso_date="2026-01-06", amount="2000.00", bank_account_id=self.bank.id)
        record_cash_in(actor=ACTOR, iso_date="2026-01-06", amount="999.00")

        self.assertEqual(bank_balance(self.bank), Decimal("13000.00"))
        self.assertEqual(bank_balance(self.bank, as_of="2026-01-05"), Decimal("15000.00"))



class ComputeBalanceAfterTests(TestCase):
    """
    GUARANTEES:
    - Replays live KASA rows dated on or before the given day
    - The candidate only counts when it is itself a KASA row
    - exclude_id leaves one stored row out of the replay
    """

    def test_empty_ledger_returns_own_delta(self):
        self.assertEqual(
            compute_balance_after("2026-01-05", "250.00", "0", LedgerEntry.SOURCE_KASA),
            Decimal("250.00"),
        )
        self.assertEqual(
            compute_balance_after("2026-01-05", "0", "40.00", LedgerEntry.SOURCE_KASA),
            Decimal("-40.00"),
        )

    def test_non_cash_candidate_adds_nothing(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")

        for source in (LedgerEntry.SOURCE_BANKA, LedgerEntry.SOURCE_KART, LedgerEntry.SOURCE_CEK):
            with self.subTest(source=source):
                self.assertEqual(
                    compute_balance_after("2026-01-06", "500.00", "0", source),
                    Decimal("1000.00"),
                )

    def test_later_rows_are_not_replayed(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        record_cash_out(actor=ACTOR, iso_date="2026-01-10", amount="300.00")

        self.assertEqual(
            compute_balance_after("2026-01-06", "50.00", "0", LedgerEntry.SOURCE_KASA),
            Decimal("1050.00"),
        )

    def test_exclude_id_drops_one_row(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        cash_out = record_cash_out(actor=ACTOR, iso_date="2026-01-06", amount="300.00")

        self.assertEqual(
            compute_balance_after("2026-01-06", "0", "0", LedgerEntry.SOURCE_KASA),
            Decimal("700.00"),
        )
        self.assertEqual(
            compute_balance_after(
                "2026-01-06", cash_out.incoming, cash_out.outgoing, cash_out.source, exclude_id=cash_out.id
            ),
            Decimal("700.00"),
        )
        self.assertEqual(
            compute_balance_after("2026-01-06", "0", "0", LedgerEntry.SOURCE_KASA, exclude_id=cash_out.id),
            Decimal("1000.00"),
        )


class LedgerImmutabilityTests(TestCase):
    def setUp(self):
        self.entry = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="100.00")

    def test_amount_cannot_be_edited(self):
        self.entry.amount = Decimal("999.00")
        with self.assertRaises(ValidationError):
            self.entry.save()

        refreshed = LedgerEntry.objects.get(pk=self.entry.pk)
        self.assertEqual(refreshed.amount, Decimal("100.00"))

    def test_hard_delete_is_blocked(self):
        with self.assertRaises(ValidationError):
            self.entry.delete()

    def test_soft_delete_is_allowed(self):
        self.entry.soft_delete(actor=ACTOR)

        self.assertFalse(LedgerEntry.objects.filter(pk=self.entry.pk).exists())
        self.assertTrue(LedgerEntry.all_objects.filter(pk=self.entry.pk).exists())


class RunningLedgerTests(TestCase):
    def setUp(self):
        self.bank = BankAccount.objects.create(name="Halkbank")
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        record_cash_out(actor=ACTOR, iso_date="2026-01-10", amount="300.00")
        record_bank_in(actor=ACTOR, iso_date="2026-01-10", amount="5000.00", bank_account_id=self.bank.id)

    def test_opening_and_closing_balance(self):
        report = running_ledger("2026-01-06", "2026-01-31")

        self.assertEqual(report["opening_balance"], Decimal("1000.00"))
        self.assertEqual(report["closing_balance"], Decimal("700.00"))
        self.assertEqual(report["total_incoming"], Decimal("0.00"))
        self.assertEqual(report["total_outgoing"], Decimal("300.00"))
        self.assertEqual(len(report["entries"]), 2)

    def test_running_balance_ignores_non_cash_rows(self):
        report = running_ledger("2026-01-01", "2026-01-31")

        balances = [row.running_balance for row in report["entries"]]
        self.assertEqual(balances, [Decimal("1000.00"), Decimal("700.00"), Decimal("700.00")])

    def test_cash_only(self):
        report = running_ledger("2026-01-01", "2026-01-31", cash_only=True)

        self.assertEqual(
            [row.source for row in report["entries"]],
            [LedgerEntry.SOURCE_KASA, LedgerEntry.SOURCE_KASA],
        )

    def test_backdated_entry_is_replayed_in_date_order(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-04", amount="50.00")

        report = running_ledger("2026-01-01", "2026-01-31", cash_only=True)

        balances = [row.running_balance for row in report["entries"]]
        self.assertEqual(balances, [Decimal("50.00"), Decimal("1050.00"), Decimal("750.00")])

    def test_start_after_end_is_rejected(self):
        with self.assertRaises(BusinessValidationError):
            running_ledger("2026-02-01", "2026-01-01")
