# ledger/tests/test_recording.py

from __future__ import annotations

from datetime import date
from decimal import Decimal
from unittest import mock

from django.test import TestCase

from banking.models import BankAccount, Card, PosTerminal
from common.exceptions import BusinessValidationError, NotFoundError
from contacts.models import Contact
from ledger.models import LedgerEntry, Tag
from ledger.services.balance import bank_balance, cash_balance
from ledger.services.recording import (
    delete_entry,
    pos_figures,
    record_bank_out,
    record_card_expense,
    record_card_payment,
    record_cash_in,
    record_cash_out,
    record_pos_collection,
)

ACTOR = "user-hayrullah"


class DocumentNumberTests(TestCase):
    def test_sequence_per_date_and_prefix(self):
        first = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="10.00")
        second = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="20.00")
        other_prefix = record_cash_out(actor=ACTOR, iso_date="2026-01-05", amount="5.00")
        other_day = record_cash_in(actor=ACTOR, iso_date="2026-01-06", amount="30.00")

        self.assertEqual(first.document_no, "KS-GRS-05/01-0001")
        self.assertEqual(second.document_no, "KS-GRS-05/01-0002")
        self.assertEqual(other_prefix.document_no, "KS-CKS-05/01-0001")
        self.assertEqual(other_day.document_no, "KS-GRS-06/01-0001")

    def test_deleted_entries_free_their_number(self):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="10.00")
        second = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="20.00")
        delete_entry(second.id, actor=ACTOR)

        again = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="30.00")

        self.assertEqual(again.document_no, "KS-GRS-05/01-0002")


class CashRecordingTests(TestCase):
    def setUp(self):
        self.customer = Contact.objects.create(name="Esca Gıda Müşteri", kind=Contact.KIND_CUSTOMER)
        self.supplier = Contact.objects.create(name="Esca Tedarikçi", kind=Contact.KIND_SUPPLIER)

    def test_cash_in_links_customer(self):
        entry = record_cash_in(
            actor=ACTOR,
            iso_date="2026-01-05",
            amount="250.50",
            customer_id=self.customer.id,
            tags=["market", " ", "market"],
        )

        self.assertEqual(entry.source, LedgerEntry.SOURCE_KASA)
        self.assertEqual(entry.incoming, Decimal("250.50"))
        self.assertEqual(entry.outgoing, Decimal("0.00"))
        self.assertEqual(entry.counterparty, "Esca Gıda Müşteri")
        self.assertEqual(entry.created_by, ACTOR)
        self.assertEqual([t.name for t in entry.tags.all()], ["market"])
        self.assertEqual(Tag.objects.count(), 1)

    def test_cash_out_keeps_category(self):
        entry = record_cash_out(
            actor=ACTOR,
            iso_date="2026-01-05",
            amount="80.00",
            supplier_id=self.supplier.id,
            category="Kira",
        )

        self.assertEqual(entry.outgoing, Decimal("80.00"))
        self.assertEqual(entry.category, "Kira")
        self.assertEqual(entry.contact_id, self.supplier.id)

    def test_supplier_given_as_customer_is_rejected(self):
        with self.assertRaises(BusinessValidationError):
            record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="10.00", customer_id=self.supplier.id)

        self.assertEqual(LedgerEntry.objects.count(), 0)

    def test_missing_contact_is_not_found(self):
        with self.assertRaises(NotFoundError):
            record_cash_out(actor=ACTOR, iso_date="2026-01-05", amount="10.00", supplier_id=999999)

    def test_zero_and_negative_amounts_are_rejected(self):
        for amount in ("0", "-5.00"):
            with self.assertRaises(BusinessValidationError):
                record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount=amount)

    def test_invalid_date_is_rejected(self):
        with self.assertRaises(BusinessValidationError):
            record_cash_in(actor=ACTOR, iso_date="05/01/2026", amount="10.00")


class BankRecordingTests(TestCase):
    def setUp(self):
        self.bank = BankAccount.objects.create(name="Yapı Kredi")

    def test_bank_out_moves_bank_not_cash(self):
        entry = record_bank_out(
            actor=ACTOR,
            iso_date="2026-01-05",
            amount="400.00",
            bank_account_id=self.bank.id,
        )

        self.assertEqual(entry.bank_delta, Decimal("-400.00"))
        self.assertEqual(entry.display_outgoing, Decimal("400.00"))
        self.assertEqual(entry.outgoing, Decimal("0.00"))
        self.assertEqual(entry.document_no, "BNK-CKS-05/01-0001")
        self.assertEqual(cash_balance(), Decimal("0.00"))

    def test_deleted_bank_is_not_found(self):
        self.bank.soft_delete(actor=ACTOR)

        with self.assertRaises(NotFoundError):
            record_bank_out(actor=ACTOR, iso_date="2026-01-05", amount="1.00", bank_account_id=self.bank.id)

    def test_unknown_cheque_is_not_found(self):
        with self.assertRaises(NotFoundError):
            record_bank_out(
                actor=ACTOR,
                iso_date="2026-01-05",
                amount="1.00",
                bank_account_id=self.bank.id,
                cheque_id=999999,
            )


class PosCollectionTests(TestCase):
    def setUp(self):
        self.bank = BankAccount.objects.create(name="Yapı Kredi", initial_balance=Decimal("0.00"))
        self.terminal = PosTerminal.objects.create(
            name="Yapı Kredi POS",
            bank_account=self.bank,
            commission_rate=Decimal("0.0200"),
        )

    def test_pos_figures(self):
        figures = pos_figures("1000.00", "20.00")

        self.assertEqual(figures["pos_net"], Decimal("980.00"))
        self.assertEqual(figures["pos_effective_rate"], Decimal("0.0200"))

    def test_commission_cannot_exceed_gross(self):
        with self.assertRaises(BusinessValidationError):
            pos_figures("100.00", "150.00")

    def test_terminal_rate_is_used_when_commission_omitted(self):
        net, commission = record_pos_collection(
            actor=ACTOR,
            iso_date="2026-01-05",
            gross="1000.00",
            pos_terminal_id=self.terminal.id,
        )

        self.assertEqual(net.type, LedgerEntry.TYPE_POS_COLLECTION)
        self.assertEqual(net.bank_delta, Decimal("980.00"))
        self.assertEqual(commission.type, LedgerEntry.TYPE_POS_COMMISSION)
        self.assertEqual(commission.bank_delta, Decimal("-20.00"))

        for entry in (net, commission):
            self.assertEqual(entry.bank_account_id, self.bank.id)
            self.assertEqual(entry.method, LedgerEntry.METHOD_CARD)
            self.assertEqual(entry.pos_gross, Decimal("1000.00"))
            self.assertEqual(entry.pos_commission, Decimal("20.00"))
            self.assertEqual(entry.pos_net, Decimal("980.00"))
            self.assertEqual(entry.pos_effective_rate, Decimal("0.0200"))

        self.assertEqual(net.document_no, "POS-TAH-05/01-0001")
        self.assertEqual(commission.document_no, "POS-TAH-05/01-0002")
        self.assertEqual(bank_balance(self.bank), Decimal("960.00"))
        self.assertEqual(cash_balance(), Decimal("0.00"))

    def test_explicit_commission_and_bank(self):
        net, commission = record_pos_collection(
            actor=ACTOR,
            iso_date="2026-01-05",
            gross="1000.00",
            commission="25.00",
            bank_account_id=self.bank.id,
        )

        self.assertEqual(net.pos_effective_rate, Decimal("0.0250"))
        self.assertIsNone(net.pos_terminal_id)
        self.assertIn("%2.50", commission.description)

    def test_zero_commission_still_writes_two_rows(self):
        entries = record_pos_collection(
            actor=ACTOR,
            iso_date="2026-01-05",
            gross="500.00",
            commission="0",
            bank_account_id=self.bank.id,
        )

        self.assertEqual(len(entries), 2)
        self.assertEqual(entries[1].amount, Decimal("0.00"))

    def test_bank_or_terminal_is_required(self):
        with self.assertRaises(BusinessValidationError):
            record_pos_collection(actor=ACTOR, iso_date="2026-01-05", gross="100.00", commission="1.00")


@mock.patch("ledger.services.recording.today", return_value=date(2026, 1, 31))
class CardRecordingTests(TestCase):
    """
    Card with cutoff 28 and due 3: on 2026-01-31 the upcoming statement
    closed on 2026-01-28.
    """

    def setUp(self):
        self.bank = BankAccount.objects.create(name="Yapı Kredi", initial_balance=Decimal("1000.00"))
        self.card = Card.objects.create(
            name="YKB Ticari Kart",
            bank_account=self.bank,
            limit=Decimal("250000.00"),
            closing_day=28,
            due_day=3,
        )

    def _card(self):
        return Card.objects.get(pk=self.card.pk)

    def test_expense_inside_statement(self, _today):
        entry = record_card_expense(
            actor=ACTOR,
            iso_date="2026-01-20",
            amount="500.00",
            card_id=self.card.id,
        )

        card = self._card()
        self.assertEqual(entry.source, LedgerEntry.SOURCE_KART)
        self.assertEqual(entry.statement_delta, Decimal("500.00"))
        self.assertEqual(card.current_risk, Decimal("500.00"))
        self.assertEqual(card.statement_debt, Decimal("500.00"))
        self.assertEqual(cash_balance(), Decimal("0.00"))

    def test_expense_after_cutoff_rolls_to_next_statement(self, _today):
        entry = record_card_expense(
            actor=ACTOR,
            iso_date="2026-01-30",
            amount="500.00",
            card_id=self.card.id,
        )

        card = self._card()
        self.assertEqual(entry.statement_delta, Decimal("0.00"))
        self.assertEqual(card.current_risk, Decimal("500.00"))
        self.assertEqual(card.statement_debt, Decimal("0.00"))

    def test_payment_restores_risk(self, _today):
        record_card_expense(actor=ACTOR, iso_date="2026-01-20", amount="500.00", card_id=self.card.id)
        payment = record_card_payment(
            actor=ACTOR,
            iso_date="2026-02-03",
            amount="500.00",
            card_id=self.card.id,
            bank_account_id=self.bank.id,
        )

        card = self._card()
        self.assertEqual(payment.source, LedgerEntry.SOURCE_BANKA)
        self.assertEqual(payment.bank_delta, Decimal("-500.00"))
        self.assertEqual(card.current_risk, Decimal("0.00"))
        self.assertEqual(card.statement_debt, Decimal("0.00"))
        self.assertEqual(card.available_limit, Decimal("250000.00"))
        self.assertEqual(bank_balance(self.bank), Decimal("500.00"))

    def test_overpayment_floors_at_zero(self, _today):
        record_card_expense(actor=ACTOR, iso_date="2026-01-20", amount="300.00", card_id=self.card.id)
        payment = record_card_payment(actor=ACTOR, iso_date="2026-02-03", amount="800.00", card_id=self.card.id)

        card = self._card()
        self.assertEqual(payment.statement_delta, Decimal("-300.00"))
        self.assertEqual(card.current_risk, Decimal("0.00"))
        self.assertEqual(card.statement_debt, Decimal("0.00"))

    def test_payment_from_cash_moves_cash(self, _today):
        record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="1000.00")
        payment = record_card_payment(actor=ACTOR, iso_date="2026-02-03", amount="200.00", card_id=self.card.id)

        self.assertEqual(payment.source, LedgerEntry.SOURCE_KASA)
        self.assertEqual(payment.outgoing, Decimal("200.00"))
        self.assertEqual(cash_balance(), Decimal("800.00"))

    def test_deleting_entries_reverses_card_effects(self, _today):
        expense = record_card_expense(actor=ACTOR, iso_date="2026-01-20", amount="500.00", card_id=self.card.id)
        payment = record_card_payment(actor=ACTOR, iso_date="2026-02-03", amount="200.00", card_id=self.card.id)

        card = self._card()
        self.assertEqual(card.current_risk, Decimal("300.00"))
        self.assertEqual(card.statement_debt, Decimal("300.00"))

        delete_entry(payment.id, actor=ACTOR)
        card = self._card()
        self.assertEqual(card.current_risk, Decimal("500.00"))
        self.assertEqual(card.statement_debt, Decimal("500.00"))

        delete_entry(expense.id, actor=ACTOR)
        card = self._card()
        self.assertEqual(card.current_risk, Decimal("0.00"))
        self.assertEqual(card.statement_debt, Decimal("0.00"))

    def test_missing_card_is_not_found(self, _today):
        with self.assertRaises(NotFoundError):
            record_card_expense(actor=ACTOR, iso_date="2026-01-20", amount="1.00", card_id=999999)


class DeleteEntryTests(TestCase):
    def test_delete_clears_tags_and_stamps_actor(self):
        entry = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="10.00", tags=["nakit"])

        delete_entry(entry.id, actor="user-onur")

        deleted = LedgerEntry.all_objects.get(pk=entry.id)
        self.assertIsNotNone(deleted.deleted_at)
        self.assertEqual(deleted.deleted_by, "user-onur")
        self.assertEqual(deleted.tags.count(), 0)

    def test_delete_twice_is_not_found(self):
        entry = record_cash_in(actor=ACTOR, iso_date="2026-01-05", amount="10.00")
        delete_entry(entry.id, actor=ACTOR)

        with self.assertRaises(NotFoundError):
            delete_entry(entry.id, actor=ACTOR)
