# cheques/tests/test_payment.py

from __future__ import annotations

from decimal import Decimal
from unittest import mock

from django.test import TestCase

from banking.models import BankAccount
from cheques.models import Cheque, ChequeMove
from cheques.services.cheque_service import create_cheque, update_cheque_status
from cheques.services.payment import pay_cheque
from common.exceptions import (
    BusinessValidationError,
    ConflictError,
    InvalidTransitionError,
    NotFoundError,
)
from contacts.models import Contact
from ledger.models import LedgerEntry
from ledger.services.balance import bank_balance, cash_balance

ACTOR = "user-hayrullah"


class PayChequeTests(TestCase):
    """
    GUARANTEES:
    - One payment entry per cheque, ever
    - Entry, status change and move commit together
    - Only BORC cheques are paid here
    """

    def setUp(self):
        self.bank = BankAccount.objects.create(name="Yapı Kredi", initial_balance=Decimal("10000.00"))
        self.supplier = Contact.objects.create(name="Esca Tedarikçi", kind=Contact.KIND_SUPPLIER)
        self.cheque = create_cheque(
            actor=ACTOR,
            cek_no="BRC-100",
            amount="2500.00",
            entry_date="2026-01-02",
            maturity_date="2026-01-15",
            direction=Cheque.DIRECTION_BORC,
            supplier_id=self.supplier.id,
        )

    def _payment_entries(self):
        return LedgerEntry.objects.filter(type=LedgerEntry.TYPE_CEK_ODENMESI)

    def test_pay_writes_bank_entry_and_settles(self):
        cheque = pay_cheque(
            self.cheque.id,
            actor=ACTOR,
            payment_date="2026-01-15",
            bank_account_id=self.bank.id,
        )

        entry = cheque.payment_entry
        self.assertEqual(cheque.status, Cheque.STATUS_ODENDI)
        self.assertEqual(str(cheque.paid_at), "2026-01-15")
        self.assertEqual(cheque.paid_bank_account_id, self.bank.id)

        self.assertEqual(entry.source, LedgerEntry.SOURCE_BANKA)
        self.assertEqual(entry.bank_delta, Decimal("-2500.00"))
        self.assertEqual(entry.display_outgoing, Decimal("2500.00"))
        self.assertEqual(entry.document_no, "BNK-CKS-15/01-0001")
        self.assertEqual(entry.contact_id, self.supplier.id)
        self.assertEqual(entry.description, "Çek No: BRC-100 - Esca Tedarikçi")

        self.assertEqual(bank_balance(self.bank), Decimal("7500.00"))
        self.assertEqual(cash_balance(), Decimal("0.00"))

        move = cheque.moves.last()
        self.assertEqual(move.action, ChequeMove.ACTION_PAYMENT)
        self.assertEqual(move.from_status, Cheque.STATUS_ODEMEDE)
        self.assertEqual(move.entry_id, entry.id)

    def test_note_replaces_default_description(self):
        cheque = pay_cheque(
            self.cheque.id,
            actor=ACTOR,
            payment_date="2026-01-15",
            bank_account_id=self.bank.id,
            note="Erken ödeme",
        )

        self.assertEqual(cheque.payment_entry.description, "Erken ödeme")

    def test_second_payment_is_conflict(self):
        pay_cheque(self.cheque.id, actor=ACTOR, payment_date="2026-01-15", bank_account_id=self.bank.id)

        with self.assertRaises(ConflictError):
            pay_cheque(self.cheque.id, actor=ACTOR, payment_date="2026-01-16", bank_account_id=self.bank.id)

        self.assertEqual(self._payment_entries().count(), 1)
        self.assertEqual(bank_balance(self.bank), Decimal("7500.00"))

    def test_receivable_cannot_be_paid(self):
        customer = Contact.objects.create(name="Esca Gıda Müşteri", kind=Contact.KIND_CUSTOMER)
        receivable = create_cheque(
            actor=ACTOR,
            cek_no="ALC-100",
            amount="100.00",
            entry_date="2026-01-02",
            maturity_date="2026-01-15",
            direction=Cheque.DIRECTION_ALACAK,
            customer_id=customer.id,
        )

        with self.assertRaises(BusinessValidationError):
            pay_cheque(receivable.id, actor=ACTOR, payment_date="2026-01-15", bank_account_id=self.bank.id)

        self.assertEqual(self._payment_entries().count(), 0)

    def test_bounced_cheque_cannot_be_paid(self):
        update_cheque_status(self.cheque.id, actor=ACTOR, new_status=Cheque.STATUS_KARSILIKSIZ)

        with self.assertRaises(InvalidTransitionError):
            pay_cheque(self.cheque.id, actor=ACTOR, payment_date="2026-01-15", bank_account_id=self.bank.id)

    def test_unknown_bank_or_cheque(self):
        with self.assertRaises(NotFoundError):
            pay_cheque(self.cheque.id, actor=ACTOR, payment_date="2026-01-15", bank_account_id=999999)
        with self.assertRaises(NotFoundError):
            pay_cheque(999999, actor=ACTOR, payment_date="2026-01-15", bank_account_id=self.bank.id)

        self.cheque.refresh_from_db()
        self.assertEqual(self.cheque.status, Cheque.STATUS_ODEMEDE)

    def test_failure_after_entry_rolls_everything_back(self):
        with mock.patch("cheques.services.payment.record_move", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                pay_cheque(self.cheque.id, actor=ACTOR, payment_date="2026-01-15", bank_account_id=self.bank.id)

        self.cheque.refresh_from_db()
        self.assertEqual(self.cheque.status, Cheque.STATUS_ODEMEDE)
        self.assertIsNone(self.cheque.payment_entry_id)
        self.assertEqual(LedgerEntry.all_objects.count(), 0)
        self.assertEqual(bank_balance(self.bank), Decimal("10000.00"))
