# banking/tests/test_api.py

from __future__ import annotations

from decimal import Decimal
from io import StringIO

from django.core.management import call_command
from django.test import TestCase
from rest_framework.test import APIClient

from banking.models import BankAccount, Card, PosTerminal
from contacts.models import Contact
from ledger.services.recording import record_bank_in


class BankAccountApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_USER_ID="user-onur")

    def test_create_stamps_actor(self):
        response = self.client.post(
            "/api/bank-accounts/",
            {"name": "Yapı Kredi", "iban": "TR000000000000000000000000", "initial_balance": "1000.00"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["created_by"], "user-onur")
        self.assertEqual(response.data["balance"], "1000.00")

    def test_balance_includes_ledger_deltas(self):
        bank = BankAccount.objects.create(name="Halkbank", initial_balance=Decimal("100.00"))
        record_bank_in(actor="user-onur", iso_date="2026-01-05", amount="50.00", bank_account_id=bank.id)

        response = self.client.get(f"/api/bank-accounts/{bank.id}/")

        self.assertEqual(response.data["balance"], "150.00")

    def test_delete_is_soft(self):
        bank = BankAccount.objects.create(name="Halkbank")

        response = self.client.delete(f"/api/bank-accounts/{bank.id}/")

        self.assertEqual(response.status_code, 204)
        self.assertFalse(BankAccount.objects.filter(pk=bank.id).exists())
        self.assertEqual(BankAccount.all_objects.get(pk=bank.id).deleted_by, "user-onur")

        response = self.client.get("/api/bank-accounts/")
        self.assertEqual(response.data["count"], 0)


class CardApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_USER_ID="user-onur")
        self.bank = BankAccount.objects.create(name="Yapı Kredi")

    def test_risk_fields_are_read_only(self):
        response = self.client.post(
            "/api/cards/",
            {
                "name": "YKB Ticari Kart",
                "bank_account": self.bank.id,
                "limit": "250000.00",
                "closing_day": 28,
                "due_day": 3,
                "current_risk": "999.00",
            },
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["current_risk"], "0.00")
        self.assertEqual(response.data["available_limit"], "250000.00")

    def test_day_out_of_range_is_rejected(self):
        response = self.client.post(
            "/api/cards/",
            {"name": "Hatalı Kart", "limit": "100.00", "closing_day": 32, "due_day": 0},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("closing_day", response.data["error"]["details"])
        self.assertIn("due_day", response.data["error"]["details"])

    def test_statement_summary(self):
        card = Card.objects.create(name="YKB Ticari Kart", limit=Decimal("1000.00"), closing_day=28, due_day=3)

        response = self.client.get(f"/api/cards/{card.id}/statement/", {"reference": "2026-01-31"})

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["due_date"], "2026-02-03")
        self.assertEqual(response.data["closing_date"], "2026-01-28")
        self.assertEqual(response.data["due_display"], "03.02.2026")
        self.assertEqual(response.data["days_left"], 3)


class PosTerminalApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_USER_ID="user-onur")
        self.bank = BankAccount.objects.create(name="Yapı Kredi")

    def test_commission_rate_bounds(self):
        response = self.client.post(
            "/api/pos-terminals/",
            {"name": "Yapı Kredi POS", "bank_account": self.bank.id, "commission_rate": "1.5000"},
            format="json",
        )
        self.assertEqual(response.status_code, 400)

        response = self.client.post(
            "/api/pos-terminals/",
            {"name": "Yapı Kredi POS", "bank_account": self.bank.id, "commission_rate": "0.0200"},
            format="json",
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["bank_account_name"], "Yapı Kredi")


class SeedReferenceDataTests(TestCase):
    def test_seed_is_idempotent(self):
        call_command("seed_reference_data", stdout=StringIO())
        call_command("seed_reference_data", stdout=StringIO())

        self.assertEqual(BankAccount.objects.count(), 2)
        self.assertEqual(Card.objects.count(), 2)
        self.assertEqual(Contact.objects.count(), 2)
        self.assertEqual(PosTerminal.objects.count(), 1)

        card = Card.objects.get(name="YKB Ticari Kart")
        self.assertEqual((card.closing_day, card.due_day), (28, 3))
        self.assertEqual(card.bank_account.name, "Yapı Kredi")
        self.assertEqual(PosTerminal.objects.get().commission_rate, Decimal("0.0200"))
