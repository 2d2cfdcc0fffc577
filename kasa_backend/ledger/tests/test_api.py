# ledger/tests/test_api.py

from __future__ import annotations

from decimal import Decimal

from django.contrib.auth import get_user_model
from django.test import TestCase, override_settings
from rest_framework.test import APIClient

from banking.models import BankAccount, PosTerminal
from contacts.models import Contact
from ledger.models import LedgerEntry

User = get_user_model()


class TransactionApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_USER_ID="onur")

        self.bank = BankAccount.objects.create(name="Yapı Kredi")
        self.supplier = Contact.objects.create(name="Esca Tedarikçi", kind=Contact.KIND_SUPPLIER)

    # =====================================================
    # ACTOR
    # =====================================================

    def test_missing_actor_is_rejected(self):
        anonymous = APIClient()

        response = anonymous.get("/api/transactions/")

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.data["error"]["code"], "not_authenticated")

    def test_actor_alias_is_stored(self):
        response = self.client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "150.00"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["created_by"], "user-onur")
        self.assertEqual(response.data["document_no"], "KS-GRS-05/01-0001")

    @override_settings(ACTOR_ALIASES={"kasa1": "user-kasa-1"})
    def test_actor_aliases_come_from_settings(self):
        client = APIClient()
        client.credentials(HTTP_X_USER_ID="kasa1")
        response = client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "20.00"},
            format="json",
        )
        self.assertEqual(response.data["created_by"], "user-kasa-1")

        client.credentials(HTTP_X_USER_ID="onur")
        response = client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "20.00"},
            format="json",
        )
        self.assertEqual(response.data["created_by"], "onur")

    def test_authenticated_user_is_the_actor(self):
        user = User.objects.create_user(username="kasiyer", password="pass")
        client = APIClient()
        client.force_authenticate(user=user)

        response = client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "10.00"},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["created_by"], "kasiyer")

    # =====================================================
    # COMMANDS
    # =====================================================

    def test_request_validation_error_envelope(self):
        response = self.client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "0"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertIn("amount", response.data["error"]["details"])

    def test_service_validation_error_envelope(self):
        response = self.client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "10.00", "customer_id": self.supplier.id},
            format="json",
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.data["error"]["code"], "validation_error")

    def test_unknown_bank_is_404(self):
        response = self.client.post(
            "/api/transactions/bank-in/",
            {"iso_date": "2026-01-05", "amount": "10.00", "bank_account_id": 999999},
            format="json",
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "not_found")

    def test_pos_returns_both_rows(self):
        terminal = PosTerminal.objects.create(
            name="Yapı Kredi POS",
            bank_account=self.bank,
            commission_rate=Decimal("0.0200"),
        )

        response = self.client.post(
            "/api/transactions/pos/",
            {"iso_date": "2026-01-05", "gross": "1000.00", "pos_terminal_id": terminal.id},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(len(response.data), 2)
        self.assertEqual(response.data[0]["bank_delta"], "980.00")
        self.assertEqual(response.data[1]["bank_delta"], "-20.00")

    def test_pos_requires_bank_or_terminal(self):
        response = self.client.post(
            "/api/transactions/pos/",
            {"iso_date": "2026-01-05", "gross": "1000.00", "commission": "10.00"},
            format="json",
        )

        self.assertEqual(response.status_code, 400)

    # =====================================================
    # READS
    # =====================================================

    def test_list_is_paginated_and_filterable(self):
        for amount in ("10.00", "20.00"):
            self.client.post(
                "/api/transactions/cash-in/",
                {"iso_date": "2026-01-05", "amount": amount, "tags": ["gunluk"]},
                format="json",
            )
        self.client.post(
            "/api/transactions/bank-in/",
            {"iso_date": "2026-01-06", "amount": "500.00", "bank_account_id": self.bank.id},
            format="json",
        )

        response = self.client.get("/api/transactions/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["count"], 3)
        self.assertEqual(len(response.data["results"]), 3)

        response = self.client.get("/api/transactions/", {"source": "KASA"})
        self.assertEqual(response.data["count"], 2)

        response = self.client.get("/api/transactions/", {"tag": "gunluk"})
        self.assertEqual(response.data["count"], 2)

        response = self.client.get("/api/transactions/", {"date_from": "2026-01-06"})
        self.assertEqual(response.data["count"], 1)

    def test_running_ledger(self):
        self.client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "1000.00"},
            format="json",
        )
        self.client.post(
            "/api/transactions/cash-out/",
            {"iso_date": "2026-01-10", "amount": "300.00"},
            format="json",
        )

        response = self.client.get(
            "/api/transactions/ledger/",
            {"start": "2026-01-06", "end": "2026-01-31"},
        )

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data["opening_balance"], "1000.00")
        self.assertEqual(response.data["closing_balance"], "700.00")
        self.assertEqual(response.data["entries"][0]["running_balance"], "700.00")

    def test_running_ledger_rejects_reversed_range(self):
        response = self.client.get(
            "/api/transactions/ledger/",
            {"start": "2026-02-01", "end": "2026-01-01"},
        )

        self.assertEqual(response.status_code, 400)

    # =====================================================
    # DELETE
    # =====================================================

    def test_delete_is_soft(self):
        created = self.client.post(
            "/api/transactions/cash-in/",
            {"iso_date": "2026-01-05", "amount": "10.00"},
            format="json",
        )
        entry_id = created.data["id"]

        response = self.client.delete(f"/api/transactions/{entry_id}/")
        self.assertEqual(response.status_code, 204)

        response = self.client.get(f"/api/transactions/{entry_id}/")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.data["error"]["code"], "not_found")

        self.assertEqual(LedgerEntry.all_objects.get(pk=entry_id).deleted_by, "user-onur")


class TagApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_USER_ID="user-onur")

    def test_create_and_list_tags(self):
        response = self.client.post("/api/tags/", {"name": "kira"}, format="json")
        self.assertEqual(response.status_code, 201)

        response = self.client.get("/api/tags/")
        self.assertEqual([t["name"] for t in response.data], ["kira"])
