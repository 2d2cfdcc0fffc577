# contacts/tests/test_api.py

from __future__ import annotations

from django.test import TestCase
from rest_framework.test import APIClient

from contacts.models import Contact, Customer, Supplier


class ContactApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.client.credentials(HTTP_X_USER_ID="user-hayrullah")

    def test_customer_endpoint_sets_kind(self):
        response = self.client.post(
            "/api/customers/",
            {"name": "Esca Gıda Müşteri", "kind": Contact.KIND_SUPPLIER},
            format="json",
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data["kind"], Contact.KIND_CUSTOMER)
        self.assertEqual(response.data["created_by"], "user-hayrullah")

    def test_lists_are_scoped_by_kind(self):
        Customer.objects.create(name="Müşteri A")
        Supplier.objects.create(name="Tedarikçi A")
        Supplier.objects.create(name="Tedarikçi B")

        customers = self.client.get("/api/customers/")
        suppliers = self.client.get("/api/suppliers/")

        self.assertEqual(customers.data["count"], 1)
        self.assertEqual(suppliers.data["count"], 2)

    def test_supplier_is_not_reachable_as_customer(self):
        supplier = Supplier.objects.create(name="Tedarikçi A")

        response = self.client.get(f"/api/customers/{supplier.id}/")

        self.assertEqual(response.status_code, 404)

    def test_blank_name_is_rejected(self):
        response = self.client.post("/api/suppliers/", {"name": "   "}, format="json")

        self.assertEqual(response.status_code, 400)

    def test_delete_is_soft(self):
        customer = Customer.objects.create(name="Müşteri A")

        response = self.client.delete(f"/api/customers/{customer.id}/")

        self.assertEqual(response.status_code, 204)
        self.assertTrue(Contact.all_objects.filter(pk=customer.id, deleted_by="user-hayrullah").exists())
        self.assertFalse(Contact.objects.filter(pk=customer.id).exists())
