# contacts/models.py

"""
CONTACTS

One table for every counterparty; `kind` tells customers from suppliers.
Customer and Supplier are proxy models scoped to their kind, so services can
write `Customer.objects.get(pk=...)` and get a kind-checked lookup.
"""

from __future__ import annotations

from django.db import models

from common.models import ActiveManager, SoftDeleteModel


class Contact(SoftDeleteModel):
    KIND_CUSTOMER = "CUSTOMER"
    KIND_SUPPLIER = "SUPPLIER"

    KINDS = [
        (KIND_CUSTOMER, "Müşteri"),
        (KIND_SUPPLIER, "Tedarikçi"),
    ]

    name = models.CharField(max_length=200, unique=True)
    kind = models.CharField(max_length=10, choices=KINDS)
    phone = models.CharField(max_length=50, blank=True, default="")
    tax_no = models.CharField(max_length=20, blank=True, default="")
    note = models.TextField(blank=True, default="")

    created_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        indexes = [
            models.Index(fields=["kind", "name"], name="contact_kind_name_idx"),
        ]

    def __str__(self):
        return self.name

    @property
    def is_customer(self) -> bool:
        return self.kind == self.KIND_CUSTOMER

    @property
    def is_supplier(self) -> bool:
        return self.kind == self.KIND_SUPPLIER


class _KindManager(ActiveManager):
    kind = None

    def get_queryset(self):
        return super().get_queryset().filter(kind=self.kind)


class CustomerManager(_KindManager):
    kind = Contact.KIND_CUSTOMER


class SupplierManager(_KindManager):
    kind = Contact.KIND_SUPPLIER


class Customer(Contact):
    objects = CustomerManager()

    class Meta:
        proxy = True
        verbose_name = "Customer"

    def save(self, *args, **kwargs):
        self.kind = Contact.KIND_CUSTOMER
        super().save(*args, **kwargs)


class Supplier(Contact):
    objects = SupplierManager()

    class Meta:
        proxy = True
        verbose_name = "Supplier"

    def save(self, *args, **kwargs):
        self.kind = Contact.KIND_SUPPLIER
        super().save(*args, **kwargs)
