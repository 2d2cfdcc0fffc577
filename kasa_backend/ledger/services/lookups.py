# ledger/services/lookups.py

"""
REFERENCE LOOKUPS FOR MUTATING SERVICES

Each helper returns a live (not soft-deleted) row or raises NotFoundError.
Contact helpers also check the kind: a supplier where a customer is expected
is a business validation error, not a missing row.
"""

from __future__ import annotations

from banking.models import BankAccount, Card, PosTerminal
from common.exceptions import BusinessValidationError, NotFoundError
from contacts.models import Contact


def get_bank_account(bank_account_id) -> BankAccount:
    bank = BankAccount.objects.filter(pk=bank_account_id).first()
    if bank is None:
        raise NotFoundError("Banka hesabı bulunamadı", details={"bank_account_id": bank_account_id})
    return bank


def get_card(card_id, *, lock: bool = False) -> Card:
    qs = Card.objects.all()
    if lock:
        qs = qs.select_for_update()
    card = qs.filter(pk=card_id).first()
    if card is None:
        raise NotFoundError("Kart bulunamadı", details={"card_id": card_id})
    return card


def get_pos_terminal(pos_terminal_id) -> PosTerminal:
    terminal = PosTerminal.objects.select_related("bank_account").filter(pk=pos_terminal_id).first()
    if terminal is None:
        raise NotFoundError("POS cihazı bulunamadı", details={"pos_terminal_id": pos_terminal_id})
    return terminal


def _get_contact(contact_id, *, kind: str, label: str) -> Contact:
    contact = Contact.objects.filter(pk=contact_id).first()
    if contact is None:
        raise NotFoundError(f"{label} bulunamadı", details={"contact_id": contact_id})
    if contact.kind != kind:
        raise BusinessValidationError(
            f"Seçilen cari bir {label.lower()} değil",
            details={"contact_id": contact_id, "kind": contact.kind},
        )
    return contact


def get_customer(contact_id) -> Contact:
    return _get_contact(contact_id, kind=Contact.KIND_CUSTOMER, label="Müşteri")


def get_supplier(contact_id) -> Contact:
    return _get_contact(contact_id, kind=Contact.KIND_SUPPLIER, label="Tedarikçi")


def find_supplier(contact_id):
    """Optional supplier lookup: None when missing, soft-deleted or not a supplier."""
    if not contact_id:
        return None
    return Contact.objects.filter(pk=contact_id, kind=Contact.KIND_SUPPLIER).first()
