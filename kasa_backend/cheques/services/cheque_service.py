# cheques/services/cheque_service.py

"""
CHEQUE SERVICE (SINGLE WRITE PATH)

Creation, base-field edits, status changes and soft delete for cheques.

Status changes:
- validated against cheques.services.lifecycle
- side effects come from STATUS_EFFECTS (target status -> handler)
- the ledger row, the cheque update and the ChequeMove commit together

Lookups for optional links (customer / supplier / bank on create and edit)
degrade to None when the referenced row is gone.
"""

from __future__ import annotations

import logging
from datetime import timedelta

from django.db import transaction
from django.db.models import DecimalField, Q, Sum, Value
from django.db.models.functions import Coalesce

from banking.models import BankAccount
from cheques.models import Cheque, ChequeMove
from cheques.services import lifecycle
from cheques.services.attachments import discard_file, get_attachment, store_attachment
from common.dates import parse_iso, today
from common.exceptions import BusinessValidationError, ConflictError, NotFoundError
from common.money import ZERO, money
from contacts.models import Contact
from ledger.models import LedgerEntry
from ledger.services import numbering
from ledger.services.entries import create_entry, require_positive
from ledger.services.lookups import find_supplier, get_bank_account

logger = logging.getLogger(__name__)

PAYABLE_LIMIT = 200

EDITABLE_FIELDS = frozenset(
    {
        "cek_no",
        "amount",
        "entry_date",
        "maturity_date",
        "direction",
        "customer_id",
        "supplier_id",
        "bank_account_id",
        "description",
        "attachment_id",
    }
)


# ============================================================
# LOOKUPS
# ============================================================


def _optional_contact(contact_id, kind: str):
    if not contact_id:
        return None
    return Contact.objects.filter(pk=contact_id, kind=kind).first()


def _optional_bank(bank_account_id):
    if not bank_account_id:
        return None
    return BankAccount.objects.filter(pk=bank_account_id).first()


def _locked(cheque_id) -> Cheque:
    cheque = Cheque.objects.select_for_update().filter(pk=cheque_id).first()
    if cheque is None:
        raise NotFoundError("Çek bulunamadı", details={"cheque_id": cheque_id})
    return cheque


def get_cheque(cheque_id) -> Cheque:
    cheque = (
        Cheque.objects
        .select_related("bank_account", "customer", "supplier", "attachment", "paid_bank_account")
        .filter(pk=cheque_id)
        .first()
    )
    if cheque is None:
        raise NotFoundError("Çek bulunamadı", details={"cheque_id": cheque_id})
    return cheque


def record_move(*, cheque: Cheque, action: str, from_status: str, actor: str, entry=None, description: str = "") -> ChequeMove:
    return ChequeMove.objects.create(
        cheque=cheque,
        action=action,
        from_status=from_status or "",
        to_status=cheque.status,
        entry=entry,
        description=description,
        performed_by=actor,
    )


# ============================================================
# CREATE / UPDATE / DELETE
# ============================================================


def create_cheque(
    *,
    actor: str,
    cek_no: str,
    amount,
    entry_date,
    maturity_date,
    direction: str,
    customer_id=None,
    supplier_id=None,
    bank_account_id=None,
    description: str = "",
    attachment_id=None,
    upload=None,
) -> Cheque:
    """
    ALACAK starts KASADA with an optional customer; BORC starts ODEMEDE with
    an optional supplier. An uploaded file is stored and linked in the same
    call; the file is removed again if the database unit fails.
    """
    cek_no = (cek_no or "").strip()
    if not cek_no:
        raise BusinessValidationError("Çek numarası gerekli", details={"cek_no": cek_no})

    amount = require_positive(amount)
    status = lifecycle.initial_status(direction)
    entry_date = parse_iso(entry_date)
    maturity_date = parse_iso(maturity_date)

    stored_path = ""
    try:
        with transaction.atomic():
            if upload is not None:
                attachment = store_attachment(upload, actor=actor)
                stored_path = attachment.path
            elif attachment_id:
                attachment = get_attachment(attachment_id)
            else:
                attachment = None

            is_receivable = direction == Cheque.DIRECTION_ALACAK

            cheque = Cheque.objects.create(
                cek_no=cek_no,
                amount=amount,
                entry_date=entry_date,
                maturity_date=maturity_date,
                direction=direction,
                status=status,
                customer=_optional_contact(customer_id, Contact.KIND_CUSTOMER) if is_receivable else None,
                supplier=None if is_receivable else _optional_contact(supplier_id, Contact.KIND_SUPPLIER),
                bank_account=_optional_bank(bank_account_id),
                description=description or "",
                attachment=attachment,
                created_by=actor,
            )

            record_move(
                cheque=cheque,
                action=lifecycle.CREATION_ACTION[direction],
                from_status="",
                actor=actor,
                description=description or "",
            )
    except Exception:
        discard_file(stored_path)
        raise

    logger.info(
        "Cheque created",
        extra={
            "cheque_id": cheque.id,
            "cek_no": cheque.cek_no,
            "direction": cheque.direction,
            "amount": str(cheque.amount),
            "actor": actor,
        },
    )
    return cheque


def update_cheque(cheque_id, *, actor: str, **changes) -> Cheque:
    """
    Base-field edit. Status never changes here (use update_cheque_status).

    - direction is immutable
    - amount is frozen once TAHSIL_EDILDI / ODENDI
    - customer only on ALACAK, supplier only on BORC
      (an endorsed ALACAK gets its supplier through ODEMEDE)
    """
    if "status" in changes:
        raise BusinessValidationError("Durum bu işlemle değiştirilemez; durum güncellemesini kullanın")

    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise BusinessValidationError("Bilinmeyen alanlar", details={"fields": sorted(unknown)})

    with transaction.atomic():
        cheque = _locked(cheque_id)

        if "direction" in changes and changes["direction"] != cheque.direction:
            raise BusinessValidationError(
                "Çek yönü değiştirilemez",
                details={"current": cheque.direction, "requested": changes["direction"]},
            )

        if "amount" in changes:
            amount = require_positive(changes["amount"])
            if amount != cheque.amount and cheque.is_settled:
                raise BusinessValidationError(
                    "Tahsil edilmiş veya ödenmiş çekin tutarı değiştirilemez",
                    details={"status": cheque.status},
                )
            cheque.amount = amount

        if "cek_no" in changes:
            cek_no = (changes["cek_no"] or "").strip()
            if not cek_no:
                raise BusinessValidationError("Çek numarası gerekli")
            cheque.cek_no = cek_no

        if "entry_date" in changes:
            cheque.entry_date = parse_iso(changes["entry_date"])
        if "maturity_date" in changes:
            cheque.maturity_date = parse_iso(changes["maturity_date"])
        if "description" in changes:
            cheque.description = changes["description"] or ""

        is_receivable = cheque.direction == Cheque.DIRECTION_ALACAK
        if changes.get("customer_id") and not is_receivable:
            raise BusinessValidationError(
                "Borç çekine müşteri atanamaz",
                details={"direction": cheque.direction, "customer_id": changes["customer_id"]},
            )
        if changes.get("supplier_id") and is_receivable:
            raise BusinessValidationError(
                "Alacak çekine tedarikçi atanamaz",
                details={"direction": cheque.direction, "supplier_id": changes["supplier_id"]},
            )

        if "customer_id" in changes:
            cheque.customer = _optional_contact(changes["customer_id"], Contact.KIND_CUSTOMER)
        if "supplier_id" in changes:
            cheque.supplier = _optional_contact(changes["supplier_id"], Contact.KIND_SUPPLIER)
        if "bank_account_id" in changes:
            cheque.bank_account = _optional_bank(changes["bank_account_id"])
        if "attachment_id" in changes:
            cheque.attachment = get_attachment(changes["attachment_id"]) if changes["attachment_id"] else None

        cheque.updated_by = actor
        cheque.save()

    logger.info(
        "Cheque updated",
        extra={"cheque_id": cheque.id, "fields": sorted(changes), "actor": actor},
    )
    return cheque


def soft_delete_cheque(cheque_id, *, actor: str) -> Cheque:
    with transaction.atomic():
        cheque = _locked(cheque_id)

        if cheque.is_paid:
            logger.warning(
                "Refused to delete paid cheque",
                extra={"cheque_id": cheque.id, "actor": actor},
            )
            raise ConflictError("Ödenmiş çek silinemez", details={"cheque_id": cheque.id})

        cheque.soft_delete(actor=actor)

    logger.info("Cheque deleted", extra={"cheque_id": cheque.id, "actor": actor})
    return cheque


# ============================================================
# STATUS SIDE EFFECTS
# ============================================================


def _collect(cheque: Cheque, *, actor, iso_date, bank, supplier_id, description):
    """TAHSIL_EDILDI: money arrives in the bank (bank given) or the drawer."""
    customer = cheque.customer
    common = dict(
        actor=actor,
        iso_date=iso_date,
        type=LedgerEntry.TYPE_CEK_TAHSIL,
        direction=LedgerEntry.DIRECTION_INFLOW,
        amount=cheque.amount,
        counterparty=customer.name if customer else "",
        description=description or f"Çek No: {cheque.cek_no}",
        contact=customer,
        cheque=cheque,
    )

    if bank is not None:
        return create_entry(
            source=LedgerEntry.SOURCE_BANKA,
            method=LedgerEntry.METHOD_BANK,
            bank_delta=cheque.amount,
            bank_account=bank,
            prefix=numbering.PREFIX_BANK_IN,
            **common,
        )

    return create_entry(
        source=LedgerEntry.SOURCE_KASA,
        method=LedgerEntry.METHOD_CASH,
        incoming=cheque.amount,
        prefix=numbering.PREFIX_CASH_IN,
        **common,
    )


def _settle(cheque: Cheque, *, actor, iso_date, bank, supplier_id, description):
    """ODENDI: money leaves the bank (bank given) or the drawer."""
    supplier = cheque.supplier
    common = dict(
        actor=actor,
        iso_date=iso_date,
        type=LedgerEntry.TYPE_CEK_ODENMESI,
        direction=LedgerEntry.DIRECTION_OUTFLOW,
        amount=cheque.amount,
        counterparty=supplier.name if supplier else "",
        description=description or f"Çek No: {cheque.cek_no}",
        contact=supplier,
        cheque=cheque,
    )

    if bank is not None:
        entry = create_entry(
            source=LedgerEntry.SOURCE_BANKA,
            method=LedgerEntry.METHOD_BANK,
            bank_delta=-cheque.amount,
            bank_account=bank,
            prefix=numbering.PREFIX_BANK_OUT,
            **common,
        )
    else:
        entry = create_entry(
            source=LedgerEntry.SOURCE_KASA,
            method=LedgerEntry.METHOD_CASH,
            outgoing=cheque.amount,
            prefix=numbering.PREFIX_CASH_OUT,
            **common,
        )

    cheque.paid_at = parse_iso(iso_date)
    cheque.paid_bank_account = bank
    cheque.payment_entry = entry
    return entry


def _bounce(cheque: Cheque, *, actor, iso_date, bank, supplier_id, description):
    """KARSILIKSIZ: info-only row; earlier movements are not reversed."""
    return create_entry(
        actor=actor,
        iso_date=iso_date,
        type=LedgerEntry.TYPE_CEK_KARSILIKSIZ,
        source=LedgerEntry.SOURCE_CEK,
        method=LedgerEntry.METHOD_BANK if bank is not None else LedgerEntry.METHOD_CASH,
        direction=LedgerEntry.DIRECTION_OUTFLOW,
        amount=cheque.amount,
        display_outgoing=cheque.amount,
        prefix=numbering.PREFIX_CHEQUE_BOUNCE,
        counterparty=cheque.counterparty_name,
        description=description or f"Çek No: {cheque.cek_no} - Karşılıksız",
        cheque=cheque,
    )


def _endorse(cheque: Cheque, *, actor, iso_date, bank, supplier_id, description):
    """ODEMEDE for a received cheque: remember which supplier it went to."""
    if cheque.direction != Cheque.DIRECTION_ALACAK:
        return None
    supplier = find_supplier(supplier_id)
    if supplier is not None:
        cheque.supplier = supplier
    return None


STATUS_EFFECTS = {
    Cheque.STATUS_TAHSIL_EDILDI: _collect,
    Cheque.STATUS_ODENDI: _settle,
    Cheque.STATUS_KARSILIKSIZ: _bounce,
    Cheque.STATUS_ODEMEDE: _endorse,
}


def update_cheque_status(
    cheque_id,
    *,
    actor: str,
    new_status: str,
    iso_date=None,
    bank_account_id=None,
    supplier_id=None,
    description: str = "",
):
    """
    Returns (cheque, ledger entry or None).
    """
    target = lifecycle.normalize_status(new_status)
    iso_date = parse_iso(iso_date) if iso_date else today()

    with transaction.atomic():
        cheque = _locked(cheque_id)
        lifecycle.validate_transition(cheque=cheque, target_status=target)

        bank = get_bank_account(bank_account_id) if bank_account_id else None
        previous = cheque.status

        effect = STATUS_EFFECTS.get(target)
        entry = None
        if effect is not None:
            entry = effect(
                cheque,
                actor=actor,
                iso_date=iso_date,
                bank=bank,
                supplier_id=supplier_id,
                description=description,
            )

        cheque.status = target
        cheque.updated_by = actor
        cheque.save()

        record_move(
            cheque=cheque,
            action=lifecycle.MOVE_ACTION[target],
            from_status=previous,
            actor=actor,
            entry=entry,
            description=description,
        )

    logger.info(
        "Cheque status changed",
        extra={
            "cheque_id": cheque.id,
            "from_status": previous,
            "to_status": target,
            "entry_id": entry.id if entry else None,
            "actor": actor,
        },
    )
    return cheque, entry


# ============================================================
# READS
# ============================================================


def _apply_filters(qs, filters: dict):
    status = filters.get("status")
    if status and status != "ALL":
        qs = qs.filter(status=lifecycle.normalize_status(status))

    if filters.get("direction"):
        qs = qs.filter(direction=filters["direction"])

    if filters.get("entry_from"):
        qs = qs.filter(entry_date__gte=parse_iso(filters["entry_from"]))
    if filters.get("entry_to"):
        qs = qs.filter(entry_date__lte=parse_iso(filters["entry_to"]))
    if filters.get("maturity_from"):
        qs = qs.filter(maturity_date__gte=parse_iso(filters["maturity_from"]))
    if filters.get("maturity_to"):
        qs = qs.filter(maturity_date__lte=parse_iso(filters["maturity_to"]))

    if filters.get("customer_id"):
        qs = qs.filter(customer_id=filters["customer_id"])
    if filters.get("supplier_id"):
        qs = qs.filter(supplier_id=filters["supplier_id"])
    if filters.get("bank_account_id"):
        qs = qs.filter(bank_account_id=filters["bank_account_id"])

    search = (filters.get("search") or "").strip()
    if search:
        qs = qs.filter(Q(cek_no__icontains=search) | Q(description__icontains=search))

    return qs


def list_cheques(reference=None, **filters):
    """
    Returns (queryset, summary).

    summary:
    - total_count / total_amount over every matching cheque
    - upcoming_maturities over matching OPEN cheques:
      within_7_days, within_30_days, overdue
    """
    ref = parse_iso(reference) if reference is not None else today()

    qs = _apply_filters(
        Cheque.objects.select_related("bank_account", "customer", "supplier", "attachment"),
        filters,
    ).order_by("maturity_date", "entry_date", "id")

    total_amount = qs.aggregate(
        total=Coalesce(Sum("amount"), Value(ZERO), output_field=DecimalField(max_digits=14, decimal_places=2))
    )["total"]

    open_qs = qs.filter(status__in=Cheque.OPEN_STATUSES)
    summary = {
        "total_count": qs.count(),
        "total_amount": money(total_amount),
        "upcoming_maturities": {
            "within_7_days": open_qs.filter(
                maturity_date__gte=ref, maturity_date__lte=ref + timedelta(days=7)
            ).count(),
            "within_30_days": open_qs.filter(
                maturity_date__gte=ref, maturity_date__lte=ref + timedelta(days=30)
            ).count(),
            "overdue": open_qs.filter(maturity_date__lt=ref).count(),
        },
    }
    return qs, summary


def payable_cheques(bank_account_id=None, reference=None) -> list[Cheque]:
    """
    BORC cheques still to pay, maturing today or later.
    """
    ref = parse_iso(reference) if reference is not None else today()

    qs = (
        Cheque.objects
        .select_related("supplier", "customer", "bank_account")
        .filter(direction=Cheque.DIRECTION_BORC, maturity_date__gte=ref)
        .exclude(status=Cheque.STATUS_ODENDI)
        .order_by("maturity_date", "created_at", "id")
    )
    if bank_account_id:
        qs = qs.filter(bank_account_id=bank_account_id)

    return list(qs[:PAYABLE_LIMIT])
