# cheques/services/payment.py

"""
PAYABLE CHEQUE SETTLEMENT (ATOMIC)

pay_cheque is the bank-payment path for BORC cheques.

Guarantees:
- cheque row locked for the whole unit
- direction must be BORC
- paying twice -> ConflictError on the second call, one payment entry only
- entry (BANKA, bank_delta = -amount), cheque update and PAYMENT move commit
  together or not at all
"""

from __future__ import annotations

import logging

from django.db import transaction

from cheques.models import Cheque, ChequeMove
from cheques.services import lifecycle
from cheques.services.cheque_service import record_move
from common.dates import parse_iso
from common.exceptions import BusinessValidationError, ConflictError, NotFoundError
from ledger.models import LedgerEntry
from ledger.services import numbering
from ledger.services.entries import create_entry
from ledger.services.lookups import get_bank_account

logger = logging.getLogger(__name__)


def pay_cheque(cheque_id, *, actor: str, payment_date, bank_account_id, note: str = "") -> Cheque:
    payment_date = parse_iso(payment_date)

    with transaction.atomic():
        cheque = Cheque.objects.select_for_update().filter(pk=cheque_id).first()
        if cheque is None:
            raise NotFoundError("Çek bulunamadı", details={"cheque_id": cheque_id})

        if cheque.direction != Cheque.DIRECTION_BORC:
            logger.warning(
                "Refused to pay receivable cheque",
                extra={"cheque_id": cheque.id, "direction": cheque.direction, "actor": actor},
            )
            raise BusinessValidationError(
                "Sadece BORC çekler ödenebilir",
                details={"direction": cheque.direction},
            )

        if cheque.is_paid:
            logger.warning(
                "Duplicate cheque payment blocked",
                extra={"cheque_id": cheque.id, "payment_entry_id": cheque.payment_entry_id, "actor": actor},
            )
            raise ConflictError("Bu çek zaten ödenmiş", details={"cheque_id": cheque.id})

        lifecycle.validate_transition(cheque=cheque, target_status=Cheque.STATUS_ODENDI)

        bank = get_bank_account(bank_account_id)
        supplier = cheque.supplier
        supplier_suffix = f" - {supplier.name}" if supplier else ""

        entry = create_entry(
            actor=actor,
            iso_date=payment_date,
            type=LedgerEntry.TYPE_CEK_ODENMESI,
            source=LedgerEntry.SOURCE_BANKA,
            method=LedgerEntry.METHOD_BANK,
            direction=LedgerEntry.DIRECTION_OUTFLOW,
            amount=cheque.amount,
            bank_delta=-cheque.amount,
            display_outgoing=cheque.amount,
            prefix=numbering.PREFIX_CHEQUE_PAYMENT,
            bank_account=bank,
            contact=supplier,
            cheque=cheque,
            counterparty=cheque.counterparty_name,
            description=note or f"Çek No: {cheque.cek_no}{supplier_suffix}",
        )

        previous = cheque.status
        cheque.status = Cheque.STATUS_ODENDI
        cheque.paid_at = payment_date
        cheque.paid_bank_account = bank
        cheque.payment_entry = entry
        cheque.updated_by = actor
        cheque.save()

        record_move(
            cheque=cheque,
            action=ChequeMove.ACTION_PAYMENT,
            from_status=previous,
            actor=actor,
            entry=entry,
            description=note,
        )

    logger.info(
        "Cheque paid",
        extra={
            "cheque_id": cheque.id,
            "entry_id": entry.id,
            "document_no": entry.document_no,
            "amount": str(cheque.amount),
            "actor": actor,
        },
    )
    return cheque
