# ledger/services/numbering.py

"""
DOCUMENT NUMBERS

Format: PREFIX-DD/MM-NNNN (e.g. BNK-CKS-05/01-0003)

- Sequence is scoped to (entry date, prefix)
- Next value = highest existing sequence among live entries + 1
- Must be called inside the atomic unit that inserts the entry
"""

from __future__ import annotations

from common.dates import parse_iso
from ledger.models import LedgerEntry

PREFIX_CASH_IN = "KS-GRS"
PREFIX_CASH_OUT = "KS-CKS"
PREFIX_BANK_IN = "BNK-GRS"
PREFIX_BANK_OUT = "BNK-CKS"
PREFIX_POS = "POS-TAH"
PREFIX_CARD_EXPENSE = "KK-HRC"
PREFIX_CARD_PAYMENT = "KK-ODM"
PREFIX_CHEQUE_PAYMENT = PREFIX_BANK_OUT
PREFIX_CHEQUE_BOUNCE = "CEK-KRS"


def document_head(iso_date, prefix: str) -> str:
    d = parse_iso(iso_date)
    return f"{prefix}-{d:%d}/{d:%m}-"


def next_document_no(iso_date, prefix: str) -> str:
    d = parse_iso(iso_date)
    head = document_head(d, prefix)

    existing = LedgerEntry.objects.filter(
        iso_date=d,
        document_no__startswith=head,
    ).values_list("document_no", flat=True)

    max_seq = 0
    for document_no in existing:
        suffix = document_no[len(head):]
        if suffix.isdigit():
            max_seq = max(max_seq, int(suffix))

    return f"{head}{max_seq + 1:04d}"
