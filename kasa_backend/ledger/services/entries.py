# ledger/services/entries.py

"""
LEDGER ENTRY FACTORY

Single insert path for every ledger row (cash, bank, POS, card, cheque).

Responsibilities:
- normalize money figures to 2 places
- snapshot the cash balance (balance_after)
- allocate the document number
- attach tags

MUST be called inside transaction.atomic(); it does not open its own unit so
the caller's side effects (card risk, cheque status) commit or roll back
together with the row.
"""

from __future__ import annotations

from decimal import Decimal

from django.db import transaction

from common.dates import parse_iso
from common.exceptions import BusinessValidationError
from common.money import ZERO, money, rate
from ledger.models import LedgerEntry, Tag
from ledger.services.balance import compute_balance_after
from ledger.services.numbering import next_document_no

_MONEY_FIELDS = (
    "bank_delta",
    "statement_delta",
)

_OPTIONAL_MONEY_FIELDS = (
    "display_incoming",
    "display_outgoing",
    "pos_gross",
    "pos_commission",
    "pos_net",
)


def resolve_tags(names) -> list[Tag]:
    tags = []
    for raw in names or []:
        name = (raw or "").strip()
        if not name:
            continue
        tag, _ = Tag.objects.get_or_create(name=name)
        tags.append(tag)
    return tags


def create_entry(
    *,
    actor: str,
    iso_date,
    type: str,
    source: str,
    method: str,
    direction: str,
    amount,
    prefix: str | None = None,
    incoming=ZERO,
    outgoing=ZERO,
    tags=None,
    **fields,
) -> LedgerEntry:
    if not transaction.get_connection().in_atomic_block:
        raise RuntimeError("create_entry must run inside transaction.atomic()")

    d = parse_iso(iso_date)
    amount = money(amount)
    if amount < ZERO:
        raise BusinessValidationError("Tutar negatif olamaz", details={"amount": str(amount)})

    incoming = money(incoming)
    outgoing = money(outgoing)

    for name in _MONEY_FIELDS:
        if name in fields:
            fields[name] = money(fields[name])
    for name in _OPTIONAL_MONEY_FIELDS:
        if fields.get(name) is not None:
            fields[name] = money(fields[name])
    if fields.get("pos_effective_rate") is not None:
        fields["pos_effective_rate"] = rate(fields["pos_effective_rate"])

    entry = LedgerEntry.objects.create(
        iso_date=d,
        document_no=next_document_no(d, prefix) if prefix else "",
        type=type,
        source=source,
        method=method,
        direction=direction,
        amount=amount,
        incoming=incoming,
        outgoing=outgoing,
        balance_after=compute_balance_after(d, incoming, outgoing, source),
        created_by=actor,
        **fields,
    )

    tag_objs = resolve_tags(tags)
    if tag_objs:
        entry.tags.set(tag_objs)

    return entry


def require_positive(amount, field: str = "amount") -> Decimal:
    value = money(amount)
    if value <= ZERO:
        raise BusinessValidationError(
            "Tutar sıfırdan büyük olmalı",
            details={field: str(value)},
        )
    return value
