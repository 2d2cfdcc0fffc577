# ledger/services/balance.py

"""
CASH BALANCE CALCULATOR

Cash balance = sum(incoming - outgoing) over live KASA entries.
BANKA, KART and CEK entries never move it.

Bank balance = initial_balance + sum(bank_delta) over live entries of that
bank account.

READ-ONLY
"""

from __future__ import annotations

from decimal import Decimal

from django.db.models import DecimalField, Sum, Value
from django.db.models.functions import Coalesce

from common.dates import parse_iso
from common.money import ZERO, money
from ledger.models import LedgerEntry

_MONEY = DecimalField(max_digits=14, decimal_places=2)


def _sum(qs, field: str) -> Decimal:
    total = qs.aggregate(total=Coalesce(Sum(field), Value(ZERO), output_field=_MONEY))["total"]
    return money(total)


def _cash_entries():
    return LedgerEntry.objects.filter(source=LedgerEntry.SOURCE_KASA)


def cash_balance(as_of=None, *, before=None) -> Decimal:
    """
    Cash balance including every KASA entry up to `as_of` (inclusive),
    or strictly before `before`. Both None: all entries.
    """
    qs = _cash_entries()
    if as_of is not None:
        qs = qs.filter(iso_date__lte=parse_iso(as_of))
    if before is not None:
        qs = qs.filter(iso_date__lt=parse_iso(before))
    return _sum(qs, "incoming") - _sum(qs, "outgoing")


def compute_balance_after(as_of, incoming, outgoing, source: str, exclude_id=None) -> Decimal:
    qs = _cash_entries().filter(iso_date__lte=parse_iso(as_of))
    if exclude_id is not None:
        qs = qs.exclude(pk=exclude_id)

    balance = _sum(qs, "incoming") - _sum(qs, "outgoing")

    if source == LedgerEntry.SOURCE_KASA:
        balance += money(incoming) - money(outgoing)

    return money(balance)


def bank_balance(bank_account, as_of=None) -> Decimal:
    qs = LedgerEntry.objects.filter(bank_account=bank_account)
    if as_of is not None:
        qs = qs.filter(iso_date__lte=parse_iso(as_of))
    return money(bank_account.initial_balance) + _sum(qs, "bank_delta")
