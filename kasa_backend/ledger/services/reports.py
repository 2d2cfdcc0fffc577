# ledger/services/reports.py

"""
RUNNING CASH BOOK (KASA DEFTERİ)

Authoritative balance view: balances are replayed on the fly instead of
trusting stored balance_after snapshots, so backdated entries show correctly.

READ-ONLY
"""

from __future__ import annotations

from common.dates import parse_iso
from common.exceptions import BusinessValidationError
from common.money import ZERO, money
from ledger.models import LedgerEntry
from ledger.services.balance import cash_balance


def running_ledger(start, end, cash_only: bool = False) -> dict:
    start_date = parse_iso(start)
    end_date = parse_iso(end)
    if start_date > end_date:
        raise BusinessValidationError(
            "Başlangıç tarihi bitiş tarihinden sonra olamaz",
            details={"start": start_date.isoformat(), "end": end_date.isoformat()},
        )

    opening = cash_balance(before=start_date)

    qs = (
        LedgerEntry.objects
        .filter(iso_date__gte=start_date, iso_date__lte=end_date)
        .select_related("bank_account", "card", "contact")
        .prefetch_related("tags")
        .order_by("iso_date", "created_at", "id")
    )
    if cash_only:
        qs = qs.filter(source=LedgerEntry.SOURCE_KASA)

    running = opening
    total_incoming = ZERO
    total_outgoing = ZERO
    rows = []

    for entry in qs:
        delta = entry.cash_delta
        running = money(running + delta)
        if entry.source == LedgerEntry.SOURCE_KASA:
            total_incoming += entry.incoming
            total_outgoing += entry.outgoing

        # Report-only attribute, never saved
        entry.running_balance = running
        rows.append(entry)

    return {
        "start": start_date,
        "end": end_date,
        "opening_balance": opening,
        "total_incoming": money(total_incoming),
        "total_outgoing": money(total_outgoing),
        "closing_balance": running,
        "entries": rows,
    }
