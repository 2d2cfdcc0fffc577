# banking/services/statement.py

"""
CREDIT-CARD STATEMENT CUTOFF

Answers ONE question:
"Does a purchase on this date bill into the upcoming payment, or the next one?"

Rule:
- A statement closes on a fixed day of month (cutoff) and is paid on another
  fixed day of month (due).
- The upcoming due date is the first due day on or after the reference date.
- cutoff < due  -> the statement closes in the due date's month
                   (due 7 Feb, cutoff 2 -> closes 2 Feb)
- cutoff >= due -> it closes in the month before
                   (due 3 Feb, cutoff 28 -> closes 28 Jan)
- Purchases dated on or before the closing date belong to the upcoming
  statement; later purchases roll to the following cycle.

Days beyond a short month are clamped (31 in February -> last day of February).

READ-ONLY: pure functions, no database access.
"""

from __future__ import annotations

from datetime import date

from common.dates import clamped_date, diff_in_days, iso_to_display, parse_iso, shift_month, today


def next_due_date(reference, due_day: int) -> date:
    ref = parse_iso(reference)

    due = clamped_date(ref.year, ref.month, due_day)
    if due >= ref:
        return due

    year, month = shift_month(ref.year, ref.month, 1)
    return clamped_date(year, month, due_day)


def statement_closing_date(reference, cutoff_day: int, due_day: int) -> date:
    due = next_due_date(reference, due_day)

    if cutoff_day < due_day:
        year, month = due.year, due.month
    else:
        year, month = shift_month(due.year, due.month, -1)

    return clamped_date(year, month, cutoff_day)


def is_in_current_statement(tx_date, cutoff_day: int, due_day: int, reference=None) -> bool:
    ref = parse_iso(reference) if reference is not None else today()
    closing = statement_closing_date(ref, cutoff_day, due_day)
    return parse_iso(tx_date) <= closing


def next_due_summary(card, reference=None) -> dict:
    """
    Upcoming payment for a card: due date, closing date and days left.
    """
    ref = parse_iso(reference) if reference is not None else today()
    due = next_due_date(ref, card.due_day)
    closing = statement_closing_date(ref, card.closing_day, card.due_day)

    return {
        "due_date": due.isoformat(),
        "due_display": iso_to_display(due),
        "closing_date": closing.isoformat(),
        "days_left": diff_in_days(ref, due),
        "statement_debt": card.statement_debt,
        "current_risk": card.current_risk,
        "available_limit": card.available_limit,
    }
