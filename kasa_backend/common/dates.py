# common/dates.py

"""
CALENDAR HELPERS

Pure date arithmetic on calendar dates (no time of day).

Rules:
- ISO text is always YYYY-MM-DD, zero padded
- Month arithmetic rolls over year boundaries in both directions
- Day-of-month values beyond a short month are clamped to its last day
"""

from __future__ import annotations

import calendar
from datetime import date

from django.utils import timezone

from common.exceptions import BusinessValidationError

WEEKDAYS_TR = (
    "pazartesi",
    "salı",
    "çarşamba",
    "perşembe",
    "cuma",
    "cumartesi",
    "pazar",
)


def parse_iso(value) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise BusinessValidationError(f"Geçersiz tarih: {value!r}") from exc


def to_iso(value) -> str:
    return parse_iso(value).isoformat()


def today() -> date:
    """Current calendar date in the project time zone."""
    return timezone.localdate()


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def clamped_date(year: int, month: int, day: int) -> date:
    return date(year, month, min(day, days_in_month(year, month)))


def add_months(value, months: int) -> date:
    d = parse_iso(value)
    year, month = shift_month(d.year, d.month, months)
    return clamped_date(year, month, d.day)


def diff_in_days(start, end) -> int:
    return (parse_iso(end) - parse_iso(start)).days


def weekday_tr(value) -> str:
    return WEEKDAYS_TR[parse_iso(value).weekday()]


def iso_to_display(value) -> str:
    return parse_iso(value).strftime("%d.%m.%Y")


def display_to_iso(text: str) -> str:
    parts = (text or "").strip().split(".")
    if len(parts) != 3:
        raise BusinessValidationError(f"Geçersiz tarih: {text!r}")
    day, month, year = parts
    return to_iso(f"{year}-{month.zfill(2)}-{day.zfill(2)}")
