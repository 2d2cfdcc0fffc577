# common/money.py

from decimal import ROUND_HALF_UP, Decimal

TWOPLACES = Decimal("0.01")
RATE_PLACES = Decimal("0.0001")
ZERO = Decimal("0.00")


def money(v) -> Decimal:
    return Decimal(str(v or "0.00")).quantize(TWOPLACES, rounding=ROUND_HALF_UP)


def rate(v) -> Decimal:
    return Decimal(str(v or "0")).quantize(RATE_PLACES, rounding=ROUND_HALF_UP)


def floor_zero(v: Decimal) -> Decimal:
    return v if v > ZERO else ZERO
