# cheques/services/lifecycle.py

"""
CHEQUE LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed status transitions for cheques.

DESIGN PRINCIPLES:
- No database writes
- No side effects (those live in cheque_service.STATUS_EFFECTS)
- Single source of truth: direction -> current status -> allowed targets
"""

from __future__ import annotations

from cheques.models import Cheque, ChequeMove
from common.exceptions import BusinessValidationError, InvalidTransitionError

# ============================================================
# STATE DEFINITIONS
# ============================================================

INITIAL_STATUS = {
    Cheque.DIRECTION_ALACAK: Cheque.STATUS_KASADA,
    Cheque.DIRECTION_BORC: Cheque.STATUS_ODEMEDE,
}

CREATION_ACTION = {
    Cheque.DIRECTION_ALACAK: ChequeMove.ACTION_IN,
    Cheque.DIRECTION_BORC: ChequeMove.ACTION_ISSUE,
}

# Reachable from every state, in both directions
ALWAYS_ALLOWED = frozenset({Cheque.STATUS_KARSILIKSIZ})

ALLOWED_TRANSITIONS = {
    Cheque.DIRECTION_ALACAK: {
        Cheque.STATUS_KASADA: {
            Cheque.STATUS_BANKADA_TAHSILDE,
            Cheque.STATUS_TAHSIL_EDILDI,
            Cheque.STATUS_ODEMEDE,
        },
        Cheque.STATUS_BANKADA_TAHSILDE: {
            Cheque.STATUS_TAHSIL_EDILDI,
        },
    },
    Cheque.DIRECTION_BORC: {
        Cheque.STATUS_KASADA: {Cheque.STATUS_ODENDI},
        Cheque.STATUS_BANKADA_TAHSILDE: {Cheque.STATUS_ODENDI},
        Cheque.STATUS_ODEMEDE: {Cheque.STATUS_ODENDI},
        Cheque.STATUS_TAHSIL_EDILDI: {Cheque.STATUS_ODENDI},
    },
}

MOVE_ACTION = {
    Cheque.STATUS_BANKADA_TAHSILDE: ChequeMove.ACTION_BANK,
    Cheque.STATUS_ODEMEDE: ChequeMove.ACTION_OUT,
    Cheque.STATUS_TAHSIL_EDILDI: ChequeMove.ACTION_COLLECTION,
    Cheque.STATUS_ODENDI: ChequeMove.ACTION_PAYMENT,
    Cheque.STATUS_KARSILIKSIZ: ChequeMove.ACTION_BOUNCE,
}

_VALID_STATUSES = frozenset(value for value, _ in Cheque.STATUSES)
_VALID_DIRECTIONS = frozenset(value for value, _ in Cheque.DIRECTIONS)


# ============================================================
# DOMAIN RULES
# ============================================================


def normalize_status(value: str) -> str:
    raw = (value or "").strip()
    status = Cheque.STATUS_ALIASES.get(raw, raw.upper())
    status = Cheque.STATUS_ALIASES.get(status, status)
    if status not in _VALID_STATUSES:
        raise BusinessValidationError(f"Geçersiz çek durumu: {value}", details={"status": value})
    return status


def initial_status(direction: str) -> str:
    if direction not in _VALID_DIRECTIONS:
        raise BusinessValidationError(f"Geçersiz çek yönü: {direction}", details={"direction": direction})
    return INITIAL_STATUS[direction]


def allowed_targets(*, direction: str, from_status: str) -> set[str]:
    targets = set(ALLOWED_TRANSITIONS.get(direction, {}).get(from_status, set()))
    return targets | ALWAYS_ALLOWED


def can_transition(*, direction: str, from_status: str, to_status: str) -> bool:
    return to_status in allowed_targets(direction=direction, from_status=from_status)


def validate_transition(*, cheque: Cheque, target_status: str) -> None:
    if not can_transition(
        direction=cheque.direction,
        from_status=cheque.status,
        to_status=target_status,
    ):
        raise InvalidTransitionError(
            current=cheque.status,
            requested=target_status,
            direction=cheque.direction,
        )
