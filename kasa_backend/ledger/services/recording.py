# ledger/services/recording.py

"""
TRANSACTION RECORDING SERVICE

One function per cash-book operation. Each one:
- validates referenced rows (bank, card, contact, POS terminal, cheque)
- computes derived figures (POS net / rate, card statement impact)
- inserts its ledger row(s) and applies side effects in ONE atomic unit
- takes an explicit `actor`

Card aggregates (current_risk, statement_debt) are changed only here, with
the card row locked, and never drop below zero.
"""

from __future__ import annotations

import logging

from django.db import transaction

from banking.services.statement import is_in_current_statement
from cheques.models import Cheque
from common.dates import today
from common.exceptions import BusinessValidationError, ConflictError, NotFoundError
from common.money import ZERO, floor_zero, money, rate
from ledger.models import LedgerEntry
from ledger.services import numbering
from ledger.services.entries import create_entry, require_positive
from ledger.services.lookups import (
    get_bank_account,
    get_card,
    get_customer,
    get_pos_terminal,
    get_supplier,
)

logger = logging.getLogger(__name__)


def _log_created(entry: LedgerEntry, actor: str) -> None:
    logger.info(
        "Ledger entry recorded",
        extra={
            "entry_id": entry.id,
            "document_no": entry.document_no,
            "type": entry.type,
            "source": entry.source,
            "amount": str(entry.amount),
            "actor": actor,
        },
    )


# ============================================================
# CASH
# ============================================================


def record_cash_in(
    *,
    actor: str,
    iso_date,
    amount,
    customer_id=None,
    counterparty: str = "",
    description: str = "",
    tags=None,
) -> LedgerEntry:
    amount = require_positive(amount)

    with transaction.atomic():
        customer = get_customer(customer_id) if customer_id else None

        entry = create_entry(
            actor=actor,
            iso_date=iso_date,
            type=LedgerEntry.TYPE_CASH_IN,
            source=LedgerEntry.SOURCE_KASA,
            method=LedgerEntry.METHOD_CASH,
            direction=LedgerEntry.DIRECTION_INFLOW,
            amount=amount,
            incoming=amount,
            prefix=numbering.PREFIX_CASH_IN,
            contact=customer,
            counterparty=counterparty or (customer.name if customer else ""),
            description=description,
            tags=tags,
        )

    _log_created(entry, actor)
    return entry


def record_cash_out(
    *,
    actor: str,
    iso_date,
    amount,
    supplier_id=None,
    category: str = "",
    counterparty: str = "",
    description: str = "",
    tags=None,
) -> LedgerEntry:
    amount = require_positive(amount)

    with transaction.atomic():
        supplier = get_supplier(supplier_id) if supplier_id else None

        entry = create_entry(
            actor=actor,
            iso_date=iso_date,
            type=LedgerEntry.TYPE_CASH_OUT,
            source=LedgerEntry.SOURCE_KASA,
            method=LedgerEntry.METHOD_CASH,
            direction=LedgerEntry.DIRECTION_OUTFLOW,
            amount=amount,
            outgoing=amount,
            prefix=numbering.PREFIX_CASH_OUT,
            contact=supplier,
            category=category,
            counterparty=counterparty or (supplier.name if supplier else ""),
            description=description,
            tags=tags,
        )

    _log_created(entry, actor)
    return entry


# ============================================================
# BANK
# ============================================================


def record_bank_in(
    *,
    actor: str,
    iso_date,
    amount,
    bank_account_id,
    customer_id=None,
    counterparty: str = "",
    description: str = "",
    tags=None,
) -> LedgerEntry:
    amount = require_positive(amount)

    with transaction.atomic():
        bank = get_bank_account(bank_account_id)
        customer = get_customer(customer_id) if customer_id else None

        entry = create_entry(
            actor=actor,
            iso_date=iso_date,
            type=LedgerEntry.TYPE_BANK_IN,
            source=LedgerEntry.SOURCE_BANKA,
            method=LedgerEntry.METHOD_BANK,
            direction=LedgerEntry.DIRECTION_INFLOW,
            amount=amount,
            bank_delta=amount,
            display_incoming=amount,
            prefix=numbering.PREFIX_BANK_IN,
            bank_account=bank,
            contact=customer,
            counterparty=counterparty or (customer.name if customer else bank.name),
            description=description,
            tags=tags,
        )

    _log_created(entry, actor)
    return entry


def record_bank_out(
    *,
    actor: str,
    iso_date,
    amount,
    bank_account_id,
    supplier_id=None,
    cheque_id=None,
    category: str = "",
    counterparty: str = "",
    description: str = "",
    tags=None,
) -> LedgerEntry:
    amount = require_positive(amount)

    with transaction.atomic():
        bank = get_bank_account(bank_account_id)
        supplier = get_supplier(supplier_id) if supplier_id else None

        cheque = None
        if cheque_id:
            cheque = Cheque.objects.filter(pk=cheque_id).first()
            if cheque is None:
                raise NotFoundError("Çek bulunamadı", details={"cheque_id": cheque_id})

        entry = create_entry(
            actor=actor,
            iso_date=iso_date,
            type=LedgerEntry.TYPE_BANK_OUT,
            source=LedgerEntry.SOURCE_BANKA,
            method=LedgerEntry.METHOD_BANK,
            direction=LedgerEntry.DIRECTION_OUTFLOW,
            amount=amount,
            bank_delta=-amount,
            display_outgoing=amount,
            prefix=numbering.PREFIX_BANK_OUT,
            bank_account=bank,
            contact=supplier,
            cheque=cheque,
            category=category,
            counterparty=counterparty or (supplier.name if supplier else bank.name),
            description=description,
            tags=tags,
        )

    _log_created(entry, actor)
    return entry


# ============================================================
# POS
# ============================================================


def pos_figures(gross, commission) -> dict:
    """
    net = gross - commission, effective rate = commission / gross (4 places).
    """
    gross = money(gross)
    commission = money(commission)

    if commission < ZERO:
        raise BusinessValidationError("Komisyon negatif olamaz", details={"commission": str(commission)})
    if commission > gross:
        raise BusinessValidationError(
            "Komisyon brüt tutardan büyük olamaz",
            details={"gross": str(gross), "commission": str(commission)},
        )

    return {
        "pos_gross": gross,
        "pos_commission": commission,
        "pos_net": gross - commission,
        "pos_effective_rate": rate(commission / gross) if gross > ZERO else rate(0),
    }


def record_pos_collection(
    *,
    actor: str,
    iso_date,
    gross,
    commission=None,
    bank_account_id=None,
    pos_terminal_id=None,
    customer_id=None,
    description: str = "",
    tags=None,
) -> list[LedgerEntry]:
    """
    Writes two BANKA rows: net inflow (+net) and commission outflow
    (-commission). Both carry all four POS figures.
    """
    gross = require_positive(gross, "gross")

    with transaction.atomic():
        terminal = get_pos_terminal(pos_terminal_id) if pos_terminal_id else None

        if bank_account_id:
            bank = get_bank_account(bank_account_id)
        elif terminal is not None:
            bank = terminal.bank_account
        else:
            raise BusinessValidationError("Banka hesabı veya POS cihazı gerekli")

        if commission is None:
            if terminal is None:
                raise BusinessValidationError("Komisyon tutarı veya POS cihazı gerekli")
            commission = money(gross * terminal.commission_rate)

        figures = pos_figures(gross, commission)
        customer = get_customer(customer_id) if customer_id else None
        counterparty = customer.name if customer else bank.name
        rate_pct = figures["pos_effective_rate"] * 100

        shared = dict(
            actor=actor,
            iso_date=iso_date,
            source=LedgerEntry.SOURCE_BANKA,
            method=LedgerEntry.METHOD_CARD,
            prefix=numbering.PREFIX_POS,
            bank_account=bank,
            pos_terminal=terminal,
            contact=customer,
            counterparty=counterparty,
            tags=tags,
            **figures,
        )

        net_entry = create_entry(
            type=LedgerEntry.TYPE_POS_COLLECTION,
            direction=LedgerEntry.DIRECTION_INFLOW,
            amount=figures["pos_net"],
            bank_delta=figures["pos_net"],
            display_incoming=figures["pos_net"],
            description=description or f"{bank.name} POS tahsilatı (brüt {figures['pos_gross']} TL)",
            **shared,
        )

        commission_entry = create_entry(
            type=LedgerEntry.TYPE_POS_COMMISSION,
            direction=LedgerEntry.DIRECTION_OUTFLOW,
            amount=figures["pos_commission"],
            bank_delta=-figures["pos_commission"],
            display_outgoing=figures["pos_commission"],
            description=description or f"{bank.name} POS komisyonu (%{rate_pct:.2f})",
            **shared,
        )

    logger.info(
        "POS collection recorded",
        extra={
            "entry_ids": [net_entry.id, commission_entry.id],
            "gross": str(figures["pos_gross"]),
            "commission": str(figures["pos_commission"]),
            "net": str(figures["pos_net"]),
            "actor": actor,
        },
    )
    return [net_entry, commission_entry]


# ============================================================
# CREDIT CARD
# ============================================================


def record_card_expense(
    *,
    actor: str,
    iso_date,
    amount,
    card_id,
    supplier_id=None,
    category: str = "",
    counterparty: str = "",
    description: str = "",
    tags=None,
) -> LedgerEntry:
    """
    Spend on a company card. Moves card risk, never cash or bank.

    statement_debt grows only when the purchase date falls on or before the
    upcoming statement's closing date; the applied change is stored on the
    entry (statement_delta) so deletion can reverse it exactly.
    """
    amount = require_positive(amount)

    with transaction.atomic():
        card = get_card(card_id, lock=True)
        supplier = get_supplier(supplier_id) if supplier_id else None

        in_statement = is_in_current_statement(iso_date, card.closing_day, card.due_day, today())
        statement_delta = amount if in_statement else ZERO

        entry = create_entry(
            actor=actor,
            iso_date=iso_date,
            type=LedgerEntry.TYPE_CARD_EXPENSE,
            source=LedgerEntry.SOURCE_KART,
            method=LedgerEntry.METHOD_CARD,
            direction=LedgerEntry.DIRECTION_OUTFLOW,
            amount=amount,
            display_outgoing=amount,
            statement_delta=statement_delta,
            prefix=numbering.PREFIX_CARD_EXPENSE,
            card=card,
            contact=supplier,
            category=category,
            counterparty=counterparty or (supplier.name if supplier else card.name),
            description=description,
            tags=tags,
        )

        card.current_risk = money(card.current_risk + amount)
        card.statement_debt = money(card.statement_debt + statement_delta)
        card.save(update_fields=["current_risk", "statement_debt", "updated_at"])

    _log_created(entry, actor)
    return entry


def record_card_payment(
    *,
    actor: str,
    iso_date,
    amount,
    card_id,
    bank_account_id=None,
    description: str = "",
    tags=None,
) -> LedgerEntry:
    """
    Pay down a card from a bank account (BANKA) or from the cash drawer (KASA).
    """
    amount = require_positive(amount)

    with transaction.atomic():
        card = get_card(card_id, lock=True)
        bank = get_bank_account(bank_account_id) if bank_account_id else None

        new_debt = floor_zero(card.statement_debt - amount)
        statement_delta = new_debt - card.statement_debt

        if bank is not None:
            money_fields = dict(
                source=LedgerEntry.SOURCE_BANKA,
                method=LedgerEntry.METHOD_BANK,
                bank_delta=-amount,
                display_outgoing=amount,
                bank_account=bank,
            )
        else:
            money_fields = dict(
                source=LedgerEntry.SOURCE_KASA,
                method=LedgerEntry.METHOD_CASH,
                outgoing=amount,
            )

        entry = create_entry(
            actor=actor,
            iso_date=iso_date,
            type=LedgerEntry.TYPE_CARD_PAYMENT,
            direction=LedgerEntry.DIRECTION_OUTFLOW,
            amount=amount,
            statement_delta=statement_delta,
            prefix=numbering.PREFIX_CARD_PAYMENT,
            card=card,
            counterparty=card.name,
            description=description or f"{card.name} kart ödemesi",
            tags=tags,
            **money_fields,
        )

        card.current_risk = floor_zero(money(card.current_risk - amount))
        card.statement_debt = new_debt
        card.save(update_fields=["current_risk", "statement_debt", "updated_at"])

    _log_created(entry, actor)
    return entry


def _reverse_card_effects(entry: LedgerEntry) -> None:
    card = get_card(entry.card_id, lock=True) if entry.card_id else None
    if card is None:
        return

    if entry.type == LedgerEntry.TYPE_CARD_EXPENSE:
        card.current_risk = floor_zero(money(card.current_risk - entry.amount))
    elif entry.type == LedgerEntry.TYPE_CARD_PAYMENT:
        card.current_risk = money(card.current_risk + entry.amount)
    else:
        return

    card.statement_debt = floor_zero(money(card.statement_debt - entry.statement_delta))
    card.save(update_fields=["current_risk", "statement_debt", "updated_at"])


# ============================================================
# DELETE
# ============================================================


def delete_entry(entry_id, *, actor: str) -> LedgerEntry:
    """
    Soft-delete a ledger entry, reversing card side effects and dropping tags.

    Entries that settle a cheque are refused with ConflictError.
    """
    with transaction.atomic():
        entry = LedgerEntry.objects.select_for_update().filter(pk=entry_id).first()
        if entry is None:
            raise NotFoundError("Kayıt bulunamadı", details={"entry_id": entry_id})

        if Cheque.all_objects.filter(payment_entry=entry).exists():
            logger.warning(
                "Refused to delete cheque payment entry",
                extra={"entry_id": entry.id, "actor": actor},
            )
            raise ConflictError("Çek ödemesine bağlı kayıt silinemez")

        _reverse_card_effects(entry)
        entry.tags.clear()
        entry.soft_delete(actor=actor)

    logger.info(
        "Ledger entry deleted",
        extra={"entry_id": entry.id, "type": entry.type, "actor": actor},
    )
    return entry
