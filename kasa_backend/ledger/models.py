# ledger/models.py

"""
CASH BOOK LEDGER

Every money movement of the business is one LedgerEntry row.

Sources:
- KASA:  physical cash drawer; the ONLY source that moves the cash balance
- BANKA: bank account; moves `bank_delta` (signed), never the cash balance
- KART:  company credit card; moves card risk, never the cash balance
- CEK:   cheque info row; display figures only

Rules:
- incoming / outgoing are cash columns and stay 0 outside KASA
- display_incoming / display_outgoing are for screens, never for balances
- balance_after is the cash balance snapshot at insert time
- Amount fields are never edited in place; removal is a soft delete done by
  ledger.services.recording.delete_entry
"""

from __future__ import annotations

from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from common.models import SoftDeleteModel

ZERO = Decimal("0.00")


class Tag(models.Model):
    name = models.CharField(max_length=60, unique=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class LedgerEntry(SoftDeleteModel):
    # ---------------------------------------------
    # SOURCE / METHOD / DIRECTION
    # ---------------------------------------------
    SOURCE_KASA = "KASA"
    SOURCE_BANKA = "BANKA"
    SOURCE_KART = "KART"
    SOURCE_CEK = "CEK"

    SOURCES = [
        (SOURCE_KASA, "Kasa"),
        (SOURCE_BANKA, "Banka"),
        (SOURCE_KART, "Kredi Kartı"),
        (SOURCE_CEK, "Çek"),
    ]

    METHOD_CASH = "CASH"
    METHOD_BANK = "BANK"
    METHOD_CARD = "CARD"

    METHODS = [
        (METHOD_CASH, "Nakit"),
        (METHOD_BANK, "Banka"),
        (METHOD_CARD, "Kart"),
    ]

    DIRECTION_INFLOW = "INFLOW"
    DIRECTION_OUTFLOW = "OUTFLOW"

    DIRECTIONS = [
        (DIRECTION_INFLOW, "Giriş"),
        (DIRECTION_OUTFLOW, "Çıkış"),
    ]

    # ---------------------------------------------
    # OPERATION TYPES
    # ---------------------------------------------
    TYPE_CASH_IN = "CASH_IN"
    TYPE_CASH_OUT = "CASH_OUT"
    TYPE_BANK_IN = "BANK_IN"
    TYPE_BANK_OUT = "BANK_OUT"
    TYPE_POS_COLLECTION = "POS_COLLECTION"
    TYPE_POS_COMMISSION = "POS_COMMISSION"
    TYPE_CARD_EXPENSE = "CARD_EXPENSE"
    TYPE_CARD_PAYMENT = "CARD_PAYMENT"
    TYPE_CEK_TAHSIL = "CEK_TAHSIL"
    TYPE_CEK_ODENMESI = "CEK_ODENMESI"
    TYPE_CEK_KARSILIKSIZ = "CEK_KARSILIKSIZ"

    TYPES = [
        (TYPE_CASH_IN, "Nakit Giriş"),
        (TYPE_CASH_OUT, "Nakit Çıkış"),
        (TYPE_BANK_IN, "Banka Giriş"),
        (TYPE_BANK_OUT, "Banka Çıkış"),
        (TYPE_POS_COLLECTION, "POS Tahsilat"),
        (TYPE_POS_COMMISSION, "POS Komisyon"),
        (TYPE_CARD_EXPENSE, "Kredi Kartı Harcama"),
        (TYPE_CARD_PAYMENT, "Kredi Kartı Ödeme"),
        (TYPE_CEK_TAHSIL, "Çek Tahsilatı"),
        (TYPE_CEK_ODENMESI, "Çek Ödemesi"),
        (TYPE_CEK_KARSILIKSIZ, "Karşılıksız Çek"),
    ]

    # Fields that may change after insert (soft delete only)
    MUTABLE_FIELDS = frozenset({"deleted_at", "deleted_by"})

    iso_date = models.DateField(db_index=True)
    document_no = models.CharField(max_length=32, blank=True, default="", db_index=True)

    type = models.CharField(max_length=20, choices=TYPES)
    source = models.CharField(max_length=10, choices=SOURCES)
    method = models.CharField(max_length=10, choices=METHODS)
    direction = models.CharField(max_length=10, choices=DIRECTIONS)
    category = models.CharField(max_length=100, blank=True, default="")

    amount = models.DecimalField(max_digits=14, decimal_places=2)
    counterparty = models.CharField(max_length=200, blank=True, default="")
    description = models.TextField(blank=True, default="")

    # ---------------------------------------------
    # CASH / BANK FIGURES
    # ---------------------------------------------
    incoming = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)
    outgoing = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)
    bank_delta = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)

    display_incoming = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    display_outgoing = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)

    balance_after = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)

    # ---------------------------------------------
    # POS / CARD FIGURES
    # ---------------------------------------------
    pos_gross = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    pos_commission = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    pos_net = models.DecimalField(max_digits=14, decimal_places=2, null=True, blank=True)
    pos_effective_rate = models.DecimalField(max_digits=6, decimal_places=4, null=True, blank=True)

    statement_delta = models.DecimalField(max_digits=14, decimal_places=2, default=ZERO)

    # ---------------------------------------------
    # LINKS
    # ---------------------------------------------
    bank_account = models.ForeignKey(
        "banking.BankAccount",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        null=True,
        blank=True,
    )
    card = models.ForeignKey(
        "banking.Card",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        null=True,
        blank=True,
    )
    pos_terminal = models.ForeignKey(
        "banking.PosTerminal",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        null=True,
        blank=True,
    )
    contact = models.ForeignKey(
        "contacts.Contact",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        null=True,
        blank=True,
    )
    cheque = models.ForeignKey(
        "cheques.Cheque",
        on_delete=models.PROTECT,
        related_name="ledger_entries",
        null=True,
        blank=True,
    )

    tags = models.ManyToManyField(Tag, related_name="entries", blank=True)

    created_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["iso_date", "created_at", "id"]
        indexes = [
            models.Index(fields=["iso_date", "source"], name="ledger_date_source_idx"),
            models.Index(fields=["type", "iso_date"], name="ledger_type_date_idx"),
        ]
        verbose_name = "ledger entry"
        verbose_name_plural = "ledger entries"

    def __str__(self):
        return f"{self.document_no or self.pk} {self.type} {self.amount}"

    # ---------------------------------------------
    # IMMUTABILITY
    # ---------------------------------------------
    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            update_fields = kwargs.get("update_fields")
            if update_fields is None or not set(update_fields) <= self.MUTABLE_FIELDS:
                raise ValidationError("Ledger entries are immutable once created.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Ledger entries cannot be hard-deleted.")

    @property
    def cash_delta(self) -> Decimal:
        if self.source != self.SOURCE_KASA:
            return ZERO
        return self.incoming - self.outgoing
