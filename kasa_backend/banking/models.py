# banking/models.py

"""
BANKING REFERENCE DATA

- BankAccount: where BANKA-source ledger entries land (bank_delta)
- Card: company credit card with running risk and statement debt
- PosTerminal: card reader with its default commission rate

Card aggregates:
- current_risk: everything spent and not yet paid back
- statement_debt: the part of current_risk that bills into the upcoming payment
Both are adjusted only by ledger services, inside the same atomic unit as
the entry that caused the change, and never go below zero.
"""

from __future__ import annotations

from decimal import Decimal

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q

from common.models import SoftDeleteModel


class BankAccount(SoftDeleteModel):
    name = models.CharField(max_length=120, unique=True)
    iban = models.CharField(max_length=34, blank=True, default="")
    account_no = models.CharField(max_length=40, blank=True, default="")

    initial_balance = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    created_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name


class Card(SoftDeleteModel):
    name = models.CharField(max_length=120, unique=True)

    bank_account = models.ForeignKey(
        BankAccount,
        on_delete=models.PROTECT,
        related_name="cards",
        null=True,
        blank=True,
    )

    limit = models.DecimalField(max_digits=14, decimal_places=2, default=Decimal("0.00"))

    closing_day = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(31)],
        help_text="Statement cutoff day of month (hesap kesim günü)",
    )
    due_day = models.PositiveSmallIntegerField(
        default=1,
        validators=[MinValueValidator(1), MaxValueValidator(31)],
        help_text="Payment due day of month (son ödeme günü)",
    )

    current_risk = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )
    statement_debt = models.DecimalField(
        max_digits=14, decimal_places=2, default=Decimal("0.00")
    )

    is_active = models.BooleanField(default=True)

    created_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        constraints = [
            models.CheckConstraint(
                condition=Q(current_risk__gte=Decimal("0.00")),
                name="card_current_risk_nonnegative",
            ),
            models.CheckConstraint(
                condition=Q(statement_debt__gte=Decimal("0.00")),
                name="card_statement_debt_nonnegative",
            ),
        ]

    def __str__(self):
        return self.name

    @property
    def available_limit(self) -> Decimal:
        return self.limit - self.current_risk


class PosTerminal(SoftDeleteModel):
    name = models.CharField(max_length=120, unique=True)

    bank_account = models.ForeignKey(
        BankAccount,
        on_delete=models.PROTECT,
        related_name="pos_terminals",
    )

    commission_rate = models.DecimalField(
        max_digits=6,
        decimal_places=4,
        default=Decimal("0.0000"),
        validators=[MinValueValidator(Decimal("0")), MaxValueValidator(Decimal("1"))],
        help_text="Default commission as a fraction of gross (0.0200 = 2%)",
    )

    is_active = models.BooleanField(default=True)

    created_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
