# cheques/models.py

"""
CHEQUE PORTFOLIO

Cheque
- ALACAK: received from a customer (starts KASADA)
- BORC:   issued to a supplier (starts ODEMEDE)
- direction never changes after creation
- amount / direction freeze once TAHSIL_EDILDI or ODENDI
- a paid cheque is never soft-deleted

ChequeMove
- append-only audit row for creation and every status change

Attachment
- stored file reference (scan / photo of the cheque)
"""

from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models

from common.models import SoftDeleteModel


class Attachment(models.Model):
    path = models.CharField(max_length=500)
    filename = models.CharField(max_length=255)
    size = models.PositiveBigIntegerField(default=0)
    mime_type = models.CharField(max_length=100, blank=True, default="")

    uploaded_by = models.CharField(max_length=150, blank=True, default="")
    uploaded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-uploaded_at"]

    def __str__(self):
        return self.filename


class Cheque(SoftDeleteModel):
    DIRECTION_ALACAK = "ALACAK"
    DIRECTION_BORC = "BORC"

    DIRECTIONS = [
        (DIRECTION_ALACAK, "Alacak (alınan çek)"),
        (DIRECTION_BORC, "Borç (verilen çek)"),
    ]

    STATUS_KASADA = "KASADA"
    STATUS_BANKADA_TAHSILDE = "BANKADA_TAHSILDE"
    STATUS_ODEMEDE = "ODEMEDE"
    STATUS_TAHSIL_EDILDI = "TAHSIL_EDILDI"
    STATUS_ODENDI = "ODENDI"
    STATUS_KARSILIKSIZ = "KARSILIKSIZ"
    STATUS_IPTAL = "IPTAL"

    STATUSES = [
        (STATUS_KASADA, "Kasada"),
        (STATUS_BANKADA_TAHSILDE, "Bankada Tahsilde"),
        (STATUS_ODEMEDE, "Ödemede"),
        (STATUS_TAHSIL_EDILDI, "Tahsil Edildi"),
        (STATUS_ODENDI, "Ödendi"),
        (STATUS_KARSILIKSIZ, "Karşılıksız"),
        (STATUS_IPTAL, "İptal"),
    ]

    # Older clients send these spellings
    STATUS_ALIASES = {
        "TAHSIL_OLDU": STATUS_TAHSIL_EDILDI,
        "ODEME_YAPILDI": STATUS_ODENDI,
        "KARŞILIKSIZ": STATUS_KARSILIKSIZ,
    }

    SETTLED_STATUSES = frozenset({STATUS_TAHSIL_EDILDI, STATUS_ODENDI})

    OPEN_STATUSES = frozenset({STATUS_KASADA, STATUS_BANKADA_TAHSILDE, STATUS_ODEMEDE})

    cek_no = models.CharField(max_length=50)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    entry_date = models.DateField()
    maturity_date = models.DateField(db_index=True)

    direction = models.CharField(max_length=10, choices=DIRECTIONS)
    status = models.CharField(max_length=20, choices=STATUSES)

    bank_account = models.ForeignKey(
        "banking.BankAccount",
        on_delete=models.PROTECT,
        related_name="cheques",
        null=True,
        blank=True,
    )
    customer = models.ForeignKey(
        "contacts.Contact",
        on_delete=models.PROTECT,
        related_name="received_cheques",
        null=True,
        blank=True,
    )
    supplier = models.ForeignKey(
        "contacts.Contact",
        on_delete=models.PROTECT,
        related_name="issued_cheques",
        null=True,
        blank=True,
    )

    description = models.TextField(blank=True, default="")

    attachment = models.ForeignKey(
        Attachment,
        on_delete=models.SET_NULL,
        related_name="cheques",
        null=True,
        blank=True,
    )

    # ---------------------------------------------
    # SETTLEMENT (BORC)
    # ---------------------------------------------
    paid_at = models.DateField(null=True, blank=True)
    paid_bank_account = models.ForeignKey(
        "banking.BankAccount",
        on_delete=models.PROTECT,
        related_name="paid_cheques",
        null=True,
        blank=True,
    )
    payment_entry = models.OneToOneField(
        "ledger.LedgerEntry",
        on_delete=models.PROTECT,
        related_name="paid_cheque",
        null=True,
        blank=True,
    )

    created_by = models.CharField(max_length=150, blank=True, default="")
    updated_by = models.CharField(max_length=150, blank=True, default="")
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["maturity_date", "created_at"]
        indexes = [
            models.Index(fields=["direction", "status"], name="cheque_direction_status_idx"),
            models.Index(fields=["cek_no"], name="cheque_cek_no_idx"),
        ]

    def __str__(self):
        return f"Çek {self.cek_no} ({self.direction} {self.status})"

    @property
    def is_settled(self) -> bool:
        return self.status in self.SETTLED_STATUSES

    @property
    def is_paid(self) -> bool:
        return self.status == self.STATUS_ODENDI

    @property
    def counterparty_name(self) -> str:
        party = self.supplier if self.direction == self.DIRECTION_BORC else self.customer
        if party is None:
            party = self.customer or self.supplier
        return party.name if party else f"Çek {self.cek_no}"


class ChequeMove(models.Model):
    ACTION_IN = "IN"
    ACTION_ISSUE = "ISSUE"
    ACTION_BANK = "BANK"
    ACTION_OUT = "OUT"
    ACTION_COLLECTION = "COLLECTION"
    ACTION_PAYMENT = "PAYMENT"
    ACTION_BOUNCE = "BOUNCE"

    ACTIONS = [
        (ACTION_IN, "Portföye giriş"),
        (ACTION_ISSUE, "Çek keşide"),
        (ACTION_BANK, "Bankaya tahsile verildi"),
        (ACTION_OUT, "Ciro / ödemeye verildi"),
        (ACTION_COLLECTION, "Tahsil edildi"),
        (ACTION_PAYMENT, "Ödendi"),
        (ACTION_BOUNCE, "Karşılıksız"),
    ]

    cheque = models.ForeignKey(Cheque, on_delete=models.PROTECT, related_name="moves")
    action = models.CharField(max_length=20, choices=ACTIONS)
    from_status = models.CharField(max_length=20, blank=True, default="")
    to_status = models.CharField(max_length=20)

    entry = models.ForeignKey(
        "ledger.LedgerEntry",
        on_delete=models.PROTECT,
        related_name="cheque_moves",
        null=True,
        blank=True,
    )

    description = models.TextField(blank=True, default="")
    performed_by = models.CharField(max_length=150, blank=True, default="")
    performed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["performed_at", "id"]

    def __str__(self):
        return f"{self.cheque_id} {self.from_status or '-'} -> {self.to_status}"

    def save(self, *args, **kwargs):
        if self.pk is not None and not self._state.adding:
            raise ValidationError("Cheque moves are append-only.")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValidationError("Cheque moves cannot be deleted.")
