# banking/management/commands/seed_reference_data.py

from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from banking.models import BankAccount, Card, PosTerminal
from contacts.models import Contact

SEED_ACTOR = "system-seed"

BANK_ACCOUNTS = [
    ("Yapı Kredi", "TR000000000000000000000000"),
    ("Halkbank", "TR111111111111111111111111"),
]

# name, limit, closing_day, due_day
CARDS = [
    ("YKB Ticari Kart", Decimal("250000.00"), 28, 3),
    ("Halkbank POS", Decimal("150000.00"), 2, 7),
]

CONTACTS = [
    ("Esca Gıda Müşteri", Contact.KIND_CUSTOMER),
    ("Esca Tedarikçi", Contact.KIND_SUPPLIER),
]

POS_TERMINAL_NAME = "Yapı Kredi POS"
POS_COMMISSION_RATE = Decimal("0.0200")


class Command(BaseCommand):
    help = "Seed demo bank accounts, cards, contacts and a POS terminal (idempotent)"

    @transaction.atomic
    def handle(self, *args, **options):
        self.stdout.write(self.style.WARNING("Seeding reference data..."))

        # -------------------------------
        # BANK ACCOUNTS
        # -------------------------------
        banks = []
        for name, iban in BANK_ACCOUNTS:
            bank, created = BankAccount.objects.update_or_create(
                name=name,
                defaults={"iban": iban},
                create_defaults={
                    "iban": iban,
                    "initial_balance": Decimal("0.00"),
                    "created_by": SEED_ACTOR,
                },
            )
            banks.append(bank)
            self.stdout.write(f"{'Created' if created else 'Updated'} bank account: {name}")

        primary_bank = banks[0]

        # -------------------------------
        # CARDS
        # -------------------------------
        for name, limit, closing_day, due_day in CARDS:
            _, created = Card.objects.update_or_create(
                name=name,
                defaults={
                    "limit": limit,
                    "bank_account": primary_bank,
                },
                create_defaults={
                    "limit": limit,
                    "bank_account": primary_bank,
                    "closing_day": closing_day,
                    "due_day": due_day,
                    "created_by": SEED_ACTOR,
                },
            )
            self.stdout.write(f"{'Created' if created else 'Updated'} card: {name}")

        # -------------------------------
        # CONTACTS
        # -------------------------------
        for name, kind in CONTACTS:
            _, created = Contact.objects.get_or_create(
                name=name,
                defaults={"kind": kind, "created_by": SEED_ACTOR},
            )
            if created:
                self.stdout.write(f"Created contact: {name}")

        # -------------------------------
        # POS TERMINAL
        # -------------------------------
        PosTerminal.objects.get_or_create(
            name=POS_TERMINAL_NAME,
            defaults={
                "bank_account": primary_bank,
                "commission_rate": POS_COMMISSION_RATE,
                "created_by": SEED_ACTOR,
            },
        )

        self.stdout.write(self.style.SUCCESS("Reference data ready"))
