import django.db.models.deletion
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("banking", "0001_initial"),
        ("contacts", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Tag",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=60, unique=True)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["name"],
            },
        ),
        migrations.CreateModel(
            name="LedgerEntry",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("deleted_by", models.CharField(blank=True, default="", max_length=150)),
                ("iso_date", models.DateField(db_index=True)),
                ("document_no", models.CharField(blank=True, db_index=True, default="", max_length=32)),
                (
                    "type",
                    models.CharField(
                        choices=[
                            ("CASH_IN", "Nakit Giriş"),
                            ("CASH_OUT", "Nakit Çıkış"),
                            ("BANK_IN", "Banka Giriş"),
                            ("BANK_OUT", "Banka Çıkış"),
                            ("POS_COLLECTION", "POS Tahsilat"),
                            ("POS_COMMISSION", "POS Komisyon"),
                            ("CARD_EXPENSE", "Kredi Kartı Harcama"),
                            ("CARD_PAYMENT", "Kredi Kartı Ödeme"),
                            ("CEK_TAHSIL", "Çek Tahsilatı"),
                            ("CEK_ODENMESI", "Çek Ödemesi"),
                            ("CEK_KARSILIKSIZ", "Karşılıksız Çek"),
                        ],
                        max_length=20,
                    ),
                ),
                (
                    "source",
                    models.CharField(
                        choices=[("KASA", "Kasa"), ("BANKA", "Banka"), ("KART", "Kredi Kartı"), ("CEK", "Çek")],
                        max_length=10,
                    ),
                ),
                (
                    "method",
                    models.CharField(
                        choices=[("CASH", "Nakit"), ("BANK", "Banka"), ("CARD", "Kart")],
                        max_length=10,
                    ),
                ),
                (
                    "direction",
                    models.CharField(
                        choices=[("INFLOW", "Giriş"), ("OUTFLOW", "Çıkış")],
                        max_length=10,
                    ),
                ),
                ("category", models.CharField(blank=True, default="", max_length=100)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("counterparty", models.CharField(blank=True, default="", max_length=200)),
                ("description", models.TextField(blank=True, default="")),
                ("incoming", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("outgoing", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("bank_delta", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("display_incoming", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("display_outgoing", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("balance_after", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("pos_gross", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("pos_commission", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("pos_net", models.DecimalField(blank=True, decimal_places=2, max_digits=14, null=True)),
                ("pos_effective_rate", models.DecimalField(blank=True, decimal_places=4, max_digits=6, null=True)),
                ("statement_delta", models.DecimalField(decimal_places=2, default=Decimal("0.00"), max_digits=14)),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "bank_account",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="banking.bankaccount",
                    ),
                ),
                (
                    "card",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="banking.card",
                    ),
                ),
                (
                    "pos_terminal",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="banking.posterminal",
                    ),
                ),
                (
                    "contact",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="ledger_entries",
                        to="contacts.contact",
                    ),
                ),
                ("tags", models.ManyToManyField(blank=True, related_name="entries", to="ledger.tag")),
            ],
            options={
                "verbose_name": "ledger entry",
                "verbose_name_plural": "ledger entries",
                "ordering": ["iso_date", "created_at", "id"],
                "indexes": [
                    models.Index(fields=["iso_date", "source"], name="ledger_date_source_idx"),
                    models.Index(fields=["type", "iso_date"], name="ledger_type_date_idx"),
                ],
            },
        ),
    ]
