import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("banking", "0001_initial"),
        ("contacts", "0001_initial"),
        ("ledger", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Attachment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("path", models.CharField(max_length=500)),
                ("filename", models.CharField(max_length=255)),
                ("size", models.PositiveBigIntegerField(default=0)),
                ("mime_type", models.CharField(blank=True, default="", max_length=100)),
                ("uploaded_by", models.CharField(blank=True, default="", max_length=150)),
                ("uploaded_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "ordering": ["-uploaded_at"],
            },
        ),
        migrations.CreateModel(
            name="Cheque",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("deleted_by", models.CharField(blank=True, default="", max_length=150)),
                ("cek_no", models.CharField(max_length=50)),
                ("amount", models.DecimalField(decimal_places=2, max_digits=14)),
                ("entry_date", models.DateField()),
                ("maturity_date", models.DateField(db_index=True)),
                (
                    "direction",
                    models.CharField(
                        choices=[("ALACAK", "Alacak (alınan çek)"), ("BORC", "Borç (verilen çek)")],
                        max_length=10,
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("KASADA", "Kasada"),
                            ("BANKADA_TAHSILDE", "Bankada Tahsilde"),
                            ("ODEMEDE", "Ödemede"),
                            ("TAHSIL_EDILDI", "Tahsil Edildi"),
                            ("ODENDI", "Ödendi"),
                            ("KARSILIKSIZ", "Karşılıksız"),
                            ("IPTAL", "İptal"),
                        ],
                        max_length=20,
                    ),
                ),
                ("description", models.TextField(blank=True, default="")),
                ("paid_at", models.DateField(blank=True, null=True)),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("updated_by", models.CharField(blank=True, default="", max_length=150)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "attachment",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="cheques",
                        to="cheques.attachment",
                    ),
                ),
                (
                    "bank_account",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cheques",
                        to="banking.bankaccount",
                    ),
                ),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="received_cheques",
                        to="contacts.contact",
                    ),
                ),
                (
                    "supplier",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="issued_cheques",
                        to="contacts.contact",
                    ),
                ),
                (
                    "paid_bank_account",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="paid_cheques",
                        to="banking.bankaccount",
                    ),
                ),
                (
                    "payment_entry",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="paid_cheque",
                        to="ledger.ledgerentry",
                    ),
                ),
            ],
            options={
                "ordering": ["maturity_date", "created_at"],
                "indexes": [
                    models.Index(fields=["direction", "status"], name="cheque_direction_status_idx"),
                    models.Index(fields=["cek_no"], name="cheque_cek_no_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ChequeMove",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "action",
                    models.CharField(
                        choices=[
                            ("IN", "Portföye giriş"),
                            ("ISSUE", "Çek keşide"),
                            ("BANK", "Bankaya tahsile verildi"),
                            ("OUT", "Ciro / ödemeye verildi"),
                            ("COLLECTION", "Tahsil edildi"),
                            ("PAYMENT", "Ödendi"),
                            ("BOUNCE", "Karşılıksız"),
                        ],
                        max_length=20,
                    ),
                ),
                ("from_status", models.CharField(blank=True, default="", max_length=20)),
                ("to_status", models.CharField(max_length=20)),
                ("description", models.TextField(blank=True, default="")),
                ("performed_by", models.CharField(blank=True, default="", max_length=150)),
                ("performed_at", models.DateTimeField(auto_now_add=True)),
                (
                    "cheque",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="moves",
                        to="cheques.cheque",
                    ),
                ),
                (
                    "entry",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="cheque_moves",
                        to="ledger.ledgerentry",
                    ),
                ),
            ],
            options={
                "ordering": ["performed_at", "id"],
            },
        ),
    ]
