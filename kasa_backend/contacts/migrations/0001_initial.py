from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Contact",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("deleted_at", models.DateTimeField(blank=True, null=True)),
                ("deleted_by", models.CharField(blank=True, default="", max_length=150)),
                ("name", models.CharField(max_length=200, unique=True)),
                ("kind", models.CharField(choices=[("CUSTOMER", "Müşteri"), ("SUPPLIER", "Tedarikçi")], max_length=10)),
                ("phone", models.CharField(blank=True, default="", max_length=50)),
                ("tax_no", models.CharField(blank=True, default="", max_length=20)),
                ("note", models.TextField(blank=True, default="")),
                ("created_by", models.CharField(blank=True, default="", max_length=150)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "ordering": ["name"],
                "indexes": [models.Index(fields=["kind", "name"], name="contact_kind_name_idx")],
            },
        ),
        migrations.CreateModel(
            name="Customer",
            fields=[],
            options={
                "verbose_name": "Customer",
                "proxy": True,
                "indexes": [],
                "constraints": [],
            },
            bases=("contacts.contact",),
        ),
        migrations.CreateModel(
            name="Supplier",
            fields=[],
            options={
                "verbose_name": "Supplier",
                "proxy": True,
                "indexes": [],
                "constraints": [],
            },
            bases=("contacts.contact",),
        ),
    ]
