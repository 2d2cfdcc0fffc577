# cheques/api/serializers.py

from decimal import Decimal

from rest_framework import serializers

from cheques.models import Attachment, Cheque, ChequeMove

MIN_AMOUNT = Decimal("0.01")


# ============================================================
# READ MODELS
# ============================================================


class AttachmentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Attachment
        fields = ["id", "path", "filename", "size", "mime_type", "uploaded_by", "uploaded_at"]
        read_only_fields = fields


class ChequeSerializer(serializers.ModelSerializer):
    bank_account_name = serializers.CharField(source="bank_account.name", read_only=True, default=None)
    customer_name = serializers.CharField(source="customer.name", read_only=True, default=None)
    supplier_name = serializers.CharField(source="supplier.name", read_only=True, default=None)
    attachment = AttachmentSerializer(read_only=True)

    class Meta:
        model = Cheque
        fields = [
            "id",
            "cek_no",
            "amount",
            "entry_date",
            "maturity_date",
            "direction",
            "status",
            "bank_account",
            "bank_account_name",
            "customer",
            "customer_name",
            "supplier",
            "supplier_name",
            "description",
            "attachment",
            "paid_at",
            "paid_bank_account",
            "payment_entry",
            "created_by",
            "created_at",
            "updated_by",
            "updated_at",
        ]
        read_only_fields = fields


class ChequeMoveSerializer(serializers.ModelSerializer):
    class Meta:
        model = ChequeMove
        fields = [
            "id",
            "action",
            "from_status",
            "to_status",
            "entry",
            "description",
            "performed_by",
            "performed_at",
        ]
        read_only_fields = fields


class PayableChequeSerializer(serializers.ModelSerializer):
    counterparty = serializers.CharField(source="counterparty_name", read_only=True)

    class Meta:
        model = Cheque
        fields = ["id", "cek_no", "maturity_date", "amount", "counterparty", "bank_account", "status"]
        read_only_fields = fields


# ============================================================
# COMMANDS
# ============================================================


def _optional_id():
    return serializers.IntegerField(required=False, allow_null=True)


class ChequeCreateSerializer(serializers.Serializer):
    cek_no = serializers.CharField(max_length=50)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=MIN_AMOUNT)
    entry_date = serializers.DateField()
    maturity_date = serializers.DateField()
    direction = serializers.ChoiceField(choices=Cheque.DIRECTIONS)
    customer_id = _optional_id()
    supplier_id = _optional_id()
    bank_account_id = _optional_id()
    description = serializers.CharField(required=False, allow_blank=True, default="")
    attachment_id = _optional_id()
    file = serializers.FileField(required=False, allow_null=True)


class ChequeUpdateSerializer(serializers.Serializer):
    cek_no = serializers.CharField(max_length=50, required=False)
    amount = serializers.DecimalField(max_digits=14, decimal_places=2, min_value=MIN_AMOUNT, required=False)
    entry_date = serializers.DateField(required=False)
    maturity_date = serializers.DateField(required=False)
    direction = serializers.ChoiceField(choices=Cheque.DIRECTIONS, required=False)
    customer_id = _optional_id()
    supplier_id = _optional_id()
    bank_account_id = _optional_id()
    description = serializers.CharField(required=False, allow_blank=True)
    attachment_id = _optional_id()

    # Accepted only to be refused with a clear message by the service
    status = serializers.CharField(required=False)


class ChequeStatusCommandSerializer(serializers.Serializer):
    new_status = serializers.CharField(max_length=30)
    iso_date = serializers.DateField(required=False, allow_null=True, default=None)
    bank_account_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    supplier_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    description = serializers.CharField(required=False, allow_blank=True, default="")


class PayChequeCommandSerializer(serializers.Serializer):
    payment_date = serializers.DateField()
    bank_account_id = serializers.IntegerField()
    note = serializers.CharField(required=False, allow_blank=True, default="")


class ChequeListQuerySerializer(serializers.Serializer):
    status = serializers.CharField(required=False)
    direction = serializers.ChoiceField(choices=Cheque.DIRECTIONS, required=False)
    entry_from = serializers.DateField(required=False)
    entry_to = serializers.DateField(required=False)
    maturity_from = serializers.DateField(required=False)
    maturity_to = serializers.DateField(required=False)
    customer_id = serializers.IntegerField(required=False)
    supplier_id = serializers.IntegerField(required=False)
    bank_account_id = serializers.IntegerField(required=False)
    search = serializers.CharField(required=False, allow_blank=True)


class PayableQuerySerializer(serializers.Serializer):
    bank_account_id = serializers.IntegerField(required=False)


class ChequeListSummarySerializer(serializers.Serializer):
    total_count = serializers.IntegerField()
    total_amount = serializers.DecimalField(max_digits=14, decimal_places=2)
    upcoming_maturities = serializers.DictField(child=serializers.IntegerField())
