# ledger/api/serializers.py

"""
LEDGER SERIALIZERS

- LedgerEntrySerializer: read model for every ledger row
- *CommandSerializer: request shapes for the recording endpoints
  (validated data is passed straight to ledger.services.recording)
"""

from decimal import Decimal

from rest_framework import serializers

from ledger.models import LedgerEntry, Tag

MIN_AMOUNT = Decimal("0.01")


# ============================================================
# READ MODELS
# ============================================================


class TagSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tag
        fields = ["id", "name", "created_at"]
        read_only_fields = ("id", "created_at")

    def validate_name(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name is required")
        return v


class LedgerEntrySerializer(serializers.ModelSerializer):
    tags = serializers.SlugRelatedField(many=True, read_only=True, slug_field="name")
    bank_account_name = serializers.CharField(source="bank_account.name", read_only=True, default=None)
    card_name = serializers.CharField(source="card.name", read_only=True, default=None)
    contact_name = serializers.CharField(source="contact.name", read_only=True, default=None)
    pos_terminal_name = serializers.CharField(source="pos_terminal.name", read_only=True, default=None)

    class Meta:
        model = LedgerEntry
        fields = [
            "id",
            "iso_date",
            "document_no",
            "type",
            "source",
            "method",
            "direction",
            "category",
            "amount",
            "counterparty",
            "description",
            "incoming",
            "outgoing",
            "bank_delta",
            "display_incoming",
            "display_outgoing",
            "balance_after",
            "pos_gross",
            "pos_commission",
            "pos_net",
            "pos_effective_rate",
            "statement_delta",
            "bank_account",
            "bank_account_name",
            "card",
            "card_name",
            "pos_terminal",
            "pos_terminal_name",
            "contact",
            "contact_name",
            "cheque",
            "tags",
            "created_by",
            "created_at",
        ]
        read_only_fields = fields


class LedgerRowSerializer(LedgerEntrySerializer):
    running_balance = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta(LedgerEntrySerializer.Meta):
        fields = LedgerEntrySerializer.Meta.fields + ["running_balance"]
        read_only_fields = fields


class LedgerQuerySerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
    cash_only = serializers.BooleanField(required=False, default=False)

    def validate(self, attrs):
        if attrs["start"] > attrs["end"]:
            raise serializers.ValidationError({"end": "end must be on or after start"})
        return attrs


class LedgerReportSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()
    opening_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_incoming = serializers.DecimalField(max_digits=14, decimal_places=2)
    total_outgoing = serializers.DecimalField(max_digits=14, decimal_places=2)
    closing_balance = serializers.DecimalField(max_digits=14, decimal_places=2)
    entries = LedgerRowSerializer(many=True)


# ============================================================
# COMMANDS
# ============================================================


class _EntryCommandSerializer(serializers.Serializer):
    iso_date = serializers.DateField()
    description = serializers.CharField(required=False, allow_blank=True, default="")
    tags = serializers.ListField(
        child=serializers.CharField(max_length=60),
        required=False,
        default=list,
    )


def _amount_field(**kwargs):
    return serializers.DecimalField(max_digits=14, decimal_places=2, min_value=MIN_AMOUNT, **kwargs)


def _optional_id():
    return serializers.IntegerField(required=False, allow_null=True, default=None)


class CashInCommandSerializer(_EntryCommandSerializer):
    amount = _amount_field()
    customer_id = _optional_id()
    counterparty = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)


class CashOutCommandSerializer(_EntryCommandSerializer):
    amount = _amount_field()
    supplier_id = _optional_id()
    category = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    counterparty = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)


class BankInCommandSerializer(_EntryCommandSerializer):
    amount = _amount_field()
    bank_account_id = serializers.IntegerField()
    customer_id = _optional_id()
    counterparty = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)


class BankOutCommandSerializer(_EntryCommandSerializer):
    amount = _amount_field()
    bank_account_id = serializers.IntegerField()
    supplier_id = _optional_id()
    cheque_id = _optional_id()
    category = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    counterparty = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)


class PosCollectionCommandSerializer(_EntryCommandSerializer):
    gross = _amount_field()
    commission = serializers.DecimalField(
        max_digits=14,
        decimal_places=2,
        min_value=Decimal("0.00"),
        required=False,
        allow_null=True,
        default=None,
    )
    bank_account_id = _optional_id()
    pos_terminal_id = _optional_id()
    customer_id = _optional_id()

    def validate(self, attrs):
        if not attrs.get("bank_account_id") and not attrs.get("pos_terminal_id"):
            raise serializers.ValidationError("bank_account_id or pos_terminal_id is required")
        commission = attrs.get("commission")
        if commission is not None and commission > attrs["gross"]:
            raise serializers.ValidationError({"commission": "commission cannot exceed gross"})
        return attrs


class CardExpenseCommandSerializer(_EntryCommandSerializer):
    amount = _amount_field()
    card_id = serializers.IntegerField()
    supplier_id = _optional_id()
    category = serializers.CharField(required=False, allow_blank=True, default="", max_length=100)
    counterparty = serializers.CharField(required=False, allow_blank=True, default="", max_length=200)


class CardPaymentCommandSerializer(_EntryCommandSerializer):
    amount = _amount_field()
    card_id = serializers.IntegerField()
    bank_account_id = _optional_id()
