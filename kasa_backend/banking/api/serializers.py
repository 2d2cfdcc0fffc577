# banking/api/serializers.py

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from banking.models import BankAccount, Card, PosTerminal
from ledger.services.balance import bank_balance


class BankAccountSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=120, validators=[UniqueValidator(queryset=BankAccount.all_objects.all())])
    balance = serializers.SerializerMethodField()

    class Meta:
        model = BankAccount
        fields = [
            "id",
            "name",
            "iban",
            "account_no",
            "initial_balance",
            "balance",
            "created_by",
            "created_at",
        ]
        read_only_fields = ("id", "balance", "created_by", "created_at")

    def get_balance(self, obj) -> str:
        return str(bank_balance(obj))

    def validate_name(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name is required")
        return v


class CardSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=120, validators=[UniqueValidator(queryset=Card.all_objects.all())])
    bank_account = serializers.PrimaryKeyRelatedField(
        queryset=BankAccount.objects.all(),
        required=False,
        allow_null=True,
    )
    bank_account_name = serializers.CharField(source="bank_account.name", read_only=True, default=None)
    available_limit = serializers.DecimalField(max_digits=14, decimal_places=2, read_only=True)

    class Meta:
        model = Card
        fields = [
            "id",
            "name",
            "bank_account",
            "bank_account_name",
            "limit",
            "closing_day",
            "due_day",
            "current_risk",
            "statement_debt",
            "available_limit",
            "is_active",
            "created_by",
            "created_at",
        ]
        # Risk figures change only through ledger entries
        read_only_fields = (
            "id",
            "current_risk",
            "statement_debt",
            "available_limit",
            "created_by",
            "created_at",
        )

    def validate_limit(self, value):
        if value < 0:
            raise serializers.ValidationError("limit cannot be negative")
        return value


class CardStatementQuerySerializer(serializers.Serializer):
    reference = serializers.DateField(required=False)


class CardStatementSerializer(serializers.Serializer):
    due_date = serializers.DateField()
    due_display = serializers.CharField()
    closing_date = serializers.DateField()
    days_left = serializers.IntegerField()
    statement_debt = serializers.DecimalField(max_digits=14, decimal_places=2)
    current_risk = serializers.DecimalField(max_digits=14, decimal_places=2)
    available_limit = serializers.DecimalField(max_digits=14, decimal_places=2)


class PosTerminalSerializer(serializers.ModelSerializer):
    name = serializers.CharField(max_length=120, validators=[UniqueValidator(queryset=PosTerminal.all_objects.all())])
    bank_account = serializers.PrimaryKeyRelatedField(queryset=BankAccount.objects.all())
    bank_account_name = serializers.CharField(source="bank_account.name", read_only=True)

    class Meta:
        model = PosTerminal
        fields = [
            "id",
            "name",
            "bank_account",
            "bank_account_name",
            "commission_rate",
            "is_active",
            "created_by",
            "created_at",
        ]
        read_only_fields = ("id", "created_by", "created_at")
