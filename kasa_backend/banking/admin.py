# banking/admin.py

from django.contrib import admin

from banking.models import BankAccount, Card, PosTerminal

# ============================================================
# BANK ACCOUNT
# ============================================================


@admin.register(BankAccount)
class BankAccountAdmin(admin.ModelAdmin):
    list_display = ("name", "iban", "account_no", "initial_balance", "deleted_at")
    search_fields = ("name", "iban", "account_no")
    readonly_fields = ("created_by", "created_at", "updated_at", "deleted_at", "deleted_by")
    ordering = ("name",)

    def get_queryset(self, request):
        return BankAccount.all_objects.all()


# ============================================================
# CARD
# ============================================================


@admin.register(Card)
class CardAdmin(admin.ModelAdmin):
    list_display = (
        "name",
        "bank_account",
        "limit",
        "current_risk",
        "statement_debt",
        "closing_day",
        "due_day",
        "is_active",
    )
    list_filter = ("is_active", "bank_account")
    search_fields = ("name",)
    ordering = ("name",)

    # Risk and statement debt move only through ledger entries
    readonly_fields = (
        "current_risk",
        "statement_debt",
        "created_by",
        "created_at",
        "updated_at",
        "deleted_at",
        "deleted_by",
    )

    def get_queryset(self, request):
        return Card.all_objects.all()


# ============================================================
# POS TERMINAL
# ============================================================


@admin.register(PosTerminal)
class PosTerminalAdmin(admin.ModelAdmin):
    list_display = ("name", "bank_account", "commission_rate", "is_active")
    list_filter = ("is_active", "bank_account")
    search_fields = ("name",)
    readonly_fields = ("created_by", "created_at", "deleted_at", "deleted_by")
    ordering = ("name",)

    def get_queryset(self, request):
        return PosTerminal.all_objects.all()
