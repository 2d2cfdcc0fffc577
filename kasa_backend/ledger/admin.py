# ledger/admin.py

from django.contrib import admin

from ledger.models import LedgerEntry, Tag


@admin.register(Tag)
class TagAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)


@admin.register(LedgerEntry)
class LedgerEntryAdmin(admin.ModelAdmin):
    """
    Read-only: entries are written by ledger services only.
    """

    list_display = (
        "iso_date",
        "document_no",
        "type",
        "source",
        "amount",
        "incoming",
        "outgoing",
        "bank_delta",
        "balance_after",
        "counterparty",
        "deleted_at",
    )
    list_filter = ("source", "type", "direction", "iso_date")
    search_fields = ("document_no", "counterparty", "description")
    date_hierarchy = "iso_date"
    ordering = ("-iso_date", "-id")

    def get_queryset(self, request):
        return LedgerEntry.all_objects.select_related("bank_account", "card", "contact")

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
