# cheques/admin.py

from django.contrib import admin

from cheques.models import Attachment, Cheque, ChequeMove

# ============================================================
# CHEQUE
# ============================================================


class ChequeMoveInline(admin.TabularInline):
    model = ChequeMove
    extra = 0
    can_delete = False
    readonly_fields = ("action", "from_status", "to_status", "entry", "description", "performed_by", "performed_at")

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Cheque)
class ChequeAdmin(admin.ModelAdmin):
    list_display = (
        "cek_no",
        "direction",
        "status",
        "amount",
        "maturity_date",
        "customer",
        "supplier",
        "bank_account",
        "deleted_at",
    )
    list_filter = ("direction", "status", "bank_account")
    search_fields = ("cek_no", "description")
    date_hierarchy = "maturity_date"
    ordering = ("maturity_date",)
    inlines = [ChequeMoveInline]

    # Status, amounts and settlement change only through cheque services
    readonly_fields = (
        "direction",
        "status",
        "amount",
        "paid_at",
        "paid_bank_account",
        "payment_entry",
        "created_by",
        "updated_by",
        "created_at",
        "updated_at",
        "deleted_at",
        "deleted_by",
    )

    def get_queryset(self, request):
        return Cheque.all_objects.select_related("customer", "supplier", "bank_account")

    def has_delete_permission(self, request, obj=None):
        return False


# ============================================================
# AUDIT / FILES
# ============================================================


@admin.register(ChequeMove)
class ChequeMoveAdmin(admin.ModelAdmin):
    list_display = ("cheque", "action", "from_status", "to_status", "performed_by", "performed_at")
    list_filter = ("action",)
    search_fields = ("cheque__cek_no",)

    def get_readonly_fields(self, request, obj=None):
        return [f.name for f in self.model._meta.fields]

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    list_display = ("filename", "mime_type", "size", "uploaded_by", "uploaded_at")
    search_fields = ("filename",)
    readonly_fields = ("path", "filename", "size", "mime_type", "uploaded_by", "uploaded_at")
