# contacts/admin.py

from django.contrib import admin

from contacts.models import Contact


@admin.register(Contact)
class ContactAdmin(admin.ModelAdmin):
    list_display = ("name", "kind", "phone", "tax_no", "deleted_at")
    list_filter = ("kind",)
    search_fields = ("name", "tax_no")
    readonly_fields = ("created_by", "created_at", "updated_at", "deleted_at", "deleted_by")
    ordering = ("name",)

    def get_queryset(self, request):
        return Contact.all_objects.all()
