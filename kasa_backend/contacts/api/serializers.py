# contacts/api/serializers.py

from rest_framework import serializers
from rest_framework.validators import UniqueValidator

from contacts.models import Contact, Customer, Supplier


class ContactSerializer(serializers.ModelSerializer):
    # Names stay unique across kinds and soft-deleted rows
    name = serializers.CharField(
        max_length=200,
        validators=[UniqueValidator(queryset=Contact.all_objects.all())],
    )

    class Meta:
        model = Contact
        fields = [
            "id",
            "name",
            "kind",
            "phone",
            "tax_no",
            "note",
            "created_by",
            "created_at",
        ]
        read_only_fields = ("id", "kind", "created_by", "created_at")

    def validate_name(self, value):
        v = (value or "").strip()
        if not v:
            raise serializers.ValidationError("name is required")
        return v


class CustomerSerializer(ContactSerializer):
    class Meta(ContactSerializer.Meta):
        model = Customer


class SupplierSerializer(ContactSerializer):
    class Meta(ContactSerializer.Meta):
        model = Supplier
