# contacts/api/views.py

from drf_spectacular.utils import extend_schema

from common.viewsets import SoftDeleteModelViewSet
from contacts.api.serializers import CustomerSerializer, SupplierSerializer
from contacts.models import Customer, Supplier


@extend_schema(tags=["contacts"])
class CustomerViewSet(SoftDeleteModelViewSet):
    serializer_class = CustomerSerializer
    queryset = Customer.objects.all()
    search_fields = ("name", "tax_no")


@extend_schema(tags=["contacts"])
class SupplierViewSet(SoftDeleteModelViewSet):
    serializer_class = SupplierSerializer
    queryset = Supplier.objects.all()
    search_fields = ("name", "tax_no")
