# contacts/api/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from contacts.api.views import CustomerViewSet, SupplierViewSet

router = SimpleRouter()
router.register("customers", CustomerViewSet, basename="customer")
router.register("suppliers", SupplierViewSet, basename="supplier")

urlpatterns = [
    path("", include(router.urls)),
]
