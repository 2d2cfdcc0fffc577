# ledger/api/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from ledger.api.views import TagViewSet, TransactionViewSet

router = SimpleRouter()
router.register("transactions", TransactionViewSet, basename="transaction")
router.register("tags", TagViewSet, basename="tag")

urlpatterns = [
    path("", include(router.urls)),
]
