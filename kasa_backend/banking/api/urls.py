# banking/api/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from banking.api.views import BankAccountViewSet, CardViewSet, PosTerminalViewSet

router = SimpleRouter()
router.register("bank-accounts", BankAccountViewSet, basename="bank-account")
router.register("cards", CardViewSet, basename="card")
router.register("pos-terminals", PosTerminalViewSet, basename="pos-terminal")

urlpatterns = [
    path("", include(router.urls)),
]
