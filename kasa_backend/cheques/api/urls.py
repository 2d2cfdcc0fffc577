# cheques/api/urls.py

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from cheques.api.views import ChequeViewSet

router = SimpleRouter()
router.register("cheques", ChequeViewSet, basename="cheque")

urlpatterns = [
    path("", include(router.urls)),
]
