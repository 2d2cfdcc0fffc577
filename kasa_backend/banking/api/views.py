# banking/api/views.py

from drf_spectacular.utils import extend_schema
from rest_framework.decorators import action
from rest_framework.response import Response

from banking.api.serializers import (
    BankAccountSerializer,
    CardSerializer,
    CardStatementQuerySerializer,
    CardStatementSerializer,
    PosTerminalSerializer,
)
from banking.models import BankAccount, Card, PosTerminal
from banking.services.statement import next_due_summary
from common.viewsets import SoftDeleteModelViewSet


@extend_schema(tags=["banking"])
class BankAccountViewSet(SoftDeleteModelViewSet):
    serializer_class = BankAccountSerializer
    queryset = BankAccount.objects.all()
    search_fields = ("name", "iban")


@extend_schema(tags=["banking"])
class CardViewSet(SoftDeleteModelViewSet):
    serializer_class = CardSerializer
    queryset = Card.objects.select_related("bank_account")
    search_fields = ("name",)

    # --------------------------------------------------
    # UPCOMING STATEMENT
    # --------------------------------------------------

    @extend_schema(parameters=[CardStatementQuerySerializer], responses=CardStatementSerializer)
    @action(detail=True, methods=["get"], url_path="statement")
    def statement(self, request, pk=None):
        card = self.get_object()

        query = CardStatementQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        summary = next_due_summary(card, query.validated_data.get("reference"))
        return Response(CardStatementSerializer(summary).data)


@extend_schema(tags=["banking"])
class PosTerminalViewSet(SoftDeleteModelViewSet):
    serializer_class = PosTerminalSerializer
    queryset = PosTerminal.objects.select_related("bank_account")
    search_fields = ("name",)
