# ledger/api/views.py

"""
CASH BOOK API

/api/transactions/
- list / retrieve: read model with filters
- destroy: soft delete (reverses card effects)
- cash-in, cash-out, bank-in, bank-out, pos, card-expense, card-payment:
  command endpoints, one service call each
- ledger: running cash book for a date range

Views never compute money; they validate the request shape, resolve the
actor and hand off to ledger.services.
"""

from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from common.identity import HasActor, resolve_actor
from ledger.api.filters import LedgerEntryFilter
from ledger.api.serializers import (
    BankInCommandSerializer,
    BankOutCommandSerializer,
    CardExpenseCommandSerializer,
    CardPaymentCommandSerializer,
    CashInCommandSerializer,
    CashOutCommandSerializer,
    LedgerEntrySerializer,
    LedgerQuerySerializer,
    LedgerReportSerializer,
    PosCollectionCommandSerializer,
    TagSerializer,
)
from ledger.models import LedgerEntry, Tag
from ledger.services import recording
from ledger.services.reports import running_ledger

COMMANDS = {
    "cash_in": (CashInCommandSerializer, recording.record_cash_in),
    "cash_out": (CashOutCommandSerializer, recording.record_cash_out),
    "bank_in": (BankInCommandSerializer, recording.record_bank_in),
    "bank_out": (BankOutCommandSerializer, recording.record_bank_out),
    "pos": (PosCollectionCommandSerializer, recording.record_pos_collection),
    "card_expense": (CardExpenseCommandSerializer, recording.record_card_expense),
    "card_payment": (CardPaymentCommandSerializer, recording.record_card_payment),
}


@extend_schema(tags=["transactions"])
class TransactionViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = (
        LedgerEntry.objects
        .select_related("bank_account", "card", "contact", "pos_terminal")
        .prefetch_related("tags")
        .order_by("iso_date", "created_at", "id")
    )
    serializer_class = LedgerEntrySerializer
    permission_classes = [HasActor]
    lookup_value_regex = r"\d+"
    filterset_class = LedgerEntryFilter
    search_fields = ("document_no", "counterparty", "description")
    ordering_fields = ("iso_date", "document_no", "type", "counterparty", "incoming", "outgoing", "balance_after")

    def get_serializer_class(self):
        if self.action in COMMANDS:
            return COMMANDS[self.action][0]
        return LedgerEntrySerializer

    def destroy(self, request, *args, **kwargs):
        recording.delete_entry(self.kwargs["pk"], actor=resolve_actor(request))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # --------------------------------------------------
    # COMMANDS
    # --------------------------------------------------

    def _run_command(self, request):
        command_cls, service = COMMANDS[self.action]

        command = command_cls(data=request.data)
        command.is_valid(raise_exception=True)

        result = service(actor=resolve_actor(request), **command.validated_data)

        many = isinstance(result, list)
        return Response(
            LedgerEntrySerializer(result, many=many).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=CashInCommandSerializer, responses={201: LedgerEntrySerializer})
    @action(detail=False, methods=["post"], url_path="cash-in")
    def cash_in(self, request):
        return self._run_command(request)

    @extend_schema(request=CashOutCommandSerializer, responses={201: LedgerEntrySerializer})
    @action(detail=False, methods=["post"], url_path="cash-out")
    def cash_out(self, request):
        return self._run_command(request)

    @extend_schema(request=BankInCommandSerializer, responses={201: LedgerEntrySerializer})
    @action(detail=False, methods=["post"], url_path="bank-in")
    def bank_in(self, request):
        return self._run_command(request)

    @extend_schema(request=BankOutCommandSerializer, responses={201: LedgerEntrySerializer})
    @action(detail=False, methods=["post"], url_path="bank-out")
    def bank_out(self, request):
        return self._run_command(request)

    @extend_schema(request=PosCollectionCommandSerializer, responses={201: LedgerEntrySerializer(many=True)})
    @action(detail=False, methods=["post"], url_path="pos")
    def pos(self, request):
        return self._run_command(request)

    @extend_schema(request=CardExpenseCommandSerializer, responses={201: LedgerEntrySerializer})
    @action(detail=False, methods=["post"], url_path="card-expense")
    def card_expense(self, request):
        return self._run_command(request)

    @extend_schema(request=CardPaymentCommandSerializer, responses={201: LedgerEntrySerializer})
    @action(detail=False, methods=["post"], url_path="card-payment")
    def card_payment(self, request):
        return self._run_command(request)

    # --------------------------------------------------
    # RUNNING CASH BOOK
    # --------------------------------------------------

    @extend_schema(
        parameters=[
            OpenApiParameter("start", str, description="YYYY-MM-DD"),
            OpenApiParameter("end", str, description="YYYY-MM-DD"),
            OpenApiParameter("cash_only", bool, required=False),
        ],
        responses=LedgerReportSerializer,
    )
    @action(detail=False, methods=["get"], url_path="ledger")
    def ledger(self, request):
        query = LedgerQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        report = running_ledger(
            query.validated_data["start"],
            query.validated_data["end"],
            cash_only=query.validated_data["cash_only"],
        )
        return Response(LedgerReportSerializer(report).data)


@extend_schema(tags=["transactions"])
class TagViewSet(viewsets.ModelViewSet):
    queryset = Tag.objects.all()
    serializer_class = TagSerializer
    permission_classes = [HasActor]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    search_fields = ("name",)
    pagination_class = None
