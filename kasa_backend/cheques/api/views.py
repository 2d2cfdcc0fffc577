# cheques/api/views.py

"""
CHEQUE API

/api/cheques/
- list: filters + totals + upcoming maturities
- create: JSON or multipart (optional `file`)
- retrieve / partial_update / destroy (soft delete; paid cheques refused)
- {id}/status/: lifecycle transition with ledger side effects
- {id}/pay/: bank payment of a BORC cheque
- {id}/moves/: audit trail
- payable/: BORC cheques still to pay
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.parsers import FormParser, JSONParser, MultiPartParser
from rest_framework.response import Response

from cheques.api.serializers import (
    ChequeCreateSerializer,
    ChequeListQuerySerializer,
    ChequeListSummarySerializer,
    ChequeMoveSerializer,
    ChequeSerializer,
    ChequeStatusCommandSerializer,
    ChequeUpdateSerializer,
    PayableChequeSerializer,
    PayableQuerySerializer,
    PayChequeCommandSerializer,
)
from cheques.models import Cheque
from cheques.services import cheque_service
from cheques.services.payment import pay_cheque
from common.identity import HasActor, resolve_actor


@extend_schema(tags=["cheques"])
class ChequeViewSet(viewsets.GenericViewSet):
    queryset = Cheque.objects.select_related("bank_account", "customer", "supplier", "attachment")
    serializer_class = ChequeSerializer
    permission_classes = [HasActor]
    parser_classes = [JSONParser, MultiPartParser, FormParser]
    lookup_value_regex = r"\d+"

    # Filtering is done by cheque_service.list_cheques
    filter_backends = []

    @extend_schema(parameters=[ChequeListQuerySerializer], responses=ChequeSerializer(many=True))
    def list(self, request):
        query = ChequeListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        qs, summary = cheque_service.list_cheques(**query.validated_data)
        summary = ChequeListSummarySerializer(summary).data

        page = self.paginate_queryset(qs)
        if page is not None:
            response = self.get_paginated_response(ChequeSerializer(page, many=True).data)
            response.data.update(summary)
            return response

        return Response({"results": ChequeSerializer(qs, many=True).data, **summary})

    @extend_schema(request=ChequeCreateSerializer, responses={201: ChequeSerializer})
    def create(self, request):
        command = ChequeCreateSerializer(data=request.data)
        command.is_valid(raise_exception=True)

        data = dict(command.validated_data)
        upload = data.pop("file", None)

        cheque = cheque_service.create_cheque(actor=resolve_actor(request), upload=upload, **data)
        return Response(ChequeSerializer(cheque).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        cheque = cheque_service.get_cheque(pk)
        return Response(ChequeSerializer(cheque).data)

    @extend_schema(request=ChequeUpdateSerializer, responses=ChequeSerializer)
    def partial_update(self, request, pk=None):
        command = ChequeUpdateSerializer(data=request.data, partial=True)
        command.is_valid(raise_exception=True)

        cheque_service.update_cheque(pk, actor=resolve_actor(request), **command.validated_data)
        return Response(ChequeSerializer(cheque_service.get_cheque(pk)).data)

    def destroy(self, request, pk=None):
        cheque_service.soft_delete_cheque(pk, actor=resolve_actor(request))
        return Response(status=status.HTTP_204_NO_CONTENT)

    # --------------------------------------------------
    # LIFECYCLE
    # --------------------------------------------------

    @extend_schema(request=ChequeStatusCommandSerializer, responses=ChequeSerializer)
    @action(detail=True, methods=["post"], url_path="status")
    def change_status(self, request, pk=None):
        command = ChequeStatusCommandSerializer(data=request.data)
        command.is_valid(raise_exception=True)

        _, entry = cheque_service.update_cheque_status(
            pk,
            actor=resolve_actor(request),
            **command.validated_data,
        )

        return Response(
            {
                "cheque": ChequeSerializer(cheque_service.get_cheque(pk)).data,
                "entry_id": entry.id if entry else None,
            }
        )

    @extend_schema(request=PayChequeCommandSerializer, responses=ChequeSerializer)
    @action(detail=True, methods=["post"], url_path="pay")
    def pay(self, request, pk=None):
        command = PayChequeCommandSerializer(data=request.data)
        command.is_valid(raise_exception=True)

        cheque = pay_cheque(pk, actor=resolve_actor(request), **command.validated_data)

        return Response(
            {
                "cheque": ChequeSerializer(cheque_service.get_cheque(pk)).data,
                "entry_id": cheque.payment_entry_id,
                "document_no": cheque.payment_entry.document_no,
            }
        )

    @extend_schema(responses=ChequeMoveSerializer(many=True))
    @action(detail=True, methods=["get"], url_path="moves")
    def moves(self, request, pk=None):
        cheque = cheque_service.get_cheque(pk)
        return Response(ChequeMoveSerializer(cheque.moves.all(), many=True).data)

    @extend_schema(parameters=[PayableQuerySerializer], responses=PayableChequeSerializer(many=True))
    @action(detail=False, methods=["get"], url_path="payable")
    def payable(self, request):
        query = PayableQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        cheques = cheque_service.payable_cheques(query.validated_data.get("bank_account_id"))
        return Response(PayableChequeSerializer(cheques, many=True).data)
