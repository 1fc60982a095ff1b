"""
SeaTrace API ViewSets.

Every lifecycle action answers with a ``notification``
({"kind": "success"|"error", "message": ...}) next to its payload, so
the client decides how to surface it.
"""

import logging

from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from seatrace.exceptions import (
    TraceError,
    TraceNotFoundError,
    TracePersistenceError,
)
from seatrace.models import Lot, ProcessingBatch, ProductGrade, RawMaterial, Supplier
from seatrace.service import Trace

from .serializers import (
    DepurationCompleteSerializer,
    DepurationStartSerializer,
    LotCreateSerializer,
    LotSerializer,
    PackagingQCSerializer,
    ProcessingBatchSerializer,
    ProcessSerializer,
    ProductGradeSerializer,
    RawMaterialSerializer,
    SupplierSerializer,
)

logger = logging.getLogger(__name__)


def error_response(exc: TraceError) -> Response:
    """Map a TraceError to an HTTP response."""
    if isinstance(exc, TraceNotFoundError):
        code = status.HTTP_404_NOT_FOUND
    elif isinstance(exc, TracePersistenceError):
        code = status.HTTP_503_SERVICE_UNAVAILABLE
    else:
        code = status.HTTP_400_BAD_REQUEST
    logger.info(f"Rejected: {exc}", extra={"code": exc.code})
    return Response(
        {"error": exc.as_dict(), "notification": exc.as_notification()},
        status=code,
    )


def invalid_response(serializer) -> Response:
    return Response(
        {
            "error": serializer.errors,
            "notification": {
                "kind": "error",
                "message": "Please fill in all required fields",
            },
        },
        status=status.HTTP_400_BAD_REQUEST,
    )


def success_response(result, payload: dict, code=status.HTTP_200_OK) -> Response:
    return Response(
        {
            **payload,
            "warnings": result.warnings,
            "notification": result.notification,
        },
        status=code,
    )


class SupplierViewSet(viewsets.ModelViewSet):
    """
    ViewSet for Supplier.

    list / create / retrieve / update / destroy
    """

    permission_classes = [IsAuthenticated]
    queryset = Supplier.objects.all()
    serializer_class = SupplierSerializer


class ProductGradeViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for ProductGrade (read-only).

    list: ?product_type=shell-on|meat
    """

    permission_classes = [IsAuthenticated]
    queryset = ProductGrade.objects.all()
    serializer_class = ProductGradeSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        product_type = self.request.query_params.get("product_type")
        if product_type:
            qs = qs.for_type(product_type)
        return qs


class RawMaterialViewSet(
    mixins.CreateModelMixin,
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    """
    ViewSet for RawMaterial.

    list: ?status=pending|assigned
    create: Record a receipt (always pending)
    """

    permission_classes = [IsAuthenticated]
    queryset = RawMaterial.objects.select_related("supplier")
    serializer_class = RawMaterialSerializer

    def get_queryset(self):
        qs = super().get_queryset()
        material_status = self.request.query_params.get("status")
        if material_status:
            qs = qs.filter(status=material_status)
        return qs

    def create(self, request, *args, **kwargs):
        """
        POST /api/seatrace/raw-materials/
        {"supplierId": 1, "weight": 120.5, "date": "2024-05-17"}
        """
        serializer = self.get_serializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        data = serializer.validated_data
        try:
            material = Trace.receive_raw_material(
                data["supplier"],
                data["weight"],
                date=data.get("date"),
                photo_url=data.get("photo_url", ""),
            )
        except TraceError as e:
            return error_response(e)

        return Response(
            {
                **RawMaterialSerializer(material).data,
                "notification": {
                    "kind": "success",
                    "message": "Raw material entry created successfully",
                },
            },
            status=status.HTTP_201_CREATED,
        )


class LotViewSet(mixins.CreateModelMixin, viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for Lot.

    list: ?status=pending|processing|completed, ?depurated=1
    create: Create a lot from pending receipts
    depuration_start / depuration_complete / elapsed
    process / processing_summary
    """

    permission_classes = [IsAuthenticated]
    queryset = Lot.objects.all()
    serializer_class = LotSerializer
    lookup_field = "lot_number"

    def get_queryset(self):
        qs = super().get_queryset()
        lot_status = self.request.query_params.get("status")
        if lot_status:
            qs = qs.with_status(lot_status)
        if self.request.query_params.get("depurated") in ("1", "true"):
            qs = qs.depurated()
        return qs.order_by("-created_at", "-pk")

    def create(self, request, *args, **kwargs):
        """
        Create a lot from pending raw materials.

        POST /api/seatrace/lots/
        {"materialIds": [1, 2], "notes": "Morning tide"}
        """
        serializer = LotCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        try:
            result = Trace.create_lot(
                serializer.validated_data["materialIds"],
                notes=serializer.validated_data["notes"],
            )
        except TraceError as e:
            return error_response(e)

        return success_response(
            result, LotSerializer(result.lot).data, code=status.HTTP_201_CREATED
        )

    @action(detail=True, methods=["post"], url_path="depuration-start")
    def depuration_start(self, request, lot_number=None):
        """
        POST /api/seatrace/lots/{lot_number}/depuration-start/
        {"tankNumber": "T3", "temperature": "12.5", "salinity": "33"}
        """
        lot = self.get_object()
        serializer = DepurationStartSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        data = serializer.validated_data
        try:
            result = Trace.start_depuration(
                lot, data["tankNumber"], data["temperature"], data["salinity"]
            )
        except TraceError as e:
            return error_response(e)

        return success_response(result, LotSerializer(result.lot).data)

    @action(detail=True, methods=["post"], url_path="depuration-complete")
    def depuration_complete(self, request, lot_number=None):
        """
        POST /api/seatrace/lots/{lot_number}/depuration-complete/
        {"temperature": "12.0", "salinity": "33"}
        """
        lot = self.get_object()
        serializer = DepurationCompleteSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        data = serializer.validated_data
        try:
            result = Trace.complete_depuration(lot, data["temperature"], data["salinity"])
        except TraceError as e:
            return error_response(e)

        return success_response(result, LotSerializer(result.lot).data)

    @action(detail=True, methods=["get"])
    def elapsed(self, request, lot_number=None):
        """
        GET /api/seatrace/lots/{lot_number}/elapsed/
        """
        lot = self.get_object()
        elapsed = lot.depuration_elapsed()
        return Response(
            {
                "depurationStatus": lot.depuration_status,
                "elapsed": elapsed.as_dict() if elapsed else None,
                "display": str(elapsed) if elapsed else None,
            }
        )

    @action(detail=True, methods=["post"])
    def process(self, request, lot_number=None):
        """
        POST /api/seatrace/lots/{lot_number}/process/
        {
            "boxes": [{"type": "shell-on", "weight": "5.0", "grade": "A"}],
            "shellWeight": "1.0"
        }
        """
        lot = self.get_object()
        serializer = ProcessSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        data = serializer.validated_data
        try:
            result = Trace.process(lot, data["boxes"], data["shellWeight"])
        except TraceError as e:
            return error_response(e)

        return success_response(
            result,
            {
                "batch": ProcessingBatchSerializer(result.batch).data,
                "summary": result.summary.as_dict(),
            },
            code=status.HTTP_201_CREATED,
        )

    @action(detail=True, methods=["post"], url_path="processing-summary")
    def processing_summary(self, request, lot_number=None):
        """
        Preview totals and yield without saving.

        POST /api/seatrace/lots/{lot_number}/processing-summary/
        """
        lot = self.get_object()
        serializer = ProcessSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        data = serializer.validated_data
        try:
            summary = Trace.processing_summary(lot, data["boxes"], data["shellWeight"])
        except TraceError as e:
            return error_response(e)

        return Response(summary.as_dict())


class ProcessingBatchViewSet(viewsets.ReadOnlyModelViewSet):
    """
    ViewSet for ProcessingBatch (read-only).

    list: ?lot_number=L2405171230
    packaging_qc: Record packaging QC for the batch's lot
    """

    permission_classes = [IsAuthenticated]
    queryset = ProcessingBatch.objects.select_related("lot").prefetch_related("boxes")
    serializer_class = ProcessingBatchSerializer
    lookup_field = "uuid"

    def get_queryset(self):
        qs = super().get_queryset()
        lot_number = self.request.query_params.get("lot_number")
        if lot_number:
            qs = qs.for_lot_number(lot_number)
        return qs.order_by("-created_at", "-pk")

    @action(detail=True, methods=["post"], url_path="packaging-qc")
    def packaging_qc(self, request, uuid=None):
        """
        POST /api/seatrace/batches/{uuid}/packaging-qc/
        {
            "checklist": [{"id": "1", "passed": true, "notes": ""}, ...],
            "inspectedBoxes": ["SO123456"]
        }
        """
        batch = self.get_object()
        serializer = PackagingQCSerializer(data=request.data)
        if not serializer.is_valid():
            return invalid_response(serializer)

        data = serializer.validated_data
        try:
            result = Trace.inspect_packaging(
                batch.lot, data["checklist"], data["inspectedBoxes"], batch=batch
            )
        except TraceError as e:
            return error_response(e)

        return success_response(
            result,
            {
                "batch": ProcessingBatchSerializer(result.batch).data,
                "passed": result.passed,
            },
        )
