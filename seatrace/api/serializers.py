"""
SeaTrace API Serializers.

Records use the camelCase keys of the document collections;
the gateway renders records through these same serializers.
"""

from rest_framework import serializers

from seatrace.models import Box, Lot, ProcessingBatch, ProductGrade, RawMaterial, Supplier


def _weight(**kwargs):
    return serializers.DecimalField(
        max_digits=12, decimal_places=3, coerce_to_string=False, **kwargs
    )


class SupplierSerializer(serializers.ModelSerializer):
    """Serializer for Supplier model."""

    licenseNumber = serializers.CharField(source="license_number", max_length=100)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Supplier
        fields = ["id", "name", "contact", "licenseNumber", "createdAt", "updatedAt"]


class ProductGradeSerializer(serializers.ModelSerializer):
    """Serializer for ProductGrade model."""

    productType = serializers.CharField(source="product_type", read_only=True)

    class Meta:
        model = ProductGrade
        fields = ["id", "code", "name", "description", "productType"]


class RawMaterialSerializer(serializers.ModelSerializer):
    """Serializer for RawMaterial model."""

    supplierId = serializers.PrimaryKeyRelatedField(
        source="supplier", queryset=Supplier.objects.all()
    )
    weight = _weight()
    lotNumber = serializers.CharField(source="lot_number", read_only=True)
    photoUrl = serializers.CharField(source="photo_url", required=False, allow_blank=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = RawMaterial
        fields = [
            "id",
            "supplierId",
            "weight",
            "date",
            "status",
            "lotNumber",
            "photoUrl",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["status"]
        extra_kwargs = {"date": {"required": False}}


class LotSerializer(serializers.ModelSerializer):
    """Serializer for Lot model."""

    lotNumber = serializers.CharField(source="lot_number", read_only=True)
    totalWeight = _weight(source="total_weight", read_only=True)
    receiptIds = serializers.JSONField(source="receipt_ids", read_only=True)
    depurationData = serializers.JSONField(source="depuration_data", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = Lot
        fields = [
            "id",
            "uuid",
            "lotNumber",
            "totalWeight",
            "status",
            "notes",
            "receiptIds",
            "depurationData",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["uuid", "status"]


class BoxSerializer(serializers.ModelSerializer):
    """Serializer for Box model."""

    type = serializers.CharField(source="box_type")
    boxNumber = serializers.CharField(source="box_number")
    weight = _weight()

    class Meta:
        model = Box
        fields = ["type", "weight", "boxNumber", "grade"]


class ProcessingBatchSerializer(serializers.ModelSerializer):
    """Serializer for ProcessingBatch model (read-only)."""

    lotNumber = serializers.CharField(source="lot.lot_number", read_only=True)
    shellOnWeight = _weight(source="shell_on_weight", read_only=True)
    meatWeight = _weight(source="meat_weight", read_only=True)
    shellWeight = _weight(source="shell_weight", read_only=True)
    boxes = BoxSerializer(many=True, read_only=True)
    yieldPercentage = serializers.DecimalField(
        source="yield_percentage",
        max_digits=8,
        decimal_places=2,
        coerce_to_string=False,
        read_only=True,
    )
    packagingQC = serializers.JSONField(source="packaging_qc", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    updatedAt = serializers.DateTimeField(source="updated_at", read_only=True)

    class Meta:
        model = ProcessingBatch
        fields = [
            "id",
            "uuid",
            "lotNumber",
            "shellOnWeight",
            "meatWeight",
            "shellWeight",
            "boxes",
            "yieldPercentage",
            "status",
            "packagingQC",
            "createdAt",
            "updatedAt",
        ]
        read_only_fields = ["uuid", "status"]


# ── Action payloads ──
# Fields are lenient (blank allowed); the services own the required-field
# rules so the API and in-process callers get the same errors.


class LotCreateSerializer(serializers.Serializer):
    """Serializer for lot creation from pending receipts."""

    materialIds = serializers.ListField(
        child=serializers.IntegerField(), allow_empty=True, required=False, default=list
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class DepurationStartSerializer(serializers.Serializer):
    """Serializer for depuration start."""

    tankNumber = serializers.CharField(required=False, allow_blank=True, default="")
    temperature = serializers.CharField(required=False, allow_blank=True, default="")
    salinity = serializers.CharField(required=False, allow_blank=True, default="")


class DepurationCompleteSerializer(serializers.Serializer):
    """Serializer for depuration completion (final readings)."""

    temperature = serializers.CharField(required=False, allow_blank=True, default="")
    salinity = serializers.CharField(required=False, allow_blank=True, default="")


class BoxInputSerializer(serializers.Serializer):
    """One box of a processing submission."""

    type = serializers.ChoiceField(choices=["shell-on", "meat"])
    weight = serializers.CharField(required=False, allow_blank=True, default="")
    grade = serializers.CharField(required=False, allow_blank=True, default="")
    boxNumber = serializers.CharField(required=False, allow_blank=True, default="")


class ProcessSerializer(serializers.Serializer):
    """Serializer for processing submission."""

    boxes = BoxInputSerializer(many=True, required=False, default=list)
    shellWeight = serializers.CharField(required=False, allow_blank=True, default="")


class ChecklistAnswerSerializer(serializers.Serializer):
    """One answered QC checklist item."""

    id = serializers.CharField()
    passed = serializers.BooleanField(allow_null=True, required=False, default=None)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class PackagingQCSerializer(serializers.Serializer):
    """Serializer for packaging QC submission."""

    checklist = ChecklistAnswerSerializer(many=True)
    inspectedBoxes = serializers.ListField(
        child=serializers.CharField(), allow_empty=True, required=False, default=list
    )
