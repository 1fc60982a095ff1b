"""
SeaTrace Admin - Basic Django admin for the traceability records.

Lifecycle transitions (depuration, processing, QC) go through
seatrace.trace; the admin keeps those fields read-only.
"""

from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from seatrace.models import (
    Box,
    CodeSequence,
    Lot,
    ProcessingBatch,
    ProductGrade,
    RawMaterial,
    Supplier,
)


# ── Registry ──


@admin.register(Supplier)
class SupplierAdmin(admin.ModelAdmin):
    """Admin for suppliers."""

    list_display = ("name", "contact", "license_number", "created_at")
    search_fields = ("name", "license_number")


@admin.register(ProductGrade)
class ProductGradeAdmin(admin.ModelAdmin):
    """Admin for product grades."""

    list_display = ("code", "name", "product_type")
    list_filter = ("product_type",)
    search_fields = ("code", "name")


# ── Intake ──


@admin.register(RawMaterial)
class RawMaterialAdmin(admin.ModelAdmin):
    """Admin for raw material receipts."""

    list_display = ("id", "supplier", "weight", "date", "status", "lot_number")
    list_filter = ("status", "date")
    search_fields = ("lot_number", "supplier__name")
    raw_id_fields = ("supplier",)
    readonly_fields = ("status", "lot_number", "created_at", "updated_at")


# ── Lots ──


@admin.register(Lot)
class LotAdmin(SimpleHistoryAdmin):
    """Admin for lots."""

    list_display = ("lot_number", "total_weight", "status", "depuration_status", "created_at")
    list_filter = ("status",)
    search_fields = ("lot_number",)
    date_hierarchy = "created_at"
    readonly_fields = (
        "uuid",
        "lot_number",
        "total_weight",
        "status",
        "receipt_ids",
        "depuration_data",
        "created_at",
        "updated_at",
    )

    @admin.display(description="Depuration")
    def depuration_status(self, obj):
        return obj.depuration_status or "-"


# ── Processing ──


class BoxInline(admin.TabularInline):
    """Inline for packed boxes."""

    model = Box
    extra = 0
    fields = ("box_number", "box_type", "weight", "grade")
    readonly_fields = fields
    can_delete = False


@admin.register(ProcessingBatch)
class ProcessingBatchAdmin(SimpleHistoryAdmin):
    """Admin for processing batches."""

    list_display = ("id", "lot", "shell_on_weight", "meat_weight", "yield_percentage", "status", "qc_passed")
    list_filter = ("status",)
    search_fields = ("lot__lot_number",)
    raw_id_fields = ("lot",)
    inlines = [BoxInline]
    readonly_fields = (
        "uuid",
        "shell_on_weight",
        "meat_weight",
        "shell_weight",
        "yield_percentage",
        "status",
        "packaging_qc",
        "created_at",
        "updated_at",
    )

    @admin.display(boolean=True, description="QC")
    def qc_passed(self, obj):
        return obj.qc_passed


@admin.register(CodeSequence)
class CodeSequenceAdmin(admin.ModelAdmin):
    list_display = ("prefix", "last_value")
