"""
Intake service -- suppliers, raw material receipts, grade lookups.
"""

import logging
from datetime import date

from django.utils import timezone

from seatrace import rules
from seatrace.exceptions import TraceValidationError
from seatrace.models import ProductGrade, ProductType, RawMaterial, Supplier
from seatrace.services.base import atomic_write, require_text, resolve_supplier

logger = logging.getLogger(__name__)


class TraceIntake:
    """Registry and intake operations."""

    @classmethod
    def register_supplier(cls, name: str, contact: str, license_number: str) -> Supplier:
        """Register a licensed supplier. All fields required."""
        name = require_text(name, "name", "Supplier name is required")
        contact = require_text(contact, "contact", "Supplier contact is required")
        license_number = require_text(
            license_number, "license_number", "License number is required"
        )

        with atomic_write("SUPPLIER_NOT_SAVED", "Error saving supplier"):
            supplier = Supplier.objects.create(
                name=name, contact=contact, license_number=license_number
            )

        logger.info(f"Registered supplier {supplier.name}", extra={"supplier": supplier.pk})
        return supplier

    @classmethod
    def receive_raw_material(
        cls,
        supplier,
        weight,
        date: date | None = None,
        photo_url: str = "",
    ) -> RawMaterial:
        """
        Record a raw material receipt.

        Args:
            supplier: Supplier or its pk
            weight: Scale reading in kg, must be > 0
            date: Receipt date (defaults to today)
            photo_url: Optional weight photo reference

        Returns:
            RawMaterial in PENDING status, not yet in any lot
        """
        supplier = resolve_supplier(supplier)
        parsed = rules.to_decimal(weight, "weight")
        if parsed is None or parsed <= 0:
            raise TraceValidationError(
                "INVALID_WEIGHT",
                "Weight must be greater than zero",
                weight=str(weight),
            )

        with atomic_write("MATERIAL_NOT_SAVED", "Failed to create raw material entry"):
            material = RawMaterial.objects.create(
                supplier=supplier,
                weight=parsed,
                date=date or timezone.localdate(),
                photo_url=photo_url or "",
            )

        logger.info(
            f"Received {parsed} kg from {supplier.name}",
            extra={
                "material": material.pk,
                "supplier": supplier.pk,
                "weight": float(parsed),
            },
        )
        return material

    @classmethod
    def pending_materials(cls) -> list[RawMaterial]:
        """Raw materials not yet assigned to a lot, most recent first."""
        return list(
            RawMaterial.objects.pending()
            .select_related("supplier")
            .order_by("-created_at", "-pk")
        )

    @classmethod
    def add_grade(
        cls, code: str, name: str, product_type: str, description: str = ""
    ) -> ProductGrade:
        """Register a product grade for shell-on or meat boxes."""
        if product_type not in ProductType.values:
            raise TraceValidationError(
                "INVALID_PRODUCT_TYPE", product_type=str(product_type)
            )
        code = require_text(code, "code", "Grade code is required")
        name = require_text(name, "name", "Grade name is required")

        with atomic_write("GRADE_NOT_SAVED", "Error saving product grade"):
            return ProductGrade.objects.create(
                code=code,
                name=name,
                product_type=product_type,
                description=description or "",
            )

    @classmethod
    def grades_for(cls, product_type: str) -> list[ProductGrade]:
        """Grades selectable for a box type."""
        return list(ProductGrade.objects.for_type(product_type))
