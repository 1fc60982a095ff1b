"""
ProcessingBatch and Box models.

ProcessingBatch = output of processing one depurated lot.
Box = packed unit (shell-on or meat) with weight and grade.
"""

import logging
import uuid
from decimal import Decimal

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _
from simple_history.models import HistoricalRecords

from seatrace import rules
from seatrace.exceptions import TraceValidationError
from seatrace.models.supplier import ProductType

logger = logging.getLogger(__name__)


class BatchStatus(models.TextChoices):
    """ProcessingBatch status."""

    PENDING = "pending", _("Pending")
    COMPLETED = "completed", _("Completed")


class ProcessingBatchQuerySet(models.QuerySet):
    def for_lot_number(self, lot_number: str):
        return self.filter(lot__lot_number=lot_number)


class ProcessingBatch(models.Model):
    """
    Processing batch for a lot.

    packaging_qc structure (set once by record_packaging_qc):
        {
            'checklist': [
                {'id': '1', 'label': 'Package Integrity', 'passed': True, 'notes': ''},
                ...
            ],
            'inspectedBoxes': ['SO123456', 'CM123457'],
            'passed': True,
            'completedAt': '2024-05-18T10:00:00+00:00'
        }
    """

    # UUID for external references
    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )

    lot = models.ForeignKey(
        "seatrace.Lot",
        on_delete=models.PROTECT,
        related_name="processing_batches",
        verbose_name=_("Lot"),
    )

    # Totals (derived at submission)
    shell_on_weight = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0"),
        verbose_name=_("Shell-on Weight (kg)"),
    )
    meat_weight = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0"),
        verbose_name=_("Meat Weight (kg)"),
    )
    shell_weight = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0"),
        verbose_name=_("Shell Weight (kg)"),
        help_text=_("Shell/waste scale reading for the whole batch"),
    )
    yield_percentage = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("0"),
        verbose_name=_("Yield (%)"),
    )

    status = models.CharField(
        max_length=20,
        choices=BatchStatus.choices,
        default=BatchStatus.PENDING,
        db_index=True,
        verbose_name=_("Status"),
    )
    packaging_qc = models.JSONField(
        null=True,
        blank=True,
        verbose_name=_("Packaging QC"),
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    # History
    history = HistoricalRecords()

    objects = ProcessingBatchQuerySet.as_manager()

    class Meta:
        db_table = "seatrace_processing_batch"
        verbose_name = _("Processing Batch")
        verbose_name_plural = _("Processing Batches")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Batch {self.pk} - Lot {self.lot.lot_number}"

    @property
    def lot_number(self) -> str:
        return self.lot.lot_number

    @property
    def box_numbers(self) -> list[str]:
        return list(self.boxes.values_list("box_number", flat=True))

    @property
    def is_inspected(self) -> bool:
        return bool(self.packaging_qc)

    @property
    def qc_passed(self) -> bool | None:
        if not self.packaging_qc:
            return None
        return self.packaging_qc.get("passed")

    def record_packaging_qc(self, checklist, inspected_boxes, now=None) -> bool:
        """
        Persist packaging QC onto this batch.

        Every checklist item must be passed or failed and at least one of
        the batch's boxes selected. QC is recorded once per batch.
        Returns the overall pass flag.
        """
        if self.packaging_qc:
            raise TraceValidationError(
                "QC_ALREADY_RECORDED",
                "Packaging quality control was already recorded for this batch",
                batch=self.pk,
                passed=self.packaging_qc.get("passed"),
            )

        checklist = rules.normalize_checklist(checklist or [])

        inspected = list(dict.fromkeys(inspected_boxes or []))
        if not inspected:
            raise TraceValidationError(
                "NO_BOXES_SELECTED",
                "Please select at least one box for QC",
            )
        unknown = sorted(set(inspected) - set(self.box_numbers))
        if unknown:
            raise TraceValidationError(
                "UNKNOWN_BOXES",
                "Selected boxes do not belong to this batch",
                boxes=unknown,
            )

        passed = rules.checklist_passed(checklist)
        now = now or timezone.now()
        self.packaging_qc = {
            "checklist": checklist,
            "inspectedBoxes": inspected,
            "passed": passed,
            "completedAt": now.isoformat(),
        }
        self.save(update_fields=["packaging_qc", "updated_at"])

        logger.info(
            f"Batch {self.pk}: packaging QC {'passed' if passed else 'failed'}",
            extra={
                "batch": self.pk,
                "lot": self.lot.lot_number,
                "inspected": len(inspected),
                "passed": passed,
            },
        )
        return passed


class Box(models.Model):
    """Packed box of a processing batch."""

    batch = models.ForeignKey(
        ProcessingBatch,
        on_delete=models.CASCADE,
        related_name="boxes",
        verbose_name=_("Batch"),
    )
    box_type = models.CharField(
        max_length=20,
        choices=ProductType.choices,
        verbose_name=_("Type"),
    )
    box_number = models.CharField(
        max_length=20,
        verbose_name=_("Box Number"),
    )
    weight = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        verbose_name=_("Weight (kg)"),
    )
    grade = models.CharField(
        max_length=20,
        verbose_name=_("Grade"),
    )

    class Meta:
        db_table = "seatrace_box"
        verbose_name = _("Box")
        verbose_name_plural = _("Boxes")
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(
                fields=["batch", "box_number"],
                name="seatrace_box_number_per_batch",
            ),
        ]

    def __str__(self) -> str:
        return f"{self.box_number} - {self.weight} kg - Grade {self.grade}"

    def as_entry(self):
        from seatrace.results import BoxEntry

        return BoxEntry(
            box_type=self.box_type,
            weight=self.weight,
            grade=self.grade,
            box_number=self.box_number,
        )
