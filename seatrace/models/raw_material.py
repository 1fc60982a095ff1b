"""
RawMaterial model.

One supplier receipt. Pending until aggregated into a Lot, then assigned
and immutable.
"""

import logging

from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)


class MaterialStatus(models.TextChoices):
    """RawMaterial status."""

    PENDING = "pending", _("Pending")
    ASSIGNED = "assigned", _("Assigned")


class RawMaterialQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=MaterialStatus.PENDING)


class RawMaterial(models.Model):
    """
    Raw material receipt (weighed at intake).

    Status: PENDING → ASSIGNED (when a Lot is created from it)
    """

    supplier = models.ForeignKey(
        "seatrace.Supplier",
        on_delete=models.PROTECT,
        related_name="raw_materials",
        verbose_name=_("Supplier"),
    )
    weight = models.DecimalField(
        max_digits=10,
        decimal_places=3,
        verbose_name=_("Weight (kg)"),
    )
    date = models.DateField(
        default=timezone.localdate,
        verbose_name=_("Date"),
    )
    status = models.CharField(
        max_length=20,
        choices=MaterialStatus.choices,
        default=MaterialStatus.PENDING,
        db_index=True,
        verbose_name=_("Status"),
    )
    lot_number = models.CharField(
        max_length=30,
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_("Lot Number"),
    )
    photo_url = models.TextField(
        blank=True,
        verbose_name=_("Weight Photo"),
    )

    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    objects = RawMaterialQuerySet.as_manager()

    class Meta:
        db_table = "seatrace_raw_material"
        verbose_name = _("Raw Material")
        verbose_name_plural = _("Raw Materials")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.weight} kg from {self.supplier.name} ({self.date})"

    @property
    def is_pending(self) -> bool:
        return self.status == MaterialStatus.PENDING

    def assign(self, lot_number: str):
        """Mark as consumed by a lot. Caller owns the transaction."""
        self.status = MaterialStatus.ASSIGNED
        self.lot_number = lot_number
        self.save(update_fields=["status", "lot_number", "updated_at"])
        logger.debug(f"RawMaterial {self.pk} assigned to lot {lot_number}")
