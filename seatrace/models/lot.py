"""
Lot model.

Lot = traceable batch of raw material aggregated from supplier receipts.

Status: PENDING → PROCESSING → COMPLETED
Depuration (stored in depuration_data): absent | PENDING → IN_PROGRESS → COMPLETED
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
from seatrace.results import ElapsedTime

logger = logging.getLogger(__name__)


class LotStatus(models.TextChoices):
    """Lot lifecycle status."""

    PENDING = "pending", _("Pending")
    PROCESSING = "processing", _("Processing")
    COMPLETED = "completed", _("Completed")


class DepurationStatus(models.TextChoices):
    """Depuration status inside Lot.depuration_data."""

    PENDING = "pending", _("Pending")
    IN_PROGRESS = "in-progress", _("In Progress")
    COMPLETED = "completed", _("Completed")


class LotQuerySet(models.QuerySet):
    def with_status(self, status: str):
        return self.filter(status=status)

    def depurated(self):
        return self.filter(depuration_data__status=DepurationStatus.COMPLETED.value)


class Lot(models.Model):
    """
    Traceable lot of raw material.

    total_weight is fixed at creation (sum of the receipts) and never
    recomputed.

    depuration_data structure:
        {
            'status': 'in-progress',
            'tankNumber': 'T3',
            'startTime': '2024-05-17T12:30:00+00:00',
            'startReadings': {'temperature': 12.5, 'salinity': 33.0},
            'completedAt': '2024-05-18T08:00:00+00:00',
            'endReadings': {'temperature': 12.0, 'salinity': 33.0}
        }
    """

    # UUID for external references
    uuid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        unique=True,
        verbose_name=_("UUID"),
    )

    lot_number = models.CharField(
        unique=True,
        max_length=30,
        verbose_name=_("Lot Number"),
        help_text=_("L + yyMMddHHmm of creation, suffixed on collision"),
    )
    total_weight = models.DecimalField(
        max_digits=12,
        decimal_places=3,
        default=Decimal("0"),
        verbose_name=_("Total Weight (kg)"),
    )
    status = models.CharField(
        max_length=20,
        choices=LotStatus.choices,
        default=LotStatus.PENDING,
        db_index=True,
        verbose_name=_("Status"),
    )
    notes = models.TextField(
        blank=True,
        verbose_name=_("Notes"),
    )
    receipt_ids = models.JSONField(
        default=list,
        blank=True,
        verbose_name=_("Receipts"),
        help_text=_("RawMaterial ids aggregated into this lot"),
    )
    depuration_data = models.JSONField(
        null=True,
        blank=True,
        verbose_name=_("Depuration"),
    )

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True, verbose_name=_("created at"))
    updated_at = models.DateTimeField(auto_now=True, verbose_name=_("updated at"))

    # History
    history = HistoricalRecords()

    objects = LotQuerySet.as_manager()

    class Meta:
        db_table = "seatrace_lot"
        verbose_name = _("Lot")
        verbose_name_plural = _("Lots")
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"Lot {self.lot_number} - {self.total_weight:.1f} kg"

    # ══════════════════════════════════════════════════════════════
    # DEPURATION
    # ══════════════════════════════════════════════════════════════

    @property
    def depuration_status(self) -> str | None:
        """Current depuration status, None while depuration never started."""
        if not self.depuration_data:
            return None
        return self.depuration_data.get("status")

    @property
    def is_depurated(self) -> bool:
        return self.depuration_status == DepurationStatus.COMPLETED

    @property
    def depuration_started_at(self):
        if not self.depuration_data:
            return None
        return rules.parse_timestamp(self.depuration_data.get("startTime"))

    @property
    def depuration_completed_at(self):
        if not self.depuration_data:
            return None
        return rules.parse_timestamp(self.depuration_data.get("completedAt"))

    def start_depuration(self, tank_number, temperature, salinity, now=None):
        """
        Start depuration (absent or pending → in-progress).

        Requires tank number, temperature and salinity readings.
        """
        if self.depuration_status in (
            DepurationStatus.IN_PROGRESS,
            DepurationStatus.COMPLETED,
        ):
            raise TraceValidationError(
                "INVALID_DEPURATION_STATE",
                "Depuration has already been started for this lot",
                lot_number=self.lot_number,
                current=self.depuration_status,
                expected=DepurationStatus.PENDING.value,
            )

        tank_number = str(tank_number or "").strip()
        temperature = rules.to_decimal(temperature, "temperature")
        salinity = rules.to_decimal(salinity, "salinity")
        if not tank_number or temperature is None or salinity is None:
            raise TraceValidationError(
                "MISSING_FIELDS",
                "Please fill in all required fields",
                required=["tank_number", "temperature", "salinity"],
            )

        now = now or timezone.now()
        self.depuration_data = {
            "status": DepurationStatus.IN_PROGRESS.value,
            "tankNumber": tank_number,
            "startTime": now.isoformat(),
            "startReadings": {
                "temperature": float(temperature),
                "salinity": float(salinity),
            },
        }
        self.save(update_fields=["depuration_data", "updated_at"])

        logger.info(
            f"Lot {self.lot_number}: depuration started in tank {tank_number}",
            extra={
                "lot": self.lot_number,
                "tank": tank_number,
                "temperature": float(temperature),
                "salinity": float(salinity),
            },
        )

    def complete_depuration(self, temperature, salinity, now=None):
        """
        Complete depuration (in-progress → completed). Terminal.

        Requires final temperature and salinity readings.
        """
        if self.depuration_status != DepurationStatus.IN_PROGRESS:
            raise TraceValidationError(
                "INVALID_DEPURATION_STATE",
                "Depuration is not in progress for this lot",
                lot_number=self.lot_number,
                current=self.depuration_status,
                expected=DepurationStatus.IN_PROGRESS.value,
            )

        temperature = rules.to_decimal(temperature, "temperature")
        salinity = rules.to_decimal(salinity, "salinity")
        if temperature is None or salinity is None:
            raise TraceValidationError(
                "MISSING_FIELDS",
                "Please enter final readings",
                required=["temperature", "salinity"],
            )

        now = now or timezone.now()
        self.depuration_data = {
            **self.depuration_data,
            "status": DepurationStatus.COMPLETED.value,
            "completedAt": now.isoformat(),
            "endReadings": {
                "temperature": float(temperature),
                "salinity": float(salinity),
            },
        }
        self.save(update_fields=["depuration_data", "updated_at"])

        logger.info(
            f"Lot {self.lot_number}: depuration completed",
            extra={"lot": self.lot_number, "completed_at": now.isoformat()},
        )

    def depuration_elapsed(self, now=None) -> ElapsedTime | None:
        """
        Time spent in depuration, recomputed on every call.

        While in progress: start → now. Once completed: start → completedAt.
        """
        started = self.depuration_started_at
        if started is None:
            return None
        if self.is_depurated:
            return rules.elapsed_time(started, self.depuration_completed_at)
        return rules.elapsed_time(started, now)

    # ══════════════════════════════════════════════════════════════
    # LIFECYCLE
    # ══════════════════════════════════════════════════════════════

    def mark_processing(self):
        """Lot entered processing (a batch was recorded)."""
        if self.status == LotStatus.COMPLETED:
            raise TraceValidationError(
                "INVALID_STATUS",
                "Lot is already completed",
                lot_number=self.lot_number,
                current=self.status,
            )
        self.status = LotStatus.PROCESSING
        self.save(update_fields=["status", "updated_at"])
        logger.info(f"Lot {self.lot_number} moved to processing")

    def complete(self):
        """Lot released after packaging QC."""
        if self.status != LotStatus.PROCESSING:
            raise TraceValidationError(
                "INVALID_STATUS",
                "Only lots in processing can be completed",
                lot_number=self.lot_number,
                current=self.status,
                expected=LotStatus.PROCESSING.value,
            )
        self.status = LotStatus.COMPLETED
        self.save(update_fields=["status", "updated_at"])
        logger.info(f"Lot {self.lot_number} completed")
