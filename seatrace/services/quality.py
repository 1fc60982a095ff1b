"""
Quality service -- packaging QC of a processed lot.
"""

import logging
from datetime import datetime

from seatrace import rules
from seatrace.conf import get_setting
from seatrace.models import LotStatus, ProcessingBatch
from seatrace.results import InspectionResult
from seatrace.services.base import atomic_write, latest_batch, resolve_lot

logger = logging.getLogger(__name__)


class TraceQuality:
    """Packaging quality control."""

    @classmethod
    def inspect_packaging(
        cls,
        lot,
        checklist: list[dict],
        inspected_boxes: list[str],
        now: datetime | None = None,
        batch: ProcessingBatch | None = None,
    ) -> InspectionResult:
        """
        Record packaging QC on the lot's processing batch.

        Args:
            lot: Lot, pk or lot number
            checklist: [{"id": "1", "passed": True, "notes": ""}, ...] for
                all six fixed items
            inspected_boxes: Box numbers of the batch that were inspected
            batch: Batch to inspect (defaults to the lot's latest batch)

        Returns:
            InspectionResult; ``warnings`` lists failed items (advisory)
        """
        lot = resolve_lot(lot)
        if batch is None or batch.lot_id != lot.pk:
            batch = latest_batch(lot)

        with atomic_write(
            "QC_NOT_SAVED",
            "Error saving quality control results",
            lot=lot.lot_number,
        ):
            batch = ProcessingBatch.objects.select_for_update().get(pk=batch.pk)
            passed = batch.record_packaging_qc(checklist, inspected_boxes, now=now)

            if passed and get_setting("COMPLETE_LOT_ON_QC_PASS"):
                lot = resolve_lot(lot, lock=True)
                if lot.status == LotStatus.PROCESSING:
                    lot.complete()

        warnings = rules.checklist_advisories(batch.packaging_qc["checklist"])

        from seatrace.signals import packaging_inspected

        packaging_inspected.send(sender=cls, batch=batch, lot=lot, passed=passed)

        return InspectionResult(
            message="Packaging quality control completed",
            warnings=warnings,
            batch=batch,
            passed=passed,
        )
