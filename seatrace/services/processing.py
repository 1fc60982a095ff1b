"""
Processing service -- box packing, yield, batch creation.

Usage:
    result = trace.process(
        lot,
        boxes=[
            {"type": "shell-on", "weight": "5.0", "grade": "A"},
            {"type": "meat", "weight": "3.0", "grade": "P"},
        ],
        shell_weight="1.0",
    )
    result.batch.yield_percentage   # Decimal("80.00") for a 10 kg lot
    result.summary.mismatch         # True: 9.0 kg out vs 10.0 kg in
"""

import logging
from datetime import datetime
from decimal import Decimal

from seatrace import rules
from seatrace.conf import get_mismatch_tolerance, get_setting
from seatrace.exceptions import TraceValidationError
from seatrace.models import BatchStatus, Box, ProcessingBatch, ProductGrade
from seatrace.results import BoxEntry, ProcessingResult, ProcessingSummary
from seatrace.services.base import atomic_write, resolve_lot

logger = logging.getLogger(__name__)


class TraceProcessing:
    """Processing of depurated lots."""

    @classmethod
    def process(
        cls,
        lot,
        boxes: list[dict],
        shell_weight,
        now: datetime | None = None,
    ) -> ProcessingResult:
        """
        Record the processing batch of a lot.

        Rejected (nothing written) when depuration is not completed, no
        boxes were given, a box lacks weight or grade, a grade is not
        valid for the box type, or the shell weight is missing/zero.

        Batch creation and the lot status change share one transaction.
        """
        lot = resolve_lot(lot)
        cls._require_depurated(lot)

        if not boxes:
            raise TraceValidationError("NO_BOXES", "Please add at least one box")

        entries = cls.parse_boxes(boxes, now=now)
        cls._check_grades(entries)

        shell = rules.to_decimal(shell_weight, "shell_weight")
        if not shell or shell < 0:
            raise TraceValidationError(
                "SHELL_WEIGHT_REQUIRED", "Please enter shell weight"
            )

        summary = rules.summarize(
            entries, shell, lot.total_weight, tolerance=get_mismatch_tolerance()
        )

        with atomic_write(
            "BATCH_NOT_SAVED", "Error saving processing data", lot=lot.lot_number
        ):
            lot = resolve_lot(lot, lock=True)
            cls._require_depurated(lot)

            if get_setting("SINGLE_BATCH_PER_LOT") and lot.processing_batches.exists():
                raise TraceValidationError(
                    "BATCH_ALREADY_EXISTS",
                    "This lot has already been processed",
                    lot_number=lot.lot_number,
                )

            batch = ProcessingBatch.objects.create(
                lot=lot,
                shell_on_weight=summary.shell_on_total,
                meat_weight=summary.meat_total,
                shell_weight=summary.shell_weight,
                yield_percentage=summary.yield_percentage,
                status=BatchStatus.COMPLETED,
            )
            Box.objects.bulk_create(
                [
                    Box(
                        batch=batch,
                        box_type=entry.box_type,
                        box_number=entry.box_number,
                        weight=entry.weight,
                        grade=entry.grade,
                    )
                    for entry in entries
                ]
            )
            lot.mark_processing()

        warnings = [summary.warning] if summary.mismatch else []
        logger.info(
            f"Lot {lot.lot_number} processed: {len(entries)} boxes, "
            f"yield {summary.yield_percentage}%",
            extra={
                "lot": lot.lot_number,
                "batch": batch.pk,
                "boxes": len(entries),
                "total_output": float(summary.total_output),
                "total_input": float(summary.total_input),
                "mismatch": summary.mismatch,
            },
        )

        from seatrace.signals import batch_processed

        batch_processed.send(sender=cls, batch=batch, lot=lot, summary=summary)

        return ProcessingResult(
            message="Processing data saved successfully",
            warnings=warnings,
            batch=batch,
            summary=summary,
        )

    @classmethod
    def processing_summary(cls, lot, boxes: list[dict], shell_weight) -> ProcessingSummary:
        """
        Preview totals, yield and mismatch without persisting.

        Incomplete boxes count as zero, like the live summary of a form
        still being filled.
        """
        lot = resolve_lot(lot)
        entries = []
        for raw in boxes or []:
            box_type = raw.get("type") or raw.get("box_type")
            weight = rules.to_decimal(raw.get("weight"), "weight") or Decimal("0")
            entries.append(BoxEntry(box_type=box_type, weight=weight, grade=""))
        return rules.summarize(
            entries, shell_weight, lot.total_weight, tolerance=get_mismatch_tolerance()
        )

    @classmethod
    def parse_boxes(cls, boxes: list[dict], now: datetime | None = None) -> list[BoxEntry]:
        """
        Validate raw box input and assign box numbers.

        Missing box numbers are generated (SO/CM + millisecond digits) and
        stepped until unique within the batch; explicit duplicates are
        rejected.
        """
        entries = []
        used: set[str] = set()

        for index, raw in enumerate(boxes):
            box_type = raw.get("type") or raw.get("box_type")
            if box_type not in rules.BOX_PREFIXES:
                raise TraceValidationError(
                    "INVALID_BOX_TYPE", index=index, box_type=str(box_type)
                )

            weight = rules.to_decimal(raw.get("weight"), "weight")
            grade = str(raw.get("grade") or "").strip()
            if weight is None or weight <= 0 or not grade:
                raise TraceValidationError(
                    "INVALID_BOX",
                    "Please fill in all box weights and grades",
                    index=index,
                )

            box_number = str(raw.get("boxNumber") or raw.get("box_number") or "").strip()
            if box_number:
                if box_number in used:
                    raise TraceValidationError(
                        "DUPLICATE_BOX_NUMBER", index=index, box_number=box_number
                    )
            else:
                box_number = rules.generate_box_number(box_type, now)
                while box_number in used:
                    box_number = rules.next_box_number(box_number)
            used.add(box_number)

            entries.append(
                BoxEntry(
                    box_type=box_type,
                    weight=weight,
                    grade=grade,
                    box_number=box_number,
                )
            )

        return entries

    @classmethod
    def _check_grades(cls, entries: list[BoxEntry]):
        valid = set(
            ProductGrade.objects.filter(code__in={e.grade for e in entries}).values_list(
                "code", "product_type"
            )
        )
        for index, entry in enumerate(entries):
            if (entry.grade, entry.box_type) not in valid:
                raise TraceValidationError(
                    "INVALID_GRADE",
                    f"Grade {entry.grade} is not valid for {entry.box_type} boxes",
                    index=index,
                    grade=entry.grade,
                    box_type=entry.box_type,
                )

    @classmethod
    def _require_depurated(cls, lot):
        if not lot.is_depurated:
            raise TraceValidationError(
                "DEPURATION_NOT_COMPLETED",
                "Depuration must be completed before processing",
                lot_number=lot.lot_number,
                depuration=lot.depuration_status,
            )
