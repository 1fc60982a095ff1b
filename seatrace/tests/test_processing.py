"""
Tests for processing (seatrace.services.processing).
"""

import pytest
from decimal import Decimal
from unittest.mock import patch

from django.db import DatabaseError

from seatrace import TraceError, trace
from seatrace.models import BatchStatus, Box, LotStatus, ProcessingBatch
from seatrace.signals import batch_processed


class TestProcess:
    def test_batch_recorded(self, processed, depurated_lot):
        batch = processed.batch

        assert batch.lot == depurated_lot
        assert batch.status == BatchStatus.COMPLETED
        assert batch.shell_on_weight == Decimal("5.0")
        assert batch.meat_weight == Decimal("3.0")
        assert batch.shell_weight == Decimal("1.0")
        assert batch.yield_percentage == Decimal("80.00")
        assert batch.box_numbers == ["SO000001", "CM000002"]
        assert batch.packaging_qc is None
        assert processed.message == "Processing data saved successfully"

    def test_lot_moves_to_processing(self, processed, depurated_lot):
        depurated_lot.refresh_from_db()

        assert depurated_lot.status == LotStatus.PROCESSING

    def test_mismatch_is_a_warning(self, processed):
        assert processed.summary.mismatch is True
        assert processed.summary.total_output == Decimal("9.0")
        assert len(processed.warnings) == 1
        assert "Please verify all weights" in processed.warnings[0]

    def test_no_warning_when_balanced(self, depurated_lot, grades):
        boxes = [
            {"type": "shell-on", "weight": "6", "grade": "A"},
            {"type": "meat", "weight": "3", "grade": "P"},
        ]

        result = trace.process(depurated_lot, boxes, "1")

        assert result.summary.mismatch is False
        assert result.warnings == []

    def test_generated_box_numbers_unique(self, depurated_lot, grades, now):
        boxes = [{"type": "shell-on", "weight": "1", "grade": "A"} for _ in range(3)]

        result = trace.process(depurated_lot, boxes, "7", now=now)

        assert result.batch.box_numbers == ["SO000000", "SO000001", "SO000002"]

    def test_signal_sent(self, depurated_lot, grades, boxes):
        received = []

        def handler(sender, batch, lot, summary, **kwargs):
            received.append((lot.lot_number, summary.yield_percentage))

        batch_processed.connect(handler)
        try:
            trace.process(depurated_lot, boxes, "1.0")
        finally:
            batch_processed.disconnect(handler)

        assert received == [(depurated_lot.lot_number, Decimal("80.00"))]


class TestProcessRejections:
    @pytest.mark.parametrize("boxes", [[], [{"type": "shell-on", "weight": "5", "grade": "A"}]])
    def test_requires_completed_depuration(self, lot, grades, boxes):
        """Depuration is checked before anything else, boxes or not."""
        with pytest.raises(TraceError) as exc:
            trace.process(lot, boxes, "1.0")

        assert exc.value.code == "DEPURATION_NOT_COMPLETED"
        assert not ProcessingBatch.objects.exists()

    def test_in_progress_depuration_rejected(self, lot, grades, boxes, now):
        trace.start_depuration(lot, "T3", "12.5", "33", now=now)

        with pytest.raises(TraceError) as exc:
            trace.process(lot, boxes, "1.0")

        assert exc.value.code == "DEPURATION_NOT_COMPLETED"

    def test_no_boxes(self, depurated_lot, grades):
        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, [], "1.0")

        assert exc.value.code == "NO_BOXES"

    @pytest.mark.parametrize(
        "box",
        [
            {"type": "shell-on", "weight": "", "grade": "A"},
            {"type": "shell-on", "weight": "0", "grade": "A"},
            {"type": "shell-on", "weight": "5", "grade": ""},
        ],
    )
    def test_incomplete_box(self, depurated_lot, grades, box):
        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, [box], "1.0")

        assert exc.value.code == "INVALID_BOX"
        assert exc.value.message == "Please fill in all box weights and grades"

    def test_grade_must_match_box_type(self, depurated_lot, grades):
        box = {"type": "meat", "weight": "3", "grade": "A"}

        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, [box], "1.0")

        assert exc.value.code == "INVALID_GRADE"

    def test_duplicate_explicit_box_numbers(self, depurated_lot, grades):
        boxes = [
            {"type": "shell-on", "weight": "3", "grade": "A", "boxNumber": "SO1"},
            {"type": "shell-on", "weight": "3", "grade": "A", "boxNumber": "SO1"},
        ]

        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, boxes, "1.0")

        assert exc.value.code == "DUPLICATE_BOX_NUMBER"

    @pytest.mark.parametrize("shell_weight", ["", None, "0"])
    def test_shell_weight_required(self, depurated_lot, grades, boxes, shell_weight):
        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, boxes, shell_weight)

        assert exc.value.code == "SHELL_WEIGHT_REQUIRED"
        depurated_lot.refresh_from_db()
        assert depurated_lot.status == LotStatus.PENDING

    def test_zero_lot_weight(self, depurated_lot, grades, boxes):
        type(depurated_lot).objects.filter(pk=depurated_lot.pk).update(total_weight=0)

        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, boxes, "1.0")

        assert exc.value.code == "INVALID_LOT_WEIGHT"

    def test_second_batch_rejected(self, processed, depurated_lot, boxes):
        with pytest.raises(TraceError) as exc:
            trace.process(depurated_lot, boxes, "1.0")

        assert exc.value.code == "BATCH_ALREADY_EXISTS"
        assert ProcessingBatch.objects.count() == 1

    def test_second_batch_allowed_when_configured(self, settings, processed, depurated_lot, boxes):
        settings.SEATRACE = {"SINGLE_BATCH_PER_LOT": False}

        trace.process(depurated_lot, boxes, "1.0")

        assert depurated_lot.processing_batches.count() == 2

    def test_box_failure_rolls_back_batch(self, depurated_lot, grades, boxes):
        with patch.object(
            Box.objects, "bulk_create", side_effect=DatabaseError("Simulated DB failure")
        ):
            with pytest.raises(TraceError) as exc:
                trace.process(depurated_lot, boxes, "1.0")

        assert exc.value.code == "BATCH_NOT_SAVED"
        assert not ProcessingBatch.objects.exists()
        depurated_lot.refresh_from_db()
        assert depurated_lot.status == LotStatus.PENDING


class TestProcessingSummary:
    def test_preview_does_not_persist(self, depurated_lot, boxes):
        summary = trace.processing_summary(depurated_lot, boxes, "1.0")

        assert summary.yield_percentage == Decimal("80.00")
        assert summary.mismatch is True
        assert not ProcessingBatch.objects.exists()

    def test_incomplete_boxes_count_as_zero(self, depurated_lot):
        boxes = [
            {"type": "shell-on", "weight": "5"},
            {"type": "meat", "weight": ""},
        ]

        summary = trace.processing_summary(depurated_lot, boxes, "")

        assert summary.shell_on_total == Decimal("5")
        assert summary.meat_total == Decimal("0")
        assert summary.total_output == Decimal("5")
