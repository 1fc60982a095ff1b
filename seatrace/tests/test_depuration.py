"""
Tests for depuration tracking (Lot depuration methods + service).
"""

import pytest
from datetime import timedelta

from seatrace import TraceError, trace
from seatrace.models import DepurationStatus, Lot
from seatrace.signals import depuration_completed, depuration_started


class TestStartDepuration:
    def test_start(self, lot, now):
        result = trace.start_depuration(lot, "T3", "12.5", "33", now=now)
        data = result.lot.depuration_data

        assert result.message == "Depuration process started"
        assert data["status"] == DepurationStatus.IN_PROGRESS
        assert data["tankNumber"] == "T3"
        assert data["startTime"] == now.isoformat()
        assert data["startReadings"] == {"temperature": 12.5, "salinity": 33.0}

    @pytest.mark.parametrize(
        "tank, temperature, salinity",
        [("", "12", "33"), ("T1", "", "33"), ("T1", "12", None)],
    )
    def test_required_fields(self, lot, tank, temperature, salinity):
        with pytest.raises(TraceError) as exc:
            trace.start_depuration(lot, tank, temperature, salinity)

        assert exc.value.code == "MISSING_FIELDS"
        lot.refresh_from_db()
        assert lot.depuration_data is None

    def test_cannot_restart(self, lot, now):
        trace.start_depuration(lot, "T3", "12.5", "33", now=now)

        with pytest.raises(TraceError) as exc:
            trace.start_depuration(lot, "T4", "13", "34")

        assert exc.value.code == "INVALID_DEPURATION_STATE"
        lot.refresh_from_db()
        assert lot.depuration_data["tankNumber"] == "T3"

    def test_start_from_pending_document(self, lot, now):
        Lot.objects.filter(pk=lot.pk).update(depuration_data={"status": "pending"})

        result = trace.start_depuration(lot, "T3", "12.5", "33", now=now)

        assert result.lot.depuration_status == DepurationStatus.IN_PROGRESS
        assert result.lot.depuration_data["tankNumber"] == "T3"

    def test_cannot_restart_completed(self, depurated_lot):
        with pytest.raises(TraceError) as exc:
            trace.start_depuration(depurated_lot, "T4", "13", "34")

        assert exc.value.code == "INVALID_DEPURATION_STATE"
        depurated_lot.refresh_from_db()
        assert depurated_lot.is_depurated

    def test_unknown_lot(self, db):
        with pytest.raises(TraceError) as exc:
            trace.start_depuration("L0000000000", "T3", "12", "33")

        assert exc.value.code == "LOT_NOT_FOUND"


class TestCompleteDepuration:
    def test_complete(self, lot, now):
        trace.start_depuration(lot, "T3", "12.5", "33", now=now)
        done = now + timedelta(hours=20)

        result = trace.complete_depuration(lot, "12.0", "32.5", now=done)
        data = result.lot.depuration_data

        assert result.message == "Depuration process completed"
        assert data["status"] == DepurationStatus.COMPLETED
        assert data["completedAt"] == done.isoformat()
        assert data["endReadings"] == {"temperature": 12.0, "salinity": 32.5}
        assert data["startReadings"] == {"temperature": 12.5, "salinity": 33.0}
        assert result.lot.is_depurated

    def test_requires_in_progress(self, lot):
        with pytest.raises(TraceError) as exc:
            trace.complete_depuration(lot, "12", "33")

        assert exc.value.code == "INVALID_DEPURATION_STATE"

    def test_completed_is_terminal(self, depurated_lot):
        with pytest.raises(TraceError) as exc:
            trace.complete_depuration(depurated_lot, "12", "33")

        assert exc.value.code == "INVALID_DEPURATION_STATE"

    def test_final_readings_required(self, lot, now):
        trace.start_depuration(lot, "T3", "12.5", "33", now=now)

        with pytest.raises(TraceError) as exc:
            trace.complete_depuration(lot, "", "33")

        assert exc.value.code == "MISSING_FIELDS"
        lot.refresh_from_db()
        assert lot.depuration_status == DepurationStatus.IN_PROGRESS

    def test_depurated_lots(self, depurated_lot, supplier, now):
        other = trace.receive_raw_material(supplier, "3")
        trace.create_lot([other.pk], now=now + timedelta(minutes=5))

        assert trace.depurated_lots() == [depurated_lot]
        assert trace.list_lots(depurated=True) == [depurated_lot]


class TestElapsed:
    def test_never_started(self, lot):
        assert trace.elapsed(lot) is None

    def test_in_progress(self, lot, now):
        trace.start_depuration(lot, "T3", "12.5", "33", now=now)

        elapsed = trace.elapsed(lot, now=now + timedelta(hours=2, minutes=45, seconds=10))

        assert str(elapsed) == "2h 45m"

    def test_completed_freezes_at_completion(self, depurated_lot, now):
        elapsed = trace.elapsed(depurated_lot, now=now + timedelta(days=3))

        assert (elapsed.hours, elapsed.minutes) == (20, 0)


class TestDepurationSignals:
    def test_signals_sent(self, lot, now):
        events = []

        def on_started(sender, lot, **kwargs):
            events.append(("started", lot.lot_number))

        def on_completed(sender, lot, **kwargs):
            events.append(("completed", lot.lot_number))

        depuration_started.connect(on_started)
        depuration_completed.connect(on_completed)
        try:
            trace.start_depuration(lot, "T3", "12.5", "33", now=now)
            trace.complete_depuration(lot, "12", "33", now=now)
        finally:
            depuration_started.disconnect(on_started)
            depuration_completed.disconnect(on_completed)

        assert events == [("started", lot.lot_number), ("completed", lot.lot_number)]

    def test_no_signal_on_rejection(self, lot):
        events = []

        def on_completed(sender, lot, **kwargs):
            events.append(lot.lot_number)

        depuration_completed.connect(on_completed)
        try:
            with pytest.raises(TraceError):
                trace.complete_depuration(lot, "12", "33")
        finally:
            depuration_completed.disconnect(on_completed)

        assert events == []
        assert Lot.objects.get(pk=lot.pk).depuration_data is None
