"""
Depuration service -- start, complete, elapsed time.

Thin wrappers over the Lot model methods that add row locking and
signal emission.
"""

import logging
from datetime import datetime

from seatrace.models import Lot
from seatrace.results import DepurationResult, ElapsedTime
from seatrace.services.base import atomic_write, resolve_lot

logger = logging.getLogger(__name__)


class TraceDepuration:
    """Depuration tracking per lot."""

    @classmethod
    def start_depuration(
        cls,
        lot,
        tank_number,
        temperature,
        salinity,
        now: datetime | None = None,
    ) -> DepurationResult:
        """Start depuration (absent or pending → in-progress)."""
        with atomic_write("DEPURATION_NOT_SAVED", "Failed to start depuration process"):
            lot = resolve_lot(lot, lock=True)
            lot.start_depuration(tank_number, temperature, salinity, now=now)

        from seatrace.signals import depuration_started

        depuration_started.send(sender=cls, lot=lot)

        return DepurationResult(message="Depuration process started", lot=lot)

    @classmethod
    def complete_depuration(
        cls,
        lot,
        temperature,
        salinity,
        now: datetime | None = None,
    ) -> DepurationResult:
        """Complete depuration (in-progress → completed)."""
        with atomic_write(
            "DEPURATION_NOT_SAVED", "Failed to complete depuration process"
        ):
            lot = resolve_lot(lot, lock=True)
            lot.complete_depuration(temperature, salinity, now=now)

        from seatrace.signals import depuration_completed

        depuration_completed.send(sender=cls, lot=lot)

        return DepurationResult(message="Depuration process completed", lot=lot)

    @classmethod
    def elapsed(cls, lot, now: datetime | None = None) -> ElapsedTime | None:
        """Elapsed depuration time, None if depuration never started."""
        return resolve_lot(lot).depuration_elapsed(now)

    @classmethod
    def depurated_lots(cls) -> list[Lot]:
        """Lots ready for processing, most recent first."""
        return list(Lot.objects.depurated().order_by("-created_at", "-pk"))
