"""
Lot service -- create lots from pending raw materials, lot queries.
"""

import logging
from datetime import datetime

from seatrace import rules
from seatrace.conf import get_setting
from seatrace.exceptions import TraceNotFoundError, TraceValidationError
from seatrace.models import CodeSequence, Lot, LotStatus, RawMaterial
from seatrace.results import LotResult
from seatrace.services.base import atomic_write, resolve_lot

logger = logging.getLogger(__name__)


class TraceLots:
    """Lot creation and lookups."""

    @classmethod
    def create_lot(
        cls,
        material_ids,
        notes: str = "",
        now: datetime | None = None,
    ) -> LotResult:
        """
        Aggregate pending raw materials into a new lot.

        The lot insert and every material update happen in one
        transaction: either the lot exists with all its receipts
        assigned, or nothing changed.

        Args:
            material_ids: RawMaterial pks (must all be pending)
            notes: Optional free text
            now: Creation time used for the lot number (defaults to now)

        Returns:
            LotResult with the lot and the assigned materials
        """
        try:
            ids = list(dict.fromkeys(int(pk) for pk in material_ids or []))
        except (TypeError, ValueError):
            raise TraceValidationError(
                "INVALID_MATERIAL_IDS", material_ids=str(material_ids)
            )
        if not ids:
            raise TraceValidationError(
                "NO_MATERIALS_SELECTED", "Please select at least one receipt"
            )

        with atomic_write("LOT_NOT_SAVED", "Error creating lot"):
            materials = list(
                RawMaterial.objects.select_for_update().filter(pk__in=ids).order_by("pk")
            )

            missing = sorted(set(ids) - {m.pk for m in materials})
            if missing:
                raise TraceNotFoundError(
                    "MATERIAL_NOT_FOUND", "Raw material not found", ids=missing
                )

            assigned = [m.pk for m in materials if not m.is_pending]
            if assigned:
                raise TraceValidationError(
                    "MATERIAL_ALREADY_ASSIGNED",
                    "Some receipts already belong to a lot",
                    ids=assigned,
                )

            lot_number = cls._next_lot_number(now)
            lot = Lot.objects.create(
                lot_number=lot_number,
                total_weight=rules.total_weight(m.weight for m in materials),
                status=LotStatus.PENDING,
                notes=(notes or "").strip(),
                receipt_ids=ids,
            )

            for material in materials:
                material.assign(lot_number)

        logger.info(
            f"Lot {lot.lot_number} created from {len(materials)} receipts",
            extra={
                "lot": lot.lot_number,
                "receipts": ids,
                "total_weight": float(lot.total_weight),
            },
        )

        from seatrace.signals import lot_created

        lot_created.send(sender=cls, lot=lot, materials=materials)

        return LotResult(
            message=f"Lot {lot.lot_number} created successfully",
            lot=lot,
            materials=materials,
        )

    @classmethod
    def _next_lot_number(cls, now: datetime | None = None) -> str:
        """
        Minute-resolution lot number, suffixed when the minute is taken.

        First lot in a minute: L2405171230. Then L2405171230-2, -3...
        """
        base = rules.generate_lot_number(now, prefix=get_setting("LOT_NUMBER_PREFIX"))
        while True:
            seq = CodeSequence.next_value(base)
            candidate = base if seq == 1 else f"{base}-{seq}"
            if not Lot.objects.filter(lot_number=candidate).exists():
                return candidate

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def get_lot(cls, lot) -> Lot:
        """Get a lot by instance, pk or lot number."""
        return resolve_lot(lot)

    @classmethod
    def list_lots(cls, status: str | None = None, depurated: bool = False) -> list[Lot]:
        """Lots most recent first, optionally by status / completed depuration."""
        qs = Lot.objects.all()
        if status:
            qs = qs.with_status(status)
        if depurated:
            qs = qs.depurated()
        return list(qs.order_by("-created_at", "-pk"))
