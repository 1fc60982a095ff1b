"""
Shared service helpers: record lookups and the atomic write guard.
"""

import logging
from contextlib import contextmanager

from django.db import DatabaseError, transaction

from seatrace.exceptions import TraceNotFoundError, TracePersistenceError, TraceValidationError
from seatrace.models import Lot, ProcessingBatch, Supplier

logger = logging.getLogger(__name__)


@contextmanager
def atomic_write(code: str, message: str, **details):
    """
    Run a multi-write sequence as one transaction.

    Database failures roll everything back and surface as
    TracePersistenceError; TraceError raised inside also rolls back and
    propagates unchanged.
    """
    try:
        with transaction.atomic():
            yield
    except DatabaseError as exc:
        logger.error(
            f"{code}: {exc}",
            extra={"code": code, **details},
        )
        raise TracePersistenceError(code, message, error=str(exc), **details) from exc


def resolve_lot(lot, lock: bool = False) -> Lot:
    """Accept a Lot, its pk or its lot number; optionally lock the row."""
    qs = Lot.objects.select_for_update() if lock else Lot.objects.all()
    if isinstance(lot, Lot):
        lookup = {"pk": lot.pk}
    elif isinstance(lot, int):
        lookup = {"pk": lot}
    else:
        lookup = {"lot_number": str(lot)}
    try:
        return qs.get(**lookup)
    except Lot.DoesNotExist:
        raise TraceNotFoundError(
            "LOT_NOT_FOUND",
            "Lot not found",
            lot=str(lot.lot_number if isinstance(lot, Lot) else lot),
        )


def resolve_supplier(supplier) -> Supplier:
    if isinstance(supplier, Supplier):
        return supplier
    try:
        return Supplier.objects.get(pk=supplier)
    except (Supplier.DoesNotExist, ValueError, TypeError):
        raise TraceNotFoundError(
            "SUPPLIER_NOT_FOUND", "Supplier not found", supplier=str(supplier)
        )


def latest_batch(lot: Lot) -> ProcessingBatch:
    """Most recent processing batch of a lot."""
    batch = lot.processing_batches.order_by("-created_at", "-pk").first()
    if batch is None:
        raise TraceNotFoundError(
            "BATCH_NOT_FOUND",
            "This lot must be processed before performing quality control",
            lot_number=lot.lot_number,
        )
    return batch


def require_text(value, field: str, message: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise TraceValidationError("MISSING_FIELDS", message, required=[field])
    return text
