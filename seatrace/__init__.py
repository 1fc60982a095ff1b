"""
Django SeaTrace - Headless seafood-processing traceability.

Raw material intake, lots, depuration, processing and packaging QC.

Usage:
    from seatrace import trace, TraceError

    # Intake
    supplier = trace.register_supplier("Baía Azul", "+55 48 9999", "LIC-001")
    material = trace.receive_raw_material(supplier, 120.5)

    # Lot
    created = trace.create_lot([material.pk], notes="Morning tide")
    lot = created.lot

    # Depuration
    trace.start_depuration(lot, tank_number="T3", temperature=12.5, salinity=33)
    trace.complete_depuration(lot, temperature=12.0, salinity=33)

    # Processing
    result = trace.process(
        lot,
        boxes=[{"type": "shell-on", "weight": 50, "grade": "A"}],
        shell_weight=60,
    )
    if result.summary.mismatch:
        print(result.summary.warning)
"""

from seatrace.exceptions import (
    TraceError,
    TraceNotFoundError,
    TracePersistenceError,
    TraceValidationError,
)


def __getattr__(name):
    """Lazy import to avoid AppRegistryNotReady errors."""
    if name in ("trace", "Trace"):
        from seatrace.service import Trace

        return Trace
    if name == "ProcessingSummary":
        from seatrace.results import ProcessingSummary

        return ProcessingSummary
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "trace",
    "Trace",
    "TraceError",
    "TraceValidationError",
    "TraceNotFoundError",
    "TracePersistenceError",
    "ProcessingSummary",
]
__version__ = "0.1.0"
