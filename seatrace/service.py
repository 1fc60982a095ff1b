"""
SeaTrace Service - Thin facade over the lifecycle services.

Lifecycle: raw material → lot → depuration → processing → packaging QC

Usage:
    from seatrace import trace, TraceError

    material = trace.receive_raw_material(supplier, 10)
    lot = trace.create_lot([material.pk]).lot

    trace.start_depuration(lot, "T1", temperature=12.5, salinity=33)
    trace.elapsed(lot)                     # ElapsedTime(hours=0, minutes=0)
    trace.complete_depuration(lot, temperature=12.0, salinity=33)

    result = trace.process(lot, boxes, shell_weight=1)
    trace.inspect_packaging(lot, checklist, ["SO123456"])

Every operation returns a result object (``message``, ``warnings``) or
raises a TraceError subclass; nothing is pushed to a global channel.
"""

from seatrace.services import (
    TraceDepuration,
    TraceIntake,
    TraceLots,
    TraceProcessing,
    TraceQuality,
)


class Trace(TraceIntake, TraceLots, TraceDepuration, TraceProcessing, TraceQuality):
    """
    Main API for SeaTrace.

    All methods are classmethods: ``trace`` is the class itself.
    """
