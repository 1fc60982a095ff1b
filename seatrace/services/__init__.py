"""
SeaTrace Services.

Lifecycle operations, one mixin per stage:
- intake: suppliers, raw material receipts, product grades
- lots: lot creation from pending receipts, lot queries
- depuration: start, complete, elapsed time
- processing: box packing, yield, batch creation
- quality: packaging QC
"""

from seatrace.services.depuration import TraceDepuration
from seatrace.services.intake import TraceIntake
from seatrace.services.lots import TraceLots
from seatrace.services.processing import TraceProcessing
from seatrace.services.quality import TraceQuality

__all__ = [
    "TraceIntake",
    "TraceLots",
    "TraceDepuration",
    "TraceProcessing",
    "TraceQuality",
]
