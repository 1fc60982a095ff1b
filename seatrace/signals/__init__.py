"""
SeaTrace Signals.

Lifecycle events for external systems (labels, ERP, dashboards).
Sent once the writes of the operation succeeded.

Signals:
    lot_created: Lot aggregated from raw materials
    depuration_started: Lot entered the depuration tank
    depuration_completed: Lot released from depuration
    batch_processed: Processing batch recorded for a lot
    packaging_inspected: Packaging QC recorded on a batch
"""

from django.dispatch import Signal

# Args: lot, materials
lot_created = Signal()

# Args: lot
depuration_started = Signal()

# Args: lot
depuration_completed = Signal()

# Args: batch, lot, summary (ProcessingSummary)
batch_processed = Signal()

# Args: batch, lot, passed
packaging_inspected = Signal()

__all__ = [
    "lot_created",
    "depuration_started",
    "depuration_completed",
    "batch_processed",
    "packaging_inspected",
]
