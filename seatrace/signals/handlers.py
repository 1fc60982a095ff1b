"""
SeaTrace Signal Handlers.

Feeds gateway subscriptions from model saves and deletes.

This module is imported in apps.py to register handlers.
"""

import logging

from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from seatrace.signals import batch_processed

logger = logging.getLogger(__name__)


@receiver(post_save, dispatch_uid="seatrace_gateway_save")
@receiver(post_delete, dispatch_uid="seatrace_gateway_delete")
def push_collection_change(sender, **kwargs):
    """Any save/delete on a collection model refreshes its subscribers."""
    if sender._meta.app_label != "seatrace":
        return

    from seatrace.gateway import dispatch_change

    dispatch_change(sender)


@receiver(batch_processed, dispatch_uid="seatrace_yield_mismatch")
def log_yield_mismatch(sender, batch, lot, summary, **kwargs):
    """Keep an audit line for batches whose output does not match the input."""
    if not summary.mismatch:
        return
    logger.warning(
        f"Lot {lot.lot_number}: output {summary.total_output} kg vs input "
        f"{summary.total_input} kg",
        extra={
            "lot": lot.lot_number,
            "batch": batch.pk,
            "difference": float(summary.difference),
        },
    )
