"""
SeaTrace Settings.

Supports two formats (dict takes priority):

    # Option 1: Dict
    SEATRACE = {
        "MISMATCH_TOLERANCE_KG": Decimal("0.2"),
        "SINGLE_BATCH_PER_LOT": False,
    }

    # Option 2: Flat
    SEATRACE_MISMATCH_TOLERANCE_KG = Decimal("0.2")
    SEATRACE_SINGLE_BATCH_PER_LOT = False

All settings have sensible defaults - zero configuration required.
"""

from decimal import Decimal

from django.conf import settings


# ── Defaults ──

DEFAULTS = {
    "LOT_NUMBER_PREFIX": "L",
    "MISMATCH_TOLERANCE_KG": Decimal("0.1"),
    "SINGLE_BATCH_PER_LOT": True,
    "COMPLETE_LOT_ON_QC_PASS": True,
}


# ── Accessors ──

_sentinel = object()


def get_setting(name, default=_sentinel):
    """
    Get a seatrace setting.

    Looks up in order:
    1. SEATRACE dict (e.g. SEATRACE = {"SINGLE_BATCH_PER_LOT": False})
    2. Flat setting (e.g. SEATRACE_SINGLE_BATCH_PER_LOT = False)
    3. DEFAULTS
    """
    seatrace_dict = getattr(settings, "SEATRACE", {})
    if name in seatrace_dict:
        return seatrace_dict[name]

    flat_value = getattr(settings, f"SEATRACE_{name}", _sentinel)
    if flat_value is not _sentinel:
        return flat_value

    if default is not _sentinel:
        return default

    return DEFAULTS.get(name)


def get_mismatch_tolerance() -> Decimal:
    """Tolerance (kg) between lot input and processing output."""
    return Decimal(str(get_setting("MISMATCH_TOLERANCE_KG")))
