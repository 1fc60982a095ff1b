"""
Lifecycle rules.

Pure functions for the derived values of the lot lifecycle: identifiers,
weight totals, yield, elapsed depuration time and QC checklist
evaluation. Nothing here touches the database.

Usage:
    from seatrace import rules

    rules.generate_lot_number(now)            # "L2405171230"
    rules.elapsed_time(start, now)            # ElapsedTime(hours=2, minutes=45)
    rules.summarize(boxes, shell_weight=1, total_input=10)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from django.utils import timezone

from seatrace.exceptions import TraceValidationError
from seatrace.results import BoxEntry, ElapsedTime, ProcessingSummary

SHELL_ON = "shell-on"
MEAT = "meat"

BOX_PREFIXES = {
    SHELL_ON: "SO",
    MEAT: "CM",
}

# Packaging QC checklist: (id, label)
CHECKLIST = (
    ("1", "Package Integrity"),
    ("2", "Label Accuracy"),
    ("3", "Weight Verification"),
    ("4", "Product Temperature"),
    ("5", "QR Code Readability"),
    ("6", "Product Grade Verification"),
)

_ZERO = Decimal("0")
_CENT = Decimal("0.01")


# ── Parsing ──


def to_decimal(value: Any, field: str = "value") -> Decimal | None:
    """
    Parse a user-entered number.

    Blank input (None, "") returns None; anything unparseable raises
    TraceValidationError.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, Decimal):
        return value
    try:
        parsed = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise TraceValidationError("INVALID_NUMBER", field=field, value=str(value))
    if not parsed.is_finite():
        raise TraceValidationError("INVALID_NUMBER", field=field, value=str(value))
    return parsed


# ── Identifiers ──


def generate_lot_number(now: datetime | None = None, prefix: str = "L") -> str:
    """Lot number with minute resolution: L + yyMMddHHmm."""
    now = now or timezone.now()
    if timezone.is_aware(now):
        now = timezone.localtime(now)
    return f"{prefix}{now:%y%m%d%H%M}"


def generate_box_number(box_type: str, now: datetime | None = None) -> str:
    """Box number: SO/CM + last 6 digits of the epoch milliseconds."""
    try:
        prefix = BOX_PREFIXES[box_type]
    except KeyError:
        raise TraceValidationError("INVALID_BOX_TYPE", box_type=box_type)
    now = now or timezone.now()
    millis = int(now.timestamp()) * 1000 + now.microsecond // 1000
    return f"{prefix}{str(millis)[-6:]}"


def next_box_number(box_number: str) -> str:
    """Step the numeric suffix of a box number, wrapping at 999999."""
    prefix, digits = box_number[:2], box_number[2:]
    try:
        value = (int(digits) + 1) % 1_000_000
    except ValueError:
        raise TraceValidationError("INVALID_BOX_NUMBER", box_number=box_number)
    return f"{prefix}{value:06d}"


# ── Weights ──


def total_weight(weights: Iterable[Any]) -> Decimal:
    """Sum of weights, treating missing values as zero."""
    total = _ZERO
    for weight in weights:
        parsed = to_decimal(weight, "weight")
        total += parsed if parsed is not None else _ZERO
    return total


def box_totals(boxes: Iterable[BoxEntry]) -> tuple[Decimal, Decimal]:
    """Return (shell_on_total, meat_total)."""
    shell_on = _ZERO
    meat = _ZERO
    for box in boxes:
        if box.box_type == SHELL_ON:
            shell_on += box.weight
        elif box.box_type == MEAT:
            meat += box.weight
    return shell_on, meat


def yield_percentage(output: Decimal, total_input: Any) -> Decimal:
    """
    100 × output / input, rounded to two places.

    A zero or missing input weight is a data error, never infinity/NaN.
    """
    total_input = to_decimal(total_input, "total_weight")
    if total_input is None or total_input <= 0:
        raise TraceValidationError(
            "INVALID_LOT_WEIGHT",
            "Lot has no input weight, yield cannot be calculated",
            total_weight=str(total_input),
        )
    return (Decimal("100") * output / total_input).quantize(_CENT)


def summarize(
    boxes: Iterable[BoxEntry],
    shell_weight: Any,
    total_input: Any,
    tolerance: Decimal = Decimal("0.1"),
) -> ProcessingSummary:
    """Totals, yield and mismatch flag for a set of boxes."""
    shell_on, meat = box_totals(boxes)
    shell = to_decimal(shell_weight, "shell_weight") or _ZERO
    return ProcessingSummary(
        shell_on_total=shell_on,
        meat_total=meat,
        shell_weight=shell,
        total_input=to_decimal(total_input, "total_weight") or _ZERO,
        yield_percentage=yield_percentage(shell_on + meat, total_input),
        tolerance=tolerance,
    )


# ── Depuration ──


def elapsed_time(start: datetime, now: datetime | None = None) -> ElapsedTime:
    """Elapsed time since ``start`` as whole hours and remainder minutes."""
    now = now or timezone.now()
    total_minutes = max(int((now - start).total_seconds() // 60), 0)
    return ElapsedTime(hours=total_minutes // 60, minutes=total_minutes % 60)


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO timestamp stored in a JSON document."""
    if value is None or isinstance(value, datetime):
        return value
    parsed = datetime.fromisoformat(value)
    if timezone.is_naive(parsed):
        parsed = timezone.make_aware(parsed)
    return parsed


# ── Packaging QC ──


def normalize_checklist(items: Iterable[dict]) -> list[dict]:
    """
    Map submitted answers onto the fixed checklist.

    Every item must be explicitly passed or failed; unset (None/missing)
    items raise CHECKLIST_INCOMPLETE listing their labels.
    """
    answers = {str(item.get("id")): item for item in items}
    checklist = []
    unset = []
    for item_id, label in CHECKLIST:
        answer = answers.get(item_id, {})
        passed = answer.get("passed")
        if not isinstance(passed, bool):
            unset.append(label)
            continue
        checklist.append(
            {
                "id": item_id,
                "label": label,
                "passed": passed,
                "notes": (answer.get("notes") or "").strip(),
            }
        )
    if unset:
        raise TraceValidationError(
            "CHECKLIST_INCOMPLETE",
            "Please complete all quality checks",
            unset=unset,
        )
    return checklist


def checklist_passed(checklist: Iterable[dict]) -> bool:
    """AND of all pass flags."""
    return all(item["passed"] for item in checklist)


def checklist_advisories(checklist: Iterable[dict]) -> list[str]:
    """One advisory per failed item, prompting detailed notes."""
    return [
        f"{item['label']} failed: please provide detailed notes"
        for item in checklist
        if not item["passed"]
    ]
