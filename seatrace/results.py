"""
SeaTrace Result Types.

Structured results for lifecycle operations. Every operation returns one
of these instead of pushing to a global notification channel; the caller
decides how to surface ``message`` and ``warnings``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from seatrace.models import Lot, ProcessingBatch, RawMaterial


@dataclass(frozen=True)
class ElapsedTime:
    """Whole hours plus remainder minutes."""

    hours: int
    minutes: int

    def __str__(self) -> str:
        return f"{self.hours}h {self.minutes}m"

    def as_dict(self) -> dict:
        return {"hours": self.hours, "minutes": self.minutes}


@dataclass(frozen=True)
class BoxEntry:
    """A packed output box, already parsed."""

    box_type: str
    weight: Decimal
    grade: str
    box_number: str = ""

    def as_dict(self) -> dict:
        return {
            "type": self.box_type,
            "weight": float(self.weight),
            "boxNumber": self.box_number,
            "grade": self.grade,
        }


@dataclass(frozen=True)
class ProcessingSummary:
    """
    Derived figures for a processing batch.

    ``mismatch`` is advisory: output (boxes + shell) differs from the lot
    input by more than the configured tolerance.
    """

    shell_on_total: Decimal
    meat_total: Decimal
    shell_weight: Decimal
    total_input: Decimal
    yield_percentage: Decimal
    tolerance: Decimal = Decimal("0.1")

    @property
    def total_output(self) -> Decimal:
        return self.shell_on_total + self.meat_total + self.shell_weight

    @property
    def difference(self) -> Decimal:
        return self.total_output - self.total_input

    @property
    def mismatch(self) -> bool:
        return abs(self.difference) > self.tolerance

    @property
    def warning(self) -> str | None:
        if not self.mismatch:
            return None
        return (
            f"Total output ({self.total_output:.1f} kg) differs from input "
            f"weight ({self.total_input:.1f} kg). Please verify all weights are correct."
        )

    def as_dict(self) -> dict:
        return {
            "shellOnTotal": float(self.shell_on_total),
            "meatTotal": float(self.meat_total),
            "shellWeight": float(self.shell_weight),
            "totalInput": float(self.total_input),
            "totalOutput": float(self.total_output),
            "yieldPercentage": float(self.yield_percentage),
            "mismatch": self.mismatch,
            "warning": self.warning,
        }


@dataclass
class TraceResult:
    """Base result: success message plus non-blocking warnings."""

    message: str
    warnings: list[str] = field(default_factory=list)

    @property
    def notification(self) -> dict[str, Any]:
        return {"kind": "success", "message": self.message}


@dataclass
class LotResult(TraceResult):
    """Lot creation outcome."""

    lot: Lot | None = None
    materials: list[RawMaterial] = field(default_factory=list)


@dataclass
class DepurationResult(TraceResult):
    """Depuration transition outcome."""

    lot: Lot | None = None


@dataclass
class ProcessingResult(TraceResult):
    """Processing submission outcome."""

    batch: ProcessingBatch | None = None
    summary: ProcessingSummary | None = None


@dataclass
class InspectionResult(TraceResult):
    """Packaging QC outcome."""

    batch: ProcessingBatch | None = None
    passed: bool = False
