"""
SeaTrace Models.

Core models for seafood traceability:
- Supplier: licensed harvester delivering raw material
- ProductGrade: grade lookup per product type (shell-on / meat)
- RawMaterial: weighed receipt, pending until assigned to a lot
- Lot: aggregated receipts with depuration tracking
- ProcessingBatch: processing output of a lot, with packaging QC
- Box: packed unit of a batch
- CodeSequence: atomic counter for identifiers
"""

from seatrace.models.lot import DepurationStatus, Lot, LotStatus
from seatrace.models.processing import BatchStatus, Box, ProcessingBatch
from seatrace.models.raw_material import MaterialStatus, RawMaterial
from seatrace.models.sequence import CodeSequence
from seatrace.models.supplier import ProductGrade, ProductType, Supplier

__all__ = [
    "Supplier",
    "ProductGrade",
    "ProductType",
    "RawMaterial",
    "MaterialStatus",
    "Lot",
    "LotStatus",
    "DepurationStatus",
    "ProcessingBatch",
    "BatchStatus",
    "Box",
    "CodeSequence",
]
