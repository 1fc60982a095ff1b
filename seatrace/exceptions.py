"""
SeaTrace Exceptions.

All seatrace errors are wrapped in TraceError for consistent handling.
The three subclasses mirror how a failure should be surfaced:

    TraceValidationError   missing/invalid input, nothing written
    TraceNotFoundError     referenced Lot/Batch/Material absent
    TracePersistenceError  the store rejected the write, caller may resubmit
"""

from typing import Any


class TraceError(Exception):
    """
    Base exception for all SeaTrace errors.

    Usage:
        raise TraceValidationError("NO_MATERIALS_SELECTED")
        raise TraceNotFoundError("LOT_NOT_FOUND", lot_number="L2405171230")

    Attributes:
        code: Error code (NO_MATERIALS_SELECTED, LOT_NOT_FOUND, etc.)
        details: Additional context as keyword arguments
    """

    kind = "error"
    default_message = "Operation failed"

    def __init__(self, code: str, message: str | None = None, **details: Any):
        self.code = code
        self.message = message or self.default_message
        self.details = details
        text = f"{code}: {details}" if details else code
        super().__init__(text)

    def as_dict(self) -> dict:
        """Return error as dictionary for API responses."""
        return {"code": self.code, **self.details}

    def as_notification(self) -> dict:
        """Return the user-facing notification for this error."""
        return {"kind": self.kind, "message": self.message}

    def __str__(self) -> str:
        name = type(self).__name__
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{name}({self.code}: {details_str})"
        return f"{name}({self.code})"


class TraceValidationError(TraceError):
    """Required field missing or invalid. Operation aborted, no write."""

    default_message = "Please check the submitted data"


class TraceNotFoundError(TraceError):
    """Referenced record does not exist."""

    default_message = "Record not found"


class TracePersistenceError(TraceError):
    """Store operation failed. No automatic retry."""

    default_message = "Could not save changes, please try again"


# Common error codes
# NO_MATERIALS_SELECTED: Lot creation without raw materials
# MATERIAL_ALREADY_ASSIGNED: Raw material belongs to another lot
# INVALID_DEPURATION_STATE: Depuration transition not allowed
# DEPURATION_NOT_COMPLETED: Processing attempted before depuration ended
# INVALID_BOX: Box without weight/grade or with unknown grade
# BATCH_ALREADY_EXISTS: Lot already has a processing batch
# CHECKLIST_INCOMPLETE: QC checklist item neither pass nor fail
# QC_ALREADY_RECORDED: Batch already carries a packaging QC result
# READ_ONLY_FIELD / UNKNOWN_FIELD: Gateway record key not writable or not known
# LOT_NOT_FOUND / BATCH_NOT_FOUND / MATERIAL_NOT_FOUND / SUPPLIER_NOT_FOUND
