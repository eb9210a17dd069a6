from __future__ import annotations

from typing import Optional

from .transfer.result import NormalizationError


class TransferError(Exception):
    """Base class for import/export failures surfaced to the user."""
    pass


class ImportFileError(TransferError):
    """Raised when an import file cannot be read."""
    pass


class MalformedJsonError(TransferError):
    """Raised when file contents are not valid JSON."""
    pass


class ImportRejected(TransferError):
    """Raised when a decoded payload fails normalization."""

    def __init__(self, error: Optional[NormalizationError] = None):
        self.error = error
        super().__init__(str(error) if error is not None else "unsupported JSON")


class TargetNotFoundError(TransferError):
    """Raised when an operation names a ledger id that does not exist."""

    def __init__(self, ledger_id: str):
        self.ledger_id = ledger_id
        super().__init__(f"ledger not found: {ledger_id}")
