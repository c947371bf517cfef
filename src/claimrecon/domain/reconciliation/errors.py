"""Failure taxonomy for a single claim's reconciliation.

Every error here is caught at the claim boundary and turned into that claim's
verdict; none of them aborts a batch.
"""

from __future__ import annotations


class ReconciliationError(RuntimeError):
    """Base class for failures that end one claim's reconciliation."""


class TransportError(ReconciliationError):
    """A collaborator could not be reached, timed out, or answered with an error status."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(ReconciliationError):
    """A collaborator's response body does not match the expected contract."""


class CardinalityError(ReconciliationError):
    """More than one support case references the claim."""

    def __init__(self, count: int) -> None:
        super().__init__(f"expected at most one support case, found {count}")
        self.count = count


class DomainGapError(ReconciliationError):
    """Support-case status outside the modelled OPENED/CLOSED domain."""

    def __init__(self, status: str) -> None:
        super().__init__(f"unmodelled support case status: {status!r}")
        self.status = status


__all__ = [
    "CardinalityError",
    "DecodeError",
    "DomainGapError",
    "ReconciliationError",
    "TransportError",
]
