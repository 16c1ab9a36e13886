from __future__ import annotations


class EstimatorError(Exception):
    """Base class for errors raised by the estimator service."""


class MemberNotFoundError(EstimatorError, IndexError):
    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"Member index {index} out of range (roster has {size} members)")
        self.index = index
        self.size = size


class ExportUnavailableError(EstimatorError):
    """The export could not be produced right now; the caller may retry."""
