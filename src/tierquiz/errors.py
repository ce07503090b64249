"""
Exception types raised by TierQuiz.

All errors are local to a single session; nothing here carries state
across sessions.
"""

from __future__ import annotations

from typing import Optional


class TierQuizError(Exception):
    """Base class for all TierQuiz errors."""


class DataLoadError(TierQuizError):
    """The question dataset is unreachable or cannot be parsed."""


class DataIntegrityError(TierQuizError, ValueError):
    """
    A single dataset row is malformed.

    Attributes:
        row_number: 1-based data row number, when known
        reason: Short machine-friendly reason used for load reports
    """

    def __init__(self, message: str, row_number: Optional[int] = None, reason: str = "invalid"):
        super().__init__(message)
        self.row_number = row_number
        self.reason = reason


class ProtocolViolation(TierQuizError, RuntimeError):
    """A state-machine operation was called out of order."""


class PrematureSummaryError(TierQuizError, RuntimeError):
    """A summary was requested before the session terminated."""


class ResultPersistenceError(TierQuizError):
    """The session result could not be validated or written."""
