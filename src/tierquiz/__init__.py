"""
TierQuiz - adaptive multiple-choice quiz core.

Questions are drawn from four difficulty tiers. Learners start at the
bottom and move up after a streak of correct answers or when a tier runs
out of questions; the session ends when the top tier is exhausted or time
runs out.
"""

from .config import config, configure_logging
from .errors import (
    DataIntegrityError,
    DataLoadError,
    PrematureSummaryError,
    ProtocolViolation,
    ResultPersistenceError,
    TierQuizError,
)
from .models import AdaptiveQuiz, DifficultyTier, QuestionRecord, SessionResult, SessionState
from .utils import QuestionRepository, ResultStore

__version__ = "0.1.0"

__all__ = [
    "config",
    "configure_logging",
    "TierQuizError",
    "DataLoadError",
    "DataIntegrityError",
    "ProtocolViolation",
    "PrematureSummaryError",
    "ResultPersistenceError",
    "AdaptiveQuiz",
    "DifficultyTier",
    "QuestionRecord",
    "SessionResult",
    "SessionState",
    "QuestionRepository",
    "ResultStore",
]
