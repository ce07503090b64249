"""
Domain models for the adaptive quiz.

This module contains:
- DifficultyTier / QuestionRecord: the question data
- SessionState and its events: one quiz attempt as an immutable value
- adaptive_controller: pure transition functions (draw, submit, tick)
- AdaptiveQuiz: stateful host that serializes triggers and publishes events
- SessionResult: the final summary
"""

from .question import DifficultyTier, QuestionRecord
from .session_state import (
    AnswerEvaluated,
    QuestionPresented,
    SessionEnded,
    SessionPhase,
    SessionState,
    TierPromoted,
    Transition,
)
from .result import SessionResult
from .adaptive_controller import start_session, draw, submit, tick
from .quiz_session import AdaptiveQuiz

__all__ = [
    "DifficultyTier",
    "QuestionRecord",
    "AnswerEvaluated",
    "QuestionPresented",
    "SessionEnded",
    "SessionPhase",
    "SessionState",
    "TierPromoted",
    "Transition",
    "SessionResult",
    "start_session",
    "draw",
    "submit",
    "tick",
    "AdaptiveQuiz",
]
