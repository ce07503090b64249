"""
Final session summary - the only thing persisted after a quiz.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from .question import DifficultyTier


@dataclass(frozen=True)
class SessionResult:
    """
    Immutable snapshot produced once a session terminates.

    Attributes:
        correct: Total correct answers
        wrong: Total wrong answers
        answered: correct + wrong
        accuracy: Integer percentage, 0 when nothing was answered
        tier_reached: Tier the session ended in
        elapsed_seconds: Time budget consumed
        date: ISO date the session ended
        mode: "adaptive" or "practice"
        end_reason: Why the session ended
    """
    correct: int
    wrong: int
    answered: int
    accuracy: int
    tier_reached: DifficultyTier
    elapsed_seconds: int
    date: str
    mode: str = "adaptive"
    end_reason: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Wire format of the stored result."""
        return {
            "score": self.correct,
            "wrongAnswers": self.wrong,
            "totalQuestions": self.answered,
            "accuracy": self.accuracy,
            "date": self.date,
            "difficulty": self.tier_reached.value,
            "timeElapsed": self.elapsed_seconds,
            "mode": self.mode,
            "endReason": self.end_reason,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> SessionResult:
        return cls(
            correct=record["score"],
            wrong=record["wrongAnswers"],
            answered=record["totalQuestions"],
            accuracy=record["accuracy"],
            tier_reached=DifficultyTier(record["difficulty"]),
            elapsed_seconds=record["timeElapsed"],
            date=record["date"],
            mode=record.get("mode", "adaptive"),
            end_reason=record.get("endReason"),
        )
