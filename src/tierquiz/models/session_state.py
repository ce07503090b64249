"""
Session state for one quiz attempt, plus the events emitted on each transition.

SessionState is an immutable value: the controller functions in
adaptive_controller.py never mutate a state, they return a new one. This
keeps the state machine independent of whatever redraws the UI.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Dict, FrozenSet, Mapping, Optional, Tuple, Union

from .question import DifficultyTier, QuestionRecord

ADAPTIVE = "adaptive"
PRACTICE = "practice"

REASON_ALL_LEVELS_COMPLETED = "all levels completed"
REASON_TIME_EXPIRED = "time expired"
REASON_PRACTICE_COMPLETED = "practice completed"


class SessionPhase(Enum):
    AWAITING_ANSWER = "awaiting_answer"
    PROMOTING = "promoting"
    TERMINATED = "terminated"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class QuestionPresented:
    question: QuestionRecord
    tier: DifficultyTier


@dataclass(frozen=True)
class AnswerEvaluated:
    question_id: str
    answer: str
    correct_key: str
    is_correct: bool


@dataclass(frozen=True)
class TierPromoted:
    from_tier: DifficultyTier
    to_tier: DifficultyTier
    cause: str  # "streak" or "exhausted"


@dataclass(frozen=True)
class SessionEnded:
    reason: str
    tier: DifficultyTier


SessionEvent = Union[QuestionPresented, AnswerEvaluated, TierPromoted, SessionEnded]


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SessionState:
    """
    Immutable snapshot of a single quiz attempt.

    Attributes:
        pools: Tier -> questions not yet asked this session
        current_tier: Tier currently drawn from
        current_question: Question awaiting an answer, if any
        correct_count: Correct answers this session
        wrong_count: Wrong answers this session
        correct_streak_in_tier: Correct answers since entering the tier (reset by a wrong answer)
        remaining_time_budget: Ticks left; None means untimed
        time_budget: Initial budget, used to compute elapsed time
        phase: Where the state machine currently rests
        mode: "adaptive" or "practice"
        promotion_threshold: Streak length that triggers promotion
        end_reason: Why the session terminated
    """
    pools: Mapping[DifficultyTier, FrozenSet[QuestionRecord]]
    current_tier: DifficultyTier
    current_question: Optional[QuestionRecord] = None
    correct_count: int = 0
    wrong_count: int = 0
    correct_streak_in_tier: int = 0
    remaining_time_budget: Optional[int] = None
    time_budget: Optional[int] = None
    phase: SessionPhase = SessionPhase.AWAITING_ANSWER
    mode: str = ADAPTIVE
    promotion_threshold: int = 3
    end_reason: Optional[str] = None
    tier_history: Tuple[DifficultyTier, ...] = field(default=())

    @property
    def terminal(self) -> bool:
        return self.phase is SessionPhase.TERMINATED

    @property
    def answered(self) -> int:
        return self.correct_count + self.wrong_count

    @property
    def remaining_total(self) -> int:
        """Questions still drawable, excluding the pending one."""
        pending = self.current_question
        return sum(len(pool - {pending}) if pending else len(pool) for pool in self.pools.values())

    @property
    def total_questions(self) -> int:
        return self.answered + self.remaining_total + (1 if self.current_question else 0)

    @property
    def elapsed_time(self) -> int:
        if self.time_budget is None or self.remaining_time_budget is None:
            return 0
        return self.time_budget - self.remaining_time_budget

    @property
    def level_progress(self) -> Tuple[int, int]:
        """(correct streak in tier, promotion threshold) for progress display."""
        return self.correct_streak_in_tier, self.promotion_threshold

    def pool(self, tier: DifficultyTier) -> FrozenSet[QuestionRecord]:
        return self.pools.get(tier, frozenset())

    def next_tier(self) -> Optional[DifficultyTier]:
        """Successor tier, if this session may promote into one."""
        if self.mode != ADAPTIVE:
            return None
        return self.current_tier.successor

    def evolve(self, **changes) -> SessionState:
        return replace(self, **changes)

    def without_question(self, question: QuestionRecord) -> Dict[DifficultyTier, FrozenSet[QuestionRecord]]:
        """Pools with `question` removed from its own tier."""
        pools = dict(self.pools)
        pools[question.difficulty] = self.pool(question.difficulty) - {question}
        return pools


@dataclass(frozen=True)
class Transition:
    """Result of a controller call: the new state and what happened."""
    state: SessionState
    events: Tuple[SessionEvent, ...] = ()

    def __iter__(self):
        # Allows `state, events = draw(...)`
        yield self.state
        yield self.events
