"""
Adaptive difficulty state machine.

Pure transition functions over SessionState. Each call returns a
Transition (new state + emitted events) and never mutates its input, so a
rejected call leaves the caller's state exactly as it was.

Rules:
- Draw picks uniformly from the current tier's pool. An empty pool promotes
  to the successor tier (repeatedly, skipping empty tiers); an empty top
  tier ends the session ("all levels completed").
- Submit consumes the pending question whether the answer is right or
  wrong. A correct answer grows the tier streak, a wrong one resets it.
  Reaching the promotion threshold moves up a tier immediately, even if
  the lower tier still has questions.
- Tick counts the time budget down; reaching zero ends the session
  ("time expired"), pending question or not.
- Terminated is absorbing.
"""

from __future__ import annotations

import logging
from typing import Callable, Collection, List, Optional

from ..errors import ProtocolViolation
from .question import DifficultyTier, QuestionRecord
from .session_state import (
    ADAPTIVE,
    PRACTICE,
    REASON_ALL_LEVELS_COMPLETED,
    REASON_PRACTICE_COMPLETED,
    REASON_TIME_EXPIRED,
    AnswerEvaluated,
    QuestionPresented,
    SessionEnded,
    SessionEvent,
    SessionPhase,
    SessionState,
    TierPromoted,
    Transition,
)

logger = logging.getLogger(__name__)

Picker = Callable[[Collection[QuestionRecord]], Optional[QuestionRecord]]

DEFAULT_PROMOTION_THRESHOLD = 3


def start_session(
    repository,
    mode: str = ADAPTIVE,
    tier: Optional[DifficultyTier] = None,
    promotion_threshold: int = DEFAULT_PROMOTION_THRESHOLD,
    time_budget: Optional[int] = None,
) -> SessionState:
    """
    Build the initial state for a new session.

    Args:
        repository: Anything with `by_difficulty(tier)` (see QuestionRepository)
        mode: "adaptive" (all tiers, promotion) or "practice" (one tier, no promotion)
        tier: Practice tier; required in practice mode, ignored otherwise
        promotion_threshold: Correct answers in a tier needed to move up
        time_budget: Countdown in ticks; None for an untimed session

    Returns:
        SessionState awaiting its first draw

    Raises:
        ValueError: If arguments are inconsistent
    """
    if mode not in (ADAPTIVE, PRACTICE):
        raise ValueError(f"Unknown session mode: {mode}")
    if promotion_threshold < 1:
        raise ValueError(f"Promotion threshold must be >= 1, got {promotion_threshold}")
    if time_budget is not None and time_budget < 1:
        raise ValueError(f"Time budget must be >= 1, got {time_budget}")

    if mode == PRACTICE:
        if tier is None:
            raise ValueError("Practice mode requires a tier")
        tiers = (tier,)
        start_tier = tier
    else:
        tiers = DifficultyTier.ordered()
        start_tier = DifficultyTier.lowest()

    pools = {t: frozenset(repository.by_difficulty(t)) for t in tiers}

    logger.info(
        "Starting %s session at %s (%s)",
        mode,
        start_tier.value,
        ", ".join(f"{t.value}={len(p)}" for t, p in pools.items()),
    )

    return SessionState(
        pools=pools,
        current_tier=start_tier,
        remaining_time_budget=time_budget,
        time_budget=time_budget,
        mode=mode,
        promotion_threshold=promotion_threshold,
        tier_history=(start_tier,),
    )


def draw(state: SessionState, pick: Picker) -> Transition:
    """
    Present the next question, promoting past empty tiers as needed.

    A no-op when the session is terminated or a question is already pending.
    """
    if state.terminal or state.current_question is not None:
        return Transition(state)

    events: List[SessionEvent] = []
    while True:
        pool = state.pool(state.current_tier)
        if pool:
            question = pick(pool)
            logger.debug("Drew question %s from %s", question.id, state.current_tier.value)
            events.append(QuestionPresented(question=question, tier=state.current_tier))
            state = state.evolve(
                current_question=question, phase=SessionPhase.AWAITING_ANSWER
            )
            return Transition(state, tuple(events))

        successor = state.next_tier()
        if successor is None:
            reason = REASON_ALL_LEVELS_COMPLETED if state.mode == ADAPTIVE else REASON_PRACTICE_COMPLETED
            state = _terminate(state, reason)
            events.append(SessionEnded(reason=reason, tier=state.current_tier))
            return Transition(state, tuple(events))

        events.append(
            TierPromoted(from_tier=state.current_tier, to_tier=successor, cause="exhausted")
        )
        state = _promote(state, successor)


def submit(state: SessionState, answer: str) -> Transition:
    """
    Grade the pending question and consume it.

    Raises:
        ProtocolViolation: If the session is terminated or nothing is pending
        ValueError: If the answer is blank
    """
    if state.terminal:
        logger.warning("Submit rejected: session already terminated")
        raise ProtocolViolation("Cannot submit an answer: session has terminated")

    question = state.current_question
    if question is None:
        logger.warning("Submit rejected: no question awaiting an answer")
        raise ProtocolViolation("Cannot submit an answer: no question is awaiting an answer")

    if not answer or not answer.strip():
        raise ValueError("Answer cannot be empty")

    is_correct = question.is_correct(answer)
    if is_correct:
        changes = dict(
            correct_count=state.correct_count + 1,
            correct_streak_in_tier=state.correct_streak_in_tier + 1,
        )
    else:
        changes = dict(wrong_count=state.wrong_count + 1, correct_streak_in_tier=0)

    new_state = state.evolve(
        pools=state.without_question(question),
        current_question=None,
        **changes,
    )
    logger.debug(
        "Question %s answered %s (%s)",
        question.id,
        answer.strip().lower(),
        "correct" if is_correct else "wrong",
    )

    events: List[SessionEvent] = [
        AnswerEvaluated(
            question_id=question.id,
            answer=answer.strip().lower(),
            correct_key=question.correct_key,
            is_correct=is_correct,
        )
    ]

    successor = new_state.next_tier()
    if new_state.correct_streak_in_tier >= new_state.promotion_threshold and successor is not None:
        events.append(
            TierPromoted(from_tier=new_state.current_tier, to_tier=successor, cause="streak")
        )
        new_state = _promote(new_state, successor)

    return Transition(new_state, tuple(events))


def tick(state: SessionState) -> Transition:
    """
    Count one unit off the time budget.

    Tolerated after termination (timers may fire once more) and for untimed
    sessions; both are no-ops.
    """
    if state.terminal or state.remaining_time_budget is None:
        return Transition(state)

    remaining = max(0, state.remaining_time_budget - 1)
    state = state.evolve(remaining_time_budget=remaining)
    if remaining > 0:
        return Transition(state)

    state = _terminate(state, REASON_TIME_EXPIRED)
    return Transition(state, (SessionEnded(reason=REASON_TIME_EXPIRED, tier=state.current_tier),))


def _promote(state: SessionState, successor: DifficultyTier) -> SessionState:
    logger.info("Promoting from %s to %s", state.current_tier.value, successor.value)
    return state.evolve(
        current_tier=successor,
        correct_streak_in_tier=0,
        phase=SessionPhase.PROMOTING,
        tier_history=state.tier_history + (successor,),
    )


def _terminate(state: SessionState, reason: str) -> SessionState:
    logger.info(
        "Session ended at %s: %s (correct=%d, wrong=%d)",
        state.current_tier.value,
        reason,
        state.correct_count,
        state.wrong_count,
    )
    return state.evolve(
        current_question=None, phase=SessionPhase.TERMINATED, end_reason=reason
    )
