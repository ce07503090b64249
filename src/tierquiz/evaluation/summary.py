"""
Scoring and result summarization.

Turns a terminated SessionState into a SessionResult and hands it to the
result store. Accuracy is an integer percentage rounded half up, and is 0
when nothing was answered.
"""

from __future__ import annotations

import logging
import math
from datetime import date
from typing import Optional

from ..errors import PrematureSummaryError
from ..models.result import SessionResult
from ..models.session_state import ADAPTIVE, SessionState
from ..utils.persistence import ResultStore

logger = logging.getLogger(__name__)


def accuracy_percent(correct: int, wrong: int) -> int:
    """
    Integer accuracy percentage.

    Example:
        >>> accuracy_percent(1, 7)
        13
        >>> accuracy_percent(0, 0)
        0
    """
    answered = correct + wrong
    if answered == 0:
        return 0
    return int(math.floor(100 * correct / answered + 0.5))


def summarize(state: SessionState, today: Optional[date] = None) -> SessionResult:
    """
    Build the final result for a terminated session.

    Args:
        state: Terminated session state
        today: Date stamped on the result (default: today)

    Raises:
        PrematureSummaryError: If the session has not terminated
    """
    if not state.terminal:
        raise PrematureSummaryError("Cannot summarize a session that has not terminated")

    return SessionResult(
        correct=state.correct_count,
        wrong=state.wrong_count,
        answered=state.answered,
        accuracy=accuracy_percent(state.correct_count, state.wrong_count),
        tier_reached=state.current_tier,
        elapsed_seconds=state.elapsed_time,
        date=(today or date.today()).isoformat(),
        mode=state.mode,
        end_reason=state.end_reason,
    )


class ResultSummarizer:
    """
    Summarizes terminated sessions and persists adaptive results.

    Practice results are summarized but not stored unless persist_practice
    is set.
    """

    def __init__(self, store: Optional[ResultStore] = None, persist_practice: bool = False):
        self.store = store
        self.persist_practice = persist_practice

    def finalize(self, state: SessionState) -> SessionResult:
        """
        Summarize `state` and store the result (overwriting any prior one).

        Raises:
            PrematureSummaryError: If the session has not terminated
            ResultPersistenceError: If the result cannot be stored
        """
        result = summarize(state)
        logger.info(
            "Session result: %d/%d correct (%d%%) at %s",
            result.correct,
            result.answered,
            result.accuracy,
            result.tier_reached.value,
        )
        if self.store is not None and (state.mode == ADAPTIVE or self.persist_practice):
            self.store.save(result.to_record())
        return result
