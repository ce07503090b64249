"""
Adaptive Quiz session - hosts the difficulty state machine for a UI.

AdaptiveQuiz owns the current SessionState, serializes every trigger
(draw, answer submission, timer tick) behind one lock, publishes the
transition events to subscribers and summarizes the session exactly once
when it ends.
"""

from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from ..config import config
from ..evaluation.summary import ResultSummarizer
from ..utils.persistence import get_result_store
from . import adaptive_controller as controller
from .question import DifficultyTier, QuestionRecord
from .result import SessionResult
from .session_state import (
    ADAPTIVE,
    PRACTICE,
    AnswerEvaluated,
    SessionEvent,
    SessionState,
    Transition,
)

logger = logging.getLogger(__name__)

Listener = Callable[[SessionEvent], None]


class AdaptiveQuiz:
    """
    One quiz attempt driven by discrete external triggers.

    Features:
    - Start at the lowest tier (adaptive) or a chosen tier (practice)
    - Promote after a streak of correct answers or when a tier runs dry
    - End on top-tier exhaustion or when the time budget runs out
    - Emit QuestionPresented / AnswerEvaluated / TierPromoted / SessionEnded
    - Summarize and persist the result once, at termination

    The feedback pause between an answer and the next question belongs to
    the caller: submit() never draws; call draw() when ready.
    """

    def __init__(
        self,
        repository,
        mode: str = ADAPTIVE,
        tier: Optional[DifficultyTier] = None,
        promotion_threshold: Optional[int] = None,
        time_budget: Optional[int] = None,
        summarizer: Optional[ResultSummarizer] = None,
        session_id: Optional[str] = None,
    ):
        """
        Initialize a quiz session.

        Args:
            repository: QuestionRepository providing pools and random picks
            mode: "adaptive" or "practice"
            tier: Tier to practice (practice mode only)
            promotion_threshold: Streak needed to move up (default from config)
            time_budget: Countdown in ticks for adaptive sessions (default from config);
                practice sessions are untimed
            summarizer: Result summarizer (default: persists to the global result store)
            session_id: Session ID (auto-generated if None)
        """
        self.repository = repository
        self.mode = mode
        self.tier = tier
        self.promotion_threshold = (
            promotion_threshold if promotion_threshold is not None else config.quiz.promotion_threshold
        )
        if mode == PRACTICE:
            self.time_budget = None
        else:
            self.time_budget = (
                time_budget if time_budget is not None else config.quiz.time_budget_seconds
            )
        self.summarizer = summarizer or ResultSummarizer(get_result_store())

        self._lock = threading.RLock()
        self._listeners: List[Listener] = []
        self._start(session_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def _start(self, session_id: Optional[str] = None):
        self.session_id = session_id or f"qs-{uuid.uuid4()}"
        self.timestamp = datetime.now(timezone.utc).isoformat()
        self.result: Optional[SessionResult] = None
        self._finalized = False
        self.last_feedback: Optional[AnswerEvaluated] = None
        self._state = controller.start_session(
            self.repository,
            mode=self.mode,
            tier=self.tier,
            promotion_threshold=self.promotion_threshold,
            time_budget=self.time_budget,
        )

    def restart(self) -> None:
        """Discard the current attempt and start a fresh one."""
        with self._lock:
            logger.info("Restarting session %s", self.session_id)
            self._start()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for session events.

        Returns:
            Callable that removes the listener
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe():
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------
    def draw(self) -> Optional[QuestionRecord]:
        """
        Present the next question.

        Returns:
            The question awaiting an answer, or None if the session ended
        """
        with self._lock:
            self._apply(controller.draw(self._state, self.repository.pick_random))
            return self._state.current_question

    def submit_answer(self, answer: str) -> AnswerEvaluated:
        """
        Submit an answer for the pending question.

        Returns:
            AnswerEvaluated with the correct key for feedback

        Raises:
            ProtocolViolation: If nothing is pending or the session ended
            ValueError: If the answer is blank
        """
        with self._lock:
            transition = controller.submit(self._state, answer)
            self._apply(transition)
            return self.last_feedback

    def tick(self) -> bool:
        """
        Advance the session clock by one unit.

        Returns:
            True if the session has terminated
        """
        with self._lock:
            self._apply(controller.tick(self._state))
            return self._state.terminal

    def _apply(self, transition: Transition) -> None:
        self._state = transition.state
        for event in transition.events:
            if isinstance(event, AnswerEvaluated):
                self.last_feedback = event

        # Finalize is attempted once; a failure surfaces on the terminating
        # call only, and its events are still published.
        try:
            if self._state.terminal and not self._finalized:
                self._finalized = True
                self.result = self.summarizer.finalize(self._state)
        finally:
            for event in transition.events:
                for listener in list(self._listeners):
                    listener(event)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------
    @property
    def state(self) -> SessionState:
        with self._lock:
            return self._state

    @property
    def is_completed(self) -> bool:
        with self._lock:
            return self._state.terminal

    @property
    def current_question(self) -> Optional[QuestionRecord]:
        with self._lock:
            return self._state.current_question

    @property
    def current_tier(self) -> DifficultyTier:
        with self._lock:
            return self._state.current_tier

    def to_dict(self) -> Dict[str, Any]:
        """Snapshot for rendering."""
        with self._lock:
            state = self._state
            result = self.result
            session_id, timestamp = self.session_id, self.timestamp
        question = state.current_question
        streak, threshold = state.level_progress
        return {
            "session_id": session_id,
            "timestamp": timestamp,
            "mode": state.mode,
            "status": "completed" if state.terminal else "in_progress",
            "phase": state.phase.value,
            "current_level": state.current_tier.value,
            "current_question": question.to_dict() if question else None,
            "score": state.correct_count,
            "wrong_answers": state.wrong_count,
            "questions_answered": state.answered,
            "total_questions": state.total_questions,
            "level_progress": {"correct": streak, "required": threshold},
            "time_left": state.remaining_time_budget,
            "difficulty_progression": [t.value for t in state.tier_history],
            "end_reason": state.end_reason,
            "result": result.to_record() if result else None,
        }
