"""
Question repository: the full question set, grouped by difficulty tier.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Collection, Dict, FrozenSet, Iterable, Optional

from ..config import config
from ..models.question import DifficultyTier, QuestionRecord
from .question_loader import LoadReport, QuestionLoader
from .random_source import RandomSource, SeededRandomSource

logger = logging.getLogger(__name__)


class QuestionRepository:
    """
    Read-only access to loaded questions.

    Usage:
        repo = QuestionRepository.from_csv("data/dataset_unstop.csv")
        easy = repo.by_difficulty(DifficultyTier.EASY)
        question = repo.pick_random(easy)
    """

    def __init__(
        self,
        questions: Iterable[QuestionRecord],
        random_source: Optional[RandomSource] = None,
        load_report: Optional[LoadReport] = None,
    ):
        """
        Initialize repository.

        Args:
            questions: Validated question records (ids must be unique)
            random_source: Uniform index source for pick_random
                (default: seeded from config.quiz.random_seed, unseeded if unset)
            load_report: Report from the load that produced `questions`, if any

        Raises:
            ValueError: If two records share an id
        """
        self._questions: Dict[str, QuestionRecord] = {}
        for question in questions:
            if question.id in self._questions:
                raise ValueError(f"Duplicate question id '{question.id}'")
            self._questions[question.id] = question

        self._by_tier: Dict[DifficultyTier, FrozenSet[QuestionRecord]] = {
            tier: frozenset(q for q in self._questions.values() if q.difficulty is tier)
            for tier in DifficultyTier.ordered()
        }
        self.random_source = random_source or SeededRandomSource(config.quiz.random_seed)
        self.load_report = load_report

        for tier, pool in self._by_tier.items():
            if not pool:
                logger.warning("No questions available for tier %s", tier.value)

    @classmethod
    def from_csv(
        cls,
        source: Optional[Path | str] = None,
        random_source: Optional[RandomSource] = None,
    ) -> QuestionRepository:
        """
        Load a repository from a CSV dataset.

        Raises:
            DataLoadError: If the dataset cannot be read
        """
        loader = QuestionLoader(source)
        questions = loader.load_all()
        return cls(questions, random_source=random_source, load_report=loader.report)

    def load_all(self) -> FrozenSet[QuestionRecord]:
        """Every question in the repository."""
        return frozenset(self._questions.values())

    def by_difficulty(self, tier: DifficultyTier) -> FrozenSet[QuestionRecord]:
        """Questions belonging to `tier`."""
        return self._by_tier.get(tier, frozenset())

    def count_by_difficulty(self) -> Dict[DifficultyTier, int]:
        """Number of questions per tier, in tier order."""
        return {tier: len(pool) for tier, pool in self._by_tier.items()}

    def get(self, question_id: str) -> Optional[QuestionRecord]:
        return self._questions.get(str(question_id))

    def pick_random(self, pool: Collection[QuestionRecord]) -> Optional[QuestionRecord]:
        """
        Pick one question uniformly at random.

        Candidates are ordered by id first so a seeded source gives the same
        pick regardless of set iteration order.

        Returns:
            A question from `pool`, or None if `pool` is empty
        """
        if not pool:
            return None
        candidates = sorted(pool, key=lambda q: q.id)
        return candidates[self.random_source.randrange(len(candidates))]

    def __len__(self) -> int:
        return len(self._questions)

    def __contains__(self, question: object) -> bool:
        return isinstance(question, QuestionRecord) and question.id in self._questions
