"""
Question records and the difficulty tier ladder.

Tier display strings are a wire contract shared with the dataset and the
persisted result: "Very easy", "Easy", "Moderate", "Difficult".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from ..errors import DataIntegrityError

OPTION_KEYS = ("a", "b", "c", "d")


class DifficultyTier(Enum):
    """Ordered difficulty tiers: VERY_EASY < EASY < MODERATE < DIFFICULT."""

    VERY_EASY = "Very easy"
    EASY = "Easy"
    MODERATE = "Moderate"
    DIFFICULT = "Difficult"

    @classmethod
    def ordered(cls) -> tuple[DifficultyTier, ...]:
        return tuple(cls)

    @classmethod
    def lowest(cls) -> DifficultyTier:
        return cls.VERY_EASY

    @classmethod
    def from_label(cls, label: str) -> DifficultyTier:
        """
        Parse an exact display string.

        Raises:
            DataIntegrityError: If the label is not one of the four tiers
        """
        try:
            return cls(label)
        except ValueError:
            raise DataIntegrityError(
                f"Unknown difficulty '{label}', expected one of "
                f"{[t.value for t in cls]}",
                reason="unknown_difficulty",
            ) from None

    @property
    def rank(self) -> int:
        return DifficultyTier.ordered().index(self)

    @property
    def successor(self) -> Optional[DifficultyTier]:
        """Next tier up, or None for the top tier."""
        tiers = DifficultyTier.ordered()
        if self.rank + 1 < len(tiers):
            return tiers[self.rank + 1]
        return None

    def __lt__(self, other: DifficultyTier) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank < other.rank

    def __le__(self, other: DifficultyTier) -> bool:
        if not isinstance(other, DifficultyTier):
            return NotImplemented
        return self.rank <= other.rank


@dataclass(frozen=True, eq=False)
class QuestionRecord:
    """
    A single multiple-choice question, immutable once loaded.

    Attributes:
        id: Unique identifier across the repository
        text: The prompt
        options: Ordered option key ("a".."d") -> option text; blank options are absent
        correct_key: One of the present option keys
        difficulty: Difficulty tier
        tags: Free-form metadata, unused by the quiz logic
    """
    id: str
    text: str
    options: Mapping[str, str]
    correct_key: str
    difficulty: DifficultyTier
    tags: str = ""

    def __post_init__(self):
        # Read-only, ordered a..d
        ordered = {k: self.options[k] for k in OPTION_KEYS if k in self.options}
        object.__setattr__(self, "options", MappingProxyType(ordered))
        self.validate()

    def __hash__(self) -> int:
        return hash(self.id)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, QuestionRecord):
            return NotImplemented
        return self.id == other.id

    def validate(self) -> None:
        """
        Validate question integrity.

        Raises:
            DataIntegrityError: If validation fails
        """
        if not str(self.id).strip():
            raise DataIntegrityError("Question id cannot be empty", reason="missing_id")

        if not isinstance(self.difficulty, DifficultyTier):
            raise DataIntegrityError(
                f"Question {self.id} has invalid difficulty {self.difficulty!r}",
                reason="unknown_difficulty",
            )

        if len(self.options) < 2:
            raise DataIntegrityError(
                f"Question {self.id} must have at least 2 options, got {len(self.options)}",
                reason="too_few_options",
            )

        if self.correct_key not in self.options:
            raise DataIntegrityError(
                f"Question {self.id} answer '{self.correct_key}' is not among its "
                f"options {list(self.options)}",
                reason="answer_not_in_options",
            )

    def is_correct(self, answer: str) -> bool:
        return answer.strip().lower() == self.correct_key

    @classmethod
    def from_row(cls, row: Mapping[str, Any], row_number: Optional[int] = None) -> QuestionRecord:
        """
        Build a record from one dataset row.

        Blank options are dropped. A blank id falls back to "row-<row number>" so it cannot
        collide with a numeric dataset id.

        Raises:
            DataIntegrityError: If the row is malformed
        """
        def cell(name: str) -> str:
            value = row.get(name)
            # NaN != NaN: short rows parsed by pandas
            if value is None or value != value:
                return ""
            return str(value).strip()

        answer = cell("answer").lower()
        if not answer:
            raise DataIntegrityError("Missing answer", row_number=row_number, reason="missing_answer")

        label = cell("difficulty")
        if not label:
            raise DataIntegrityError(
                "Missing difficulty", row_number=row_number, reason="missing_difficulty"
            )

        qid = cell("id") or (f"row-{row_number}" if row_number is not None else "")

        try:
            return cls(
                id=qid,
                text=cell("question_text"),
                options={k: cell(f"option_{k}") for k in OPTION_KEYS if cell(f"option_{k}")},
                correct_key=answer,
                difficulty=DifficultyTier.from_label(label),
                tags=cell("tags"),
            )
        except DataIntegrityError as e:
            e.row_number = row_number
            raise

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dataset-shaped dictionary."""
        row = {
            "id": self.id,
            "question_text": self.text,
            "answer": self.correct_key,
            "difficulty": self.difficulty.value,
            "tags": self.tags,
        }
        for key in OPTION_KEYS:
            row[f"option_{key}"] = self.options.get(key, "")
        return row
