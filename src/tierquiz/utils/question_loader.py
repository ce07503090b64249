"""
Question dataset loading.

Reads the delimited question dataset (columns: id, question_text,
option_a..option_d, answer, difficulty, tags) into QuestionRecords.

Features:
- Blank options are valid (2-4 option questions)
- Malformed rows are dropped and counted, never silently coerced
- Duplicate ids are rejected (first occurrence wins)
- A missing/unparseable file fails the whole load with DataLoadError
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional

import pandas as pd

from ..config import config
from ..errors import DataIntegrityError, DataLoadError
from ..models.question import QuestionRecord

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = (
    "question_text",
    "option_a",
    "option_b",
    "option_c",
    "option_d",
    "answer",
    "difficulty",
)
OPTIONAL_COLUMNS = ("id", "tags")


@dataclass
class LoadReport:
    """
    Outcome of a dataset load.

    Attributes:
        source: Where the rows came from
        rows_read: Data rows seen (blank lines excluded)
        accepted: Rows turned into QuestionRecords
        rejected: Reason -> number of rows dropped for it
        errors: One message per dropped row
    """
    source: str
    rows_read: int = 0
    accepted: int = 0
    rejected: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def rejected_count(self) -> int:
        return sum(self.rejected.values())

    def __str__(self) -> str:
        msg = f"Loaded {self.accepted}/{self.rows_read} questions from {self.source}"
        if self.rejected:
            reasons = ", ".join(f"{k}={v}" for k, v in sorted(self.rejected.items()))
            msg += f" (rejected {self.rejected_count}: {reasons})"
        return msg


class QuestionLoader:
    """
    Load QuestionRecords from a CSV dataset.

    Usage:
        loader = QuestionLoader("data/dataset_unstop.csv")
        questions = loader.load_all()
        print(loader.report)
    """

    def __init__(self, source: Optional[Path | str] = None, delimiter: str = ","):
        """
        Initialize loader.

        Args:
            source: Path or URL of the dataset (default from config)
            delimiter: Field delimiter
        """
        self.source = source if source is not None else config.paths.dataset_path
        self.delimiter = delimiter
        self.report: Optional[LoadReport] = None

    def load_all(self) -> FrozenSet[QuestionRecord]:
        """
        Read and validate every row.

        Returns:
            Set of valid QuestionRecords

        Raises:
            DataLoadError: If the source is unreachable, unparseable or lacks columns
        """
        frame = self._read_frame()
        report = LoadReport(source=str(self.source))
        reasons: Counter = Counter()
        questions: Dict[str, QuestionRecord] = {}

        for row_number, row in enumerate(frame.to_dict("records"), start=1):
            report.rows_read += 1
            try:
                question = QuestionRecord.from_row(row, row_number=row_number)
                if question.id in questions:
                    raise DataIntegrityError(
                        f"Duplicate question id '{question.id}'",
                        row_number=row_number,
                        reason="duplicate_id",
                    )
            except DataIntegrityError as e:
                reasons[e.reason] += 1
                message = f"Row {row_number}: {e}"
                report.errors.append(message)
                logger.warning("Rejected %s", message)
                continue
            questions[question.id] = question

        report.accepted = len(questions)
        report.rejected = dict(reasons)
        self.report = report
        logger.info(str(report))
        return frozenset(questions.values())

    def _read_frame(self) -> pd.DataFrame:
        if isinstance(self.source, Path) and not self.source.exists():
            raise DataLoadError(f"Question dataset not found: {self.source}")

        try:
            frame = pd.read_csv(
                self.source,
                sep=self.delimiter,
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding="utf-8",
            )
        except pd.errors.EmptyDataError as e:
            raise DataLoadError(f"Question dataset is empty: {self.source}") from e
        except (pd.errors.ParserError, UnicodeDecodeError) as e:
            raise DataLoadError(f"Could not parse question dataset {self.source}: {e}") from e
        except OSError as e:
            raise DataLoadError(f"Could not read question dataset {self.source}: {e}") from e

        frame.columns = [str(c).strip().lower() for c in frame.columns]
        missing = [c for c in REQUIRED_COLUMNS if c not in frame.columns]
        if missing:
            raise DataLoadError(
                f"Question dataset {self.source} is missing columns: {', '.join(missing)}"
            )
        for column in OPTIONAL_COLUMNS:
            if column not in frame.columns:
                frame[column] = ""
        return frame


def load_questions(source: Optional[Path | str] = None) -> FrozenSet[QuestionRecord]:
    """
    Convenience function to load all valid questions from a dataset.

    Example:
        >>> questions = load_questions("data/dataset_unstop.csv")
        >>> len(questions)
        120
    """
    return QuestionLoader(source).load_all()
