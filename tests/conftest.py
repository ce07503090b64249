"""
Shared pytest fixtures and configuration for TierQuiz tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import csv
import sys
from pathlib import Path

import pytest

# Add src to path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from tierquiz.models.question import DifficultyTier, QuestionRecord  # noqa: E402
from tierquiz.utils.persistence import ResultStore  # noqa: E402
from tierquiz.utils.question_repository import QuestionRepository  # noqa: E402
from tierquiz.utils.random_source import ScriptedRandomSource, SeededRandomSource  # noqa: E402

CSV_COLUMNS = [
    "id",
    "question_text",
    "option_a",
    "option_b",
    "option_c",
    "option_d",
    "answer",
    "difficulty",
    "tags",
]


def make_question(qid, tier=DifficultyTier.VERY_EASY, correct="a", n_options=4, tags=""):
    """Build a QuestionRecord with options a.. up to n_options."""
    keys = "abcd"[:n_options]
    return QuestionRecord(
        id=str(qid),
        text=f"Question {qid}?",
        options={k: f"Option {k.upper()} for {qid}" for k in keys},
        correct_key=correct,
        difficulty=tier,
        tags=tags,
    )


def write_csv(path, rows, columns=None):
    """Write dataset rows (dicts) to `path` and return it."""
    columns = columns or CSV_COLUMNS
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=columns)
        writer.writeheader()
        for row in rows:
            writer.writerow({c: row.get(c, "") for c in columns})
    return path


@pytest.fixture
def write_dataset():
    """Fixture exposing write_csv to tests."""
    return write_csv


@pytest.fixture
def question_factory():
    """Fixture exposing make_question to tests."""
    return make_question


@pytest.fixture
def tiered_questions():
    """
    Fixture providing 4 questions per tier, correct key 'a' everywhere.

    Ids are "<tier rank>-<n>" so sorted order within a tier is predictable.
    """
    return [
        make_question(f"{tier.rank}-{n}", tier=tier, correct="a")
        for tier in DifficultyTier.ordered()
        for n in range(4)
    ]


@pytest.fixture
def seeded_repository(tiered_questions):
    """Repository over tiered_questions with a fixed seed."""
    return QuestionRepository(tiered_questions, random_source=SeededRandomSource(7))


@pytest.fixture
def first_pick_repository(tiered_questions):
    """Repository that always picks the lowest id in a pool."""
    return QuestionRepository(tiered_questions, random_source=ScriptedRandomSource([0] * 100))


@pytest.fixture
def result_store(tmp_path):
    """ResultStore writing into a temporary directory."""
    return ResultStore(results_dir=tmp_path / "results")


@pytest.fixture
def valid_rows():
    """Dataset rows covering sparse options and every tier."""
    return [
        {
            "id": "1",
            "question_text": "2 + 2 = ?",
            "option_a": "3",
            "option_b": "4",
            "option_c": "5",
            "option_d": "6",
            "answer": "b",
            "difficulty": "Very easy",
            "tags": "arithmetic",
        },
        {
            "id": "2",
            "question_text": "Is water wet?",
            "option_a": "Yes",
            "option_b": "No",
            "answer": "a",
            "difficulty": "Easy",
            "tags": "trivia",
        },
        {
            "id": "3",
            "question_text": "Capital of France?",
            "option_a": "Paris",
            "option_b": "Lyon",
            "option_c": "Nice",
            "answer": "a",
            "difficulty": "Moderate",
        },
        {
            "id": "4",
            "question_text": "Derivative of x^2?",
            "option_a": "x",
            "option_b": "2x",
            "option_c": "x^2",
            "option_d": "2",
            "answer": "B",
            "difficulty": "Difficult",
            "tags": "calculus",
        },
    ]


@pytest.fixture
def dataset_csv(tmp_path, valid_rows):
    """CSV file containing valid_rows."""
    return write_csv(tmp_path / "questions.csv", valid_rows)


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
