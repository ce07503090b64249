"""
Unit tests for the question repository and random sources.
"""

import unittest
from collections import Counter

import pytest

from tierquiz.errors import DataLoadError
from tierquiz.models.question import DifficultyTier, QuestionRecord
from tierquiz.utils.question_repository import QuestionRepository
from tierquiz.utils.random_source import ScriptedRandomSource, SeededRandomSource


def _question(qid, tier):
    return QuestionRecord(
        id=qid, text=f"{qid}?", options={"a": "A", "b": "B"}, correct_key="a", difficulty=tier
    )


class TestQuestionRepository(unittest.TestCase):
    """Test QuestionRepository filtering and picking."""

    def setUp(self):
        self.questions = [
            _question("ve-1", DifficultyTier.VERY_EASY),
            _question("ve-2", DifficultyTier.VERY_EASY),
            _question("e-1", DifficultyTier.EASY),
            _question("d-1", DifficultyTier.DIFFICULT),
        ]
        self.repo = QuestionRepository(self.questions, random_source=SeededRandomSource(1))

    def test_load_all(self):
        self.assertEqual(self.repo.load_all(), frozenset(self.questions))
        self.assertEqual(len(self.repo), 4)

    def test_by_difficulty(self):
        """Test filtering returns exactly the tier's questions."""
        very_easy = self.repo.by_difficulty(DifficultyTier.VERY_EASY)
        self.assertEqual({q.id for q in very_easy}, {"ve-1", "ve-2"})
        self.assertEqual(self.repo.by_difficulty(DifficultyTier.MODERATE), frozenset())

    def test_count_by_difficulty(self):
        counts = self.repo.count_by_difficulty()
        self.assertEqual(list(counts), list(DifficultyTier.ordered()))
        self.assertEqual(
            list(counts.values()),
            [2, 1, 0, 1],
        )

    def test_get(self):
        self.assertEqual(self.repo.get("e-1").difficulty, DifficultyTier.EASY)
        self.assertIsNone(self.repo.get("missing"))

    def test_contains(self):
        self.assertIn(self.questions[0], self.repo)
        self.assertNotIn(_question("other", DifficultyTier.EASY), self.repo)

    def test_pick_random_empty_pool(self):
        """Test picking from an empty pool yields None."""
        self.assertIsNone(self.repo.pick_random(frozenset()))

    def test_pick_random_uses_sorted_candidates(self):
        """Test scripted indices map onto id-sorted candidates."""
        repo = QuestionRepository(self.questions, random_source=ScriptedRandomSource([1, 0]))
        pool = repo.by_difficulty(DifficultyTier.VERY_EASY)
        self.assertEqual(repo.pick_random(pool).id, "ve-2")
        self.assertEqual(repo.pick_random(pool).id, "ve-1")

    def test_duplicate_ids_rejected(self):
        with self.assertRaises(ValueError):
            QuestionRepository(self.questions + [_question("ve-1", DifficultyTier.EASY)])


class TestPickRandomUniformity:
    """Test pick_random is unbiased over the pool."""

    def test_every_member_equally_likely(self):
        pool = [_question(f"q{i}", DifficultyTier.EASY) for i in range(4)]
        repo = QuestionRepository(pool, random_source=SeededRandomSource(12345))

        draws = 8000
        counts = Counter(repo.pick_random(frozenset(pool)).id for _ in range(draws))

        assert set(counts) == {"q0", "q1", "q2", "q3"}
        for count in counts.values():
            # Expected 2000 each; allow a generous band
            assert 1700 < count < 2300

    def test_same_seed_same_sequence(self):
        pool = frozenset(_question(f"q{i}", DifficultyTier.EASY) for i in range(10))
        repo_a = QuestionRepository(pool, random_source=SeededRandomSource(99))
        repo_b = QuestionRepository(pool, random_source=SeededRandomSource(99))

        picks_a = [repo_a.pick_random(pool).id for _ in range(20)]
        picks_b = [repo_b.pick_random(pool).id for _ in range(20)]
        assert picks_a == picks_b


class TestRepositoryFromCsv:
    """Test building a repository from a dataset file."""

    def test_from_csv(self, dataset_csv):
        repo = QuestionRepository.from_csv(dataset_csv)
        assert len(repo) == 4
        assert repo.load_report.accepted == 4
        assert all(n == 1 for n in repo.count_by_difficulty().values())

    def test_from_csv_missing_file(self, tmp_path):
        with pytest.raises(DataLoadError):
            QuestionRepository.from_csv(tmp_path / "missing.csv")


class TestRandomSources:
    """Test the injectable random sources."""

    def test_scripted_source_replays(self):
        source = ScriptedRandomSource([2, 0])
        assert source.randrange(3) == 2
        assert source.randrange(3) == 0
        assert source.exhausted

    def test_scripted_source_exhausted(self):
        source = ScriptedRandomSource([])
        with pytest.raises(IndexError):
            source.randrange(1)

    def test_scripted_source_out_of_range(self):
        with pytest.raises(ValueError):
            ScriptedRandomSource([5]).randrange(2)

    def test_seeded_source_rejects_empty_range(self):
        with pytest.raises(ValueError):
            SeededRandomSource(0).randrange(0)
