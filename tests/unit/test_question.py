"""
Unit tests for difficulty tiers and question records.
"""

import pytest

from tierquiz.errors import DataIntegrityError
from tierquiz.models.question import DifficultyTier, QuestionRecord


class TestDifficultyTier:
    """Test the ordered tier ladder."""

    def test_wire_labels_are_exact(self):
        """Test tier display strings match the dataset contract."""
        assert [t.value for t in DifficultyTier.ordered()] == [
            "Very easy",
            "Easy",
            "Moderate",
            "Difficult",
        ]

    def test_total_order(self):
        """Test VeryEasy < Easy < Moderate < Difficult."""
        assert DifficultyTier.VERY_EASY < DifficultyTier.EASY
        assert DifficultyTier.EASY < DifficultyTier.MODERATE
        assert DifficultyTier.MODERATE < DifficultyTier.DIFFICULT
        assert sorted(reversed(DifficultyTier.ordered())) == list(DifficultyTier.ordered())

    def test_successor_chain(self):
        """Test each tier's successor and the top tier having none."""
        assert DifficultyTier.VERY_EASY.successor is DifficultyTier.EASY
        assert DifficultyTier.EASY.successor is DifficultyTier.MODERATE
        assert DifficultyTier.MODERATE.successor is DifficultyTier.DIFFICULT
        assert DifficultyTier.DIFFICULT.successor is None

    def test_lowest(self):
        assert DifficultyTier.lowest() is DifficultyTier.VERY_EASY

    def test_from_label(self):
        """Test parsing exact labels."""
        assert DifficultyTier.from_label("Moderate") is DifficultyTier.MODERATE

    @pytest.mark.parametrize("label", ["very easy", "Hard", "VeryEasy", ""])
    def test_from_label_rejects_unknown(self, label):
        """Test casing and spacing are part of the contract."""
        with pytest.raises(DataIntegrityError) as exc_info:
            DifficultyTier.from_label(label)
        assert exc_info.value.reason == "unknown_difficulty"


class TestQuestionRecord:
    """Test QuestionRecord integrity checks."""

    def test_options_keep_key_order(self):
        """Test options are stored a..d regardless of input order."""
        q = QuestionRecord(
            id="q1",
            text="Pick one",
            options={"c": "C", "a": "A", "b": "B"},
            correct_key="b",
            difficulty=DifficultyTier.EASY,
        )
        assert list(q.options) == ["a", "b", "c"]

    def test_options_are_read_only(self):
        """Test records are immutable once built."""
        q = QuestionRecord(
            id="q1", text="?", options={"a": "A", "b": "B"}, correct_key="a",
            difficulty=DifficultyTier.EASY,
        )
        with pytest.raises(TypeError):
            q.options["c"] = "C"
        with pytest.raises(AttributeError):
            q.text = "changed"

    def test_answer_must_be_a_present_option(self):
        """Test a correct key without option text is rejected."""
        with pytest.raises(DataIntegrityError) as exc_info:
            QuestionRecord(
                id="q1", text="?", options={"a": "A", "b": "B"}, correct_key="c",
                difficulty=DifficultyTier.EASY,
            )
        assert exc_info.value.reason == "answer_not_in_options"

    def test_at_least_two_options(self):
        with pytest.raises(DataIntegrityError) as exc_info:
            QuestionRecord(
                id="q1", text="?", options={"a": "A"}, correct_key="a",
                difficulty=DifficultyTier.EASY,
            )
        assert exc_info.value.reason == "too_few_options"

    def test_identity_is_by_id(self):
        """Test equality and hashing use the id."""
        q1 = QuestionRecord(
            id="q1", text="?", options={"a": "A", "b": "B"}, correct_key="a",
            difficulty=DifficultyTier.EASY,
        )
        q1_again = QuestionRecord(
            id="q1", text="other", options={"a": "X", "b": "Y"}, correct_key="b",
            difficulty=DifficultyTier.EASY,
        )
        assert q1 == q1_again
        assert len({q1, q1_again}) == 1

    def test_is_correct_normalizes_answer(self):
        q = QuestionRecord(
            id="q1", text="?", options={"a": "A", "b": "B"}, correct_key="b",
            difficulty=DifficultyTier.EASY,
        )
        assert q.is_correct("b")
        assert q.is_correct(" B ")
        assert not q.is_correct("a")


class TestQuestionRecordFromRow:
    """Test building records from dataset rows."""

    def test_sparse_options_dropped(self):
        """Test blank option cells are absent, not empty strings."""
        q = QuestionRecord.from_row(
            {
                "id": "7",
                "question_text": "True or false?",
                "option_a": "True",
                "option_b": "False",
                "option_c": "",
                "option_d": "  ",
                "answer": "a",
                "difficulty": "Easy",
                "tags": "logic",
            }
        )
        assert dict(q.options) == {"a": "True", "b": "False"}
        assert q.difficulty is DifficultyTier.EASY
        assert q.tags == "logic"

    def test_uppercase_answer_accepted(self):
        q = QuestionRecord.from_row(
            {"id": "1", "question_text": "?", "option_a": "x", "option_b": "y",
             "answer": "B", "difficulty": "Difficult"}
        )
        assert q.correct_key == "b"

    def test_blank_id_falls_back_to_row_number(self):
        q = QuestionRecord.from_row(
            {"id": "", "question_text": "?", "option_a": "x", "option_b": "y",
             "answer": "a", "difficulty": "Moderate"},
            row_number=12,
        )
        assert q.id == "row-12"

    @pytest.mark.parametrize(
        "changes,reason",
        [
            ({"answer": ""}, "missing_answer"),
            ({"difficulty": ""}, "missing_difficulty"),
            ({"difficulty": "Impossible"}, "unknown_difficulty"),
            ({"answer": "c"}, "answer_not_in_options"),
        ],
    )
    def test_malformed_rows_rejected(self, changes, reason):
        """Test malformed rows raise DataIntegrityError with a reason and row number."""
        row = {"id": "1", "question_text": "?", "option_a": "x", "option_b": "y",
               "answer": "a", "difficulty": "Easy"}
        row.update(changes)
        with pytest.raises(DataIntegrityError) as exc_info:
            QuestionRecord.from_row(row, row_number=5)
        assert exc_info.value.reason == reason
        assert exc_info.value.row_number == 5

    def test_to_dict_round_trips_dataset_shape(self):
        row = {"id": "9", "question_text": "?", "option_a": "x", "option_b": "y",
               "option_c": "", "option_d": "", "answer": "b", "difficulty": "Easy",
               "tags": "t"}
        assert QuestionRecord.from_row(row).to_dict() == row
