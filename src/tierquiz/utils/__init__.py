"""
Utility modules for TierQuiz.

This module contains utility functions:
- question_loader: CSV dataset loading with per-row integrity checks
- question_repository: tier-grouped question access and random picks
- random_source: injectable uniform random sources
- validation: JSON Schema validation
- persistence: last-result storage
"""

from .random_source import RandomSource, SeededRandomSource, ScriptedRandomSource
from .validation import SchemaValidator, ResultValidator, ValidationResult, validate_result_record
from .question_loader import LoadReport, QuestionLoader, load_questions
from .question_repository import QuestionRepository
from .persistence import ResultStore, get_result_store

__all__ = [
    # Randomness
    "RandomSource",
    "SeededRandomSource",
    "ScriptedRandomSource",
    # Validation
    "SchemaValidator",
    "ResultValidator",
    "ValidationResult",
    "validate_result_record",
    # Questions
    "LoadReport",
    "QuestionLoader",
    "load_questions",
    "QuestionRepository",
    # Persistence
    "ResultStore",
    "get_result_store",
]
