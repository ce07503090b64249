"""
Scoring for finished quiz sessions.
"""

from .summary import ResultSummarizer, accuracy_percent, summarize

__all__ = [
    "ResultSummarizer",
    "accuracy_percent",
    "summarize",
]
