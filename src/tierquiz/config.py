"""
Configuration management for TierQuiz.

This module centralizes all configuration settings:
- Tunables loaded from environment variables (and an optional .env file)
- Sensible defaults for development
- Single source of truth for paths, quiz rules and logging
- Explicit validation instead of failing deep inside a session
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return int(value)


@dataclass
class QuizConfig:
    """Adaptive quiz rules."""

    # Correct answers needed within a tier before moving up
    promotion_threshold: int = field(
        default_factory=lambda: int(os.getenv("TIERQUIZ_PROMOTION_THRESHOLD", "3"))
    )
    # Session countdown, one unit per tick (the reference UI ticks every second)
    time_budget_seconds: int = field(
        default_factory=lambda: int(os.getenv("TIERQUIZ_TIME_BUDGET", "300"))
    )

    # Pause between answer feedback and the next draw. Read by the UI only.
    feedback_delay_seconds: float = 2.0

    # Reproducibility
    random_seed: Optional[int] = field(
        default_factory=lambda: _optional_int("TIERQUIZ_RANDOM_SEED")
    )


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    # Base paths
    project_root: Path = field(
        default_factory=lambda: Path(__file__).parent.parent.parent
    )
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv(
                "TIERQUIZ_DATA_DIR", str(Path(__file__).parent.parent.parent / "data")
            )
        )
    )

    # Computed from data_dir unless overridden
    dataset_path: Path = field(init=False)
    results_dir: Path = field(init=False)

    # Schemas ship inside the package
    schemas_dir: Path = field(init=False)
    result_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        dataset_env = os.getenv("TIERQUIZ_DATASET")
        self.dataset_path = (
            Path(dataset_env) if dataset_env else self.data_dir / "dataset_unstop.csv"
        )
        self.results_dir = self.data_dir / "results"
        self.schemas_dir = Path(__file__).parent / "schemas"
        self.result_schema = self.schemas_dir / "quiz_result.schema.json"

    def prepare_filesystem(self):
        """
        Create directories if they don't exist.

        Separated from __post_init__ to avoid side-effects on import.
        Call this explicitly from your app entrypoint.
        """
        for directory in [self.data_dir, self.results_dir]:
            directory.mkdir(parents=True, exist_ok=True)


@dataclass
class StorageConfig:
    """Where the last session summary lives."""

    result_key: str = "quizResults"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    log_level: str = field(
        default_factory=lambda: os.getenv("TIERQUIZ_LOG_LEVEL", "INFO").upper()
    )
    log_format: str = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from tierquiz.config import config

        threshold = config.quiz.promotion_threshold
        dataset = config.paths.dataset_path

        # Prepare filesystem (call once at startup)
        config.prepare_fs()
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.quiz = QuizConfig()
            cls._instance.storage = StorageConfig()
            cls._instance.logging = LoggingConfig()
        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        if self.quiz.promotion_threshold < 1:
            errors.append(
                f"promotion_threshold must be >= 1, got {self.quiz.promotion_threshold}"
            )

        if self.quiz.time_budget_seconds < 1:
            errors.append(
                f"time_budget_seconds must be >= 1, got {self.quiz.time_budget_seconds}"
            )

        if self.quiz.feedback_delay_seconds < 0:
            errors.append(
                f"feedback_delay_seconds must be >= 0, got {self.quiz.feedback_delay_seconds}"
            )

        if not self.storage.result_key:
            errors.append("result_key must not be empty")

        if not isinstance(logging.getLevelName(self.logging.log_level), int):
            errors.append(f"Unknown log level: {self.logging.log_level}")

        if not self.paths.result_schema.exists():
            errors.append(f"Result schema not found: {self.paths.result_schema}")

        return errors


# Global config instance
config = Config()


def configure_logging(level: Optional[str] = None) -> None:
    """
    Attach a stream handler to the package logger.

    The package never configures logging on import; host applications call
    this once at startup.
    """
    logger = logging.getLogger("tierquiz")
    logger.setLevel(level or config.logging.log_level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(config.logging.log_format))
        logger.addHandler(handler)
