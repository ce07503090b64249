"""
Quiz result persistence with validation.

Stores the summary of the most recent session under a single well-known
key. Every save overwrites the previous result; no history is kept.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ..config import config
from ..errors import ResultPersistenceError
from .validation import ResultValidator

logger = logging.getLogger(__name__)


class ResultStore:
    """
    Handles persistence of the last quiz result.

    Features:
    - Validate results against quiz_result.schema.json
    - Save to <results_dir>/<key>.json, replacing any prior result
    - Load the stored result for dashboards
    """

    def __init__(
        self,
        results_dir: Path | str = None,
        key: Optional[str] = None,
        validator: Optional[ResultValidator] = None,
    ):
        """
        Initialize result store.

        Args:
            results_dir: Directory holding the result file (default: config.paths.results_dir)
            key: Storage key / file stem (default: config.storage.result_key)
            validator: Schema validator (default: bundled result schema)
        """
        self.results_dir = Path(results_dir) if results_dir else config.paths.results_dir
        self.key = key or config.storage.result_key
        self.validator = validator or ResultValidator()

    @property
    def path(self) -> Path:
        return self.results_dir / f"{self.key}.json"

    def save(self, record: Dict[str, Any], validate: bool = True) -> Path:
        """
        Store a result record, overwriting the previous one.

        Args:
            record: Result dictionary (see SessionResult.to_record)
            validate: Whether to validate before saving

        Returns:
            Path written

        Raises:
            ResultPersistenceError: If validation or writing fails
        """
        if validate:
            result = self.validator.validate(record)
            if not result:
                raise ResultPersistenceError(str(result))

        self.results_dir.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
            tmp_path.replace(self.path)
        except OSError as e:
            raise ResultPersistenceError(f"Failed to save result: {e}") from e

        logger.info("Saved quiz result to %s", self.path)
        return self.path

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Load the stored result.

        Returns:
            Result dict, or None if nothing is stored or the file is unreadable
        """
        if not self.path.exists():
            return None

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Failed to load result %s: %s", self.path, e)
            return None

    def clear(self) -> None:
        """Remove the stored result, if any."""
        if self.path.exists():
            self.path.unlink()


# Global result store instance
_result_store: Optional[ResultStore] = None


def get_result_store() -> ResultStore:
    """Get or create the global result store."""
    global _result_store
    if _result_store is None:
        _result_store = ResultStore()
    return _result_store
