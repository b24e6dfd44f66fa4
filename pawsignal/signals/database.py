"""
Signal database: the static catalogue of behavioral signals.

The database is built once, loaded eagerly and handed to the matcher and the
classifier by reference. After ``load()`` it is immutable.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import ValidationError

from pawsignal.config import DEFAULT_SIGNALS_PATH, EnvKey
from pawsignal.signals.schema import SignalRecord
from pawsignal.utils.logging import logger
from pawsignal.utils.text import normalize


def resolve_signals_path(path: Optional[Union[str, Path]] = None) -> Path:
    """
    Resolve the signal database location.

    Priority: explicit argument > ``PAWSIGNAL_SIGNALS_PATH`` > bundled file.

    Args:
        path: Optional explicit path

    Returns:
        Path to the database file (existence is not checked here)
    """
    if path:
        return Path(path)
    env_path = os.getenv(EnvKey.SIGNALS_PATH)
    if env_path:
        return Path(env_path)
    return DEFAULT_SIGNALS_PATH


def parse_records(payload: Any) -> List[SignalRecord]:
    """
    Validate raw JSON entries into SignalRecords.

    Accepts a list of records or a ``{"signals": [...]}`` wrapper. Invalid
    entries and duplicate ids are skipped with a warning.

    Args:
        payload: Decoded JSON document

    Returns:
        Valid records in file order
    """
    if isinstance(payload, dict) and "signals" in payload:
        payload = payload["signals"]
    if not isinstance(payload, list):
        logger.warning(f"Signal database payload must be a list, got {type(payload).__name__}")
        return []

    records = []
    seen_ids = set()
    for idx, entry in enumerate(payload):
        try:
            record = SignalRecord.model_validate(entry)
        except ValidationError as e:
            logger.warning(f"Skipping invalid signal record at index {idx}: {e.error_count()} error(s)")
            logger.debug(str(e))
            continue
        if record.id in seen_ids:
            logger.warning(f"Skipping duplicate signal id {record.id} at index {idx}")
            continue
        seen_ids.add(record.id)
        records.append(record)
    return records


class SignalDatabase:
    """
    Read-only collection of SignalRecords.

    Attributes:
        path: Source JSON file
        loaded: Whether ``load()`` already ran
    """

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self.path = resolve_signals_path(path)
        self.loaded = False
        self._records: Tuple[SignalRecord, ...] = ()
        self._by_id: Dict[int, SignalRecord] = {}
        self._categories: Tuple[str, ...] = ()

    @classmethod
    def from_records(cls, records: List[SignalRecord]) -> "SignalDatabase":
        """Build an already-loaded database from in-memory records."""
        db = cls()
        db._install(list(records))
        return db

    @classmethod
    def from_path(cls, path: Optional[Union[str, Path]] = None) -> "SignalDatabase":
        """Construct and load in one step."""
        db = cls(path)
        db.load()
        return db

    def load(self) -> "SignalDatabase":
        """
        Parse the data source into memory once; later calls are no-ops.

        A missing or malformed file leaves the database empty. Nothing is raised.
        """
        if self.loaded:
            return self

        records: List[SignalRecord] = []
        if not self.path.exists():
            logger.warning(f"Signal database not found: {self.path}")
        else:
            try:
                with open(self.path, "r", encoding="utf-8") as f:
                    payload = json.load(f)
                records = parse_records(payload)
            except (OSError, ValueError) as e:
                logger.warning(f"Failed to load signal database from {self.path}: {e}")
                records = []

        self._install(records)
        logger.info(f"Signal database loaded: {len(self._records)} signals, {len(self._categories)} categories")
        return self

    def _install(self, records: List[SignalRecord]) -> None:
        self._records = tuple(records)
        self._by_id = {r.id: r for r in self._records}
        categories = []
        for record in self._records:
            for tag in record.emotions:
                if tag not in categories:
                    categories.append(tag)
        self._categories = tuple(categories)
        self.loaded = True

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self):
        return iter(self._records)

    def get_all(self) -> Tuple[SignalRecord, ...]:
        """Full ordered record list."""
        return self._records

    def get_categories(self) -> Tuple[str, ...]:
        """De-duplicated emotion tags in first-seen order."""
        return self._categories

    def get(self, signal_id: int) -> Optional[SignalRecord]:
        return self._by_id.get(signal_id)

    def by_category(self, category: str) -> List[SignalRecord]:
        """Records tagged with the given emotion (case-insensitive)."""
        wanted = normalize(category)
        return [r for r in self._records if wanted in (normalize(tag) for tag in r.emotions)]

    def search(self, query: str) -> List[SignalRecord]:
        """Records whose label, description or emotion contains the query."""
        q = normalize(query)
        if not q:
            return []
        return [
            r for r in self._records
            if q in r.label_text or q in r.description_text or q in r.emotion_text
        ]
