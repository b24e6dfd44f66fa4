"""
Signal matcher: scores every database record against an observation description.

Match policy per (record, field), first satisfied wins:
1. exact containment (field in record text, or record text in field)
2. a comma-separated sub-phrase of the field with more than 5 words
3. a domain phrase (play-bow, submission, aggression, joy) present in both
4. a distinctive single word (>= 7 chars, not a stop word, allowlisted)

A matching field adds ``intensity * game_bonus`` to the record's score.
"""

from typing import List, Optional, Tuple

from pawsignal.engine import markers
from pawsignal.signals.database import SignalDatabase
from pawsignal.signals.schema import MatchedSignal, ObservationDescription, SignalRecord
from pawsignal.utils.logging import logger
from pawsignal.utils.text import split_phrases, split_words


class MatchPolicy:
    """Names of the layered match policies, reported by ``explain``."""
    EXACT = "exact"
    LONG_PHRASE = "long_phrase"
    DOMAIN_PHRASE = "domain_phrase"
    SPECIFIC_WORD = "specific_word"


def game_bonus(record: SignalRecord) -> int:
    """2 when the record is about play or an invitation to play, else 1."""
    if markers.GAME_MARKERS.found_in(record.label_text, record.description_text, record.emotion_text):
        return 2
    return 1


def match_policy(field_text: str, record: SignalRecord) -> Optional[str]:
    """
    Return the first match policy satisfied by ``field_text`` against ``record``.

    Args:
        field_text: Normalized (lowercase) observation text
        record: Signal record

    Returns:
        A MatchPolicy name, or None when nothing matches
    """
    if not field_text:
        return None

    label = record.label_text
    desc = record.description_text
    record_texts = (label, desc)

    # 1. exact containment, both directions
    if field_text in label or field_text in desc:
        return MatchPolicy.EXACT
    if (label and label in field_text) or (desc and desc in field_text):
        return MatchPolicy.EXACT

    # 2. long comma-separated sub-phrases
    for phrase in split_phrases(field_text):
        if len(phrase.split()) >= markers.MIN_PHRASE_WORDS:
            if phrase in label or phrase in desc:
                return MatchPolicy.LONG_PHRASE

    # 3. curated domain phrases present on both sides
    for phrase_set in markers.MATCH_PHRASE_SETS:
        if phrase_set.shared(field_text, record_texts):
            return MatchPolicy.DOMAIN_PHRASE

    # 4. distinctive single words
    for word in split_words(field_text):
        if len(word) < markers.MIN_SPECIFIC_WORD_LENGTH:
            continue
        if word in markers.STOP_WORDS:
            continue
        if word in markers.SPECIFIC_VOCABULARY and (word in label or word in desc):
            return MatchPolicy.SPECIFIC_WORD

    return None


class SignalMatcher:
    """
    Ranks database records against an ObservationDescription.

    Attributes:
        database: The injected, already-loaded SignalDatabase
    """

    def __init__(self, database: SignalDatabase):
        self.database = database

    @staticmethod
    def _score(record: SignalRecord, field_texts) -> Tuple[int, int]:
        bonus = game_bonus(record)
        total = 0
        for field_text in field_texts:
            if match_policy(field_text, record):
                total += record.intensity * bonus
        return total, bonus

    def score(self, record: SignalRecord, description: ObservationDescription) -> Tuple[int, int]:
        """
        Score one record.

        Returns:
            (match_score, game_bonus)
        """
        return self._score(record, description.observed_fields().values())

    def match(self, description: ObservationDescription) -> List[MatchedSignal]:
        """
        All records with a non-zero score, best first.

        Args:
            description: Observation to match

        Returns:
            MatchedSignals sorted by match_score descending (database order on ties)
        """
        observed = description.observed_fields()
        if not observed:
            logger.debug("No observed fields, nothing to match")
            return []

        field_texts = list(observed.values())
        matches = []
        for record in self.database.get_all():
            total, bonus = self._score(record, field_texts)
            if total > 0:
                matches.append(MatchedSignal.from_record(record, total, bonus))

        matches.sort(key=lambda m: m.match_score, reverse=True)
        logger.debug(f"Matched {len(matches)} signals from {len(observed)} observed fields")
        return matches

    def explain(self, description: ObservationDescription, record: SignalRecord) -> dict:
        """Which policy matched each field for one record (diagnostics)."""
        return {
            field.value: match_policy(text, record)
            for field, text in description.observed_fields().items()
        }
