"""
Conglomerate classifier: picks the dominant emotion bucket for a matched set.

The override hierarchy is data: CLASSIFICATION_RULES is evaluated in order and
the first rule returning a bucket wins.

    play_bow > aggression > bucket_scoring
"""

from dataclasses import dataclass
from typing import Callable, Collection, Dict, List, Optional, Sequence, Tuple

from pawsignal.config import Emotion
from pawsignal.engine import markers
from pawsignal.engine.detectors import is_aggression_signal, is_play_bow_signal, is_tension_signal
from pawsignal.signals.schema import Conglomerate, EmotionBucket, MatchedSignal
from pawsignal.utils.logging import logger

RuleFn = Callable[[Sequence[MatchedSignal]], Optional[EmotionBucket]]


@dataclass(frozen=True)
class ClassificationRule:
    """
    One step of the classification cascade.

    Attributes:
        name: Rule name, logged when it fires
        apply: Pure function from the ranked matched signals to a bucket or None
    """
    name: str
    apply: RuleFn


def _is_play_signal(signal: MatchedSignal) -> bool:
    playful = markers.marker_set_for(Emotion.PLAYFUL)
    return playful.found_in(signal.label_text, signal.emotion_text)


def route_signal(signal: MatchedSignal, has_play_signals: bool) -> Emotion:
    """
    Bucket for one signal in generic scoring.

    Fear/submission is re-routed to neutral when play is present in the same
    matched set, so play is never counted as fear.
    """
    for emotion, marker_set in markers.BUCKET_MARKERS:
        if marker_set.found_in(signal.label_text, signal.emotion_text):
            if emotion == Emotion.FEARFUL and has_play_signals:
                return Emotion.NEUTRAL
            return emotion
    return Emotion.NEUTRAL


def play_bow_rule(signals: Sequence[MatchedSignal]) -> Optional[EmotionBucket]:
    """
    Any unambiguous play-bow signal makes the result playful.

    Vetoed when another matched signal shows explicit tension, so a bow held
    with a rigid body or bared teeth falls through to the aggression rule.
    """
    play_bows = [s for s in signals if is_play_bow_signal(s)]
    if not play_bows:
        return None
    tense = next((s for s in signals if is_tension_signal(s)), None)
    if tense is not None:
        logger.debug(f"Play-bow rule vetoed by tension in signal {tense.id} ({tense.label})")
        return None
    return EmotionBucket.of(Emotion.PLAYFUL, play_bows)


def aggression_rule(signals: Sequence[MatchedSignal]) -> Optional[EmotionBucket]:
    """Any aggression-marked signal makes the result aggressive, whatever the raw scores."""
    aggressive = [s for s in signals if is_aggression_signal(s)]
    if aggressive:
        return EmotionBucket.of(Emotion.AGGRESSIVE, aggressive)
    return None


def partition(signals: Sequence[MatchedSignal]) -> Dict[Emotion, List[MatchedSignal]]:
    """
    Split signals into buckets, keyed in order of first population.

    Returns:
        Mapping emotion -> member signals (only non-empty buckets)
    """
    has_play = any(_is_play_signal(s) for s in signals)
    buckets: Dict[Emotion, List[MatchedSignal]] = {}
    for signal in signals:
        buckets.setdefault(route_signal(signal, has_play), []).append(signal)
    return buckets


def bucket_scoring_rule(signals: Sequence[MatchedSignal]) -> Optional[EmotionBucket]:
    """Highest summed score wins; ties go to the bucket populated first."""
    best: Optional[EmotionBucket] = None
    for emotion, members in partition(signals).items():
        bucket = EmotionBucket.of(emotion, members)
        if best is None or bucket.score > best.score:
            best = bucket
    return best


CLASSIFICATION_RULES: Tuple[ClassificationRule, ...] = (
    ClassificationRule("play_bow", play_bow_rule),
    ClassificationRule("aggression", aggression_rule),
    ClassificationRule("bucket_scoring", bucket_scoring_rule),
)


class ConglomerateClassifier:
    """
    Evaluates the rule cascade over a ranked matched-signal list.

    Attributes:
        rules: Ordered classification rules
    """

    def __init__(self, rules: Tuple[ClassificationRule, ...] = CLASSIFICATION_RULES):
        self.rules = tuple(rules)

    def classify(self, signals: Sequence[MatchedSignal], skip: Collection[str] = ()) -> Optional[EmotionBucket]:
        """
        Dominant bucket, or None for an empty matched set.

        Args:
            signals: Matcher output, ranked best first
            skip: Names of rules not to evaluate (e.g. "play_bow" once the
                detector has vetoed the override)

        Returns:
            The first bucket produced by the rule cascade
        """
        if not signals:
            return None
        for rule in self.rules:
            if rule.name in skip:
                continue
            bucket = rule.apply(signals)
            if bucket is not None:
                logger.debug(f"Rule '{rule.name}' selected {bucket.emotion.value} (score={bucket.score})")
                return bucket
        return None

    def conglomerate(self, signals: Sequence[MatchedSignal]) -> Conglomerate:
        """Dominant bucket together with the full matched set."""
        return Conglomerate(
            dominant=self.classify(signals),
            all_signals=list(signals),
            total_signals=len(signals),
        )
