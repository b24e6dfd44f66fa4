"""
Priority detectors: patterns unambiguous enough to override generic scoring.

- PlayBowDetector: runs on the raw description before matching and can
  short-circuit the whole pipeline.
- is_aggression_signal / is_play_bow_signal / is_tension_signal: predicates
  over matched signals used by the classifier's override rules.
- RewardPatternDetector: runs on the synthesized result and recasts a dog
  asking for food or a treat as a graded "demanding" pattern.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from pawsignal.config import ObservationField
from pawsignal.engine import markers
from pawsignal.signals.schema import ObservationDescription, SignalRecord

PLAY_BOW_TRANSLATION = "Clear invitation to play! I'm excited and I want you to play with me"
PLAY_BOW_CONTEXT = "Clear invitation to play"
MIN_STRUCTURAL_CUES = 2


@dataclass(frozen=True)
class PlayBowDetection:
    """
    Play-bow detector outcome.

    Attributes:
        is_play_bow: Whether the override fires
        marker: Exact marker phrase found, if any
        cues: Structural cues present ("chest_down", "hips_up", "tail_moving")
        suppressed_by: Tension marker that vetoed the override, if any
    """
    is_play_bow: bool
    marker: str = ""
    cues: Tuple[str, ...] = field(default_factory=tuple)
    suppressed_by: str = ""

    @property
    def pattern(self) -> str:
        return "Play bow detected" if self.is_play_bow else "Not a play bow"


class PlayBowDetector:
    """
    Detects a play bow from posture, tail and movement text.

    Fires on any exact marker phrase, or on at least two of the three
    structural cues. Explicit tension anywhere in the description (rigid,
    tense, threat, ...) vetoes it.
    """

    examined_fields = (ObservationField.POSTURE, ObservationField.TAIL, ObservationField.MOVEMENTS)

    def detect(self, description: ObservationDescription) -> PlayBowDetection:
        observed = description.observed_fields()
        posture = observed.get(ObservationField.POSTURE, "")
        tail = observed.get(ObservationField.TAIL, "")
        examined = [observed.get(f, "") for f in self.examined_fields]

        marker = ""
        for text in examined:
            marker = markers.PLAY_BOW_MARKERS.search(text) or ""
            if marker:
                break

        cues = []
        if markers.CHEST_WORDS.found_in(posture) and markers.LOWERED_WORDS.found_in(posture):
            cues.append("chest_down")
        if markers.HIPS_WORDS.found_in(posture) and markers.RAISED_WORDS.found_in(posture):
            cues.append("hips_up")
        if markers.TAIL_MOVING_WORDS.found_in(tail):
            cues.append("tail_moving")

        if not marker and len(cues) < MIN_STRUCTURAL_CUES:
            return PlayBowDetection(False, cues=tuple(cues))

        for text in observed.values():
            tension = markers.TENSION_MARKERS.search(text)
            if tension:
                return PlayBowDetection(False, marker=marker, cues=tuple(cues), suppressed_by=tension)

        return PlayBowDetection(True, marker=marker, cues=tuple(cues))

@dataclass(frozen=True)
class RewardPattern:
    """
    A graded food/treat expectation pattern.

    Attributes:
        name: Pattern name, reported in ``InterpretationResult.pattern``
        translation: First-person translation replacing the matrix one
        confidence: Confidence of the pattern
    """
    name: str
    translation: str
    confidence: int


FULL_DEMAND = RewardPattern("full_demand", "Give it! Give it! I already gave you my paw, where's my snack?", 95)
PAW_INSISTENCE = RewardPattern("paw_insistence", "Food, food! Look, I'm giving you my paw!", 90)
INTENSE_EXPECTATION = RewardPattern("intense_expectation", "I want my treat! Give it to me!", 85)
PAW_REQUEST = RewardPattern("paw_request", "Look, here's my paw. Do I get something tasty?", 80)
FOOD_DESIRE = RewardPattern("food_desire", "Food! Food! Food!", 75)


class RewardPatternDetector:
    """
    Recognizes a dog waiting for food or a treat.

    Three cues are looked for in the observation: a raised paw, an intent
    gaze and an open or drooling mouth. The more of them co-occur, the
    stronger the pattern; a food or treat mention alone is the weakest one.
    Aggression or fear wording in the observation or in the interpreted
    emotion and context cancels the pattern.
    """

    def detect(self, description: ObservationDescription, emotion: str = "", context: str = "") -> Optional[RewardPattern]:
        """
        Strongest reward pattern in an observation.

        Args:
            description: The observation
            emotion: Emotion already assigned by the signal matrix
            context: Context already assigned by the signal matrix

        Returns:
            The strongest RewardPattern present, or None
        """
        texts = tuple(description.observed_fields().values())
        if not texts:
            return None
        if markers.REWARD_VETO.found_in(*texts, emotion, context):
            return None

        paw = markers.PAW_RAISING.found_in(*texts)
        gaze = markers.INTENT_GAZE.found_in(*texts)
        mouth = markers.MOUTH_OPEN.found_in(*texts)

        if paw and gaze and mouth:
            return FULL_DEMAND
        if paw and gaze:
            return PAW_INSISTENCE
        if gaze and mouth:
            return INTENSE_EXPECTATION
        if paw:
            return PAW_REQUEST
        if markers.REWARD_CONTEXT.found_in(*texts, context):
            return FOOD_DESIRE
        return None



def _record_texts(record: SignalRecord) -> Tuple[str, str, str]:
    return record.label_text, record.description_text, record.emotion_text


def is_aggression_signal(record: SignalRecord) -> bool:
    """Label, description or emotion carries an aggression marker."""
    return markers.AGGRESSION_MARKERS.found_in(*_record_texts(record))


def is_tension_signal(record: SignalRecord) -> bool:
    """Record wording shows explicit tension (rigid, tense, threat, hard stare, bared teeth, ...)."""
    return markers.TENSION_MARKERS.found_in(*_record_texts(record))


def is_play_bow_signal(record: SignalRecord) -> bool:
    """
    A genuine play-bow signal.

    Requires play-bow wording, a chest and a floor/ground mention, and no
    tension or dominance wording anywhere in the record.
    """
    label, desc, emotion = _record_texts(record)
    if not markers.PLAY_BOW_SIGNAL_MARKERS.found_in(label, desc):
        return False
    if not markers.CHEST_WORDS.found_in(label, desc):
        return False
    if not markers.FLOOR_WORDS.found_in(label, desc):
        return False
    return not markers.PLAY_BOW_EXCLUSIONS.found_in(label, desc, emotion)
