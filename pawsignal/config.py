"""
Configuration module: project directories, enums and constant classes.

Contains:
- Common directories (ROOT_DIR, LOGS_DIR, DATA_DIR, CONFIG_DIR)
- Emotion categories enum (Emotion)
- Observation fields enum (ObservationField)
- Situation impact enum (ContextImpact)
- Environment variable keys (EnvKey)
"""

from pathlib import Path
from enum import Enum

# Directories
ROOT_DIR = Path(__file__).parent.parent.absolute()
"""
Project root directory.

Points at the repository root no matter which directory scripts are run from.
"""

PACKAGE_DIR = Path(__file__).parent.absolute()
"""Installed package directory (holds the bundled signal database)"""

LOGS_DIR = Path(ROOT_DIR, "logs")
"""Log directory"""
LOGS_DIR.mkdir(parents=True, exist_ok=True)

DATA_DIR = Path(ROOT_DIR, "data")
"""Local data directory (custom signal databases)"""
DATA_DIR.mkdir(parents=True, exist_ok=True)

CONFIG_DIR = Path(ROOT_DIR, "config")
"""Engine YAML configuration directory"""

DEFAULT_SIGNALS_PATH = Path(PACKAGE_DIR, "signals", "data", "signals.json")
"""Signal database shipped with the package"""

DEFAULT_CONFIG_PATH = Path(CONFIG_DIR, "engine.yaml")
"""Default engine configuration file"""


class Emotion(str, Enum):
    """
    Emotion categories produced by the classifier.

    The declaration order is the bucket order used during bucket scoring
    (playful first so play is never double-counted as fear).

    Attributes:
        PLAYFUL: play, invitation to play
        FEARFUL: fear, submission, avoidance
        ANXIOUS: anxiety, stress, nervousness
        HAPPY: happiness, relaxation
        CURIOUS: curiosity, interest, attention
        DEMANDING: demand, insistence
        NEUTRAL: nothing more specific applies
        AGGRESSIVE: threat, warning, defense (only reachable through the override)
    """
    PLAYFUL = "playful"
    FEARFUL = "fearful"
    ANXIOUS = "anxious"
    HAPPY = "happy"
    CURIOUS = "curious"
    DEMANDING = "demanding"
    NEUTRAL = "neutral"
    AGGRESSIVE = "aggressive"

    def __str__(self) -> str:
        """
        Return the emotion's string value.

        Returns:
            The value used in InterpretationResult.emotion, e.g. "playful"
        """
        return self.value


class ObservationField(str, Enum):
    """
    The seven body-part/behavior slots of an observation.

    Order matters: it is the order used when formatting the behavior summary.

    Attributes:
        POSTURE: body posture ("crouched low", "chest down, hips up")
        TAIL: tail position and movement
        EARS: ear position
        EYES: gaze and eye shape
        MOUTH: mouth, lips and tongue
        MOVEMENTS: what the body is doing ("pacing", "bouncy")
        SOUNDS: vocalizations ("growling", "whining", "none")
    """
    POSTURE = "posture"
    TAIL = "tail"
    EARS = "ears"
    EYES = "eyes"
    MOUTH = "mouth"
    MOVEMENTS = "movements"
    SOUNDS = "sounds"

    def __str__(self) -> str:
        """
        Return the field's string value.

        Returns:
            The English key of the field, e.g. "posture"
        """
        return self.value

    @property
    def title(self) -> str:
        """Display name used in the behavior summary, e.g. ``Posture``."""
        return self.value.capitalize()


class ContextImpact(str, Enum):
    """
    How the situation an observation was made in bears on its emotion.

    Attributes:
        NEUTRAL: the situation adds nothing
        AMPLIFIES: the situation strengthens the emotion (fear at the vet)
        CONFIRMS: the situation is consistent with the emotion (play at home)
        REQUIRES_CAUTION: the situation calls for care (aggression towards an unfamiliar dog)
    """
    NEUTRAL = "neutral"
    AMPLIFIES = "amplifies"
    CONFIRMS = "confirms"
    REQUIRES_CAUTION = "requires_caution"

    def __str__(self) -> str:
        """
        Return the impact's string value.

        Returns:
            The value used in InterpretationResult.context_impact
        """
        return self.value


SPANISH_FIELD_ALIASES = {
    ObservationField.POSTURE: "postura",
    ObservationField.TAIL: "cola",
    ObservationField.EARS: "orejas",
    ObservationField.EYES: "ojos",
    ObservationField.MOUTH: "boca",
    ObservationField.MOVEMENTS: "movimientos",
    ObservationField.SOUNDS: "sonidos",
}
"""Keys used by the Spanish captioning prompt for the same seven fields"""

SPANISH_SITUATION_ALIASES = {
    "place": "lugar",
    "interaction": "interaccion",
    "item": "objeto",
    "prior_state": "estado_previo",
}
"""Keys used by the Spanish client for the situation of an observation"""


class EnvKey:
    """
    Environment variable names read by the engine.

    Attributes:
        SIGNALS_PATH: overrides the signal database location
        CONFIG_PATH: overrides the engine YAML configuration location
    """
    SIGNALS_PATH = "PAWSIGNAL_SIGNALS_PATH"
    CONFIG_PATH = "PAWSIGNAL_CONFIG_PATH"
