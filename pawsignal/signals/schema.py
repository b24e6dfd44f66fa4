"""
Signal schemas.

Uses Pydantic to enforce the shape of the signal database records, the
observation description consumed by the engine and the structures it produces.
"""

from typing import Dict, List, Literal, Optional, Tuple

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from pawsignal.config import Emotion, ObservationField, SPANISH_FIELD_ALIASES, SPANISH_SITUATION_ALIASES
from pawsignal.utils.text import is_placeholder, normalize


class SignalRecord(BaseModel):
    """One catalogued behavioral signal."""
    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique ordinal")
    label: str = Field(..., min_length=1, description="Short signal name")
    description: str = Field("", description="Free-text description of the signal")
    probable_emotion: str = Field(
        ...,
        description="One or more comma-separated emotion tags"
    )
    intensity: int = Field(..., ge=1, le=5, description="Intensity from 1 (subtle) to 5 (strong)")
    prioritized_interpretation: str = Field(
        ...,
        description="First-person text used verbatim in the translation"
    )

    @field_validator("probable_emotion")
    @classmethod
    def validate_probable_emotion(cls, v: str) -> str:
        """At least one non-empty emotion tag is required."""
        if not any(tag.strip() for tag in v.split(",")):
            raise ValueError("probable_emotion must contain at least one tag")
        return v.strip()

    @property
    def emotions(self) -> Tuple[str, ...]:
        """Emotion tags split on commas."""
        return tuple(tag.strip() for tag in self.probable_emotion.split(",") if tag.strip())

    @property
    def label_text(self) -> str:
        return normalize(self.label)

    @property
    def description_text(self) -> str:
        return normalize(self.description)

    @property
    def emotion_text(self) -> str:
        return normalize(self.probable_emotion)


def _field(name: ObservationField):
    return Field(
        None,
        validation_alias=AliasChoices(name.value, SPANISH_FIELD_ALIASES[name]),
        description=f"{name.title} observation",
    )


class ObservationDescription(BaseModel):
    """
    Per-body-part description of the animal, as produced by the captioning step.

    Every field is optional; the Spanish keys of the captioning prompt
    (``postura``, ``cola``, ...) are accepted as well.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    posture: Optional[str] = _field(ObservationField.POSTURE)
    tail: Optional[str] = _field(ObservationField.TAIL)
    ears: Optional[str] = _field(ObservationField.EARS)
    eyes: Optional[str] = _field(ObservationField.EYES)
    mouth: Optional[str] = _field(ObservationField.MOUTH)
    movements: Optional[str] = _field(ObservationField.MOVEMENTS)
    sounds: Optional[str] = _field(ObservationField.SOUNDS)

    @field_validator("*", mode="before")
    @classmethod
    def coerce_text(cls, v):
        """Non-string values from loose JSON become strings; None stays None."""
        if v is None or isinstance(v, str):
            return v
        if isinstance(v, (list, tuple)):
            return ", ".join(str(item) for item in v)
        return str(v)

    def get(self, field: ObservationField) -> Optional[str]:
        return getattr(self, field.value)

    def observed_fields(self) -> Dict[ObservationField, str]:
        """
        Fields carrying a real observation, lowercased.

        Placeholder values ("undetermined", "none", ...) are left out.

        Returns:
            Ordered mapping from field to normalized text
        """
        observed = {}
        for field in ObservationField:
            value = self.get(field)
            if value is not None and not is_placeholder(value):
                observed[field] = normalize(value)
        return observed

    def is_empty(self) -> bool:
        return not self.observed_fields()

    @classmethod
    def undetermined(cls) -> "ObservationDescription":
        """Placeholder description used when the captioning answer is unusable."""
        return cls(**{field.value: f"{field.value} undetermined" for field in ObservationField})

def _situation_field(name: str, description: str):
    return Field(
        None,
        validation_alias=AliasChoices(name, SPANISH_SITUATION_ALIASES[name]),
        description=description,
    )


class SituationContext(BaseModel):
    """
    Where and with whom an observation was made.

    Optional input to the interpreter; it never changes the emotion, only the
    reported ``context_impact``.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    place: Optional[str] = _situation_field("place", "Where the animal is (home, vet, park, ...)")
    interaction: Optional[str] = _situation_field("interaction", "Who it is interacting with")
    item: Optional[str] = _situation_field("item", "Object involved (toy, food bowl, ...)")
    prior_state: Optional[str] = _situation_field("prior_state", "State before the observation")



class MatchedSignal(SignalRecord):
    """A signal record annotated with its score against one description."""
    match_score: int = Field(..., ge=0, description="Sum of intensity-weighted field hits")
    game_bonus: Literal[1, 2] = Field(1, description="2 for play/invitation signals, else 1")

    @classmethod
    def from_record(cls, record: SignalRecord, match_score: int, game_bonus: int) -> "MatchedSignal":
        return cls(**record.model_dump(), match_score=match_score, game_bonus=game_bonus)


class EmotionBucket(BaseModel):
    """An emotion category with the matched signals classified into it."""
    emotion: Emotion
    signals: List[MatchedSignal] = Field(default_factory=list)
    score: int = 0

    @classmethod
    def of(cls, emotion: Emotion, signals: List[MatchedSignal]) -> "EmotionBucket":
        return cls(emotion=emotion, signals=list(signals), score=sum(s.match_score for s in signals))

    @property
    def top_signal(self) -> Optional[MatchedSignal]:
        return self.signals[0] if self.signals else None


class Conglomerate(BaseModel):
    """Classifier output: the dominant bucket plus the full matched set."""
    dominant: Optional[EmotionBucket] = None
    all_signals: List[MatchedSignal] = Field(default_factory=list)
    total_signals: int = 0


class InterpretationResult(BaseModel):
    """Final engine output."""
    translation: str
    confidence: int = Field(..., ge=0, le=100)
    emotion: str
    behavior: str = ""
    context: str = ""
    success: bool = True
    recommendation: str = ""
    method: Literal["play-bow", "reward-pattern", "signal-matrix", "no-match", "fallback"] = "signal-matrix"
    pattern: Optional[str] = Field(None, description="Reward pattern name when method is reward-pattern")
    context_impact: str = Field("neutral", description="How the situation bears on the emotion")
