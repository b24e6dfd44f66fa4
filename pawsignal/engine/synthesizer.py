"""
Interpretation synthesizer: turns a dominant bucket into an InterpretationResult.
"""

from typing import Optional

from pawsignal.config import ContextImpact, Emotion, ObservationField
from pawsignal.engine import markers
from pawsignal.engine.detectors import PLAY_BOW_CONTEXT, PLAY_BOW_TRANSLATION, RewardPattern
from pawsignal.engine_conf import EngineConfig
from pawsignal.signals.schema import (
    EmotionBucket,
    InterpretationResult,
    ObservationDescription,
    SituationContext,
)

UNCLEAR_TRANSLATION = "I can't clearly interpret what I see"
NO_MATCH_CONTEXT = "observation without a clear interpretation"
FALLBACK_CONTEXT = "no clear context"
FALLBACK_BEHAVIOR = "behavior not clearly visible"
REWARD_CONTEXT = "expecting food or a treat"

RECOMMENDATION_UNCERTAIN = "Watch for more signals before acting. The current interpretation is uncertain."
RECOMMENDATION_PROBABLE = "The interpretation is probable, but consider the wider context."
RECOMMENDATION_RELIABLE = "The interpretation is reliable. You can act on it."


def format_behavior(description: ObservationDescription) -> str:
    """
    ``"Posture: value. Tail: value. ..."`` for every field present.

    Placeholder values are kept: they tell the reader what could not be seen.
    """
    parts = []
    for field in ObservationField:
        value = description.get(field)
        if value and value.strip():
            parts.append(f"{field.title}: {value.strip().rstrip('.')}.")
    return " ".join(parts)


def assess_context_impact(emotion: str, situation: Optional[SituationContext]) -> ContextImpact:
    """
    How the situation bears on an interpreted emotion.

    - fear at the vet amplifies
    - play at home confirms
    - aggression towards an unfamiliar dog requires caution

    Anything else is neutral.
    """
    if situation is None:
        return ContextImpact.NEUTRAL
    if emotion == Emotion.FEARFUL and markers.VET_PLACES.found_in(situation.place):
        return ContextImpact.AMPLIFIES
    if emotion == Emotion.PLAYFUL and markers.HOME_PLACES.found_in(situation.place):
        return ContextImpact.CONFIRMS
    if emotion == Emotion.AGGRESSIVE and markers.UNFAMILIAR_DOGS.found_in(situation.interaction):
        return ContextImpact.REQUIRES_CAUTION
    return ContextImpact.NEUTRAL


class InterpretationSynthesizer:
    """
    Builds the final result from classifier output.

    Attributes:
        config: Engine configuration (confidence constants, runner-up count)
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()

    def confidence(self, bucket: EmotionBucket) -> int:
        """min(max, base + per_signal * n + per_score * top_score), rounded."""
        cfg = self.config
        top_score = bucket.signals[0].match_score if bucket.signals else 0
        raw = cfg.confidence_base + cfg.confidence_per_signal * len(bucket.signals) + cfg.confidence_per_score * top_score
        return int(round(min(cfg.confidence_max, raw)))

    def recommendation(self, confidence: int) -> str:
        if confidence < self.config.recommendation_low:
            return RECOMMENDATION_UNCERTAIN
        if confidence < self.config.recommendation_high:
            return RECOMMENDATION_PROBABLE
        return RECOMMENDATION_RELIABLE

    def translation(self, bucket: EmotionBucket) -> str:
        """Top signal's text, followed by up to ``runner_up_count`` runner-ups."""
        texts = [s.prioritized_interpretation.strip() for s in bucket.signals[: 1 + self.config.runner_up_count]]
        return " ".join(t for t in texts if t)

    def synthesize(self, bucket: Optional[EmotionBucket], description: ObservationDescription) -> InterpretationResult:
        """
        Build the result for a classified description.

        Args:
            bucket: Dominant bucket, None when nothing matched
            description: The original observation

        Returns:
            InterpretationResult (success is always True)
        """
        if bucket is None or not bucket.signals:
            return self.no_match(description)

        confidence = self.confidence(bucket)
        top = bucket.signals[0]
        return InterpretationResult(
            translation=self.translation(bucket),
            confidence=confidence,
            emotion=bucket.emotion.value,
            behavior=format_behavior(description),
            context=top.probable_emotion,
            success=True,
            recommendation=self.recommendation(confidence),
            method="signal-matrix",
        )

    def play_bow(self, description: ObservationDescription) -> InterpretationResult:
        confidence = self.config.play_bow_confidence
        return InterpretationResult(
            translation=PLAY_BOW_TRANSLATION,
            confidence=confidence,
            emotion=Emotion.PLAYFUL.value,
            behavior=format_behavior(description),
            context=PLAY_BOW_CONTEXT,
            success=True,
            recommendation=self.recommendation(confidence),
            method="play-bow",
        )

    def reward(self, result: InterpretationResult, pattern: RewardPattern) -> InterpretationResult:
        """
        Recast a result as a reward-expectation pattern.

        Behavior is kept; translation, confidence, emotion and context come
        from the pattern.
        """
        confidence = min(pattern.confidence, self.config.confidence_max)
        return result.model_copy(update={
            "translation": pattern.translation,
            "confidence": confidence,
            "emotion": Emotion.DEMANDING.value,
            "context": REWARD_CONTEXT,
            "recommendation": self.recommendation(confidence),
            "method": "reward-pattern",
            "pattern": pattern.name,
        })

    def no_match(self, description: ObservationDescription) -> InterpretationResult:
        confidence = self.config.no_match_confidence
        return InterpretationResult(
            translation=UNCLEAR_TRANSLATION,
            confidence=confidence,
            emotion=Emotion.NEUTRAL.value,
            behavior=format_behavior(description),
            context=NO_MATCH_CONTEXT,
            success=True,
            recommendation=self.recommendation(confidence),
            method="no-match",
        )

    def fallback(self) -> InterpretationResult:
        """Result used when interpretation failed internally."""
        confidence = self.config.fallback_confidence
        return InterpretationResult(
            translation=UNCLEAR_TRANSLATION,
            confidence=confidence,
            emotion=Emotion.NEUTRAL.value,
            behavior=FALLBACK_BEHAVIOR,
            context=FALLBACK_CONTEXT,
            success=True,
            recommendation=self.recommendation(confidence),
            method="fallback",
        )
