import pytest

from pawsignal.config import ContextImpact, Emotion
from pawsignal.engine.detectors import FULL_DEMAND, PAW_REQUEST
from pawsignal.engine.synthesizer import (
    RECOMMENDATION_PROBABLE,
    RECOMMENDATION_RELIABLE,
    RECOMMENDATION_UNCERTAIN,
    REWARD_CONTEXT,
    UNCLEAR_TRANSLATION,
    InterpretationSynthesizer,
    assess_context_impact,
    format_behavior,
)
from pawsignal.engine_conf import EngineConfig
from pawsignal.signals import EmotionBucket, MatchedSignal, ObservationDescription, SituationContext

from conftest import make_record


def bucket_of(emotion, scores):
    signals = [
        MatchedSignal.from_record(
            make_record(i, f"Signal {i}", "fear", interpretation=f"Text {i}."), score, 1
        )
        for i, score in enumerate(scores, 1)
    ]
    return EmotionBucket.of(emotion, signals)


@pytest.fixture
def synthesizer():
    return InterpretationSynthesizer(EngineConfig())


def test_confidence_formula(synthesizer):
    assert synthesizer.confidence(bucket_of(Emotion.FEARFUL, [2])) == 70
    assert synthesizer.confidence(bucket_of(Emotion.FEARFUL, [4, 2])) == 90
    assert synthesizer.confidence(bucket_of(Emotion.FEARFUL, [10, 8, 6])) == 95


def test_confidence_uses_configured_constants():
    config = EngineConfig(confidence_base=10, confidence_per_signal=1, confidence_per_score=1, confidence_max=100)
    synthesizer = InterpretationSynthesizer(config)
    assert synthesizer.confidence(bucket_of(Emotion.HAPPY, [6, 3])) == 18


@pytest.mark.parametrize("confidence,expected", [
    (20, RECOMMENDATION_UNCERTAIN),
    (59, RECOMMENDATION_UNCERTAIN),
    (60, RECOMMENDATION_PROBABLE),
    (79, RECOMMENDATION_PROBABLE),
    (80, RECOMMENDATION_RELIABLE),
    (95, RECOMMENDATION_RELIABLE),
])
def test_recommendation_thresholds(synthesizer, confidence, expected):
    assert synthesizer.recommendation(confidence) == expected


def test_translation_appends_runner_ups(synthesizer):
    bucket = bucket_of(Emotion.FEARFUL, [8, 6, 4, 2])
    assert synthesizer.translation(bucket) == "Text 1. Text 2. Text 3."


def test_translation_without_runner_ups():
    synthesizer = InterpretationSynthesizer(EngineConfig(runner_up_count=0))
    assert synthesizer.translation(bucket_of(Emotion.FEARFUL, [8, 6])) == "Text 1."


def test_format_behavior_keeps_placeholders():
    description = ObservationDescription(posture="Crouched low.", tail="undetermined", mouth="  ")
    assert format_behavior(description) == "Posture: Crouched low. Tail: undetermined."


def test_synthesize_uses_dominant_bucket(synthesizer):
    description = ObservationDescription(tail="tucked")
    result = synthesizer.synthesize(bucket_of(Emotion.FEARFUL, [4]), description)
    assert result.emotion == "fearful"
    assert result.context == "fear"
    assert result.confidence == 80
    assert result.method == "signal-matrix"
    assert result.behavior == "Tail: tucked."
    assert result.success


def test_synthesize_without_bucket(synthesizer):
    result = synthesizer.synthesize(None, ObservationDescription())
    assert result.emotion == "neutral"
    assert result.confidence == 30
    assert result.translation == UNCLEAR_TRANSLATION
    assert result.method == "no-match"
    assert result.behavior == ""


def test_fallback_result(synthesizer):
    result = synthesizer.fallback()
    assert result.confidence == 20
    assert result.emotion == "neutral"
    assert result.success
    assert result.recommendation == RECOMMENDATION_UNCERTAIN


def test_reward_recasts_the_result(synthesizer):
    description = ObservationDescription(movements="pawing at my leg")
    base = synthesizer.synthesize(None, description)
    result = synthesizer.reward(base, PAW_REQUEST)
    assert result.method == "reward-pattern"
    assert result.pattern == "paw_request"
    assert result.emotion == "demanding"
    assert result.confidence == 80
    assert result.context == REWARD_CONTEXT
    assert result.translation == PAW_REQUEST.translation
    assert result.recommendation == RECOMMENDATION_RELIABLE
    assert result.behavior == base.behavior


def test_reward_confidence_is_capped():
    synthesizer = InterpretationSynthesizer(EngineConfig(confidence_max=90))
    result = synthesizer.reward(synthesizer.fallback(), FULL_DEMAND)
    assert result.confidence == 90


@pytest.mark.parametrize("emotion, situation, expected", [
    ("fearful", {"place": "at the vet"}, ContextImpact.AMPLIFIES),
    ("fearful", {"lugar": "veterinario"}, ContextImpact.AMPLIFIES),
    ("playful", {"place": "home"}, ContextImpact.CONFIRMS),
    ("playful", {"lugar": "casa"}, ContextImpact.CONFIRMS),
    ("aggressive", {"interaction": "meeting an unfamiliar dog"}, ContextImpact.REQUIRES_CAUTION),
    ("aggressive", {"interaccion": "con perro desconocido"}, ContextImpact.REQUIRES_CAUTION),
    ("fearful", {"place": "home"}, ContextImpact.NEUTRAL),
    ("playful", {"place": "at the vet"}, ContextImpact.NEUTRAL),
    ("happy", {}, ContextImpact.NEUTRAL),
])
def test_context_impact(emotion, situation, expected):
    assert assess_context_impact(emotion, SituationContext.model_validate(situation)) == expected


def test_context_impact_without_situation():
    assert assess_context_impact("fearful", None) == ContextImpact.NEUTRAL
