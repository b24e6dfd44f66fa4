"""
Signal interpreter: the public entry point of the engine.

Pipeline:
    description -> play-bow detector (short-circuit) -> matcher
                -> conglomerate classifier -> synthesizer
                -> reward-pattern detector -> situation impact -> result

``interpret`` never raises for a well-formed description: failures degrade to
a low-confidence neutral result.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from pawsignal.engine.classifier import ConglomerateClassifier
from pawsignal.engine.detectors import PlayBowDetector, RewardPatternDetector
from pawsignal.engine.matcher import SignalMatcher
from pawsignal.engine.synthesizer import InterpretationSynthesizer, assess_context_impact
from pawsignal.engine_conf import EngineConfig, create_default_config, validate_config
from pawsignal.parsing import DescriptionParser
from pawsignal.signals.database import SignalDatabase
from pawsignal.signals.schema import (
    EmotionBucket,
    InterpretationResult,
    MatchedSignal,
    ObservationDescription,
    SituationContext,
)
from pawsignal.utils.logging import logger, set_log_level

DescriptionLike = Union[ObservationDescription, Dict[str, Any]]
SituationLike = Union[SituationContext, Dict[str, Any]]


class SignalInterpreter:
    """
    Multi-stage interpreter over an injected signal database.

    Attributes:
        database: Loaded SignalDatabase (read-only)
        config: EngineConfig
        detector: PlayBowDetector
        reward_detector: RewardPatternDetector
        matcher: SignalMatcher
        classifier: ConglomerateClassifier
        synthesizer: InterpretationSynthesizer
    """

    def __init__(self, database: SignalDatabase, config: Optional[EngineConfig] = None):
        self.config = config or EngineConfig()
        self.database = database.load()
        self.detector = PlayBowDetector()
        self.reward_detector = RewardPatternDetector()
        self.matcher = SignalMatcher(self.database)
        self.classifier = ConglomerateClassifier()
        self.synthesizer = InterpretationSynthesizer(self.config)

    @staticmethod
    def _coerce(description: DescriptionLike) -> ObservationDescription:
        if isinstance(description, ObservationDescription):
            return description
        return ObservationDescription.model_validate(description or {})

    def match(self, description: DescriptionLike) -> List[MatchedSignal]:
        """Ranked matched signals (diagnostics)."""
        return self.matcher.match(self._coerce(description))

    def classify(self, signals: Sequence[MatchedSignal]) -> Optional[EmotionBucket]:
        """Dominant bucket for a matched set, None when it is empty."""
        return self.classifier.classify(signals)

    def interpret(self, description: DescriptionLike, situation: Optional[SituationLike] = None) -> InterpretationResult:
        """
        Interpret one observation.

        Args:
            description: ObservationDescription or a dict with the same keys
            situation: Optional SituationContext (or dict, English or Spanish
                keys); only sets ``context_impact``

        Returns:
            InterpretationResult, ``success`` is always True
        """
        try:
            observation = self._coerce(description)
            result = self._interpret(observation)
            if situation is not None:
                if not isinstance(situation, SituationContext):
                    situation = SituationContext.model_validate(situation)
                impact = assess_context_impact(result.emotion, situation)
                result = result.model_copy(update={"context_impact": impact.value})
            return result
        except Exception:
            logger.exception("Interpretation failed, returning fallback result")
            return self.synthesizer.fallback()

    def _interpret(self, observation: ObservationDescription) -> InterpretationResult:
        detection = self.detector.detect(observation)
        if detection.is_play_bow:
            logger.info(f"Play bow detected (marker='{detection.marker}', cues={list(detection.cues)})")
            return self.synthesizer.play_bow(observation)
        skip = ()
        if detection.suppressed_by:
            logger.debug(f"Play bow suppressed by '{detection.suppressed_by}'")
            skip = ("play_bow",)

        signals = self.matcher.match(observation)
        bucket = self.classifier.classify(signals, skip=skip)
        result = self.synthesizer.synthesize(bucket, observation)
        logger.debug(f"Interpretation: emotion={result.emotion}, confidence={result.confidence}, signals={len(signals)}")

        pattern = self.reward_detector.detect(observation, result.emotion, result.context)
        if pattern is not None:
            logger.info(f"Reward pattern detected: {pattern.name}")
            result = self.synthesizer.reward(result, pattern)
        return result

    def analyze(self, generated_text: str, situation: Optional[SituationLike] = None) -> Dict[str, Any]:
        """
        Parse a raw captioning answer and interpret it.

        Args:
            generated_text: Raw JSON-ish answer of the captioning model
            situation: Optional situation, passed through to interpret()

        Returns:
            Result fields plus ``objective_description`` and ``analysis_method``
        """
        description = DescriptionParser.parse_model_output(generated_text)
        result = self.interpret(description, situation)
        return {
            "analysis_method": "signal-matrix",
            "objective_description": description.model_dump(),
            **result.model_dump(),
        }


def create_interpreter(
    config: Optional[EngineConfig] = None,
    database: Optional[SignalDatabase] = None,
) -> SignalInterpreter:
    """
    Build a ready interpreter.

    Args:
        config: Engine configuration; resolved with create_default_config() when None
        database: Pre-built database; loaded from ``config.signals_path`` when None

    Returns:
        SignalInterpreter

    Raises:
        ValueError: If the configuration is invalid
    """
    config = config or create_default_config()
    validate_config(config)
    set_log_level(config.log_level)
    if database is None:
        database = SignalDatabase.from_path(config.signals_path)
    return SignalInterpreter(database, config)
