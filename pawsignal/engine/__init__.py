"""
Engine module: matcher, priority detectors, classifier, synthesizer

Contains:
- SignalInterpreter: pipeline facade (interpret / match / classify / analyze)
- create_interpreter: build an interpreter from configuration
"""

from .matcher import SignalMatcher, MatchPolicy, match_policy, game_bonus
from .detectors import (
    PlayBowDetector,
    PlayBowDetection,
    RewardPattern,
    RewardPatternDetector,
    is_aggression_signal,
    is_play_bow_signal,
    is_tension_signal,
)
from .classifier import ConglomerateClassifier, ClassificationRule, CLASSIFICATION_RULES
from .synthesizer import InterpretationSynthesizer, assess_context_impact, format_behavior
from .interpreter import SignalInterpreter, create_interpreter

__all__ = [
    'SignalInterpreter',
    'create_interpreter',
    'SignalMatcher',
    'MatchPolicy',
    'match_policy',
    'game_bonus',
    'PlayBowDetector',
    'PlayBowDetection',
    'is_aggression_signal',
    'is_play_bow_signal',
    'is_tension_signal',
    'RewardPattern',
    'RewardPatternDetector',
    'ConglomerateClassifier',
    'ClassificationRule',
    'CLASSIFICATION_RULES',
    'InterpretationSynthesizer',
    'format_behavior',
    'assess_context_impact',
]
