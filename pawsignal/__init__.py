"""
PawSignal: body-language signal interpretation for pet photos and videos.

Public interface:
- create_interpreter / SignalInterpreter: interpret, match, classify, analyze
- SignalDatabase: the static signal catalogue
- ObservationDescription, InterpretationResult: engine input and output
"""

from pawsignal.config import Emotion, ObservationField
from pawsignal.signals import (
    SignalDatabase,
    SignalRecord,
    ObservationDescription,
    MatchedSignal,
    EmotionBucket,
    InterpretationResult,
)
from pawsignal.engine import SignalInterpreter, create_interpreter
from pawsignal.engine_conf import EngineConfig, load_config
from pawsignal.parsing import DescriptionParser, format_report

__version__ = "0.1.0"

__all__ = [
    'Emotion',
    'ObservationField',
    'SignalDatabase',
    'SignalRecord',
    'ObservationDescription',
    'MatchedSignal',
    'EmotionBucket',
    'InterpretationResult',
    'SignalInterpreter',
    'create_interpreter',
    'EngineConfig',
    'load_config',
    'DescriptionParser',
    'format_report',
]
