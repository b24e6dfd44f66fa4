"""
Signal module: database and schemas

Contains:
- SignalDatabase: the static signal catalogue
- SignalRecord, ObservationDescription, MatchedSignal, EmotionBucket,
  Conglomerate, InterpretationResult, SituationContext: Pydantic models
"""

from .schema import (
    SignalRecord,
    ObservationDescription,
    MatchedSignal,
    EmotionBucket,
    Conglomerate,
    InterpretationResult,
    SituationContext,
)
from .database import SignalDatabase, parse_records, resolve_signals_path

__all__ = [
    'SignalDatabase',
    'parse_records',
    'resolve_signals_path',
    'SignalRecord',
    'ObservationDescription',
    'MatchedSignal',
    'EmotionBucket',
    'Conglomerate',
    'InterpretationResult',
    'SituationContext',
]
