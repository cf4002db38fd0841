"""Tonal Tuner - real-time pitch detection and string tuning."""

from .core.config import TunerConfig
from .note_types import MatchResult, TunerReading, TuningState, TuningStatus
from .session import TuningSession
from .tunings import ReferenceTuning, get_tuning

__version__ = "0.1.0"

__all__ = [
    "MatchResult",
    "ReferenceTuning",
    "TunerConfig",
    "TunerReading",
    "TuningSession",
    "TuningState",
    "TuningStatus",
    "get_tuning",
]
