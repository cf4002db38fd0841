"""Core components for the Tonal Tuner application."""

# Import interfaces for easier access
from .config import ConfigManager, TunerConfig
from .errors import AudioDeviceError, TunerError, TuningNotFoundError
from .interfaces import Clock, FrameCallback, IAudioInput

__all__ = [
    "AudioDeviceError",
    "Clock",
    "ConfigManager",
    "FrameCallback",
    "IAudioInput",
    "TunerConfig",
    "TunerError",
    "TuningNotFoundError",
]
