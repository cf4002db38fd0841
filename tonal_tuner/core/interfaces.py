"""Defines the core interfaces for the Tonal Tuner application."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Callable

import numpy as np

# A monotonic time source returning seconds
Clock = Callable[[], float]

# Receives a mono frame and the capture timestamp
FrameCallback = Callable[[np.ndarray, float], None]


class IAudioInput(ABC):
    """Interface for audio input handlers."""

    @property
    @abstractmethod
    def sample_rate(self) -> int:
        """The sample rate frames are delivered at."""
        pass

    @abstractmethod
    def start(self, callback: FrameCallback) -> None:
        """Start capturing audio."""
        pass

    @abstractmethod
    def stop(self) -> None:
        """Stop capturing audio."""
        pass

    @abstractmethod
    def is_running(self) -> bool:
        """Check if audio is running."""
        pass
