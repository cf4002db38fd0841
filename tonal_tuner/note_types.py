"""Type definitions for the Tonal Tuner project."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class MatchResult:
    """The reference note closest to an observed frequency."""

    note: str  # Note name from the reference tuning (e.g., 'A4')
    target_frequency: float  # Reference frequency of that note in Hz
    deviation: float  # Observed minus target in Hz (positive = sharp)


class TuningState(Enum):
    OFF_TARGET = "off_target"
    IN_TUNE = "in_tune"
    SHARP = "sharp"
    FLAT = "flat"


@dataclass(frozen=True)
class TuningStatus:
    """Discrete tuning verdict for one frame."""

    state: TuningState
    note: str  # The detected (matched) note
    selected_note: Optional[str] = None  # Only set for OFF_TARGET

    @property
    def is_in_tune(self) -> bool:
        return self.state is TuningState.IN_TUNE

    def describe(self) -> str:
        """Short human readable message for display."""
        if self.state is TuningState.OFF_TARGET:
            return f"Detected: {self.note} - play {self.selected_note}"
        if self.state is TuningState.IN_TUNE:
            return f"{self.note} is in tune!"
        if self.state is TuningState.SHARP:
            return f"{self.note} - Too Sharp, loosen"
        return f"{self.note} - Too Flat, tighten"

    def __str__(self):
        return self.describe()


@dataclass(frozen=True)
class TunerReading:
    """Everything the display and feedback collaborators need for one frame."""

    status: TuningStatus
    frequency: float  # Smoothed frequency in Hz
    match: MatchResult
    needle_angle: float  # Degrees, clamped to +/-45
    confirm: bool  # Play the audible confirmation now (already rate limited)
    timestamp: float

    @property
    def target_frequency(self) -> float:
        return self.match.target_frequency

    @property
    def deviation(self) -> float:
        return self.match.deviation
