import math

from .logger import get_logger
from .note_types import MatchResult
from .tunings import ReferenceTuning

# Get logger for this module
logger = get_logger(__name__)


class NoteMatcher:
    """
    Maps a frequency to the nearest note of a reference tuning and reports
    how far off it is, in Hz.
    """

    def __init__(self, tuning: ReferenceTuning):
        self._tuning = tuning

    @property
    def tuning(self) -> ReferenceTuning:
        return self._tuning

    def match(self, frequency: float) -> MatchResult:
        """
        Find the reference note closest to ``frequency``.

        Args:
            frequency: Observed frequency in Hz (e.g., 441.0)
        Returns:
            MatchResult with the closest note and the signed deviation
            (observed - target). On equal distances the note listed first
            in the tuning wins.
        """
        closest = None
        min_diff = math.inf
        for note, target in self._tuning.items():
            diff = abs(target - frequency)
            if diff < min_diff:
                min_diff = diff
                closest = note

        target = self._tuning[closest]
        result = MatchResult(
            note=closest,
            target_frequency=target,
            deviation=frequency - target,
        )
        logger.debug(
            f"🎵 MATCHER - {frequency:.2f} Hz → {closest} "
            f"({target:.2f} Hz, {result.deviation:+.2f} Hz)"
        )
        return result

    @staticmethod
    def cents_off(frequency: float, target: float) -> float:
        """Distance from ``target`` in cents. Display only; tuning decisions use Hz."""
        if frequency <= 0 or target <= 0:
            return 0.0
        return 1200.0 * math.log2(frequency / target)
