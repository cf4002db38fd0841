"""Turns a note match into a discrete tuning verdict."""

from typing import Optional

from .note_types import MatchResult, TuningState, TuningStatus


class TuningClassifier:
    """Classifies a match as off-target, in tune, sharp or flat.

    Stateless: the result depends only on the arguments of ``classify``.
    """

    DEFAULT_TOLERANCE_HZ: float = 1.0

    def __init__(self, tolerance_hz: float = DEFAULT_TOLERANCE_HZ):
        self._tolerance = tolerance_hz

    @property
    def tolerance(self) -> float:
        return self._tolerance

    def classify(
        self, match: MatchResult, selected_target: Optional[str] = None
    ) -> TuningStatus:
        """Classify ``match`` against the user's selected string.

        Args:
            match: Result of matching the smoothed frequency
            selected_target: Note the user is tuning, or None to accept any note
        """
        if selected_target is not None and selected_target != match.note:
            return TuningStatus(
                TuningState.OFF_TARGET, match.note, selected_note=selected_target
            )
        if abs(match.deviation) < self._tolerance:
            return TuningStatus(TuningState.IN_TUNE, match.note)
        if match.deviation > 0:
            return TuningStatus(TuningState.SHARP, match.note)
        return TuningStatus(TuningState.FLAT, match.note)
