"""Per-frame tuning pipeline and the state it carries between frames."""

from __future__ import annotations
import threading
import time
from typing import Optional

import numpy as np

from .core.config import TunerConfig
from .core.interfaces import Clock
from .detection import Autocorrelator, PitchSmoother, SilenceGate
from .feedback import ConfirmationCooldown
from .logger import get_logger
from .note_matcher import NoteMatcher
from .note_types import TunerReading
from .tunings import ReferenceTuning, get_tuning
from .tuning_classifier import TuningClassifier
from .ui.needle import needle_angle

logger = get_logger(__name__)


class TuningSession:
    """Owns the state of one tuning session.

    The selected string, the pitch history and the confirmation cooldown
    live here. ``select_target`` and ``process_frame`` are the only methods
    that change them, and both hold the session lock so that frames are
    analysed one at a time.
    """

    def __init__(
        self,
        tuning: Optional[ReferenceTuning] = None,
        config: Optional[TunerConfig] = None,
        clock: Clock = time.monotonic,
        estimator: Optional[Autocorrelator] = None,
    ) -> None:
        """Initialize the session.

        Args:
            tuning: Reference tuning, or None to use the one named in ``config``
            config: Pipeline parameters, or None for defaults
            clock: Monotonic time source used for the confirmation cooldown
            estimator: Pitch estimator, or None for an Autocorrelator built from ``config``
        """
        self._config = config or TunerConfig()
        self._tuning = tuning or get_tuning(self._config.tuning)
        self._clock = clock

        self._gate = SilenceGate(self._config.gate_threshold)
        self._estimator = estimator or Autocorrelator(self._config.edge_threshold)
        self._smoother = PitchSmoother(self._config.history_size)
        self._matcher = NoteMatcher(self._tuning)
        self._classifier = TuningClassifier(self._config.tolerance_hz)
        self._cooldown = ConfirmationCooldown(self._config.cooldown_seconds, clock)

        self._selected_target: Optional[str] = None
        self._last_reading: Optional[TunerReading] = None
        self._lock = threading.Lock()

        logger.info(
            f"Tuning session ready: tuning={self._tuning.name}, "
            f"notes={list(self._tuning)}, tolerance={self._config.tolerance_hz} Hz"
        )

    @property
    def tuning(self) -> ReferenceTuning:
        return self._tuning

    @property
    def config(self) -> TunerConfig:
        return self._config

    @property
    def selected_target(self) -> Optional[str]:
        return self._selected_target

    @property
    def last_reading(self) -> Optional[TunerReading]:
        """Most recent reading; stays put across silent or degenerate frames."""
        return self._last_reading

    @property
    def history_length(self) -> int:
        return len(self._smoother)

    def select_target(self, note: Optional[str]) -> None:
        """Select the string to tune, or None to accept any note.

        Always clears the pitch history so the previous string's pitch does
        not leak into the new average.

        Raises:
            ValueError: If ``note`` is not part of the session's tuning
        """
        if note is not None and note not in self._tuning:
            raise ValueError(
                f"Note '{note}' is not in tuning '{self._tuning.name}' "
                f"({', '.join(self._tuning)})"
            )
        with self._lock:
            self._selected_target = note
            self._smoother.reset()
        logger.info(f"Selected target: {note or 'any note'}")

    def process_frame(
        self, frame: np.ndarray, sample_rate: float
    ) -> Optional[TunerReading]:
        """Run one frame through the pipeline.

        Args:
            frame: Mono samples in [-1.0, 1.0]
            sample_rate: Sample rate of ``frame`` in Hz

        Returns:
            A TunerReading, or None if the frame was silent or had no
            usable pitch (callers keep showing ``last_reading``)
        """
        with self._lock:
            if not self._gate.is_voiced(frame):
                return None

            estimate = self._estimator.estimate(frame, sample_rate)
            if estimate is None:
                return None

            frequency = self._smoother.push(estimate)
            match = self._matcher.match(frequency)
            status = self._classifier.classify(match, self._selected_target)
            confirm = self._cooldown.should_fire(status.is_in_tune)

            reading = TunerReading(
                status=status,
                frequency=frequency,
                match=match,
                needle_angle=needle_angle(frequency, match.target_frequency),
                confirm=confirm,
                timestamp=self._clock(),
            )
            self._last_reading = reading

        logger.debug(
            f"{estimate:.2f} Hz raw, {frequency:.2f} Hz smoothed → {status.describe()}"
        )
        return reading
