"""Input conditioning applied to frames before pitch analysis."""

import numpy as np
from scipy import signal as scipy_signal

from ..logger import get_logger

logger = get_logger(__name__)


class LowPassFilter:
    """Streaming Butterworth low-pass filter.

    Filter state is carried from one frame to the next so consecutive frames
    behave like one continuous signal.
    """

    def __init__(self, cutoff_hz: float = 1000.0, sample_rate: int = 44100, order: int = 2):
        if not 0 < cutoff_hz < sample_rate / 2:
            raise ValueError(
                f"cutoff_hz must be between 0 and Nyquist ({sample_rate / 2} Hz), got {cutoff_hz}"
            )
        self.cutoff_hz = cutoff_hz
        self.sample_rate = sample_rate
        self._sos = scipy_signal.butter(
            order, cutoff_hz, btype="low", fs=sample_rate, output="sos"
        )
        self._zi = None
        logger.debug(f"Low-pass filter: order={order}, cutoff={cutoff_hz} Hz @ {sample_rate} Hz")

    def reset(self) -> None:
        self._zi = None

    def process(self, frame: np.ndarray) -> np.ndarray:
        samples = np.asarray(frame, dtype=np.float64)
        if samples.size == 0:
            return samples.astype(np.float32)
        if self._zi is None:
            # Start from rest: no step response on the first sample
            self._zi = np.zeros((self._sos.shape[0], 2))
        filtered, self._zi = scipy_signal.sosfilt(self._sos, samples, zi=self._zi)
        return filtered.astype(np.float32)
