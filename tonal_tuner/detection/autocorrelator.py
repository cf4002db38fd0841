"""Time-domain autocorrelation pitch estimation."""

import math
from typing import Optional

import numpy as np

from ..logger import get_logger

logger = get_logger(__name__)


class Autocorrelator:
    """Estimates the fundamental frequency of a voiced frame.

    The frame is first trimmed so that it starts and ends near a low-amplitude
    sample, which keeps onset and release transients out of the correlation.
    The autocorrelation is then walked past the zero-lag peak to its first
    local minimum, and the strongest lag after that point is taken as the
    period in samples.

    Silence gating is the caller's job; this class only guards against
    numerically degenerate frames and returns ``None`` for them.
    """

    DEFAULT_EDGE_THRESHOLD: float = 0.2

    def __init__(self, edge_threshold: float = DEFAULT_EDGE_THRESHOLD):
        self._edge_threshold = edge_threshold

    @property
    def edge_threshold(self) -> float:
        return self._edge_threshold

    def trim_bounds(self, frame: np.ndarray) -> tuple:
        """Return ``(start, end)`` of the steady-state region of ``frame``.

        ``start`` is the first sample in the first half below the edge
        threshold (0 if none is), ``end`` the last such sample scanning back
        through the second half (``len - 1`` if none is). The region is
        ``frame[start:end]``.
        """
        size = len(frame)
        half = math.ceil(size / 2)
        quiet = np.abs(frame) < self._edge_threshold

        start = 0
        head = np.flatnonzero(quiet[:half])
        if head.size:
            start = int(head[0])

        end = size - 1
        # Scan back from the last sample through offsets 1..half-1
        tail = np.flatnonzero(quiet[::-1][: half - 1])
        if tail.size:
            end = size - 1 - int(tail[0])

        return start, end

    def correlate(self, samples: np.ndarray) -> np.ndarray:
        """Unnormalized autocorrelation for lags ``0..len(samples) - 1``.

        Direct O(M^2) evaluation. Subclasses may replace this with a faster
        method as long as the lag layout stays the same.
        """
        size = len(samples)
        return np.correlate(samples, samples, mode="full")[size - 1:]

    def estimate(self, frame: np.ndarray, sample_rate: float) -> Optional[float]:
        """Estimate the pitch of ``frame`` in Hz, or ``None`` if there is none.

        Args:
            frame: Mono samples in [-1.0, 1.0]
            sample_rate: Sample rate of ``frame`` in Hz

        Returns:
            Frequency in Hz within (0, sample_rate], or None for degenerate input
        """
        samples = np.asarray(frame, dtype=np.float64)
        if samples.ndim != 1 or not np.all(np.isfinite(samples)):
            logger.debug("Rejecting frame with bad shape or non-finite samples")
            return None

        start, end = self.trim_bounds(samples)
        trimmed = samples[start:end]
        if len(trimmed) < 2:
            logger.debug(f"Trimmed region too short ({len(trimmed)} samples)")
            return None

        corr = self.correlate(trimmed)

        # First lag where the correlation stops falling
        rising = np.flatnonzero(corr[:-1] <= corr[1:])
        if rising.size == 0:
            logger.debug("No local minimum in autocorrelation")
            return None
        dip = int(rising[0])

        period = dip + int(np.argmax(corr[dip:]))
        if period == 0:
            logger.debug("Autocorrelation peak at zero lag")
            return None

        frequency = sample_rate / period
        logger.debug(
            f"Estimated {frequency:.2f} Hz (period={period}, trim={start}:{end})"
        )
        return frequency
