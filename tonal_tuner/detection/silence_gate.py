import numpy as np

from ..logger import get_logger

logger = get_logger(__name__)


class SilenceGate:
    """Decides whether a frame carries enough energy to be worth analyzing."""

    DEFAULT_THRESHOLD: float = 0.01

    def __init__(self, threshold: float = DEFAULT_THRESHOLD):
        self._threshold = threshold

    @property
    def threshold(self) -> float:
        return self._threshold

    @staticmethod
    def rms(frame: np.ndarray) -> float:
        """Root-mean-square level of a frame (0.0 for an empty frame)."""
        samples = np.asarray(frame, dtype=np.float64)
        if samples.size == 0:
            return 0.0
        return float(np.sqrt(np.mean(np.square(samples))))

    def is_voiced(self, frame: np.ndarray) -> bool:
        level = self.rms(frame)
        voiced = level >= self._threshold
        if not voiced:
            logger.debug(f"Frame gated as silence (rms={level:.5f} < {self._threshold})")
        return voiced
