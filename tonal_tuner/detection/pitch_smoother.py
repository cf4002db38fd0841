from collections import deque
from typing import Deque, Optional

from ..logger import get_logger

logger = get_logger(__name__)


class PitchSmoother:
    """
    Rolling mean over the most recent pitch estimates.
    """

    DEFAULT_HISTORY_SIZE: int = 5

    def __init__(self, history_size: int = DEFAULT_HISTORY_SIZE):
        if history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {history_size}")
        self._history: Deque[float] = deque(maxlen=history_size)

    def __len__(self) -> int:
        return len(self._history)

    @property
    def capacity(self) -> int:
        return self._history.maxlen

    @property
    def mean(self) -> Optional[float]:
        """Mean of the current history, or None when it is empty."""
        if not self._history:
            return None
        # Averaging offsets from the first entry keeps a constant stream exact
        first = self._history[0]
        return first + sum(x - first for x in self._history) / len(self._history)

    def push(self, estimate: float) -> float:
        """Add an estimate, evicting the oldest if full, and return the new mean."""
        self._history.append(estimate)
        return self.mean

    def reset(self) -> None:
        logger.debug(f"Clearing pitch history ({len(self._history)} estimates)")
        self._history.clear()
