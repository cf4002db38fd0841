"""Rate limiting for the audible in-tune confirmation."""

import time
from typing import Optional

from .core.interfaces import Clock
from .logger import get_logger

logger = get_logger(__name__)


class ConfirmationCooldown:
    """Lets an in-tune confirmation through at most once per cooldown window.

    Args:
        cooldown_seconds: Minimum time between two confirmations
        clock: Monotonic time source in seconds, injectable for tests
    """

    def __init__(self, cooldown_seconds: float = 2.0, clock: Clock = time.monotonic):
        self._cooldown = cooldown_seconds
        self._clock = clock
        self._last_fired: Optional[float] = None

    @property
    def last_fired(self) -> Optional[float]:
        return self._last_fired

    def should_fire(self, in_tune: bool) -> bool:
        """Return True if a confirmation should be played for this frame."""
        if not in_tune:
            return False
        now = self._clock()
        if self._last_fired is None or now - self._last_fired > self._cooldown:
            self._last_fired = now
            logger.debug(f"Confirmation fired at {now:.3f}")
            return True
        return False

    def reset(self) -> None:
        self._last_fired = None
