"""Single-slot hand-off between the capture thread and the analysis loop."""

import threading
from typing import Optional, Tuple

import numpy as np


class LatestFrame:
    """Holds only the newest captured frame.

    A frame that is replaced before anyone reads it is dropped, so a slow
    consumer always analyses current audio instead of working through a
    backlog.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._frame: Optional[np.ndarray] = None
        self._timestamp = 0.0
        self._dropped = 0

    def put(self, frame: np.ndarray, timestamp: float) -> None:
        with self._lock:
            if self._frame is not None:
                self._dropped += 1
            # The capture library may reuse its buffer
            self._frame = np.array(frame, copy=True)
            self._timestamp = timestamp

    def take(self) -> Optional[Tuple[np.ndarray, float]]:
        """Return and clear the pending frame, or None if nothing new arrived."""
        with self._lock:
            if self._frame is None:
                return None
            frame, self._frame = self._frame, None
            return frame, self._timestamp

    @property
    def dropped(self) -> int:
        return self._dropped
