"""File-backed audio input, used for offline analysis and testing."""

from __future__ import annotations
import threading
import time
from typing import Iterator, Optional

import numpy as np
import soundfile as sf

from ..core.interfaces import FrameCallback, IAudioInput
from ..logger import get_logger

logger = get_logger(__name__)

DEFAULT_FRAME_SIZE = 2048


def to_mono(data: np.ndarray) -> np.ndarray:
    """Collapse a (frames x channels) block to a 1-D float32 frame."""
    if data.ndim > 1:
        data = data.mean(axis=1) if data.shape[1] > 1 else data[:, 0]
    return np.ascontiguousarray(data, dtype=np.float32)


class WavFileInput(IAudioInput):
    """Provides frames by reading from an audio file."""

    def __init__(
        self,
        file_path: str,
        frames_per_buffer: int = DEFAULT_FRAME_SIZE,
        loop: bool = False,
        gain: float = 1.0,
        realtime: bool = True,
    ):
        """
        Args:
            file_path: Path of any file soundfile can read (wav, flac, ogg)
            frames_per_buffer: Frame size in samples
            loop: Start over at the end of the file instead of stopping
            gain: Linear gain applied to every frame
            realtime: Pace delivery at the file's sample rate
        """
        self._file_path = file_path
        self._frames_per_buffer = frames_per_buffer
        self._loop = loop
        self._gain = gain
        self._realtime = realtime
        self._callback: Optional[FrameCallback] = None
        self._running = False
        self._thread: Optional[threading.Thread] = None

        with sf.SoundFile(self._file_path) as f:
            self._sample_rate = f.samplerate
            self._channels = f.channels
        logger.info(
            f"Opened {file_path}: {self._sample_rate} Hz, {self._channels} channel(s)"
        )

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def is_running(self) -> bool:
        return self._running

    def frames(self) -> Iterator[np.ndarray]:
        """Yield full mono frames from the file once, without pacing.

        A trailing partial frame is dropped.
        """
        with sf.SoundFile(self._file_path) as f:
            for block in f.blocks(
                blocksize=self._frames_per_buffer, dtype="float32", always_2d=True
            ):
                if len(block) < self._frames_per_buffer:
                    break
                yield to_mono(block) * self._gain

    def start(self, callback: FrameCallback) -> None:
        if self._running:
            return

        self._callback = callback
        self._running = True
        self._thread = threading.Thread(target=self._stream_data, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._running = False
        if self._thread and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until a non-looping file has been fully delivered."""
        if self._thread:
            self._thread.join(timeout)

    def _stream_data(self) -> None:
        period = self._frames_per_buffer / self._sample_rate
        try:
            while self._running:
                delivered = 0
                for frame in self.frames():
                    if not self._running:
                        break
                    delivered += 1
                    if self._callback:
                        self._callback(frame, time.monotonic())
                    if self._realtime:
                        time.sleep(period)
                if not self._loop or delivered == 0:
                    break
        except (OSError, RuntimeError) as e:
            logger.error(f"Error streaming {self._file_path}: {e}")
        finally:
            self._running = False
