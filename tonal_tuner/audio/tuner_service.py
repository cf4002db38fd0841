"""Tuner service that connects audio input to a tuning session."""

from __future__ import annotations
from typing import Optional

import numpy as np

from ..core.events import TunerEvents
from ..core.interfaces import IAudioInput
from ..logger import get_logger
from ..note_types import TunerReading
from ..session import TuningSession
from .filters import LowPassFilter
from .frame_buffer import LatestFrame

logger = get_logger(__name__)


class TunerService:
    """Facade over the audio input, input filter and tuning session.

    The input pushes frames from its own thread into a single-slot buffer.
    The owner of the display loop calls ``poll`` once per tick, which
    analyses the newest frame (if any) and emits events.
    """

    def __init__(
        self,
        audio_input: IAudioInput,
        session: TuningSession,
        lowpass: Optional[LowPassFilter] = None,
        events: Optional[TunerEvents] = None,
    ) -> None:
        self._audio_input = audio_input
        self._session = session
        self._lowpass = lowpass
        self.events = events or TunerEvents()
        self._latest = LatestFrame()
        self._running = False

    @classmethod
    def from_config(cls, audio_input: IAudioInput, session: TuningSession) -> "TunerService":
        """Build a service, adding the low-pass filter the session config asks for."""
        cutoff = session.config.lowpass_cutoff_hz
        lowpass = None
        if cutoff is not None:
            if cutoff < audio_input.sample_rate / 2:
                lowpass = LowPassFilter(cutoff, audio_input.sample_rate)
            else:
                logger.warning(
                    f"Low-pass cutoff {cutoff} Hz is above Nyquist for "
                    f"{audio_input.sample_rate} Hz input, filter disabled"
                )
        return cls(audio_input, session, lowpass=lowpass)

    @property
    def session(self) -> TuningSession:
        return self._session

    @property
    def dropped_frames(self) -> int:
        return self._latest.dropped

    def is_running(self) -> bool:
        """True while started and the input is still delivering frames."""
        return self._running and self._audio_input.is_running()

    def start(self) -> None:
        if self._running:
            logger.warning("Tuner already running")
            return
        self._audio_input.start(self._on_frame)
        self._running = True
        logger.info("Tuner started")

    def stop(self) -> None:
        if not self._running:
            return
        self._audio_input.stop()
        self._running = False
        logger.info(f"Tuner stopped ({self._latest.dropped} frames dropped)")

    def select_target(self, note: Optional[str]) -> None:
        self._session.select_target(note)

    def _condition(self, frame: np.ndarray) -> np.ndarray:
        if self._lowpass is None:
            return frame
        rate = self._audio_input.sample_rate
        if self._lowpass.sample_rate != rate:
            # The input may have fallen back to another rate when it started
            logger.info(f"Rebuilding low-pass filter for {rate} Hz")
            self._lowpass = LowPassFilter(self._lowpass.cutoff_hz, rate)
        return self._lowpass.process(frame)

    def _on_frame(self, frame: np.ndarray, timestamp: float) -> None:
        # Runs on the capture thread; filtering here keeps the filter state continuous
        self._latest.put(self._condition(frame), timestamp)

    def process(self, frame: np.ndarray) -> Optional[TunerReading]:
        """Condition and analyse one frame synchronously, emitting a reading event."""
        return self._analyse(self._condition(frame))

    def _analyse(self, frame: np.ndarray) -> Optional[TunerReading]:
        reading = self._session.process_frame(frame, self._audio_input.sample_rate)
        if reading is not None:
            self.events.emit_reading(reading)
        return reading

    def poll(self) -> Optional[TunerReading]:
        """Process the newest captured frame, if one arrived since the last poll."""
        pending = self._latest.take()
        if pending is None:
            return None
        frame, _timestamp = pending
        return self._analyse(frame)
