"""Live audio input handling for the tuner."""

from __future__ import annotations
import time
from typing import List, Optional, ClassVar, Tuple, Dict, Any

import numpy as np
import sounddevice as sd

from ..core.errors import AudioDeviceError
from ..core.interfaces import FrameCallback, IAudioInput
from ..logger import get_logger
from .file_input import to_mono

logger = get_logger(__name__)


class SoundDeviceInput(IAudioInput):
    """Live audio input using the sounddevice library."""

    SAMPLE_RATE: ClassVar[int] = 44100  # Hz
    FRAMES_PER_BUFFER: ClassVar[int] = 2048  # One analysis frame per callback
    CHANNELS: ClassVar[int] = 1  # Mono audio
    FALLBACK_RATES: ClassVar[List[int]] = [48000, 44100, 22050, 16000]

    def __init__(
        self,
        device_id: Optional[int] = None,
        sample_rate: Optional[int] = None,
        frames_per_buffer: Optional[int] = None,
        channels: Optional[int] = None,
        device_name: Optional[str] = None,
    ) -> None:
        """Initialize the audio input handler.

        Args:
            device_id: Audio input device ID, or None for the default device
            sample_rate: Preferred sample rate in Hz (others are tried if it fails)
            frames_per_buffer: Frame size in samples delivered per callback
            channels: Number of channels to open (frames are mixed down to mono)
            device_name: Substring of a device name to look for when no ID is given
        """
        self._device_id = device_id
        self._device_name = device_name
        self._sample_rate = sample_rate or self.SAMPLE_RATE
        self._frames_per_buffer = frames_per_buffer or self.FRAMES_PER_BUFFER
        self._channels = channels or self.CHANNELS

        self._stream: Optional[sd.InputStream] = None
        self._callback: Optional[FrameCallback] = None
        self._running = False

    @property
    def sample_rate(self) -> int:
        return self._sample_rate

    def is_running(self) -> bool:
        return self._running

    def _find_device(self) -> Tuple[Optional[int], Optional[Dict[str, Any]]]:
        """Find an input device whose name contains ``device_name``.

        Returns:
            A tuple of (device_id, device_info) if found, (None, None) otherwise
        """
        if not self._device_name:
            return None, None
        try:
            devices = sd.query_devices()
        except sd.PortAudioError as e:
            logger.error(f"Error querying audio devices: {e}")
            return None, None
        for device_id, device in enumerate(devices):
            if (
                device["max_input_channels"] > 0
                and self._device_name.lower() in device["name"].lower()
            ):
                logger.info(f"Found input device: {device['name']}")
                return device_id, device
        logger.warning(f"No input device matching '{self._device_name}', using default")
        return None, None

    def _audio_callback(
        self,
        indata: np.ndarray,
        _frames: int,
        _time_info,
        status: sd.CallbackFlags,
    ) -> None:
        """Callback for processing audio data from the input stream.

        Note:
            This is called from the audio thread, so it should be fast
            and avoid any blocking operations to prevent audio glitches.
        """
        if status:
            logger.warning(f"Audio callback status: {status}")

        if self._callback:
            self._callback(to_mono(indata), time.monotonic())

    def start(self, callback: FrameCallback) -> None:
        """Start capturing audio and pass each frame to the callback.

        Raises:
            AudioDeviceError: If no sample rate could be opened on the device
        """
        if self._running:
            logger.warning("Audio input already running")
            return

        self._callback = callback
        if self._device_id is None:
            self._device_id, _ = self._find_device()

        rates = [self._sample_rate] + [
            r for r in self.FALLBACK_RATES if r != self._sample_rate
        ]
        for rate in rates:
            stream = None
            try:
                logger.info(f"Trying to start audio input with sample rate: {rate} Hz")
                stream = sd.InputStream(
                    device=self._device_id,
                    samplerate=rate,
                    blocksize=self._frames_per_buffer,
                    channels=self._channels,
                    dtype="float32",
                    callback=self._audio_callback,
                )
                stream.start()
            except (sd.PortAudioError, ValueError) as e:
                logger.warning(f"Failed to start audio input with sample rate {rate} Hz: {e}")
                if stream is not None:
                    try:
                        stream.close()
                    except sd.PortAudioError as close_error:
                        logger.warning(f"Error closing failed stream: {close_error}")
                continue

            self._stream = stream
            self._sample_rate = rate
            self._running = True
            logger.info(f"Audio input started: device={self._device_id}, rate={rate} Hz")
            return

        raise AudioDeviceError(
            f"Could not start audio input on device {self._device_id} "
            f"with any of {rates} Hz"
        )

    def stop(self) -> None:
        """Stop capturing audio."""
        if not self._running:
            return

        try:
            if self._stream:
                self._stream.stop()
                self._stream.close()
        except sd.PortAudioError as e:
            logger.error(f"Error stopping audio input: {e}")
        finally:
            self._stream = None
            self._running = False
            logger.info("Audio input stopped")
