"""Audio capture, conditioning and the tuner service.

Live capture lives in ``tonal_tuner.audio.audio_input`` and is imported on
demand, since sounddevice needs the PortAudio system library.
"""

from .file_input import WavFileInput
from .filters import LowPassFilter
from .frame_buffer import LatestFrame
from .tuner_service import TunerService

__all__ = ["LatestFrame", "LowPassFilter", "TunerService", "WavFileInput"]
