import unittest
from unittest import mock

import numpy as np
import pytest

try:
    from tonal_tuner.audio import audio_input
except OSError:  # PortAudio library not installed
    pytest.skip("sounddevice needs the PortAudio library", allow_module_level=True)

from tonal_tuner.core.errors import AudioDeviceError


class TestSoundDeviceInput(unittest.TestCase):
    def test_failed_start_closes_every_stream(self):
        with mock.patch.object(audio_input.sd, "InputStream") as stream_cls:
            stream = stream_cls.return_value
            stream.start.side_effect = audio_input.sd.PortAudioError("Invalid sample rate")

            device = audio_input.SoundDeviceInput(device_id=0)
            with self.assertRaises(AudioDeviceError):
                device.start(lambda frame, timestamp: None)

        self.assertEqual(stream_cls.call_count, 4)
        self.assertEqual(stream.close.call_count, 4)
        self.assertFalse(device.is_running())

    def test_falls_back_to_next_rate(self):
        good = mock.MagicMock()
        bad = mock.MagicMock()
        bad.start.side_effect = audio_input.sd.PortAudioError("Invalid sample rate")
        with mock.patch.object(audio_input.sd, "InputStream", side_effect=[bad, good]):
            device = audio_input.SoundDeviceInput(device_id=0, sample_rate=44100)
            device.start(lambda frame, timestamp: None)

        bad.close.assert_called_once()
        good.close.assert_not_called()
        self.assertTrue(device.is_running())
        self.assertEqual(device.sample_rate, 48000)

        device.stop()
        good.stop.assert_called_once()
        good.close.assert_called_once()
        self.assertFalse(device.is_running())

    def test_callback_receives_mono_frames(self):
        received = []
        with mock.patch.object(audio_input.sd, "InputStream"):
            device = audio_input.SoundDeviceInput(device_id=0)
            device.start(lambda frame, timestamp: received.append(frame))
        device._audio_callback(np.ones((4, 2), dtype=np.float32), 4, None, None)
        self.assertEqual(len(received), 1)
        np.testing.assert_array_equal(received[0], np.ones(4, dtype=np.float32))


if __name__ == "__main__":
    unittest.main()
