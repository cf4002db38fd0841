import unittest

import numpy as np

from tonal_tuner.detection import SilenceGate


class TestSilenceGate(unittest.TestCase):
    def setUp(self):
        self.gate = SilenceGate()

    def test_all_zeros_is_silent(self):
        self.assertFalse(self.gate.is_voiced(np.zeros(2048, dtype=np.float32)))

    def test_empty_frame_is_silent(self):
        self.assertFalse(self.gate.is_voiced(np.array([], dtype=np.float32)))

    def test_quiet_noise_is_silent(self):
        rng = np.random.default_rng(7)
        frame = rng.uniform(-0.005, 0.005, 2048)
        self.assertLess(SilenceGate.rms(frame), 0.01)
        self.assertFalse(self.gate.is_voiced(frame))

    def test_tone_is_voiced(self):
        t = np.arange(2048) / 44100
        frame = 0.1 * np.sin(2 * np.pi * 440 * t)
        self.assertTrue(self.gate.is_voiced(frame))

    def test_rms_around_threshold(self):
        # A constant frame has an RMS equal to its magnitude
        self.assertTrue(self.gate.is_voiced(np.full(64, 0.0101)))
        self.assertFalse(self.gate.is_voiced(np.full(64, 0.0099)))

    def test_custom_threshold(self):
        gate = SilenceGate(threshold=0.5)
        self.assertEqual(gate.threshold, 0.5)
        self.assertFalse(gate.is_voiced(np.full(64, 0.4)))


if __name__ == "__main__":
    unittest.main()
