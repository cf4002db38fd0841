import unittest

from tonal_tuner.feedback import ConfirmationCooldown
from tonal_tuner.note_matcher import NoteMatcher
from tonal_tuner.tuning_classifier import TuningClassifier
from tonal_tuner.tunings import UKULELE_STANDARD
from tonal_tuner.ui.needle import is_on_pitch, needle_angle


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class TestConfirmationCooldown(unittest.TestCase):
    def setUp(self):
        self.clock = FakeClock(100.0)
        self.cooldown = ConfirmationCooldown(2.0, clock=self.clock)

    def test_not_in_tune_never_fires(self):
        self.assertFalse(self.cooldown.should_fire(False))
        self.assertIsNone(self.cooldown.last_fired)

    def test_first_in_tune_fires(self):
        self.assertTrue(self.cooldown.should_fire(True))
        self.assertEqual(self.cooldown.last_fired, 100.0)

    def test_fires_once_per_window(self):
        fired = []
        # 30 frames per second for 5 seconds of continuous in-tune readings
        for _ in range(150):
            if self.cooldown.should_fire(True):
                fired.append(self.clock.now)
            self.clock.advance(1 / 30)
        self.assertEqual(len(fired), 3)
        for earlier, later in zip(fired, fired[1:]):
            self.assertGreater(later - earlier, 2.0)

    def test_window_is_strictly_greater(self):
        self.assertTrue(self.cooldown.should_fire(True))
        self.clock.advance(2.0)
        self.assertFalse(self.cooldown.should_fire(True))
        self.clock.advance(0.25)
        self.assertTrue(self.cooldown.should_fire(True))

    def test_reset(self):
        self.cooldown.should_fire(True)
        self.cooldown.reset()
        self.assertTrue(self.cooldown.should_fire(True))


class TestNeedleAngle(unittest.TestCase):
    def test_scales_by_two_degrees_per_hz(self):
        self.assertEqual(needle_angle(441.0, 440.0), 2.0)
        self.assertEqual(needle_angle(435.0, 440.0), -10.0)

    def test_clamped(self):
        self.assertEqual(needle_angle(500.0, 440.0), 45.0)
        self.assertEqual(needle_angle(300.0, 440.0), -45.0)


class TestOnPitch(unittest.TestCase):
    def test_strictly_inside_tolerance(self):
        self.assertTrue(is_on_pitch(0.5, 1.0))
        self.assertTrue(is_on_pitch(-0.99, 1.0))
        self.assertFalse(is_on_pitch(1.0, 1.0))
        self.assertFalse(is_on_pitch(-1.5, 1.0))

    def test_ignores_selected_string(self):
        # A4 played while C4 is selected: off target, but the needle is on pitch
        match = NoteMatcher(UKULELE_STANDARD).match(440.5)
        status = TuningClassifier().classify(match, selected_target="C4")
        self.assertFalse(status.is_in_tune)
        self.assertTrue(is_on_pitch(match.deviation, 1.0))


if __name__ == "__main__":
    unittest.main()
