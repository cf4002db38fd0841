import unittest

from tonal_tuner.note_matcher import NoteMatcher
from tonal_tuner.note_types import MatchResult, TuningState
from tonal_tuner.tuning_classifier import TuningClassifier
from tonal_tuner.tunings import UKULELE_STANDARD


class TestTuningClassifier(unittest.TestCase):
    def setUp(self):
        self.matcher = NoteMatcher(UKULELE_STANDARD)
        self.classifier = TuningClassifier(tolerance_hz=1.0)

    def test_in_tune(self):
        status = self.classifier.classify(self.matcher.match(439.5))
        self.assertEqual(status.state, TuningState.IN_TUNE)
        self.assertEqual(status.note, "A4")
        self.assertTrue(status.is_in_tune)

    def test_exactly_at_tolerance_is_not_in_tune(self):
        status = self.classifier.classify(self.matcher.match(441.0))
        self.assertEqual(status.state, TuningState.SHARP)
        self.assertEqual(status.note, "A4")
        self.assertFalse(status.is_in_tune)

    def test_flat(self):
        status = self.classifier.classify(self.matcher.match(436.0))
        self.assertEqual(status.state, TuningState.FLAT)

    def test_selected_target_matches(self):
        status = self.classifier.classify(self.matcher.match(440.2), "A4")
        self.assertEqual(status.state, TuningState.IN_TUNE)

    def test_off_target_regardless_of_deviation(self):
        for deviation in (0.0, 0.5, -0.5, 5.0, -5.0):
            match = MatchResult("A4", 440.0, deviation)
            status = self.classifier.classify(match, "C4")
            self.assertEqual(status.state, TuningState.OFF_TARGET)
            self.assertEqual(status.note, "A4")
            self.assertEqual(status.selected_note, "C4")
            self.assertFalse(status.is_in_tune)

    def test_no_target_matches_any_note(self):
        status = self.classifier.classify(MatchResult("G4", 392.0, 0.0), None)
        self.assertEqual(status.state, TuningState.IN_TUNE)

    def test_descriptions(self):
        self.assertIn("play C4", self.classifier.classify(MatchResult("A4", 440.0, 0.0), "C4").describe())
        self.assertIn("in tune", self.classifier.classify(MatchResult("A4", 440.0, 0.0)).describe())
        self.assertIn("Sharp", self.classifier.classify(MatchResult("A4", 440.0, 3.0)).describe())
        self.assertIn("Flat", str(self.classifier.classify(MatchResult("A4", 440.0, -3.0))))


if __name__ == "__main__":
    unittest.main()
