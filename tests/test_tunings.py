import unittest

from tonal_tuner.core.errors import TunerError, TuningNotFoundError
from tonal_tuner.tunings import TUNINGS, UKULELE_STANDARD, ReferenceTuning, get_tuning


class TestReferenceTuning(unittest.TestCase):
    def test_ukulele_table(self):
        self.assertEqual(UKULELE_STANDARD.notes, ("G4", "C4", "E4", "A4"))
        self.assertEqual(UKULELE_STANDARD["G4"], 392.00)
        self.assertEqual(UKULELE_STANDARD["C4"], 261.63)
        self.assertEqual(UKULELE_STANDARD["E4"], 329.63)
        self.assertEqual(UKULELE_STANDARD["A4"], 440.00)

    def test_immutable(self):
        with self.assertRaises(TypeError):
            UKULELE_STANDARD["A4"] = 442.0  # type: ignore[index]

    def test_source_mapping_is_copied(self):
        notes = {"A4": 440.0}
        tuning = ReferenceTuning("a", notes)
        notes["A4"] = 1.0
        self.assertEqual(tuning["A4"], 440.0)

    def test_rejects_empty_table(self):
        with self.assertRaises(ValueError):
            ReferenceTuning("empty", {})

    def test_rejects_non_positive_frequency(self):
        with self.assertRaises(ValueError):
            ReferenceTuning("bad", {"A4": 0})

    def test_lookup(self):
        for name, tuning in TUNINGS.items():
            self.assertIs(get_tuning(name), tuning)

    def test_unknown_tuning(self):
        with self.assertRaises(TuningNotFoundError) as ctx:
            get_tuning("banjo")
        self.assertIsInstance(ctx.exception, TunerError)
        self.assertIsInstance(ctx.exception, KeyError)
        self.assertIn("ukulele", str(ctx.exception))


if __name__ == "__main__":
    unittest.main()
