"""Reference tuning tables: note name to target frequency in Hz."""

from types import MappingProxyType
from typing import Dict, Iterator, Mapping, Tuple

from .core.errors import TuningNotFoundError


class ReferenceTuning(Mapping):
    """Immutable, ordered mapping of note names to target frequencies.

    Iteration order is the order the strings were given in, which is also the
    order used to break ties when matching a frequency.
    """

    def __init__(self, name: str, notes: Mapping[str, float]):
        if not notes:
            raise ValueError(f"Tuning '{name}' must contain at least one note")
        table: Dict[str, float] = {}
        for note, frequency in notes.items():
            frequency = float(frequency)
            if not frequency > 0:
                raise ValueError(
                    f"Tuning '{name}': frequency for {note} must be positive, got {frequency}"
                )
            table[str(note)] = frequency
        self.name = name
        self._notes = MappingProxyType(table)

    def __getitem__(self, note: str) -> float:
        return self._notes[note]

    def __iter__(self) -> Iterator[str]:
        return iter(self._notes)

    def __len__(self) -> int:
        return len(self._notes)

    def __repr__(self) -> str:
        notes = ", ".join(f"{n}={f:.2f}" for n, f in self._notes.items())
        return f"ReferenceTuning({self.name!r}, {notes})"

    @property
    def notes(self) -> Tuple[str, ...]:
        return tuple(self._notes)


UKULELE_STANDARD = ReferenceTuning(
    "ukulele",
    {"G4": 392.00, "C4": 261.63, "E4": 329.63, "A4": 440.00},
)

UKULELE_LOW_G = ReferenceTuning(
    "ukulele-low-g",
    {"G3": 196.00, "C4": 261.63, "E4": 329.63, "A4": 440.00},
)

GUITAR_STANDARD = ReferenceTuning(
    "guitar",
    {
        "E2": 82.41,
        "A2": 110.00,
        "D3": 146.83,
        "G3": 196.00,
        "B3": 246.94,
        "E4": 329.63,
    },
)

BASS_STANDARD = ReferenceTuning(
    "bass",
    {"E1": 41.20, "A1": 55.00, "D2": 73.42, "G2": 98.00},
)

TUNINGS: Mapping[str, ReferenceTuning] = MappingProxyType(
    {
        t.name: t
        for t in (UKULELE_STANDARD, UKULELE_LOW_G, GUITAR_STANDARD, BASS_STANDARD)
    }
)


def get_tuning(name: str) -> ReferenceTuning:
    """Look up a built-in tuning by name (e.g. 'ukulele', 'guitar')."""
    try:
        return TUNINGS[name]
    except KeyError:
        raise TuningNotFoundError(name, TUNINGS.keys()) from None
