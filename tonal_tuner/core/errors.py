"""Exception types raised at the outer surfaces of Tonal Tuner.

The per-frame pitch pipeline never raises for numeric edge cases; it reports
"no estimate" instead. These exceptions cover setup problems only.
"""


class TunerError(Exception):
    """Base class for Tonal Tuner errors."""


class AudioDeviceError(TunerError):
    """Audio capture could not be started on any supported configuration."""


class TuningNotFoundError(TunerError, KeyError):
    """No reference tuning is registered under the requested name."""

    def __init__(self, name: str, available):
        self.name = name
        self.available = sorted(available)
        super().__init__(
            f"Unknown tuning '{name}'. Available: {', '.join(self.available)}"
        )

    def __str__(self) -> str:
        return self.args[0]
