"""Needle geometry shared by the display front-ends."""

NEEDLE_RANGE_DEGREES: float = 45.0
DEGREES_PER_HZ: float = 2.0


def needle_angle(frequency: float, target: float) -> float:
    """Needle deflection in degrees, clamped to +/-45 (positive = sharp)."""
    angle = (frequency - target) * DEGREES_PER_HZ
    return max(-NEEDLE_RANGE_DEGREES, min(NEEDLE_RANGE_DEGREES, angle))


def is_on_pitch(deviation: float, tolerance_hz: float) -> bool:
    """Whether the needle shows on-pitch, whichever string is selected."""
    return abs(deviation) < tolerance_hz
