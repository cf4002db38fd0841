"""Display front-ends for Tonal Tuner."""

from .needle import is_on_pitch, needle_angle

__all__ = ["is_on_pitch", "needle_angle"]
