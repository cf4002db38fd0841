"""Pitch detection stages: silence gating, estimation and smoothing."""

from .autocorrelator import Autocorrelator
from .pitch_smoother import PitchSmoother
from .silence_gate import SilenceGate

__all__ = ["Autocorrelator", "PitchSmoother", "SilenceGate"]
