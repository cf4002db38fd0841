"""Configuration management for Tonal Tuner components."""

from dataclasses import asdict, dataclass, fields
from typing import Dict, Any, Optional
import json
import os
from pathlib import Path

from ..logger import get_logger

logger = get_logger(__name__)


def _as_float(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{name} must be a number, got {value!r}")
    return float(value)


def _as_int(name: str, value: Any) -> int:
    """Accept whole numbers, including values like 5.0 read back from JSON."""
    number = _as_float(name, value)
    if not number.is_integer():
        raise ValueError(f"{name} must be a whole number, got {value!r}")
    return int(number)


@dataclass
class TunerConfig:
    """Named, overridable parameters of the tuning pipeline."""

    gate_threshold: float = 0.01  # RMS below this is treated as silence
    edge_threshold: float = 0.2  # Amplitude used to trim onset/offset transients
    history_size: int = 5  # Estimates averaged by the smoother
    tolerance_hz: float = 1.0  # |deviation| strictly below this is in tune
    cooldown_ms: float = 2000.0  # Minimum gap between audible confirmations
    frame_size: int = 2048
    sample_rate: int = 44100
    lowpass_cutoff_hz: Optional[float] = 1000.0  # None disables the input filter
    tuning: str = "ukulele"

    def __post_init__(self):
        for name in ("history_size", "frame_size", "sample_rate"):
            setattr(self, name, _as_int(name, getattr(self, name)))
        for name in ("gate_threshold", "edge_threshold", "tolerance_hz", "cooldown_ms"):
            setattr(self, name, _as_float(name, getattr(self, name)))
        if self.lowpass_cutoff_hz is not None:
            self.lowpass_cutoff_hz = _as_float("lowpass_cutoff_hz", self.lowpass_cutoff_hz)
        if not isinstance(self.tuning, str):
            raise ValueError(f"tuning must be a name, got {self.tuning!r}")

        if self.gate_threshold < 0:
            raise ValueError(f"gate_threshold must be >= 0, got {self.gate_threshold}")
        if self.edge_threshold <= 0:
            raise ValueError(f"edge_threshold must be > 0, got {self.edge_threshold}")
        if self.history_size < 1:
            raise ValueError(f"history_size must be >= 1, got {self.history_size}")
        if self.tolerance_hz <= 0:
            raise ValueError(f"tolerance_hz must be > 0, got {self.tolerance_hz}")
        if self.cooldown_ms < 0:
            raise ValueError(f"cooldown_ms must be >= 0, got {self.cooldown_ms}")
        if self.frame_size < 2:
            raise ValueError(f"frame_size must be >= 2, got {self.frame_size}")
        if self.sample_rate <= 0:
            raise ValueError(f"sample_rate must be > 0, got {self.sample_rate}")
        if self.lowpass_cutoff_hz is not None and not (
            0 < self.lowpass_cutoff_hz < self.sample_rate / 2
        ):
            raise ValueError(
                f"lowpass_cutoff_hz must be between 0 and Nyquist "
                f"({self.sample_rate / 2} Hz), got {self.lowpass_cutoff_hz}"
            )

    @property
    def cooldown_seconds(self) -> float:
        return self.cooldown_ms / 1000.0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "TunerConfig":
        """Build a config from a dict, ignoring keys that are not config fields."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {sorted(unknown)}")
        return cls(**{k: v for k, v in values.items() if k in known})

    def with_overrides(self, **overrides) -> "TunerConfig":
        """Return a copy with every non-None override applied."""
        values = self.to_dict()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return TunerConfig.from_dict(values)


class ConfigManager:
    """Configuration manager for Tonal Tuner components."""

    TUNER: str = "tuner"

    def __init__(self, config_dir: Optional[str] = None):
        """Initialize the configuration manager.

        Args:
            config_dir: Directory to store configuration files, or None to use default
        """
        if config_dir is None:
            # Use ~/.config/tonal_tuner by default
            home = os.path.expanduser("~")
            config_dir = os.path.join(home, ".config", "tonal_tuner")

        self.config_dir = Path(config_dir)
        self.config_dir.mkdir(parents=True, exist_ok=True)

        # Default configurations
        self.default_configs = {
            self.TUNER: TunerConfig().to_dict(),
        }

        # Load existing configurations or create default ones
        self.configs = {}
        for config_name, default_config in self.default_configs.items():
            self.configs[config_name] = self.load_config(config_name, default_config)

    def load_config(self, name: str, default_config: Dict[str, Any]) -> Dict[str, Any]:
        """Load configuration from file or create default.

        Args:
            name: Configuration name
            default_config: Default configuration to use if file doesn't exist

        Returns:
            Configuration dictionary
        """
        config_file = self.config_dir / f"{name}.json"

        if config_file.exists():
            try:
                with open(config_file, "r") as f:
                    config = json.load(f)
                logger.info(f"Loaded configuration from {config_file}")
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Error loading configuration from {config_file}: {e}")
                return default_config.copy()

            # Ensure all default keys are present
            for key, value in default_config.items():
                if key not in config:
                    config[key] = value

            return config

        # Create default configuration
        config = default_config.copy()
        self.save_config(name, config)
        return config

    def save_config(self, name: str, config: Dict[str, Any]) -> bool:
        """Save configuration to file.

        Args:
            name: Configuration name
            config: Configuration dictionary

        Returns:
            True if saved successfully, False otherwise
        """
        config_file = self.config_dir / f"{name}.json"

        try:
            with open(config_file, "w") as f:
                json.dump(config, f, indent=2)
            logger.info(f"Saved configuration to {config_file}")
            return True
        except OSError as e:
            logger.error(f"Error saving configuration to {config_file}: {e}")
            return False

    def get_config(self, name: str) -> Dict[str, Any]:
        """Get configuration by name."""
        return self.configs.get(name, {}).copy()

    def get_tuner_config(self) -> TunerConfig:
        """Get the tuner configuration as a validated TunerConfig."""
        return TunerConfig.from_dict(self.get_config(self.TUNER))

    def update_config(self, name: str, updates: Dict[str, Any]) -> bool:
        """Update configuration and save to file.

        Args:
            name: Configuration name
            updates: Dictionary of updates to apply

        Returns:
            True if updated and saved successfully, False otherwise
        """
        if name not in self.configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        if name == self.TUNER:
            # Reject values TunerConfig would not accept before persisting them
            TunerConfig.from_dict({**self.configs[name], **updates})

        self.configs[name].update(updates)
        return self.save_config(name, self.configs[name])

    def reset_config(self, name: str) -> bool:
        """Reset configuration to default.

        Args:
            name: Configuration name

        Returns:
            True if reset successfully, False otherwise
        """
        if name not in self.default_configs:
            logger.error(f"Unknown configuration: {name}")
            return False

        self.configs[name] = self.default_configs[name].copy()
        return self.save_config(name, self.configs[name])
