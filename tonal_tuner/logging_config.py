"""Centralized logging configuration for Tonal Tuner.

This module provides a consistent way to configure logging across the application.
"""

import logging
import sys
from typing import Optional

# Log levels for different modules
MODULE_LOG_LEVELS = {
    # Core modules
    "tonal_tuner": logging.INFO,
    "tonal_tuner.main": logging.INFO,
    "tonal_tuner.session": logging.INFO,
    "tonal_tuner.core": logging.INFO,
    # Pitch pipeline
    "tonal_tuner.detection": logging.INFO,  # Set to DEBUG for per-frame estimates
    "tonal_tuner.note_matcher": logging.INFO,
    "tonal_tuner.audio": logging.INFO,
    "tonal_tuner.ui": logging.WARNING,  # UI modules often noisy, keep at WARNING
    # Libraries/third-party
    "PIL": logging.ERROR,
    # Root logger
    "": logging.ERROR,
}

# Shared console handler
_console_handler: Optional[logging.Handler] = None


def setup_logging(level: Optional[str] = None) -> None:
    """Set up logging configuration for the application.

    Args:
        level: If provided, override all 'tonal_tuner' log levels with this level (e.g., "DEBUG").
    """
    global _console_handler

    # Create a single, shared console handler if it doesn't exist
    if _console_handler is None:
        _console_handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
        _console_handler.setFormatter(formatter)

    # Determine log levels
    log_levels = MODULE_LOG_LEVELS.copy()
    if level:
        numeric_level = logging.getLevelName(level.upper())
        if isinstance(numeric_level, int):
            for module_name in log_levels:
                if module_name.startswith("tonal_tuner"):
                    log_levels[module_name] = numeric_level
        else:
            logging.getLogger(__name__).error(f"Invalid log level: {level}")

    # Apply package-level levels; child loggers propagate up to these
    for module_name, module_level in log_levels.items():
        logger = logging.getLogger(module_name if module_name else "")
        logger.setLevel(module_level)

        for handler in logger.handlers[:]:
            logger.removeHandler(handler)

    # Only the root of our package and the true root get the handler,
    # everything else propagates to them.
    package_logger = logging.getLogger("tonal_tuner")
    package_logger.addHandler(_console_handler)
    package_logger.propagate = False
    logging.getLogger("").addHandler(_console_handler)

    logging.getLogger("tonal_tuner").info("Logging configuration complete")
