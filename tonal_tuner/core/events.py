"""Event system for Tonal Tuner components."""

from typing import Dict, List, Callable, Any
from enum import Enum, auto

from ..logger import get_logger

logger = get_logger(__name__)


class TunerEventType(Enum):
    """Event types emitted by the tuner service."""

    READING = auto()
    CONFIRMATION = auto()


class EventEmitter:
    """Event emitter for Tonal Tuner components."""

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners: Dict[Any, List[Callable]] = {}

    def on(self, event_type: Any, callback: Callable) -> None:
        """Register a callback for an event type.

        Args:
            event_type: Event type to listen for
            callback: Function to call when the event occurs
        """
        if event_type not in self._listeners:
            self._listeners[event_type] = []

        if callback not in self._listeners[event_type]:
            self._listeners[event_type].append(callback)
            logger.debug(f"Added listener for event {event_type}")

    def emit(self, event_type: Any, *args, **kwargs) -> None:
        """Emit an event.

        Listener errors are logged and do not stop other listeners.
        """
        for callback in list(self._listeners.get(event_type, [])):
            try:
                callback(*args, **kwargs)
            except Exception as e:
                logger.error(f"Error in event listener for {event_type}: {e}", exc_info=True)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._listeners = {}
        logger.debug("Cleared all event listeners")


class TunerEvents:
    """Event emitter specifically for tuner output."""

    def __init__(self):
        self._emitter = EventEmitter()

    def on_reading(self, callback: Callable) -> None:
        """Register ``callback(reading)`` for every frame with a pitch."""
        self._emitter.on(TunerEventType.READING, callback)

    def on_confirmation(self, callback: Callable) -> None:
        """Register ``callback(reading)`` for rate-limited in-tune confirmations."""
        self._emitter.on(TunerEventType.CONFIRMATION, callback)

    def emit_reading(self, reading) -> None:
        self._emitter.emit(TunerEventType.READING, reading)
        if reading.confirm:
            self._emitter.emit(TunerEventType.CONFIRMATION, reading)

    def clear(self) -> None:
        """Remove all event listeners."""
        self._emitter.clear()
