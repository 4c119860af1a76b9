"""
Event bus for observing camera updates.

The rig publishes what happened in a tick (a camera moved, manual control
was skipped) so that renderers, UI or tests can react without the
controllers knowing about them.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Events published by the camera rig."""

    CAMERA_MOVED = auto()
    CONTROL_SKIPPED = auto()
    ACTIVE_CAMERA_CHANGED = auto()


@dataclass
class Event:
    """Event data container."""

    type: EventType | str
    data: dict[str, Any]
    source: str | None = None


class EventBus:
    """
    Simple event bus for pub/sub pattern.

    Subscribers run synchronously inside :meth:`emit`, highest priority
    first. A failing subscriber is logged and does not stop the others.
    """

    def __init__(self, name: str = "default", max_history: int = 100):
        """
        Initialize event bus.

        Parameters
        ----------
        name : str
            Name of this event bus instance
        max_history : int
            Number of recent events kept for :meth:`get_history`
        """
        self.name = name
        self._subscribers: dict[EventType | str, list[tuple[int, Callable[[Event], None]]]] = {}
        self._event_history: list[Event] = []
        self._max_history = max_history
        logger.debug(f"Created EventBus: {name}")

    def subscribe(
        self,
        event_type: EventType | str,
        callback: Callable[[Event], None],
        priority: int = 0,
    ) -> None:
        """
        Subscribe to an event type.

        Parameters
        ----------
        event_type : EventType | str
            Event type to subscribe to
        callback : Callable[[Event], None]
            Function to call when event is emitted
        priority : int
            Priority for callback execution (higher = earlier)
        """
        callbacks = self._subscribers.setdefault(event_type, [])
        index = next(
            (i for i, (existing, _) in enumerate(callbacks) if priority > existing),
            len(callbacks),
        )
        callbacks.insert(index, (priority, callback))
        logger.debug(f"[{self.name}] Subscribed to {event_type} (priority={priority})")

    def unsubscribe(self, event_type: EventType | str, callback: Callable[[Event], None]) -> bool:
        """
        Unsubscribe from an event type.

        Returns
        -------
        bool
            True if callback was found and removed
        """
        callbacks = self._subscribers.get(event_type, [])
        for i, (_, cb) in enumerate(callbacks):
            if cb == callback:
                del callbacks[i]
                return True
        return False

    def emit(self, event_type: EventType | str, source: str | None = None, **data) -> Event:
        """
        Emit an event.

        Parameters
        ----------
        event_type : EventType | str
            Type of event to emit
        source : str | None
            Component emitting the event
        **data
            Event data as keyword arguments

        Returns
        -------
        Event
            The emitted event
        """
        event = Event(type=event_type, data=data, source=source)

        self._event_history.append(event)
        if len(self._event_history) > self._max_history:
            self._event_history.pop(0)

        for _, callback in list(self._subscribers.get(event_type, [])):
            try:
                callback(event)
            except Exception as e:
                logger.error(
                    f"[{self.name}] Error in event handler for {event_type}: {e}",
                    exc_info=True,
                )
        return event

    def get_history(
        self,
        event_type: (EventType | str) | None = None,
        limit: int | None = None,
    ) -> list[Event]:
        """Recent events, most recent last, optionally filtered by type."""
        history = self._event_history
        if event_type is not None:
            history = [e for e in history if e.type == event_type]
        if limit is not None:
            history = history[-limit:]
        return list(history)

    def clear_history(self) -> None:
        self._event_history.clear()
