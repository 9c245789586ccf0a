"""
Event publishing for the patience engine.

A game announces every change it makes to its table and selection as one of
the `EngineEventType` members, together with a payload dictionary. Listeners
subscribe to a single event type or to all of them. The engine never waits on
a listener: a handler that raises is logged and the remaining handlers still
run.
"""

import itertools
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

logger = logging.getLogger("patience.events")


class EngineEventType(Enum):
    """
    Event types published by the patience engine.
    """

    # Game lifecycle
    GAME_CREATED = "game_created"
    GAME_STARTED = "game_started"
    GAME_CLEARED = "game_cleared"

    # Card events
    CARD_DEALT = "card_dealt"
    CARD_REVEALED = "card_revealed"
    CARDS_MOVED = "cards_moved"
    CARDS_DRAWN = "cards_drawn"
    STOCK_RECYCLED = "stock_recycled"

    # Player cursor
    SELECTION_CHANGED = "selection_changed"

    # Error events
    ACTION_REJECTED = "action_rejected"
    ACTION_FAILED = "action_failed"


class EventPriority(Enum):
    """Priority levels for event handlers. Higher priorities run first."""

    LOW = 0
    NORMAL = 1
    HIGH = 2
    CRITICAL = 3


EventType = Union[EngineEventType, str]
EventHandler = Callable[[Dict[str, Any]], None]
AnyEventHandler = Callable[[EngineEventType, Dict[str, Any]], None]


def resolve_event_type(event_type: EventType) -> EngineEventType:
    """
    Accept an `EngineEventType` or the name of one.

    >>> resolve_event_type("CARDS_MOVED")
    <EngineEventType.CARDS_MOVED: 'cards_moved'>

    Raises:
        ValueError: If the name is not an engine event
    """
    if isinstance(event_type, EngineEventType):
        return event_type
    if isinstance(event_type, str) and event_type in EngineEventType.__members__:
        return EngineEventType[event_type]
    raise ValueError(f"Unknown engine event: {event_type!r}")


@dataclass(frozen=True)
class _Listener:
    callback: Callable
    priority: EventPriority
    sequence: int

    def order(self) -> Tuple[int, int]:
        return (-self.priority.value, self.sequence)


class EventEmitter:
    """
    Delivers engine events to their subscribers.

    Handlers for one event type run in priority order, and in subscription
    order within a priority. Handlers subscribed to every event run after
    them. Subscribing and unsubscribing are thread-safe; handlers are called
    outside the lock, so a handler may subscribe or unsubscribe.
    """

    def __init__(self):
        # The `None` key holds the handlers for every event.
        self._listeners: Dict[Optional[EngineEventType], List[_Listener]] = {}
        self._sequence = itertools.count()
        self._lock = threading.RLock()

    def on(
        self,
        event_type: EventType,
        callback: EventHandler,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable[[], None]:
        """
        Subscribe to one event type.

        Args:
            event_type: The event, as an `EngineEventType` or its name
            callback: Called with the event payload
            priority: Priority level for this handler

        Returns:
            A function that removes this subscription

        Raises:
            ValueError: If `event_type` is not an engine event
        """
        return self._subscribe(resolve_event_type(event_type), callback, priority)

    def on_any(
        self,
        callback: AnyEventHandler,
        priority: EventPriority = EventPriority.NORMAL,
    ) -> Callable[[], None]:
        """
        Subscribe to every event.

        Args:
            callback: Called with the `EngineEventType` and the payload
            priority: Priority level for this handler

        Returns:
            A function that removes this subscription
        """
        return self._subscribe(None, callback, priority)

    def emit(self, event_type: EventType, data: Dict[str, Any]) -> None:
        """
        Publish an event.

        Args:
            event_type: The event, as an `EngineEventType` or its name
            data: The payload handed to every handler

        Raises:
            ValueError: If `event_type` is not an engine event
        """
        event_type = resolve_event_type(event_type)

        with self._lock:
            typed = list(self._listeners.get(event_type, ()))
            untyped = list(self._listeners.get(None, ()))

        for listener in typed:
            self._call(event_type, listener.callback, data)
        for listener in untyped:
            self._call(event_type, listener.callback, event_type, data)

    def _subscribe(
        self,
        key: Optional[EngineEventType],
        callback: Callable,
        priority: EventPriority,
    ) -> Callable[[], None]:
        listener = _Listener(callback, priority, next(self._sequence))
        with self._lock:
            listeners = self._listeners.setdefault(key, [])
            listeners.append(listener)
            listeners.sort(key=_Listener.order)

        def unsubscribe() -> None:
            with self._lock:
                listeners = self._listeners.get(key, [])
                if listener in listeners:
                    listeners.remove(listener)

        return unsubscribe

    @staticmethod
    def _call(event_type: EngineEventType, callback: Callable, *args: Any) -> None:
        try:
            callback(*args)
        except Exception:
            logger.exception("Error in event handler for %s", event_type.name)


class EventBus:
    """
    The process-wide event emitter games publish on unless they are given
    their own.
    """

    _instance: Optional[EventEmitter] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        """Return the shared emitter, creating it on first use."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the shared emitter and every subscription on it."""
        with cls._lock:
            cls._instance = None
