"""
Event system for the patience engine.

This package provides the event bus games publish their state changes on.
"""

from patience.events.emitter import (
    EventEmitter as EventEmitter,
    EventBus as EventBus,
    EventPriority as EventPriority,
    EngineEventType as EngineEventType,
    resolve_event_type as resolve_event_type,
)

__all__ = [
    "EventEmitter",
    "EventBus",
    "EventPriority",
    "EngineEventType",
    "resolve_event_type",
]
