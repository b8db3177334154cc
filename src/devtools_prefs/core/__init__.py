"""Core modules for DevTools preferences."""

from .events import EventBus, Event, EventType
from .observable import ObservableValue, AutoDisposeMixin

__all__ = ["EventBus", "Event", "EventType", "ObservableValue", "AutoDisposeMixin"]
