"""Event bus infrastructure for query building events."""

from .bus import EventBus, InMemoryEventBus, Listener, QueryListener

__all__ = [
    "EventBus",
    "InMemoryEventBus",
    "Listener",
    "QueryListener",
]
