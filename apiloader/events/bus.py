"""Event bus used to let listeners customise queries before execution."""

import logging
from abc import ABC, abstractmethod
from collections import defaultdict
from collections.abc import Callable
from typing import Any, ClassVar

from ..domain import QueryBuildingContext
from ..routing import setup_listener_routing

LOGGER = logging.getLogger(__name__)

Listener = Callable[[QueryBuildingContext[Any]], Any]


class EventBus(ABC):
    """Abstract synchronous publish mechanism for query building events.

    Loaders publish a configuration event once the query handle has been
    built and pre-configured. Implementations must invoke every listener
    registered for the event, in a defined order, before returning, and
    must not swallow listener errors.
    """

    @abstractmethod
    def dispatch(self, event_name: str, context: QueryBuildingContext[Any]) -> None:
        """Invoke the listeners registered for ``event_name``.

        Args:
            event_name: The event being published.
            context: The query building context handed to each listener.

        Raises:
            Any exception raised by a listener.
        """
        ...


class QueryListener:
    """Base class for grouping listeners on a single object.

    Methods decorated with ``@listens_to`` are discovered when the
    subclass is defined. ``InMemoryEventBus.register`` subscribes the
    bound methods in definition order.

    Example:
        >>> class Pagination(QueryListener):
        ...     def __init__(self, page_size: int):
        ...         self.page_size = page_size
        ...
        ...     @listens_to("on_collection_query_building")
        ...     def paginate(self, context: QueryBuildingContext) -> None:
        ...         context.query = context.query.paginate(self.page_size)
        >>>
        >>> bus.register(Pagination(page_size=20))
    """

    # Class-level routing table of (event_name, method_name) pairs
    _listener_routes: ClassVar[list[tuple[str, str]]] = []

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Set up listener routing when a subclass is defined."""
        super().__init_subclass__(**kwargs)
        cls._listener_routes = setup_listener_routing(cls)

    def listeners(self) -> list[tuple[str, Listener]]:
        """Return the bound listener methods with their event names."""
        return [(event_name, getattr(self, name)) for event_name, name in self._listener_routes]


class InMemoryEventBus(EventBus):
    """In-process event bus invoking listeners synchronously.

    Listeners run in subscription order on the caller's thread. A listener
    may call ``context.stop_propagation()`` to skip the listeners after it
    for the current dispatch. Errors raised by listeners propagate to the
    caller of ``dispatch`` untouched.

    Example:
        >>> bus = InMemoryEventBus()
        >>> bus.subscribe("on_item_query_building", lambda ctx: print(ctx.query))
        >>> loader.load_item(process_event, "get_item", bus)
    """

    def __init__(self) -> None:
        self._listeners: dict[str, list[Listener]] = defaultdict(list)

    def subscribe(self, event_name: str, listener: Listener) -> None:
        """Register a listener for an event.

        Args:
            event_name: The event to listen to.
            listener: Callable receiving the query building context.
        """
        self._listeners[event_name].append(listener)

    def unsubscribe(self, event_name: str, listener: Listener) -> None:
        """Remove a previously registered listener.

        Args:
            event_name: The event the listener was registered for.
            listener: The listener to remove.

        Raises:
            ValueError: If the listener is not registered for the event.
        """
        listeners = self._listeners.get(event_name, [])
        listeners.remove(listener)
        if not listeners:
            self._listeners.pop(event_name, None)

    def register(self, listener: QueryListener) -> None:
        """Subscribe every ``@listens_to`` method of a QueryListener."""
        for event_name, method in listener.listeners():
            self.subscribe(event_name, method)

    def listeners(self, event_name: str) -> list[Listener]:
        """Return the listeners registered for an event, in call order."""
        return list(self._listeners.get(event_name, []))

    def has_listeners(self, event_name: str) -> bool:
        return bool(self._listeners.get(event_name))

    def dispatch(self, event_name: str, context: QueryBuildingContext[Any]) -> None:
        listeners = self.listeners(event_name)
        LOGGER.debug(
            "Dispatching query building event",
            extra={
                "event_name": event_name,
                "listener_count": len(listeners),
                "load_id": str(context.load_id),
            },
        )
        for listener in listeners:
            if context.is_propagation_stopped:
                break
            listener(context)
