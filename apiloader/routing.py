from collections.abc import Callable
from typing import Any, TypeVar

T = TypeVar("T")

# Attribute storing the event names a listener method subscribes to
_LISTENS_TO_ATTR = "_listens_to_events"


class ListenerDecorator:
    """Decorator marking methods as listeners for configuration events.

    Unlike type-routed handlers, query building events are identified by
    name, so the decorator is parameterised with the event names the
    method wants to receive. A method may listen to several events, which
    is handy when the same narrowing applies to both item and collection
    queries.
    """

    def __init__(self, *event_names: str):
        """Initialize the decorator.

        Args:
            *event_names: Names of the events the decorated method
                listens to.

        Raises:
            ValueError: If no event name is given or a name is empty.
        """
        if not event_names:
            raise ValueError("listens_to requires at least one event name")
        if any(not name for name in event_names):
            raise ValueError("Event names must be non-empty strings")
        self.event_names = event_names

    def __call__(self, func: Callable[..., T]) -> Callable[..., T]:
        """Decorate a listener method.

        Args:
            func: The listener method to decorate.

        Returns:
            The same method with the event names attached.
        """
        existing: tuple[str, ...] = getattr(func, _LISTENS_TO_ATTR, ())
        setattr(func, _LISTENS_TO_ATTR, existing + self.event_names)
        return func


def listens_to(*event_names: str) -> ListenerDecorator:
    """Mark a QueryListener method as a listener for the given events.

    Example:
        >>> class PublishedOnly(QueryListener):
        ...     @listens_to("on_collection_query_building", "on_item_query_building")
        ...     def only_published(self, context: QueryBuildingContext) -> None:
        ...         context.query = context.query.where("published", True)
    """
    return ListenerDecorator(*event_names)


def setup_listener_routing(cls: type) -> list[tuple[str, str]]:
    """Build the listener routing table for a class.

    Scans the class hierarchy, base classes first, for methods decorated
    with ``listens_to``. A subclass redefining a method replaces the base
    definition, including its event names.

    Args:
        cls: The class to set up routing for.

    Returns:
        A list of ``(event_name, method_name)`` pairs in definition order.
    """
    decorated: dict[str, tuple[str, ...]] = {}
    for klass in reversed(cls.__mro__):
        for name, value in klass.__dict__.items():
            events: Any = getattr(value, _LISTENS_TO_ATTR, None)
            if events:
                decorated[name] = events
            elif name in decorated:
                # Overridden without the decorator
                del decorated[name]

    return [(event_name, name) for name, events in decorated.items() for event_name in events]
