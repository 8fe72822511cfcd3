"""Query strategies supplying the technology-specific steps of a load.

A ResourceLoader owns the workflow; a QueryStrategy owns everything that
depends on the query technology: how the handle is created, how it is
prepared for items or collections and how it is executed.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from ..context import ProcessContext
from ..domain import QueryBuildingContext
from ..events import EventBus


Q = TypeVar("Q")

ContextFactory = Callable[[ProcessContext], QueryBuildingContext[Any]]
HandleFactory = Callable[[QueryBuildingContext[Any], str, EventBus], Any]
Configurator = Callable[[QueryBuildingContext[Any], str, EventBus], None]
Executor = Callable[[QueryBuildingContext[Any], str, EventBus], Any]


class QueryStrategy(ABC, Generic[Q]):
    """Capability interface for the hooks of the loading workflow.

    The loader calls the hooks in a fixed order for every load:

    1. ``new_query_context``
    2. ``instantiate_query_handle``
    3. ``configure_for_item`` or ``configure_for_collection``
    4. (the loader dispatches the configuration event)
    5. ``execute_item_query`` or ``execute_collection_query``

    Every hook after the first receives the same QueryBuildingContext,
    the name of the event that triggered the load and the bus.

    Type Parameters:
        Q: The query handle type this strategy builds and executes.

    Example:
        >>> class ArticleStrategy(QueryStrategy[Select]):
        ...     def instantiate_query_handle(self, context, event_name, bus):
        ...         context.query = select(Article)
        ...
        ...     def configure_for_item(self, context, event_name, bus):
        ...         article_id = context.process_context.request["id"]
        ...         context.query = context.query.where(Article.id == article_id)
        ...
        ...     def configure_for_collection(self, context, event_name, bus):
        ...         context.query = context.query.order_by(Article.created_at)
        ...
        ...     def execute_item_query(self, context, event_name, bus):
        ...         return self.session.scalars(context.query).first()
        ...
        ...     def execute_collection_query(self, context, event_name, bus):
        ...         return self.session.scalars(context.query).all()
    """

    def new_query_context(self, process_context: ProcessContext) -> QueryBuildingContext[Q]:
        """Create the query building context for a load.

        Args:
            process_context: The process context that triggered the load.

        Returns:
            A new QueryBuildingContext wrapping the process context.
        """
        return QueryBuildingContext(process_context)

    @abstractmethod
    def instantiate_query_handle(
        self, context: QueryBuildingContext[Q], event_name: str, bus: EventBus
    ) -> None:
        """Create a fresh query handle and attach it to ``context``.

        The handle must be set when this method returns.
        """
        ...

    @abstractmethod
    def configure_for_collection(
        self, context: QueryBuildingContext[Q], event_name: str, bus: EventBus
    ) -> None:
        """Prepare the query handle to load a collection."""
        ...

    @abstractmethod
    def configure_for_item(
        self, context: QueryBuildingContext[Q], event_name: str, bus: EventBus
    ) -> None:
        """Prepare the query handle to load a single item."""
        ...

    @abstractmethod
    def execute_collection_query(
        self, context: QueryBuildingContext[Q], event_name: str, bus: EventBus
    ) -> Any:
        """Execute the query and return a collection-shaped result."""
        ...

    @abstractmethod
    def execute_item_query(
        self, context: QueryBuildingContext[Q], event_name: str, bus: EventBus
    ) -> Any:
        """Execute the query and return the item, or an empty value if missing."""
        ...


def _no_configuration(context: QueryBuildingContext[Any], event_name: str, bus: EventBus) -> None:
    pass


class CallbackStrategy(QueryStrategy[Any]):
    """Strategy assembled from plain functions.

    Useful when a loader is small enough that a dedicated subclass would
    be ceremony. ``build`` returns the query handle and the strategy
    attaches it to the context; the other callables mirror the hooks of
    QueryStrategy and receive the same arguments.

    Example:
        >>> strategy = CallbackStrategy(
        ...     build=lambda ctx, name, bus: InMemoryQuery(),
        ...     execute_collection=lambda ctx, name, bus: ctx.query.apply(records),
        ...     execute_item=lambda ctx, name, bus: next(iter(ctx.query.apply(records)), None),
        ... )
        >>> loader = ResourceLoader(strategy)
    """

    def __init__(
        self,
        build: HandleFactory,
        execute_collection: Executor,
        execute_item: Executor,
        configure_collection: Configurator = _no_configuration,
        configure_item: Configurator = _no_configuration,
        new_context: ContextFactory | None = None,
    ):
        self.build = build
        self.execute_collection = execute_collection
        self.execute_item = execute_item
        self.configure_collection = configure_collection
        self.configure_item = configure_item
        self.new_context = new_context

    def new_query_context(self, process_context: ProcessContext) -> QueryBuildingContext[Any]:
        if self.new_context is None:
            return super().new_query_context(process_context)
        return self.new_context(process_context)

    def instantiate_query_handle(
        self, context: QueryBuildingContext[Any], event_name: str, bus: EventBus
    ) -> None:
        context.query = self.build(context, event_name, bus)

    def configure_for_collection(
        self, context: QueryBuildingContext[Any], event_name: str, bus: EventBus
    ) -> None:
        self.configure_collection(context, event_name, bus)

    def configure_for_item(
        self, context: QueryBuildingContext[Any], event_name: str, bus: EventBus
    ) -> None:
        self.configure_item(context, event_name, bus)

    def execute_collection_query(
        self, context: QueryBuildingContext[Any], event_name: str, bus: EventBus
    ) -> Any:
        return self.execute_collection(context, event_name, bus)

    def execute_item_query(
        self, context: QueryBuildingContext[Any], event_name: str, bus: EventBus
    ) -> Any:
        return self.execute_item(context, event_name, bus)
