"""Query building context shared by loaders and their listeners."""

from typing import Generic, TypeVar

from ulid import ULID

from ..context import ProcessContext

Q = TypeVar("Q")


class QueryBuildingContext(Generic[Q]):
    """Mutable envelope passed through a single load operation.

    A QueryBuildingContext wraps the process context that triggered the
    load together with the query handle being built. The loader creates a
    fresh instance for every call, attaches a query handle in the build
    step and then hands the very same instance to the configuration hook,
    to every listener of the configuration event and finally to the
    execution hook.

    The query handle is opaque. Its shape is decided by the strategy that
    builds it and the listeners that mutate it. No validation happens
    here; the loader itself checks that a handle exists once the build
    step has run.

    Type Parameters:
        Q: The type of query handle carried by this context.

    Attributes:
        load_id: Identifier of the load operation, used to correlate
            diagnostic records emitted while the context is alive.

    Examples:
        Listener narrowing a query before execution:

        >>> def only_published(context: QueryBuildingContext[InMemoryQuery]) -> None:
        ...     context.query = context.query.where("published", True)
    """

    __slots__ = ("_process_context", "_query", "_propagation_stopped", "load_id")

    def __init__(self, process_context: ProcessContext, query: Q | None = None):
        """Initialize the context for a process context.

        Args:
            process_context: The process context that triggered the load.
            query: Optional initial query handle.
        """
        self._process_context = process_context
        self._query = query
        self._propagation_stopped = False
        self.load_id = ULID()

    @property
    def process_context(self) -> ProcessContext:
        """The originating process context."""
        return self._process_context

    @property
    def query(self) -> Q | None:
        """The query handle currently attached to the context."""
        return self._query

    @query.setter
    def query(self, query: Q | None) -> None:
        self._query = query

    @property
    def is_propagation_stopped(self) -> bool:
        """Whether a listener asked the bus to skip remaining listeners."""
        return self._propagation_stopped

    def stop_propagation(self) -> None:
        """Prevent the remaining listeners of the current dispatch from running."""
        self._propagation_stopped = True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(load_id={self.load_id}, query={self._query!r})"
