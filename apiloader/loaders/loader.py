"""Resource loader orchestrating the query building workflow."""

import logging
import sys
import traceback
from collections.abc import Callable, Sized
from enum import Enum
from typing import Any, NamedTuple, Protocol

from ..config import LoaderConfiguration
from ..context import ProcessContext
from ..domain import ItemNotFoundError, QueryBuildingContext, QueryHandleError
from ..events import EventBus
from .strategy import QueryStrategy


LOGGER = logging.getLogger(__name__)

ITEM_NOT_FOUND_MESSAGE = "Item not found from loader"


class LoadMode(Enum):
    """Shape of the result a load produces."""

    ITEM = "item"
    COLLECTION = "collection"


class _Stage(NamedTuple):
    """Mode-specific pieces of the workflow, selected once per load."""

    label: str
    dispatch_event: str
    configure: Callable[[QueryBuildingContext[Any], str, EventBus], None]
    execute: Callable[[QueryBuildingContext[Any], str, EventBus], Any]


def is_empty(result: Any) -> bool:
    """Tell whether an item query result means "not found".

    ``None``, ``False`` and sized values of length zero (empty lists,
    dicts, strings...) are empty. Numbers, including zero, and objects
    without a length are considered found, even when ``bool(result)`` is
    false: this is narrower than plain truthiness so that a legitimate
    ``0`` or a model whose ``__bool__`` returns ``False`` is not reported
    as a missing item.
    """
    if result is None or result is False:
        return True
    if isinstance(result, Sized):
        return len(result) == 0
    return False


class ApiLoader(Protocol):
    def load_collection(
        self, process_context: ProcessContext, event_name: str, bus: EventBus
    ) -> None:
        """Load a collection and store it into the process context."""
        ...

    def load_item(self, process_context: ProcessContext, event_name: str, bus: EventBus) -> None:
        """Load a single item and store it into the process context."""
        ...


class ResourceLoader:
    """Loads items or collections into a process context.

    The loader runs the same linear workflow for every call:

    1. Build a QueryBuildingContext from the process context
    2. Attach a fresh query handle
    3. Pre-configure the handle for an item or a collection
    4. Dispatch the configuration event so listeners can adjust the query
    5. Execute the query
    6. Store the result into the process context under the storage key

    Technology-specific steps are delegated to a QueryStrategy. Any error
    raised by the strategy or a listener aborts the load and propagates
    unchanged; nothing is stored in that case.

    For item loads an empty result (see ``is_empty``) raises
    ItemNotFoundError unless ``raise_on_missing_item`` is disabled, in
    which case the empty value is stored as is.

    Args:
        strategy: Supplies the query building and execution hooks.
        configuration: Event names, storage key and not-found policy.
            Defaults to ``LoaderConfiguration()``.
        logger: Logger receiving diagnostic records. Defaults to the
            module logger.

    Example:
        >>> loader = ResourceLoader(
        ...     InMemoryQueryStrategy(articles),
        ...     LoaderConfiguration(storage_key="articles"),
        ... )
        >>> event = ProcessEvent(request={"id": 1})
        >>> loader.load_item(event, "get_article", InMemoryEventBus())
        >>> event.get_parameter("articles")
    """

    def __init__(
        self,
        strategy: QueryStrategy[Any],
        configuration: LoaderConfiguration | None = None,
        logger: logging.Logger | None = None,
    ):
        self.strategy = strategy
        self.configuration = configuration or LoaderConfiguration()
        self.logger = logger or LOGGER

    @property
    def collection_event_name(self) -> str:
        return self.configuration.collection_event_name

    @property
    def item_event_name(self) -> str:
        return self.configuration.item_event_name

    @property
    def storage_key(self) -> str:
        return self.configuration.storage_key

    @property
    def raise_on_missing_item(self) -> bool:
        return self.configuration.raise_on_missing_item

    def load_collection(
        self, process_context: ProcessContext, event_name: str, bus: EventBus
    ) -> None:
        """Load a collection and store it into the process context.

        Args:
            process_context: The process context receiving the result.
            event_name: Name of the event that triggered the load.
            bus: Bus used to dispatch the collection configuration event.
        """
        self._run_load(process_context, event_name, bus, LoadMode.COLLECTION)

    def load_item(self, process_context: ProcessContext, event_name: str, bus: EventBus) -> None:
        """Load a single item and store it into the process context.

        Args:
            process_context: The process context receiving the result.
            event_name: Name of the event that triggered the load.
            bus: Bus used to dispatch the item configuration event.

        Raises:
            ItemNotFoundError: If the item query returned an empty result
                and ``raise_on_missing_item`` is enabled.
        """
        self._run_load(process_context, event_name, bus, LoadMode.ITEM)

    def _stage_for(self, mode: LoadMode) -> _Stage:
        if mode is LoadMode.ITEM:
            return _Stage(
                label="Item",
                dispatch_event=self.item_event_name,
                configure=self.strategy.configure_for_item,
                execute=self._resolve_item,
            )
        return _Stage(
            label="Collection",
            dispatch_event=self.collection_event_name,
            configure=self.strategy.configure_for_collection,
            execute=self.strategy.execute_collection_query,
        )

    def _run_load(
        self,
        process_context: ProcessContext,
        event_name: str,
        bus: EventBus,
        mode: LoadMode,
    ) -> None:
        stage = self._stage_for(mode)
        self._log(
            logging.DEBUG,
            f"{stage.label} loading started",
            from_event=event_name,
            dispatched_event=stage.dispatch_event,
            storage_key=self.storage_key,
        )

        context = self.strategy.new_query_context(process_context)
        self.strategy.instantiate_query_handle(context, event_name, bus)
        if context.query is None:
            raise QueryHandleError(
                f"{type(self.strategy).__name__} did not attach a query handle "
                f"while handling {event_name}"
            )

        stage.configure(context, event_name, bus)
        bus.dispatch(stage.dispatch_event, context)
        payload = stage.execute(context, event_name, bus)

        process_context.set_parameter(self.storage_key, payload)

    def _resolve_item(
        self, context: QueryBuildingContext[Any], event_name: str, bus: EventBus
    ) -> Any:
        result = self.strategy.execute_item_query(context, event_name, bus)

        if is_empty(result) and self.raise_on_missing_item:
            self._log(
                logging.WARNING,
                ITEM_NOT_FOUND_MESSAGE,
                loader_class=type(self.strategy).__name__,
                from_event=event_name,
                dispatched_event=self.item_event_name,
            )
            raise ItemNotFoundError(ITEM_NOT_FOUND_MESSAGE)

        return result

    def _log(self, level: int, message: str, **extra: Any) -> None:
        # Diagnostics never abort a load; failures are reported the way
        # logging.Handler.handleError reports them.
        try:
            self.logger.log(level, message, extra=extra)
        except Exception:
            if logging.raiseExceptions:
                traceback.print_exc(file=sys.stderr)
