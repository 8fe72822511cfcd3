"""apiloader - Resource loading workflow for API frameworks.

This module provides the public API for building loaders that turn an
inbound request into a query, let listeners customise it, execute it and
store the result back onto the request.
"""

from .config import LoaderConfiguration
from .context import ProcessContext, ProcessEvent
from .domain import ItemNotFoundError, LoaderError, QueryBuildingContext, QueryHandleError
from .events import EventBus, InMemoryEventBus, QueryListener
from .loaders import (
    ApiLoader,
    CallbackStrategy,
    InMemoryQuery,
    InMemoryQueryStrategy,
    LoadMode,
    QueryStrategy,
    ResourceLoader,
)
from .routing import listens_to

__all__ = [
    # Loaders
    "ApiLoader",
    "LoadMode",
    "ResourceLoader",
    "LoaderConfiguration",
    # Strategies
    "CallbackStrategy",
    "InMemoryQuery",
    "InMemoryQueryStrategy",
    "QueryStrategy",
    # Contexts
    "ProcessContext",
    "ProcessEvent",
    "QueryBuildingContext",
    # Events
    "EventBus",
    "InMemoryEventBus",
    "QueryListener",
    "listens_to",
    # Errors
    "ItemNotFoundError",
    "LoaderError",
    "QueryHandleError",
]
