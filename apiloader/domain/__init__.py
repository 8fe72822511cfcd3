"""Domain primitives for the loader workflow.

- QueryBuildingContext: Envelope carrying the query handle through a load
- LoaderError: Base exception for loader errors
- ItemNotFoundError: Raised when an item cannot be resolved
- QueryHandleError: Raised when no query handle was built
"""

from .exceptions import ItemNotFoundError, LoaderError, QueryHandleError
from .query import QueryBuildingContext

__all__ = [
    "QueryBuildingContext",
    "LoaderError",
    "ItemNotFoundError",
    "QueryHandleError",
]
