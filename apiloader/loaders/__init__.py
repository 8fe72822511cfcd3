"""Loaders and query strategies.

- ResourceLoader: Orchestrates the load workflow
- QueryStrategy: Hooks a concrete loader supplies
- CallbackStrategy: QueryStrategy assembled from plain functions
- InMemoryQuery / InMemoryQueryStrategy: In-memory reference implementation
"""

from .loader import ITEM_NOT_FOUND_MESSAGE, ApiLoader, LoadMode, ResourceLoader, is_empty
from .memory import InMemoryQuery, InMemoryQueryStrategy
from .strategy import CallbackStrategy, QueryStrategy

__all__ = [
    "ApiLoader",
    "CallbackStrategy",
    "ITEM_NOT_FOUND_MESSAGE",
    "InMemoryQuery",
    "InMemoryQueryStrategy",
    "LoadMode",
    "QueryStrategy",
    "ResourceLoader",
    "is_empty",
]
