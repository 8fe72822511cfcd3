"""Loader configuration using pydantic-settings."""

from pydantic import Field
from pydantic_settings import BaseSettings

COLLECTION_EVENT_NAME = "on_collection_query_building"
ITEM_EVENT_NAME = "on_item_query_building"
STORAGE_KEY = "query_storage"


class LoaderConfiguration(BaseSettings):
    """Construction-time configuration of a ResourceLoader.

    The configuration is frozen once created, so a loader can be shared
    between requests without its behaviour changing underneath them. Each
    loader owns its own configuration instance.

    All settings can be configured via environment variables with the
    APILOADER_ prefix. For example:
    - APILOADER_COLLECTION_EVENT_NAME=on_articles_query_building
    - APILOADER_STORAGE_KEY=articles
    - APILOADER_RAISE_ON_MISSING_ITEM=false

    Attributes:
        collection_event_name: Event dispatched to configure collection
            queries.
        item_event_name: Event dispatched to configure item queries.
        storage_key: Process context parameter receiving the result.
        raise_on_missing_item: Whether an empty item result raises
            ItemNotFoundError instead of being stored.

    Example:
        >>> config = LoaderConfiguration(storage_key="articles")
        >>> loader = ResourceLoader(ArticleStrategy(), config)
    """

    collection_event_name: str = Field(default=COLLECTION_EVENT_NAME, min_length=1)
    item_event_name: str = Field(default=ITEM_EVENT_NAME, min_length=1)
    storage_key: str = Field(default=STORAGE_KEY, min_length=1)
    raise_on_missing_item: bool = True

    model_config = {"env_prefix": "APILOADER_", "frozen": True}
