"""Central test fixtures - imports from the loader test app."""

from typing import Any

import pytest

from apiloader.context import ProcessEvent
from apiloader.events import InMemoryEventBus
from apiloader.loaders import InMemoryQueryStrategy, ResourceLoader
from tests.fixtures.loader_app import RecordingStrategy


@pytest.fixture(autouse=True)
def clear_loader_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep APILOADER_* variables from leaking into configuration defaults."""
    for name in (
        "APILOADER_COLLECTION_EVENT_NAME",
        "APILOADER_ITEM_EVENT_NAME",
        "APILOADER_STORAGE_KEY",
        "APILOADER_RAISE_ON_MISSING_ITEM",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def process_event() -> ProcessEvent:
    """Create an empty process event."""
    return ProcessEvent()


@pytest.fixture
def bus() -> InMemoryEventBus:
    """Create an in-memory event bus without listeners."""
    return InMemoryEventBus()


@pytest.fixture
def recording_strategy() -> RecordingStrategy:
    """Create a strategy recording its hook calls."""
    return RecordingStrategy(collection_result=["a", "b", "c"], item_result={"id": 1})


@pytest.fixture
def articles() -> list[dict[str, Any]]:
    """Sample records served by the in-memory strategy."""
    return [
        {"id": 1, "title": "Draft notes", "published": False},
        {"id": 2, "title": "Release announcement", "published": True},
        {"id": 3, "title": "Roadmap", "published": True},
        {"id": 4, "title": "Changelog", "published": True},
    ]


@pytest.fixture
def article_loader(articles: list[dict[str, Any]]) -> ResourceLoader:
    """Create a loader serving the sample articles."""
    return ResourceLoader(InMemoryQueryStrategy(articles))
