from .loader_scenario import LoaderScenario, RecordingEventBus

__all__ = [
    "LoaderScenario",
    "RecordingEventBus",
]
