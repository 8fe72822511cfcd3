"""Loader test application: a recording strategy and sample listeners."""

from .listeners import PublishedArticles
from .strategies import RecordingStrategy

__all__ = [
    "PublishedArticles",
    "RecordingStrategy",
]
