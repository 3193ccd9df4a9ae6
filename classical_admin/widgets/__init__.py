"""Headless search widgets: type-ahead state and keyboard handling."""

from .artist_search import ArtistSearch
from .composition_search import CompositionSearch
from .recording_search import RecordingSearch
from .suggestions import (
    MIN_QUERY_LENGTH,
    SuggestionList,
    filter_artists,
    filter_compositions,
)

__all__ = [
    "ArtistSearch",
    "CompositionSearch",
    "RecordingSearch",
    "MIN_QUERY_LENGTH",
    "SuggestionList",
    "filter_artists",
    "filter_compositions",
]
