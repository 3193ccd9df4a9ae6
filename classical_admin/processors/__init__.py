"""Cross-referencing and batch-fetch helpers."""

from .batch import fetch_all
from .lookup import (
    PLACEHOLDER,
    album_count,
    album_types,
    albums_with_composition,
    albums_with_recording,
    composer_name,
    composition_display,
    composition_label,
    find_by_id,
    primary_image_url,
    recording_artist_names,
    recording_label,
    sort_composers,
    split_album_types,
)

__all__ = [
    "fetch_all",
    "PLACEHOLDER",
    "album_count",
    "album_types",
    "albums_with_composition",
    "albums_with_recording",
    "composer_name",
    "composition_display",
    "composition_label",
    "find_by_id",
    "primary_image_url",
    "recording_artist_names",
    "recording_label",
    "sort_composers",
    "split_album_types",
]
