"""Data models for catalog records and request payloads."""

from .catalog import (
    Album,
    AlbumCustomUrl,
    AlbumImage,
    AlbumsPageData,
    Artist,
    Composer,
    Composition,
    Recording,
)
from .payloads import (
    AlbumPayload,
    ArtistPayload,
    ComposerPayload,
    CompositionPayload,
    CustomUrlPayload,
    RecordingPayload,
)

__all__ = [
    "Album",
    "AlbumCustomUrl",
    "AlbumImage",
    "AlbumsPageData",
    "Artist",
    "Composer",
    "Composition",
    "Recording",
    "AlbumPayload",
    "ArtistPayload",
    "ComposerPayload",
    "CompositionPayload",
    "CustomUrlPayload",
    "RecordingPayload",
]
