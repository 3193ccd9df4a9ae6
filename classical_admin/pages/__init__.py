"""Page controllers: list state, filters, modals and cross-page navigation."""

from .albums import AlbumsPage
from .artists import ArtistsPage
from .base import ListPage
from .composers import ComposersPage
from .compositions import CompositionsPage
from .recordings import RecordingsPage

PAGES = {
    "composers": ComposersPage,
    "compositions": CompositionsPage,
    "artists": ArtistsPage,
    "recordings": RecordingsPage,
    "albums": AlbumsPage,
}

__all__ = [
    "PAGES",
    "AlbumsPage",
    "ArtistsPage",
    "ComposersPage",
    "CompositionsPage",
    "ListPage",
    "RecordingsPage",
]
