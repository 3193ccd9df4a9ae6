"""Artist type-ahead with single selection."""

from typing import Callable, Iterable

from ..models.catalog import Artist
from ..processors.lookup import find_by_id
from .suggestions import SuggestionList, filter_artists


class ArtistSearch:
    """Type-ahead over a fixed artist list.

    With retain_selection the chosen artist stays selected and its name
    replaces the query (used as a filter). Without it the widget resets
    after each pick, so it can add several artists in a row.
    """

    def __init__(
        self,
        artists: Iterable[Artist],
        on_select: Callable[[Artist], None] | None = None,
        on_clear: Callable[[], None] | None = None,
        retain_selection: bool = True,
    ) -> None:
        self.artists = list(artists)
        self.on_select = on_select
        self.on_clear = on_clear
        self.retain_selection = retain_selection
        self.exclude_ids: list[int] = []
        self.query = ""
        self.selected_id: int | None = None
        self.suggestions: SuggestionList[Artist] = SuggestionList()

    @property
    def selected(self) -> Artist | None:
        return find_by_id(self.artists, self.selected_id)

    def set_query(self, query: str) -> list[Artist]:
        self.query = query
        self.suggestions.set_items(filter_artists(self.artists, query, self.exclude_ids))
        return self.suggestions.items

    def handle_key(self, key: str) -> None:
        chosen = self.suggestions.handle_key(key)
        if chosen is not None:
            self.select(chosen)

    def select(self, artist: Artist) -> None:
        if self.retain_selection:
            self.selected_id = artist.id
            self.query = artist.name
        else:
            self.query = ""
        self.suggestions.clear()
        if self.on_select:
            self.on_select(artist)

    def select_id(self, artist_id: int | None) -> None:
        """Restore a selection without notifying (e.g. from saved page state)."""
        artist = find_by_id(self.artists, artist_id)
        self.selected_id = artist.id if artist else None
        self.query = artist.name if artist else ""
        self.suggestions.clear()

    def clear(self) -> None:
        self.selected_id = None
        self.query = ""
        self.suggestions.clear()
        if self.on_clear:
            self.on_clear()
