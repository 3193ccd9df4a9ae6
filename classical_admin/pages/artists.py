"""Artists list page with a persisted search."""

from __future__ import annotations

from ..forms.artist import ArtistForm
from ..models.catalog import Artist
from ..services.api_client import ApiClient
from ..services.page_state import ArtistsPageState, PageStateStore, RecordingsPageState
from ..utils.formatting import format_life
from .base import FETCH_ALL_LIMIT, Confirm, ListPage, Navigate, decline, stay


class ArtistsPage(ListPage[Artist]):
    route = "artists"
    entity = "artist"

    def __init__(
        self,
        api: ApiClient,
        store: PageStateStore | None = None,
        confirm: Confirm = decline,
        navigate: Navigate = stay,
    ) -> None:
        super().__init__(api, ArtistForm(), store, confirm, navigate)
        self.search_query = ""

    def mount(self) -> None:
        saved = self.store.load_state(ArtistsPageState)
        if saved is not None:
            self.search_query = saved.search_query
        self.refresh()

    def fetch(self) -> list[Artist]:
        return self.api.get_artists(search=self.search_query or None)

    def after_load(self) -> None:
        self.store.save_state(ArtistsPageState(search_query=self.search_query, artists=self.items))

    def search(self, query: str) -> list[Artist]:
        self.search_query = query.strip()
        return self.refresh()

    def delete_record(self, record_id: int) -> None:
        self.api.delete_artist(record_id)

    def delete_message(self, record: Artist) -> str:
        return f"Delete artist {record.name}?"

    def show_recordings(self, artist: Artist) -> None:
        """Open the recordings page filtered to this performer."""

        def build_state() -> RecordingsPageState:
            recordings = self.api.get_recordings(limit=FETCH_ALL_LIMIT, artist_id=artist.id)
            return RecordingsPageState(filter_artist_id=artist.id, recordings=recordings)

        self.navigate_with_state("recordings", build_state)

    def rows(self) -> list[dict]:
        return [
            {
                "id": artist.id,
                "name": artist.name,
                "instrument": artist.instrument or "-",
                "life": format_life(artist.birth_year, artist.death_year),
                "nationality": artist.nationality or "-",
                "recordings": artist.recording_count,
            }
            for artist in self.items
        ]
