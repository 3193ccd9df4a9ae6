"""Recordings list page filtered by composition, composer or performer."""

from __future__ import annotations

import logging

from ..forms.recording import RecordingForm
from ..models.catalog import Album, Artist, Composer, Composition, Recording
from ..processors import lookup
from ..processors.batch import fetch_all
from ..services.api_client import ApiClient, ApiError
from ..services.page_state import AlbumsPageState, PageStateStore, RecordingsPageState
from ..widgets.artist_search import ArtistSearch
from ..widgets.composition_search import CompositionSearch
from .base import FETCH_ALL_LIMIT, Confirm, ListPage, Navigate, decline, stay

logger = logging.getLogger(__name__)


class RecordingsPage(ListPage[Recording]):
    """Recordings filtered by composition (or composer) and performer.

    Nothing is listed until at least one filter is set. A selected
    composition takes precedence over the composer filter. Every load is
    saved as the recordings page state, and mount() restores it.
    """

    route = "recordings"
    entity = "recording"

    def __init__(
        self,
        api: ApiClient,
        store: PageStateStore | None = None,
        confirm: Confirm = decline,
        navigate: Navigate = stay,
    ) -> None:
        super().__init__(api, RecordingForm(), store, confirm, navigate)
        self.composers: list[Composer] = []
        self.compositions: list[Composition] = []
        self.artists: list[Artist] = []
        self.albums: list[Album] = []
        self._build_filters()

    def _build_filters(self) -> None:
        self.composition_filter = CompositionSearch(
            self.composers,
            self.compositions,
            on_composer_change=lambda composer_id: self.refresh(),
            on_composition_select=lambda composition: self.refresh(),
            on_clear=self.refresh,
        )
        self.artist_filter = ArtistSearch(
            self.artists,
            on_select=lambda artist: self.refresh(),
            on_clear=self.refresh,
        )

    @property
    def selected_composition_id(self) -> int | None:
        return self.composition_filter.selected_composition_id

    @property
    def filter_composer_id(self) -> int | None:
        return self.composition_filter.selected_composer_id

    @property
    def filter_artist_id(self) -> int | None:
        return self.artist_filter.selected_id

    def mount(self) -> None:
        self.loading = True
        try:
            data = fetch_all(
                composers=lambda: self.api.get_composers(limit=FETCH_ALL_LIMIT),
                artists=lambda: self.api.get_artists(limit=FETCH_ALL_LIMIT),
                albums=lambda: self.api.get_albums(limit=FETCH_ALL_LIMIT),
                compositions=lambda: self.api.get_compositions(limit=FETCH_ALL_LIMIT),
            )
        except ApiError as e:
            logger.error(f"Failed to load recordings page data: {e}")
            self.error = str(e)
            return
        finally:
            self.loading = False

        self.composers = lookup.sort_composers(data["composers"])
        self.artists = data["artists"]
        self.albums = data["albums"]
        self.compositions = data["compositions"]
        self.items = []
        self.error = None
        self._build_filters()
        self.form.set_reference_data(self.composers, self.compositions, self.artists)

        saved = self.store.load_state(RecordingsPageState)
        if saved is not None:
            self.composition_filter.restore(saved.filter_composer_id, saved.selected_composition_id)
            self.artist_filter.select_id(saved.filter_artist_id)
            self.items = saved.recordings

    def fetch(self) -> list[Recording]:
        composition_id = self.selected_composition_id
        composer_id = None if composition_id else self.filter_composer_id
        artist_id = self.filter_artist_id

        if not (composition_id or composer_id or artist_id):
            return []
        return self.api.get_recordings(
            limit=FETCH_ALL_LIMIT,
            composition_id=composition_id,
            composer_id=composer_id,
            artist_id=artist_id,
        )

    def after_load(self) -> None:
        self.store.save_state(
            RecordingsPageState(
                selected_composition_id=self.selected_composition_id,
                filter_composer_id=self.filter_composer_id,
                filter_artist_id=self.filter_artist_id,
                recordings=self.items,
            )
        )

    def album_count(self, recording: Recording) -> int:
        return lookup.album_count(recording.id, self.albums)

    def delete_record(self, record_id: int) -> None:
        self.api.delete_recording(record_id)

    def delete_message(self, record: Recording) -> str:
        title, _ = lookup.composition_display(record.composition_id, self.compositions)
        return f"Delete recording of {title} ({lookup.recording_artist_names(record)})?"

    def show_albums(self, recording: Recording) -> None:
        """Open the albums page filtered to albums containing this recording."""

        def build_state() -> AlbumsPageState:
            albums = self.api.get_albums(limit=FETCH_ALL_LIMIT)
            return AlbumsPageState(selected_recording_id=recording.id, albums=albums)

        self.navigate_with_state("albums", build_state)

    def rows(self) -> list[dict]:
        rows = []
        for recording in self.items:
            title, catalog_number = lookup.composition_display(
                recording.composition_id, self.compositions
            )
            rows.append(
                {
                    "id": recording.id,
                    "composer": lookup.composer_name(
                        recording.composition_id, self.compositions, self.composers
                    ),
                    "catalog_number": catalog_number or "-",
                    "composition": title,
                    "artists": lookup.recording_artist_names(recording),
                    "year": recording.year or "-",
                    "albums": self.album_count(recording),
                }
            )
        return rows
