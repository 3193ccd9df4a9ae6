"""Recording form: composition picker plus an ordered performer list."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from ..models.catalog import Artist, Composer, Composition, Recording
from ..models.payloads import RecordingPayload
from ..processors.lookup import find_by_id
from ..services.api_client import ApiClient
from ..utils.formatting import clean_text, extract_year
from ..widgets.artist_search import ArtistSearch
from .base import FormModal, ValidationError, move_item, require


@dataclass
class RecordingDraft:
    composer_id: int | None = None
    composition_id: int | None = None
    year: int | str | None = None
    artist_ids: list[int] = field(default_factory=list)  # credit order
    memo: str = ""


class RecordingForm(FormModal[RecordingDraft, Recording]):
    """Recording modal.

    The composer select narrows the composition choice; changing it drops
    the chosen composition. Artists are added through a type-ahead that
    hides those already on the recording, and can be removed or reordered.
    """

    entity = "recording"

    def __init__(
        self,
        composers: Iterable[Composer] = (),
        compositions: Iterable[Composition] = (),
        artists: Iterable[Artist] = (),
    ) -> None:
        super().__init__()
        self.composers = list(composers)
        self.compositions = list(compositions)
        self.artist_search = ArtistSearch(artists, on_select=self.add_artist, retain_selection=False)

    def set_reference_data(
        self,
        composers: Iterable[Composer],
        compositions: Iterable[Composition],
        artists: Iterable[Artist],
    ) -> None:
        self.composers = list(composers)
        self.compositions = list(compositions)
        self.artist_search.artists = list(artists)

    @property
    def selected_artists(self) -> list[Artist]:
        if self.draft is None:
            return []
        found = (find_by_id(self.artist_search.artists, i) for i in self.draft.artist_ids)
        return [artist for artist in found if artist is not None]

    def _sync_search(self) -> None:
        self.artist_search.exclude_ids = list(self.draft.artist_ids) if self.draft else []
        self.artist_search.query = ""
        self.artist_search.suggestions.clear()

    def new_draft(self) -> RecordingDraft:
        return RecordingDraft()

    def draft_from(self, record: Recording) -> RecordingDraft:
        composition = find_by_id(self.compositions, record.composition_id)
        return RecordingDraft(
            composer_id=composition.composer_id if composition else None,
            composition_id=record.composition_id,
            year=record.year,
            artist_ids=record.artist_ids,
            memo=record.memo or "",
        )

    def open_create(self, **initial) -> RecordingDraft:
        draft = super().open_create(**initial)
        self._sync_search()
        return draft

    def open_edit(self, record: Recording) -> RecordingDraft:
        draft = super().open_edit(record)
        self._sync_search()
        return draft

    def select_composer(self, composer_id: int | None) -> None:
        self.draft.composer_id = composer_id or None
        self.draft.composition_id = None

    def select_composition(self, composition_id: int | None) -> None:
        self.draft.composition_id = composition_id or None

    def add_artist(self, artist: Artist) -> None:
        if artist.id not in self.draft.artist_ids:
            self.draft.artist_ids.append(artist.id)
        self._sync_search()

    def remove_artist(self, artist_id: int) -> None:
        self.draft.artist_ids = [i for i in self.draft.artist_ids if i != artist_id]
        self._sync_search()

    def move_artist(self, from_index: int, to_index: int) -> None:
        move_item(self.draft.artist_ids, from_index, to_index)

    def validate(self, draft: RecordingDraft) -> None:
        require(draft.composition_id, "Select a composition")
        if not draft.artist_ids:
            raise ValidationError("Select at least one artist")

    def build_payload(self, draft: RecordingDraft) -> RecordingPayload:
        return RecordingPayload(
            composition_id=draft.composition_id,
            year=extract_year(draft.year),
            artist_ids=list(draft.artist_ids),
            memo=clean_text(draft.memo),
        )

    def create(self, api: ApiClient, payload: RecordingPayload) -> Recording:
        return api.create_recording(payload)

    def update(self, api: ApiClient, record_id: int, payload: RecordingPayload) -> Recording:
        return api.update_recording(record_id, payload)
