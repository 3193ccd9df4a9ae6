"""Albums list page, filtered in memory by recording or composition."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from ..forms.album import AlbumForm
from ..models.catalog import Album, Composer, Composition, Recording
from ..processors import lookup
from ..processors.batch import fetch_all
from ..services.api_client import ApiClient, ApiError
from ..services.images import ImageUploader, ImageUploadError
from ..services.page_state import AlbumsPageState, PageStateStore
from .base import FETCH_ALL_LIMIT, Confirm, ListPage, Navigate, decline, stay

logger = logging.getLogger(__name__)


class AlbumsPage(ListPage[Album]):
    """All albums, narrowed in memory by recording and/or composition."""

    route = "albums"
    entity = "album"

    def __init__(
        self,
        api: ApiClient,
        store: PageStateStore | None = None,
        confirm: Confirm = decline,
        navigate: Navigate = stay,
        uploader: ImageUploader | None = None,
    ) -> None:
        super().__init__(api, AlbumForm(uploader=uploader), store, confirm, navigate)
        self.recordings: list[Recording] = []
        self.composers: list[Composer] = []
        self.compositions: list[Composition] = []
        self.selected_recording_id: int | None = None
        self.selected_composition_id: int | None = None

    def mount(self) -> None:
        self.loading = True
        try:
            data = fetch_all(
                page_data=self.api.get_albums_page_data,
                artists=lambda: self.api.get_artists(limit=FETCH_ALL_LIMIT),
            )
        except ApiError as e:
            logger.error(f"Failed to load albums page data: {e}")
            self.error = str(e)
            return
        finally:
            self.loading = False

        page_data = data["page_data"]
        self.items = page_data.albums
        self.recordings = page_data.recordings
        self.composers = lookup.sort_composers(page_data.composers)
        self.compositions = page_data.compositions
        self.error = None
        self.form.set_reference_data(
            self.recordings, self.composers, self.compositions, data["artists"]
        )

        saved = self.store.load_state(AlbumsPageState)
        if saved is not None:
            self.selected_recording_id = saved.selected_recording_id
            self.selected_composition_id = saved.selected_composition_id

    def fetch(self) -> list[Album]:
        return self.api.get_albums(limit=FETCH_ALL_LIMIT)

    def after_load(self) -> None:
        self._save_state()

    def _save_state(self) -> None:
        self.store.save_state(
            AlbumsPageState(
                selected_recording_id=self.selected_recording_id,
                selected_composition_id=self.selected_composition_id,
                albums=self.items,
            )
        )

    @property
    def visible_albums(self) -> list[Album]:
        albums = self.items
        if self.selected_recording_id:
            albums = lookup.albums_with_recording(albums, self.selected_recording_id)
        if self.selected_composition_id:
            albums = lookup.albums_with_composition(albums, self.selected_composition_id)
        return albums

    def filter_by_recording(self, recording_id: int | None) -> list[Album]:
        self.selected_recording_id = recording_id or None
        self._save_state()
        return self.visible_albums

    def filter_by_composition(self, composition_id: int | None) -> list[Album]:
        self.selected_composition_id = composition_id or None
        self._save_state()
        return self.visible_albums

    def clear_filters(self) -> list[Album]:
        self.selected_recording_id = None
        self.selected_composition_id = None
        self._save_state()
        return self.visible_albums

    def add_images(self, file_paths: Iterable[Path]) -> list[str]:
        """Attach images to the open album form; a failure is kept in `error`."""
        try:
            urls = self.form.add_images(file_paths)
        except (ImageUploadError, ApiError) as e:
            self.error = str(e)
            return []
        self.error = None
        return urls

    def delete_record(self, record_id: int) -> None:
        self.api.delete_album(record_id)

    def delete_message(self, record: Album) -> str:
        return f"Delete {record.album_type} album (ID: {record.id})?"

    def rows(self) -> list[dict]:
        return [
            {
                "id": album.id,
                "types": ", ".join(lookup.album_types(album)) or "-",
                "recordings": "; ".join(
                    lookup.recording_label(
                        recording.id, self.recordings, self.compositions, self.composers
                    )
                    for recording in album.recordings
                )
                or "-",
                "artists": "; ".join(
                    lookup.recording_artist_names(recording) for recording in album.recordings
                )
                or "-",
                "image": lookup.primary_image_url(album) or "-",
            }
            for album in self.visible_albums
        ]
