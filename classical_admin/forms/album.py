"""Album form: type tags, track list, images and external links."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..models.catalog import Album, Artist, Composer, Composition, Recording
from ..models.payloads import AlbumPayload, CustomUrlPayload
from ..processors.lookup import recording_label, split_album_types
from ..services.api_client import ApiClient
from ..services.images import ImageUploader, ImageUploadError, to_data_url
from ..utils.formatting import clean_text
from ..widgets.recording_search import RecordingSearch
from .base import FormModal, ValidationError, move_item

logger = logging.getLogger(__name__)

ALBUM_TYPES = ("LP", "CD", "Roon")

CUSTOM_URL_FIELDS = {"url_name", "url"}


@dataclass
class AlbumDraft:
    types: list[str] = field(default_factory=list)  # checkbox order
    discogs_url: str = ""
    goclassic_url: str = ""
    memo: str = ""
    recording_ids: list[int] = field(default_factory=list)  # track order
    image_urls: list[str] = field(default_factory=list)
    primary_image_index: int | None = None
    custom_urls: list[CustomUrlPayload] = field(default_factory=list)

    @property
    def album_type(self) -> str:
        return ",".join(self.types)


class AlbumForm(FormModal[AlbumDraft, Album]):
    """Album create/edit form.

    Images picked while creating are inlined as data URLs. While editing,
    with an uploader configured, they are uploaded first and the host's URL
    is kept instead. The primary image index follows removals so it keeps
    pointing at the same image.
    """

    entity = "album"

    def __init__(
        self,
        recordings: Iterable[Recording] = (),
        composers: Iterable[Composer] = (),
        compositions: Iterable[Composition] = (),
        artists: Iterable[Artist] = (),
        uploader: ImageUploader | None = None,
    ) -> None:
        super().__init__()
        self.uploader = uploader
        self.uploading = False
        self.recording_search = RecordingSearch(
            recordings, composers, compositions, artists, on_add=self.add_recording
        )

    def set_reference_data(
        self,
        recordings: Iterable[Recording],
        composers: Iterable[Composer],
        compositions: Iterable[Composition],
        artists: Iterable[Artist],
    ) -> None:
        self.recording_search = RecordingSearch(
            recordings, composers, compositions, artists, on_add=self.add_recording
        )
        self._sync_search()

    def _sync_search(self) -> None:
        self.recording_search.exclude_ids = list(self.draft.recording_ids) if self.draft else []

    def recording_labels(self) -> list[str]:
        """Track list as "Composer - Catalog - Title" lines."""
        if self.draft is None:
            return []
        search = self.recording_search
        return [
            recording_label(
                recording_id,
                search.recordings,
                search.composition_search.compositions,
                search.composition_search.composers,
            )
            for recording_id in self.draft.recording_ids
        ]

    def new_draft(self) -> AlbumDraft:
        return AlbumDraft()

    def draft_from(self, record: Album) -> AlbumDraft:
        primary = next((i for i, image in enumerate(record.images) if image.primary), None)
        return AlbumDraft(
            types=split_album_types(record.album_type),
            discogs_url=record.discogs_url or "",
            goclassic_url=record.goclassic_url or "",
            memo=record.memo or "",
            recording_ids=record.recording_ids,
            image_urls=[image.image_url for image in record.images],
            primary_image_index=primary,
            custom_urls=[
                CustomUrlPayload(url_name=u.url_name, url=u.url, url_order=u.url_order)
                for u in record.custom_urls
            ],
        )

    def open_create(self, **initial) -> AlbumDraft:
        draft = super().open_create(**initial)
        self._sync_search()
        return draft

    def open_edit(self, record: Album) -> AlbumDraft:
        draft = super().open_edit(record)
        self._sync_search()
        return draft

    # Type tags

    def has_type(self, album_type: str) -> bool:
        return self.draft is not None and album_type in self.draft.types

    def toggle_type(self, album_type: str) -> None:
        if album_type not in ALBUM_TYPES:
            raise ValueError(f"Unknown album type: {album_type}")
        if album_type in self.draft.types:
            self.draft.types.remove(album_type)
        else:
            self.draft.types.append(album_type)

    # Recordings

    def add_recording(self, recording_id: int) -> None:
        if recording_id not in self.draft.recording_ids:
            self.draft.recording_ids.append(recording_id)
        self._sync_search()

    def remove_recording(self, recording_id: int) -> None:
        self.draft.recording_ids = [i for i in self.draft.recording_ids if i != recording_id]
        self._sync_search()

    def move_recording(self, from_index: int, to_index: int) -> None:
        move_item(self.draft.recording_ids, from_index, to_index)

    # Images

    def add_images(self, file_paths: Iterable[Path]) -> list[str]:
        """Attach image files, returning the references appended to the draft.

        Raises:
            ImageUploadError: A file is not an image or could not be stored.
                Nothing is appended in that case.
        """
        paths = [Path(p) for p in file_paths]
        if not paths:
            return []

        self.uploading = True
        try:
            if self.is_editing and self.uploader is not None:
                urls = self.uploader.upload_many(paths, "albums")
            else:
                urls = [to_data_url(path) for path in paths]
        except ImageUploadError as e:
            self.error = str(e)
            raise
        finally:
            self.uploading = False

        self.draft.image_urls.extend(urls)
        self.error = None
        logger.debug(f"Added {len(urls)} album image(s)")
        return urls

    def remove_image(self, index: int) -> None:
        draft = self.draft
        if not 0 <= index < len(draft.image_urls):
            raise IndexError(f"No image at index {index}")
        del draft.image_urls[index]

        if draft.primary_image_index == index:
            draft.primary_image_index = None
        elif draft.primary_image_index is not None and draft.primary_image_index > index:
            draft.primary_image_index -= 1

    def set_primary_image(self, index: int) -> None:
        if not 0 <= index < len(self.draft.image_urls):
            raise IndexError(f"No image at index {index}")
        self.draft.primary_image_index = index

    # Custom links

    def add_custom_url(self, url_name: str = "", url: str = "") -> CustomUrlPayload:
        custom_url = CustomUrlPayload(
            url_name=url_name, url=url, url_order=len(self.draft.custom_urls)
        )
        self.draft.custom_urls.append(custom_url)
        return custom_url

    def remove_custom_url(self, index: int) -> None:
        del self.draft.custom_urls[index]
        for order, custom_url in enumerate(self.draft.custom_urls):
            custom_url.url_order = order

    def change_custom_url(self, index: int, field_name: str, value: str) -> None:
        if field_name not in CUSTOM_URL_FIELDS:
            raise ValueError(f"Unknown custom URL field: {field_name}")
        setattr(self.draft.custom_urls[index], field_name, value)

    # Submit

    def validate(self, draft: AlbumDraft) -> None:
        if not draft.album_type:
            raise ValidationError("Select an album type")
        if not draft.recording_ids:
            raise ValidationError("Select at least one recording")

    def build_payload(self, draft: AlbumDraft) -> AlbumPayload:
        return AlbumPayload(
            album_type=draft.album_type,
            recording_ids=list(draft.recording_ids),
            discogs_url=clean_text(draft.discogs_url),
            goclassic_url=clean_text(draft.goclassic_url),
            memo=clean_text(draft.memo),
            image_urls=list(draft.image_urls),
            primary_image_index=draft.primary_image_index,
            custom_urls=[
                CustomUrlPayload(
                    url_name=custom_url.url_name.strip(),
                    url=custom_url.url.strip(),
                    url_order=custom_url.url_order,
                )
                for custom_url in draft.custom_urls
            ],
        )

    def create(self, api: ApiClient, payload: AlbumPayload) -> Album:
        return api.create_album(payload)

    def update(self, api: ApiClient, record_id: int, payload: AlbumPayload) -> Album:
        return api.update_album(record_id, payload)
