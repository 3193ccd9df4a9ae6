"""Artist create/edit form."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.catalog import Artist
from ..models.payloads import ArtistPayload
from ..services.api_client import ApiClient
from ..utils.formatting import clean_text, extract_year
from .base import FormModal, require


@dataclass
class ArtistDraft:
    name: str = ""
    birth_year: int | str | None = None
    death_year: int | str | None = None
    nationality: str = ""
    instrument: str = ""


class ArtistForm(FormModal[ArtistDraft, Artist]):
    entity = "artist"

    def new_draft(self) -> ArtistDraft:
        return ArtistDraft()

    def draft_from(self, record: Artist) -> ArtistDraft:
        return ArtistDraft(
            name=record.name,
            birth_year=record.birth_year,
            death_year=record.death_year,
            nationality=record.nationality or "",
            instrument=record.instrument or "",
        )

    def validate(self, draft: ArtistDraft) -> None:
        require(draft.name, "Name is required")

    def build_payload(self, draft: ArtistDraft) -> ArtistPayload:
        return ArtistPayload(
            name=draft.name.strip(),
            birth_year=extract_year(draft.birth_year),
            death_year=extract_year(draft.death_year),
            nationality=clean_text(draft.nationality),
            instrument=clean_text(draft.instrument),
        )

    def create(self, api: ApiClient, payload: ArtistPayload) -> Artist:
        return api.create_artist(payload)

    def update(self, api: ApiClient, record_id: int, payload: ArtistPayload) -> Artist:
        return api.update_artist(record_id, payload)
