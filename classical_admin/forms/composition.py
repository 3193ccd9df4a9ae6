"""Composition create/edit form."""

from __future__ import annotations

from dataclasses import dataclass

from ..models.catalog import Composition
from ..models.payloads import CompositionPayload
from ..services.api_client import ApiClient
from ..utils.formatting import clean_text
from .base import FormModal, require


@dataclass
class CompositionDraft:
    composer_id: int | None = None
    title: str = ""
    catalog_number: str = ""


class CompositionForm(FormModal[CompositionDraft, Composition]):
    entity = "composition"

    def new_draft(self) -> CompositionDraft:
        return CompositionDraft()

    def draft_from(self, record: Composition) -> CompositionDraft:
        return CompositionDraft(
            composer_id=record.composer_id,
            title=record.title,
            catalog_number=record.catalog_number or "",
        )

    def validate(self, draft: CompositionDraft) -> None:
        require(draft.composer_id, "Select a composer")
        require(draft.title, "Title is required")

    def build_payload(self, draft: CompositionDraft) -> CompositionPayload:
        return CompositionPayload(
            composer_id=draft.composer_id,
            title=draft.title.strip(),
            catalog_number=clean_text(draft.catalog_number),
        )

    def create(self, api: ApiClient, payload: CompositionPayload) -> Composition:
        return api.create_composition(payload)

    def update(self, api: ApiClient, record_id: int, payload: CompositionPayload) -> Composition:
        return api.update_composition(record_id, payload)
