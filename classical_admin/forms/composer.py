"""Composer create/edit form with portrait upload."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from ..models.catalog import Composer
from ..models.payloads import ComposerPayload
from ..services.api_client import ApiClient
from ..services.images import ImageUploader, ImageUploadError, validate_image_file
from ..utils.formatting import clean_text, extract_year
from .base import FormModal, require

logger = logging.getLogger(__name__)


@dataclass
class ComposerDraft:
    full_name: str = ""
    name: str = ""
    birth_year: int | str | None = None
    death_year: int | str | None = None
    nationality: str = ""
    image_url: str = ""


class ComposerForm(FormModal[ComposerDraft, Composer]):
    entity = "composer"

    def __init__(self, uploader: ImageUploader | None = None) -> None:
        super().__init__()
        self.uploader = uploader
        self.uploading = False

    def new_draft(self) -> ComposerDraft:
        return ComposerDraft()

    def draft_from(self, record: Composer) -> ComposerDraft:
        return ComposerDraft(
            full_name=record.full_name,
            name=record.name,
            birth_year=record.birth_year,
            death_year=record.death_year,
            nationality=record.nationality or "",
            image_url=record.image_url or "",
        )

    def validate(self, draft: ComposerDraft) -> None:
        require(draft.full_name, "Full name is required")
        require(draft.name, "Name is required")

    def build_payload(self, draft: ComposerDraft) -> ComposerPayload:
        return ComposerPayload(
            full_name=draft.full_name.strip(),
            name=draft.name.strip(),
            birth_year=extract_year(draft.birth_year),
            death_year=extract_year(draft.death_year),
            nationality=clean_text(draft.nationality),
            image_url=clean_text(draft.image_url),
        )

    def create(self, api: ApiClient, payload: ComposerPayload) -> Composer:
        return api.create_composer(payload)

    def update(self, api: ApiClient, record_id: int, payload: ComposerPayload) -> Composer:
        return api.update_composer(record_id, payload)

    def upload_image(self, file_path: Path) -> str:
        """Check and upload a portrait, storing its reference on the draft.

        Raises:
            ImageUploadError: The file is too large, not an image, or the
                upload failed. The message is also kept in `error`.
        """
        if self.draft is None:
            raise RuntimeError("Composer form is not open")

        try:
            validate_image_file(Path(file_path))
            if self.uploader is None:
                raise ImageUploadError("Image uploads are not configured")
            self.uploading = True
            try:
                url = self.uploader.upload(Path(file_path), "composers")
            finally:
                self.uploading = False
        except ImageUploadError as e:
            self.error = str(e)
            raise

        self.draft.image_url = url
        self.error = None
        logger.debug(f"Composer portrait uploaded: {url}")
        return url

    def remove_image(self) -> None:
        if self.draft is not None:
            self.draft.image_url = ""
