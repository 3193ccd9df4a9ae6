"""Composers list page with portrait uploads."""

from __future__ import annotations

from pathlib import Path

from ..forms.composer import ComposerForm
from ..models.catalog import Composer
from ..services.api_client import ApiClient, ApiError
from ..services.images import ImageUploader, ImageUploadError
from ..services.page_state import CompositionsPageState, PageStateStore
from ..utils.formatting import format_life, initials
from .base import FETCH_ALL_LIMIT, Confirm, ListPage, Navigate, decline, stay


class ComposersPage(ListPage[Composer]):
    route = "composers"
    entity = "composer"

    def __init__(
        self,
        api: ApiClient,
        store: PageStateStore | None = None,
        confirm: Confirm = decline,
        navigate: Navigate = stay,
        uploader: ImageUploader | None = None,
    ) -> None:
        super().__init__(api, ComposerForm(uploader), store, confirm, navigate)
        self.search_query = ""

    def fetch(self) -> list[Composer]:
        return self.api.get_composers(search=self.search_query or None)

    def search(self, query: str) -> list[Composer]:
        self.search_query = query.strip()
        return self.refresh()

    def upload_image(self, file_path: Path) -> str | None:
        """Upload a portrait into the open form; a failure is kept in `error`."""
        try:
            url = self.form.upload_image(file_path)
        except (ImageUploadError, ApiError) as e:
            self.error = str(e)
            return None
        self.error = None
        return url

    def delete_record(self, record_id: int) -> None:
        self.api.delete_composer(record_id)

    def delete_message(self, record: Composer) -> str:
        return f"Delete composer {record.name}?"

    def show_compositions(self, composer: Composer) -> None:
        """Open the compositions page filtered to this composer."""

        def build_state() -> CompositionsPageState:
            compositions = self.api.get_compositions(
                limit=FETCH_ALL_LIMIT, composer_id=composer.id
            )
            return CompositionsPageState(
                selected_composer_id=composer.id, search_query="", compositions=compositions
            )

        self.navigate_with_state("compositions", build_state)

    def rows(self) -> list[dict]:
        return [
            {
                "id": composer.id,
                "name": composer.name,
                "full_name": composer.full_name,
                "life": format_life(composer.birth_year, composer.death_year),
                "nationality": composer.nationality or "-",
                "portrait": composer.image_url or initials(composer.name),
                "compositions": composer.composition_count,
            }
            for composer in self.items
        ]
