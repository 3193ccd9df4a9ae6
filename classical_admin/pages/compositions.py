"""Compositions list page for one composer at a time."""

from __future__ import annotations

import logging

from ..forms.composition import CompositionForm
from ..models.catalog import Composer, Composition
from ..processors.lookup import find_by_id, sort_composers
from ..services.api_client import ApiClient, ApiError
from ..services.page_state import CompositionsPageState, PageStateStore, RecordingsPageState
from .base import FETCH_ALL_LIMIT, Confirm, ListPage, Navigate, decline, stay

logger = logging.getLogger(__name__)


class CompositionsPage(ListPage[Composition]):
    """Compositions of one selected composer.

    Nothing is listed until a composer is chosen. Every load is saved as
    the compositions page state, and mount() restores it.
    """

    route = "compositions"
    entity = "composition"

    def __init__(
        self,
        api: ApiClient,
        store: PageStateStore | None = None,
        confirm: Confirm = decline,
        navigate: Navigate = stay,
    ) -> None:
        super().__init__(api, CompositionForm(), store, confirm, navigate)
        self.composers: list[Composer] = []
        self.selected_composer_id: int | None = None
        self.search_query = ""

    def mount(self) -> None:
        self.loading = True
        try:
            self.composers = sort_composers(self.api.get_composers(limit=FETCH_ALL_LIMIT))
        except ApiError as e:
            logger.error(f"Failed to load composers: {e}")
            self.error = str(e)
        finally:
            self.loading = False

        saved = self.store.load_state(CompositionsPageState)
        if saved is not None:
            self.selected_composer_id = saved.selected_composer_id
            self.search_query = saved.search_query
            self.items = saved.compositions

    def fetch(self) -> list[Composition]:
        if not self.selected_composer_id:
            return []
        return self.api.get_compositions(
            limit=FETCH_ALL_LIMIT,
            composer_id=self.selected_composer_id,
            search=self.search_query or None,
        )

    def after_load(self) -> None:
        self.store.save_state(
            CompositionsPageState(
                selected_composer_id=self.selected_composer_id,
                search_query=self.search_query,
                compositions=self.items,
            )
        )

    def filter_by_composer(self, composer_id: int | None) -> list[Composition]:
        self.selected_composer_id = composer_id or None
        return self.refresh()

    def search(self, query: str) -> list[Composition]:
        self.search_query = query.strip()
        return self.refresh()

    def open_create(self, **initial) -> None:
        # Default to the filtered composer, else the first one listed
        if "composer_id" not in initial:
            default = self.selected_composer_id or (self.composers[0].id if self.composers else None)
            initial["composer_id"] = default
        super().open_create(**initial)

    def delete_record(self, record_id: int) -> None:
        self.api.delete_composition(record_id)

    def delete_message(self, record: Composition) -> str:
        return f"Delete composition {record.title}?"

    def show_recordings(self, composition: Composition) -> None:
        """Open the recordings page filtered to this composition."""

        def build_state() -> RecordingsPageState:
            recordings = self.api.get_recordings(
                limit=FETCH_ALL_LIMIT, composition_id=composition.id
            )
            return RecordingsPageState(
                selected_composition_id=composition.id,
                filter_composer_id=composition.composer_id,
                recordings=recordings,
            )

        self.navigate_with_state("recordings", build_state)

    def rows(self) -> list[dict]:
        composer = find_by_id(self.composers, self.selected_composer_id)
        return [
            {
                "id": composition.id,
                "composer": composer.name if composer else "-",
                "catalog_number": composition.catalog_number or "-",
                "title": composition.title,
                "recordings": composition.recording_count,
            }
            for composition in self.items
        ]
