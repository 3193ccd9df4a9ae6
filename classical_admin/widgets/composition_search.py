"""Two-stage composition picker: composer first, then a title search."""

from typing import Callable, Iterable

from ..models.catalog import Composer, Composition
from ..processors.lookup import composition_label, find_by_id, sort_composers
from .suggestions import SuggestionList, filter_compositions


class CompositionSearch:
    """Select a composer, then type-ahead among that composer's compositions.

    Changing the composer resets the query, the suggestions and the
    selected composition. clear() resets both selections.
    """

    def __init__(
        self,
        composers: Iterable[Composer],
        compositions: Iterable[Composition],
        on_composer_change: Callable[[int | None], None] | None = None,
        on_composition_select: Callable[[Composition], None] | None = None,
        on_clear: Callable[[], None] | None = None,
    ) -> None:
        self.composers = sort_composers(composers)
        self.compositions = list(compositions)
        self.on_composer_change = on_composer_change
        self.on_composition_select = on_composition_select
        self.on_clear = on_clear
        self.query = ""
        self.selected_composer_id: int | None = None
        self.selected_composition_id: int | None = None
        self.suggestions: SuggestionList[Composition] = SuggestionList()

    @property
    def selected_composition(self) -> Composition | None:
        return find_by_id(self.compositions, self.selected_composition_id)

    @property
    def selected_label(self) -> str:
        return composition_label(self.selected_composition)

    def _reset_query(self) -> None:
        self.query = ""
        self.suggestions.clear()

    def select_composer(self, composer_id: int | None) -> None:
        self._reset_query()
        self.selected_composer_id = composer_id or None
        self.selected_composition_id = None
        if self.on_composer_change:
            self.on_composer_change(self.selected_composer_id)

    def set_query(self, query: str) -> list[Composition]:
        self.query = query
        self.suggestions.set_items(
            filter_compositions(self.compositions, self.selected_composer_id, query)
        )
        return self.suggestions.items

    def handle_key(self, key: str) -> None:
        chosen = self.suggestions.handle_key(key)
        if chosen is not None:
            self.select_composition(chosen)

    def select_composition(self, composition: Composition) -> None:
        self._reset_query()
        self.selected_composition_id = composition.id
        if self.on_composition_select:
            self.on_composition_select(composition)

    def restore(self, composer_id: int | None, composition_id: int | None) -> None:
        """Set both selections without notifying.

        The composer is derived from the composition when not given.
        """
        composition = find_by_id(self.compositions, composition_id)
        if composition is not None and not composer_id:
            composer_id = composition.composer_id
        self._reset_query()
        self.selected_composer_id = composer_id or None
        self.selected_composition_id = composition.id if composition else None

    def clear(self) -> None:
        self._reset_query()
        self.selected_composer_id = None
        self.selected_composition_id = None
        if self.on_clear:
            self.on_clear()
