"""Type-ahead suggestion lists shared by the search widgets."""

from typing import Generic, Iterable, TypeVar

from ..models.catalog import Artist, Composition

T = TypeVar("T")

# Queries shorter than this (after trimming) produce no suggestions
MIN_QUERY_LENGTH = 2

ARROW_DOWN = "ArrowDown"
ARROW_UP = "ArrowUp"
ENTER = "Enter"
ESCAPE = "Escape"


def normalize_query(query: str) -> str | None:
    """Lowercased, trimmed query, or None if too short to search."""
    query = query.strip()
    if len(query) < MIN_QUERY_LENGTH:
        return None
    return query.lower()


def filter_artists(
    artists: Iterable[Artist], query: str, exclude_ids: Iterable[int] = ()
) -> list[Artist]:
    """Artists whose name or instrument contains the query."""
    needle = normalize_query(query)
    if needle is None:
        return []

    excluded = set(exclude_ids)
    return [
        artist
        for artist in artists
        if artist.id not in excluded
        and (
            needle in artist.name.lower()
            or (artist.instrument is not None and needle in artist.instrument.lower())
        )
    ]


def filter_compositions(
    compositions: Iterable[Composition], composer_id: int | None, query: str
) -> list[Composition]:
    """The selected composer's compositions whose title or catalog number contains the query."""
    needle = normalize_query(query)
    if not composer_id or needle is None:
        return []

    return [
        composition
        for composition in compositions
        if composition.composer_id == composer_id
        and (
            needle in composition.title.lower()
            or (
                composition.catalog_number is not None
                and needle in composition.catalog_number.lower()
            )
        )
    ]


class SuggestionList(Generic[T]):
    """Suggestion items plus the keyboard-highlighted position (-1 for none)."""

    def __init__(self) -> None:
        self.items: list[T] = []
        self.highlighted = -1

    def __len__(self) -> int:
        return len(self.items)

    def set_items(self, items: Iterable[T]) -> None:
        self.items = list(items)
        self.highlighted = -1

    def clear(self) -> None:
        self.items = []
        self.highlighted = -1

    @property
    def highlighted_item(self) -> T | None:
        if 0 <= self.highlighted < len(self.items):
            return self.items[self.highlighted]
        return None

    def handle_key(self, key: str) -> T | None:
        """Apply a key press; returns the item chosen with Enter, if any."""
        if not self.items:
            return None

        if key == ARROW_DOWN:
            if self.highlighted < len(self.items) - 1:
                self.highlighted += 1
        elif key == ARROW_UP:
            self.highlighted = self.highlighted - 1 if self.highlighted > 0 else -1
        elif key == ENTER:
            return self.highlighted_item
        elif key == ESCAPE:
            self.clear()
        return None
