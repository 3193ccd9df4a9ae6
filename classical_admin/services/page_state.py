"""Persisted page state used to hand filters between pages.

Each list page owns one key in a small JSON file (the equivalent of the
browser's local storage). A page writes its current filter and result list
there on every change; another page may pre-compute that state and write it
before navigating, so the target page opens already filtered. Everything in
the store is disposable: read or write failures are logged and treated as
"no saved state".
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import ClassVar, TypeVar

from ..models.catalog import Album, Artist, Composition, Recording

logger = logging.getLogger(__name__)

COMPOSITIONS_PAGE_STATE = "compositions_page_state"
RECORDINGS_PAGE_STATE = "recordings_page_state"
ALBUMS_PAGE_STATE = "albums_page_state"
ARTISTS_PAGE_STATE = "artists_page_state"


@dataclass
class CompositionsPageState:
    """Compositions page: composer filter, search text and the loaded list."""

    KEY: ClassVar[str] = COMPOSITIONS_PAGE_STATE

    selected_composer_id: int | None = None
    search_query: str = ""
    compositions: list[Composition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "CompositionsPageState":
        return cls(
            selected_composer_id=data.get("selected_composer_id"),
            search_query=data.get("search_query") or "",
            compositions=[Composition.from_dict(c) for c in data.get("compositions") or []],
        )

    def to_dict(self) -> dict:
        return {
            "selected_composer_id": self.selected_composer_id,
            "search_query": self.search_query,
            "compositions": [c.to_dict() for c in self.compositions],
        }


@dataclass
class RecordingsPageState:
    """Recordings page: composition/composer/artist filters and the loaded list."""

    KEY: ClassVar[str] = RECORDINGS_PAGE_STATE

    selected_composition_id: int | None = None
    filter_composer_id: int | None = None
    filter_artist_id: int | None = None
    recordings: list[Recording] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "RecordingsPageState":
        return cls(
            selected_composition_id=data.get("selected_composition_id"),
            filter_composer_id=data.get("filter_composer_id") or None,
            filter_artist_id=data.get("filter_artist_id"),
            recordings=[Recording.from_dict(r) for r in data.get("recordings") or []],
        )

    def to_dict(self) -> dict:
        return {
            "selected_composition_id": self.selected_composition_id,
            "filter_composer_id": self.filter_composer_id,
            "filter_artist_id": self.filter_artist_id,
            "recordings": [r.to_dict() for r in self.recordings],
        }


@dataclass
class AlbumsPageState:
    """Albums page: in-memory recording/composition filters and the album list."""

    KEY: ClassVar[str] = ALBUMS_PAGE_STATE

    selected_recording_id: int | None = None
    selected_composition_id: int | None = None
    albums: list[Album] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AlbumsPageState":
        return cls(
            selected_recording_id=data.get("selected_recording_id"),
            selected_composition_id=data.get("selected_composition_id"),
            albums=[Album.from_dict(a) for a in data.get("albums") or []],
        )

    def to_dict(self) -> dict:
        return {
            "selected_recording_id": self.selected_recording_id,
            "selected_composition_id": self.selected_composition_id,
            "albums": [a.to_dict() for a in self.albums],
        }


@dataclass
class ArtistsPageState:
    """Artists page: last search text and its results."""

    KEY: ClassVar[str] = ARTISTS_PAGE_STATE

    search_query: str = ""
    artists: list[Artist] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "ArtistsPageState":
        return cls(
            search_query=data.get("search_query") or "",
            artists=[Artist.from_dict(a) for a in data.get("artists") or []],
        )

    def to_dict(self) -> dict:
        return {
            "search_query": self.search_query,
            "artists": [a.to_dict() for a in self.artists],
        }


PageState = CompositionsPageState | RecordingsPageState | AlbumsPageState | ArtistsPageState
S = TypeVar("S", CompositionsPageState, RecordingsPageState, AlbumsPageState, ArtistsPageState)


class PageStateStore:
    """Key/value JSON store for page state, best-effort on every operation."""

    def __init__(self, path: Path | None = None) -> None:
        # path=None keeps state in memory only
        self._path = path
        self._memory: dict[str, dict] = {}
        self._lock = threading.Lock()

    def _read_all(self) -> dict[str, dict]:
        if self._path is None:
            return dict(self._memory)
        if not self._path.exists():
            return {}
        with open(self._path, encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("page state file is not a JSON object")
        return data

    def _write_all(self, data: dict[str, dict]) -> None:
        if self._path is None:
            self._memory = data
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        with open(self._path, "w", encoding="utf-8") as f:
            f.write(json_str)

    def load(self, key: str) -> dict | None:
        """Return the raw state saved under key, or None."""
        with self._lock:
            try:
                value = self._read_all().get(key)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to load page state: {e}")
                return None
        return value if isinstance(value, dict) else None

    def save(self, key: str, state: dict) -> None:
        """Overwrite the state saved under key."""
        with self._lock:
            try:
                try:
                    data = self._read_all()
                except ValueError:
                    data = {}  # corrupt file is overwritten
                data[key] = state
                self._write_all(data)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to save page state: {e}")

    def clear(self, key: str) -> None:
        """Drop the state saved under key."""
        with self._lock:
            try:
                data = self._read_all()
                if data.pop(key, None) is not None:
                    self._write_all(data)
            except (OSError, ValueError) as e:
                logger.error(f"Failed to clear page state: {e}")

    def load_state(self, state_cls: type[S]) -> S | None:
        """Typed load; malformed entries count as no saved state."""
        raw = self.load(state_cls.KEY)
        if raw is None:
            return None
        try:
            return state_cls.from_dict(raw)
        except (KeyError, TypeError, ValueError) as e:
            logger.error(f"Failed to parse {state_cls.KEY}: {e}")
            return None

    def save_state(self, state: PageState) -> None:
        """Typed save under the state's own key."""
        self.save(state.KEY, state.to_dict())
