"""Recording picker combining composition and artist filters."""

from typing import Callable, Iterable

from ..models.catalog import Artist, Composer, Composition, Recording
from .artist_search import ArtistSearch
from .composition_search import CompositionSearch


class RecordingSearch:
    """Find recordings by composition AND performer, for adding to an album.

    Results are shown only once a composition or an artist is selected.
    Recordings listed in exclude_ids (already on the album) never appear.
    """

    def __init__(
        self,
        recordings: Iterable[Recording],
        composers: Iterable[Composer],
        compositions: Iterable[Composition],
        artists: Iterable[Artist],
        on_add: Callable[[int], None] | None = None,
    ) -> None:
        self.recordings = list(recordings)
        self.on_add = on_add
        self.exclude_ids: list[int] = []
        self.composition_search = CompositionSearch(composers, compositions)
        self.artist_search = ArtistSearch(artists)

    @property
    def show_results(self) -> bool:
        return bool(
            self.composition_search.selected_composition_id or self.artist_search.selected_id
        )

    @property
    def available_recordings(self) -> list[Recording]:
        composition_id = self.composition_search.selected_composition_id
        artist_id = self.artist_search.selected_id
        excluded = set(self.exclude_ids)

        return [
            recording
            for recording in self.recordings
            if recording.id not in excluded
            and (not composition_id or recording.composition_id == composition_id)
            and (not artist_id or artist_id in recording.artist_ids)
        ]

    def results(self) -> list[Recording]:
        return self.available_recordings if self.show_results else []

    def add(self, recording: Recording) -> None:
        if self.on_add:
            self.on_add(recording.id)
