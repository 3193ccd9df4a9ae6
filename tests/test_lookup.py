"""Unit tests for classical_admin/processors (lookup helpers and batch fetch)."""

import sys
import threading
from pathlib import Path

import pytest

# Add parent dir to path so classical_admin is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from classical_admin.models.catalog import Album, Composer, Composition, Recording
from classical_admin.processors import lookup
from classical_admin.processors.batch import fetch_all


@pytest.fixture
def composers(catalog):
    return [Composer.from_dict(c) for c in catalog["composers"]]


@pytest.fixture
def compositions(catalog):
    return [Composition.from_dict(c) for c in catalog["compositions"]]


@pytest.fixture
def recordings(catalog):
    return [Recording.from_dict(r) for r in catalog["recordings"]]


@pytest.fixture
def albums(catalog):
    return [Album.from_dict(a) for a in catalog["albums"]]


class TestFindById:
    """Tests for find_by_id() and sort_composers()."""

    def test_found(self, compositions):
        assert lookup.find_by_id(compositions, 11).title == "Brandenburg Concerto No. 1"

    def test_missing(self, compositions):
        assert lookup.find_by_id(compositions, 999) is None
        assert lookup.find_by_id(compositions, None) is None

    def test_sort_composers_by_name(self, composers):
        assert [c.name for c in lookup.sort_composers(composers)] == ["Bach", "Mozart"]


class TestDisplayHelpers:
    """Tests for the composer/composition/recording display lookups."""

    def test_composer_name(self, compositions, composers):
        assert lookup.composer_name(20, compositions, composers) == "Mozart"

    def test_composer_name_missing_composition(self, compositions, composers):
        assert lookup.composer_name(999, compositions, composers) == "-"

    def test_composer_name_missing_composer(self, composers):
        orphan = [Composition(id=30, composer_id=99, title="Orphan")]
        assert lookup.composer_name(30, orphan, composers) == "-"

    def test_composition_display(self, compositions):
        assert lookup.composition_display(10, compositions) == ("Goldberg Variations", "BWV 988")
        assert lookup.composition_display(999, compositions) == ("-", None)

    def test_composition_label(self, compositions):
        assert lookup.composition_label(compositions[0]) == "BWV 988 - Goldberg Variations"
        assert lookup.composition_label(Composition(id=1, composer_id=1, title="Aria")) == "Aria"
        assert lookup.composition_label(None) == "-"

    def test_recording_label(self, recordings, compositions, composers):
        label = lookup.recording_label(1000, recordings, compositions, composers)
        assert label == "Bach - BWV 988 - Goldberg Variations"
        assert lookup.recording_label(999, recordings, compositions, composers) == "-"

    def test_recording_artist_names(self, recordings):
        assert lookup.recording_artist_names(recordings[0]) == "Glenn Gould"
        assert lookup.recording_artist_names(Recording(id=1, composition_id=10)) == "-"


class TestAlbumHelpers:
    """Tests for album cross-references."""

    def test_album_count(self, albums):
        assert lookup.album_count(1000, albums) == 1
        assert lookup.album_count(1001, albums) == 0

    def test_albums_with_composition(self, albums):
        assert [a.id for a in lookup.albums_with_composition(albums, 11)] == [501]

    def test_primary_image(self, albums):
        """The flagged image wins over the first one."""
        assert lookup.primary_image_url(albums[0]) == "/uploads/back.jpg"
        assert lookup.primary_image_url(albums[1]) is None

    def test_primary_image_falls_back_to_first(self, albums):
        album = albums[0]
        for image in album.images:
            image.is_primary = 0
        assert lookup.primary_image_url(album) == "/uploads/front.jpg"

    def test_album_types_ordered(self):
        album = Album(id=1, album_type="Roon, CD,LP")
        assert lookup.album_types(album) == ["LP", "CD", "roon"]

    def test_album_types_unknown_dropped(self):
        assert lookup.album_types(Album(id=1, album_type="Cassette")) == []
        assert lookup.album_types(Album(id=1, album_type="")) == []


class TestFetchAll:
    """Tests for fetch_all() batch helper."""

    def test_results_by_name(self):
        data = fetch_all(a=lambda: 1, b=lambda: [2])
        assert data == {"a": 1, "b": [2]}

    def test_runs_in_parallel(self):
        """Both calls are in flight at the same time."""
        barrier = threading.Barrier(2, timeout=5)

        def wait():
            barrier.wait()
            return True

        assert fetch_all(first=wait, second=wait) == {"first": True, "second": True}

    def test_failure_propagates(self):
        def fail():
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            fetch_all(ok=lambda: 1, broken=fail)

    def test_empty(self):
        assert fetch_all() == {}
