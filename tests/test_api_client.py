"""Unit tests for classical_admin/services/api_client.py."""

import sys
from pathlib import Path

import pytest
import requests

# Add parent dir to path so classical_admin is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from classical_admin.models.payloads import (
    AlbumPayload,
    ArtistPayload,
    CustomUrlPayload,
    RecordingPayload,
)
from classical_admin.services.api_client import ApiClient, ApiError


class TestListParams:
    """Tests for list query parameters."""

    def test_default_paging(self, api, session, catalog):
        """Lists send skip/limit even without filters."""
        session.add("GET", "/api/composers/", catalog["composers"])
        api.get_composers()
        assert session.calls[0].params == {"skip": 0, "limit": 100}

    def test_falsy_filters_omitted(self, api, session):
        """Empty or zero filters are not sent."""
        session.add("GET", "/api/recordings/", [])
        api.get_recordings(limit=1000, composition_id=None, composer_id=0, artist_id=100)
        assert session.calls[0].params == {"skip": 0, "limit": 1000, "artist_id": 100}

    def test_search_sent(self, api, session):
        session.add("GET", "/api/compositions/", [])
        api.get_compositions(composer_id=1, search="BWV")
        assert session.calls[0].params == {
            "skip": 0,
            "limit": 100,
            "composer_id": 1,
            "search": "BWV",
        }


class TestDecoding:
    """Tests for response decoding into models."""

    def test_recordings_keep_artist_order(self, api, session, catalog):
        session.add("GET", "/api/recordings/", catalog["recordings"])
        recordings = api.get_recordings(composition_id=10)
        assert [r.id for r in recordings] == [1000, 1001, 1002]
        assert recordings[0].artist_ids == [100]

    def test_album_images_and_links(self, api, session, catalog):
        session.add("GET", "/api/albums/500", catalog["albums"][0])
        album = api.get_album(500)
        assert album.album_type == "LP,CD"
        assert [image.primary for image in album.images] == [False, True]
        assert album.custom_urls[0].url_name == "Label"
        assert album.recording_ids == [1000]

    def test_page_data(self, api, session, catalog):
        session.add(
            "GET",
            "/api/albums/page-data",
            {
                "albums": catalog["albums"],
                "recordings": catalog["recordings"],
                "composers": catalog["composers"],
                "compositions": catalog["compositions"],
            },
        )
        data = api.get_albums_page_data()
        assert len(data.albums) == 2
        assert len(data.compositions) == 3

    def test_delete_no_content(self, api, session):
        """A 204 response decodes to None."""
        session.add("DELETE", "/api/artists/100", None, status=204)
        assert api.delete_artist(100) is None


class TestRequestBodies:
    """Tests for create/update payload serialization."""

    def test_recording_body(self, api, session, catalog):
        session.add("POST", "/api/recordings/", catalog["recordings"][0])
        api.create_recording(RecordingPayload(composition_id=10, year=1955, artist_ids=[100, 102]))
        assert session.calls[0].json == {
            "composition_id": 10,
            "year": 1955,
            "artist_ids": [100, 102],
            "memo": None,
        }

    def test_album_body(self, api, session, catalog):
        session.add("PUT", "/api/albums/500", catalog["albums"][0])
        payload = AlbumPayload(
            album_type="LP,CD",
            recording_ids=[1000],
            image_urls=["/uploads/front.jpg"],
            primary_image_index=0,
            custom_urls=[CustomUrlPayload(url_name="Label", url="https://label.example")],
        )
        api.update_album(500, payload)

        body = session.calls[0].json
        assert body["album_type"] == "LP,CD"
        assert body["primary_image_index"] == 0
        assert body["custom_urls"] == [
            {"url_name": "Label", "url": "https://label.example", "url_order": 0}
        ]


class TestErrors:
    """Tests for error message extraction."""

    def test_detail_message(self, api, session):
        """The backend's detail field becomes the error message."""
        session.add("DELETE", "/api/composers/1", {"detail": "Composer has compositions"}, status=400)
        with pytest.raises(ApiError) as exc_info:
            api.delete_composer(1)
        assert str(exc_info.value) == "Composer has compositions"
        assert exc_info.value.status_code == 400

    def test_validation_list(self, api, session):
        """FastAPI validation errors are joined."""
        session.add(
            "POST",
            "/api/artists/",
            {"detail": [{"msg": "field required"}, {"msg": "value is not a valid integer"}]},
            status=422,
        )
        with pytest.raises(ApiError) as exc_info:
            api.create_artist(ArtistPayload(name="x"))
        assert str(exc_info.value) == "field required; value is not a valid integer"

    def test_status_fallback(self, api, session):
        """Without a usable body the status code is reported."""
        session.add("GET", "/api/albums/9", None, status=500)
        with pytest.raises(ApiError) as exc_info:
            api.get_album(9)
        assert str(exc_info.value) == "HTTP 500"

    def test_transport_error(self):
        """Connection failures are wrapped in ApiError."""

        class BrokenSession:
            def request(self, *args, **kwargs):
                raise requests.ConnectionError("connection refused")

        client = ApiClient("http://catalog.test/", session=BrokenSession())
        with pytest.raises(ApiError) as exc_info:
            client.get_artists()
        assert "connection refused" in str(exc_info.value)

    def test_trailing_slash_stripped(self):
        assert ApiClient("http://catalog.test/").base_url == "http://catalog.test"


class TestImageUpload:
    """Tests for multipart image uploads."""

    @pytest.fixture
    def png(self, tmp_path):
        path = tmp_path / "cover.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n")
        return path

    def test_returns_image_url(self, api, session, png):
        session.add("POST", "/api/albums/upload-image", {"image_url": "/uploads/albums/cover.png"})
        assert api.upload_album_image(png) == "/uploads/albums/cover.png"

    def test_missing_image_url(self, api, session, png):
        session.add("POST", "/api/composers/upload-image", {"filename": "cover.png"})
        with pytest.raises(ApiError, match="Upload response missing image_url"):
            api.upload_composer_image(png)
