"""REST client for the catalog backend."""

from __future__ import annotations

import logging
import mimetypes
from pathlib import Path
from typing import Any

import requests

from ..models.catalog import Album, AlbumsPageData, Artist, Composer, Composition, Recording
from ..models.payloads import (
    AlbumPayload,
    ArtistPayload,
    ComposerPayload,
    CompositionPayload,
    RecordingPayload,
)

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


class ApiError(Exception):
    """A failed backend call, reduced to one human-readable message."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __str__(self) -> str:
        return self.message


class ApiClient:
    """Typed access to the composers/compositions/artists/recordings/albums API.

    No retries: a failed call raises ApiError and the caller keeps its
    previous state.
    """

    def __init__(
        self,
        base_url: str,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def _request(
        self,
        method: str,
        endpoint: str,
        params: dict | None = None,
        json: dict | None = None,
        files: dict | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body (None for 204)."""
        url = f"{self._base_url}{endpoint}"
        logger.debug(f"{method} {url} params={params}")
        try:
            response = self._session.request(
                method,
                url,
                params=params,
                json=json,
                files=files,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.debug(f"{method} {url} failed: {e}")
            raise ApiError(str(e)) from e

        if not 200 <= response.status_code < 300:
            raise ApiError(self._error_message(response), response.status_code)

        if response.status_code == 204:
            return None

        try:
            return response.json()
        except ValueError as e:
            raise ApiError(f"Invalid JSON response from {endpoint}", response.status_code) from e

    def _error_message(self, response: requests.Response) -> str:
        """Extract the backend's error message, falling back to the status code."""
        try:
            body = response.json()
        except ValueError:
            body = None

        if isinstance(body, dict):
            detail = body.get("detail") or body.get("message")
            if isinstance(detail, str) and detail:
                return detail
            # FastAPI validation errors come back as a list of {msg: ...}
            if isinstance(detail, list) and detail:
                messages = [d.get("msg", "") for d in detail if isinstance(d, dict)]
                joined = "; ".join(m for m in messages if m)
                if joined:
                    return joined

        return f"HTTP {response.status_code}"

    def _list_params(self, skip: int, limit: int, **filters: Any) -> dict:
        params: dict[str, Any] = {"skip": skip, "limit": limit}
        for key, value in filters.items():
            if value:
                params[key] = value
        return params

    def _upload(self, endpoint: str, file_path: Path) -> str:
        content_type = mimetypes.guess_type(file_path.name)[0] or "application/octet-stream"
        with open(file_path, "rb") as f:
            data = self._request(
                "POST", endpoint, files={"file": (file_path.name, f, content_type)}
            )
        if not isinstance(data, dict) or not data.get("image_url"):
            raise ApiError("Upload response missing image_url")
        return data["image_url"]

    # Composers

    def get_composers(
        self, skip: int = 0, limit: int = DEFAULT_LIMIT, search: str | None = None
    ) -> list[Composer]:
        data = self._request("GET", "/api/composers/", params=self._list_params(skip, limit, search=search))
        return [Composer.from_dict(item) for item in data]

    def get_composer(self, composer_id: int) -> Composer:
        return Composer.from_dict(self._request("GET", f"/api/composers/{composer_id}"))

    def create_composer(self, payload: ComposerPayload) -> Composer:
        return Composer.from_dict(self._request("POST", "/api/composers/", json=payload.to_dict()))

    def update_composer(self, composer_id: int, payload: ComposerPayload) -> Composer:
        return Composer.from_dict(
            self._request("PUT", f"/api/composers/{composer_id}", json=payload.to_dict())
        )

    def delete_composer(self, composer_id: int) -> None:
        self._request("DELETE", f"/api/composers/{composer_id}")

    def upload_composer_image(self, file_path: Path) -> str:
        """Upload a portrait; returns the stored path or URL."""
        return self._upload("/api/composers/upload-image", Path(file_path))

    # Compositions

    def get_compositions(
        self,
        skip: int = 0,
        limit: int = DEFAULT_LIMIT,
        composer_id: int | None = None,
        search: str | None = None,
    ) -> list[Composition]:
        params = self._list_params(skip, limit, composer_id=composer_id, search=search)
        data = self._request("GET", "/api/compositions/", params=params)
        return [Composition.from_dict(item) for item in data]

    def get_composition(self, composition_id: int) -> Composition:
        return Composition.from_dict(self._request("GET", f"/api/compositions/{composition_id}"))

    def create_composition(self, payload: CompositionPayload) -> Composition:
        return Composition.from_dict(
            self._request("POST", "/api/compositions/", json=payload.to_dict())
        )

    def update_composition(self, composition_id: int, payload: CompositionPayload) -> Composition:
        return Composition.from_dict(
            self._request("PUT", f"/api/compositions/{composition_id}", json=payload.to_dict())
        )

    def delete_composition(self, composition_id: int) -> None:
        self._request("DELETE", f"/api/compositions/{composition_id}")

    # Artists

    def get_artists(
        self, skip: int = 0, limit: int = DEFAULT_LIMIT, search: str | None = None
    ) -> list[Artist]:
        data = self._request("GET", "/api/artists/", params=self._list_params(skip, limit, search=search))
        return [Artist.from_dict(item) for item in data]

    def get_artist(self, artist_id: int) -> Artist:
        return Artist.from_dict(self._request("GET", f"/api/artists/{artist_id}"))

    def create_artist(self, payload: ArtistPayload) -> Artist:
        return Artist.from_dict(self._request("POST", "/api/artists/", json=payload.to_dict()))

    def update_artist(self, artist_id: int, payload: ArtistPayload) -> Artist:
        return Artist.from_dict(
            self._request("PUT", f"/api/artists/{artist_id}", json=payload.to_dict())
        )

    def delete_artist(self, artist_id: int) -> None:
        self._request("DELETE", f"/api/artists/{artist_id}")

    # Recordings

    def get_recordings(
        self,
        skip: int = 0,
        limit: int = DEFAULT_LIMIT,
        composition_id: int | None = None,
        composer_id: int | None = None,
        artist_id: int | None = None,
    ) -> list[Recording]:
        params = self._list_params(
            skip,
            limit,
            composition_id=composition_id,
            composer_id=composer_id,
            artist_id=artist_id,
        )
        data = self._request("GET", "/api/recordings/", params=params)
        return [Recording.from_dict(item) for item in data]

    def get_recording(self, recording_id: int) -> Recording:
        return Recording.from_dict(self._request("GET", f"/api/recordings/{recording_id}"))

    def create_recording(self, payload: RecordingPayload) -> Recording:
        return Recording.from_dict(self._request("POST", "/api/recordings/", json=payload.to_dict()))

    def update_recording(self, recording_id: int, payload: RecordingPayload) -> Recording:
        return Recording.from_dict(
            self._request("PUT", f"/api/recordings/{recording_id}", json=payload.to_dict())
        )

    def delete_recording(self, recording_id: int) -> None:
        self._request("DELETE", f"/api/recordings/{recording_id}")

    # Albums

    def get_albums(
        self,
        skip: int = 0,
        limit: int = DEFAULT_LIMIT,
        album_type: str | None = None,
        search: str | None = None,
    ) -> list[Album]:
        params = self._list_params(skip, limit, album_type=album_type, search=search)
        data = self._request("GET", "/api/albums/", params=params)
        return [Album.from_dict(item) for item in data]

    def get_album(self, album_id: int) -> Album:
        return Album.from_dict(self._request("GET", f"/api/albums/{album_id}"))

    def get_albums_page_data(self) -> AlbumsPageData:
        """Fetch albums with the recordings/composers/compositions they reference."""
        return AlbumsPageData.from_dict(self._request("GET", "/api/albums/page-data"))

    def create_album(self, payload: AlbumPayload) -> Album:
        return Album.from_dict(self._request("POST", "/api/albums/", json=payload.to_dict()))

    def update_album(self, album_id: int, payload: AlbumPayload) -> Album:
        return Album.from_dict(
            self._request("PUT", f"/api/albums/{album_id}", json=payload.to_dict())
        )

    def delete_album(self, album_id: int) -> None:
        self._request("DELETE", f"/api/albums/{album_id}")

    def upload_album_image(self, file_path: Path) -> str:
        """Upload a cover image; returns the stored path or URL."""
        return self._upload("/api/albums/upload-image", Path(file_path))
