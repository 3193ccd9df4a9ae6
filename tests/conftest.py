"""Shared fixtures: an in-memory stand-in for the HTTP session and sample catalog data."""

import copy
import sys
from dataclasses import dataclass
from pathlib import Path

import pytest

# Add parent dir to path so classical_admin is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from classical_admin.services.api_client import ApiClient
from classical_admin.services.page_state import PageStateStore

BASE_URL = "http://catalog.test"


class FakeResponse:
    def __init__(self, status_code: int = 200, body=None) -> None:
        self.status_code = status_code
        self._body = body

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self._body is None:
            raise ValueError("No JSON body")
        return copy.deepcopy(self._body)


@dataclass
class Call:
    method: str
    path: str
    params: dict | None
    json: dict | None


class FakeSession:
    """Answers requests from canned routes and records every call.

    A route registered several times answers in order, then keeps
    repeating its last response. Unknown routes answer 404.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], list[FakeResponse]] = {}
        self.calls: list[Call] = []

    def add(self, method: str, path: str, body=None, status: int = 200) -> None:
        self.routes.setdefault((method, path), []).append(FakeResponse(status, body))

    def request(self, method, url, params=None, json=None, files=None, timeout=None):
        path = url.removeprefix(BASE_URL)
        self.calls.append(Call(method, path, params, json))
        queue = self.routes.get((method, path))
        if not queue:
            return FakeResponse(404, {"detail": "Not Found"})
        return queue.pop(0) if len(queue) > 1 else queue[0]

    def calls_to(self, method: str, path: str | None = None) -> list[Call]:
        return [
            call
            for call in self.calls
            if call.method == method and (path is None or call.path == path)
        ]


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def api(session):
    return ApiClient(BASE_URL, session=session)


@pytest.fixture
def store():
    return PageStateStore()


GOULD = {"id": 100, "name": "Glenn Gould", "instrument": "Piano", "birth_year": 1932, "death_year": 1982}
AIMARD = {"id": 101, "name": "Pierre-Laurent Aimard", "instrument": "Piano", "birth_year": 1957}
RICHTER = {"id": 102, "name": "Karl Richter", "instrument": "Conductor"}
PIATIGORSKY = {"id": 103, "name": "Gregor Piatigorsky", "instrument": "Cello"}


@pytest.fixture
def catalog():
    """Backend JSON for a small catalog.

    Bach has the Goldberg Variations (two Gould recordings) and the first
    Brandenburg Concerto (one Richter recording); Mozart has the Requiem.
    """
    composers = [
        {
            "id": 2,
            "full_name": "Wolfgang Amadeus Mozart",
            "name": "Mozart",
            "birth_year": 1756,
            "death_year": 1791,
            "nationality": "Austrian",
            "composition_count": 1,
        },
        {
            "id": 1,
            "full_name": "Johann Sebastian Bach",
            "name": "Bach",
            "birth_year": 1685,
            "death_year": 1750,
            "nationality": "German",
            "composition_count": 2,
        },
    ]
    compositions = [
        {"id": 10, "composer_id": 1, "title": "Goldberg Variations", "catalog_number": "BWV 988", "recording_count": 2},
        {"id": 11, "composer_id": 1, "title": "Brandenburg Concerto No. 1", "catalog_number": "BWV 1046", "recording_count": 1},
        {"id": 20, "composer_id": 2, "title": "Requiem", "catalog_number": "K. 626", "recording_count": 0},
    ]
    recordings = [
        {"id": 1000, "composition_id": 10, "year": 1955, "artists": [GOULD], "memo": None},
        {"id": 1001, "composition_id": 10, "year": 1981, "artists": [GOULD], "memo": "Digital"},
        {"id": 1002, "composition_id": 11, "year": 1967, "artists": [RICHTER], "memo": None},
    ]
    albums = [
        {
            "id": 500,
            "album_type": "LP,CD",
            "discogs_url": "https://www.discogs.com/release/1",
            "goclassic_url": None,
            "memo": None,
            "recordings": [recordings[0]],
            "images": [
                {"id": 1, "album_id": 500, "image_url": "/uploads/front.jpg", "is_primary": 0},
                {"id": 2, "album_id": 500, "image_url": "/uploads/back.jpg", "is_primary": 1},
            ],
            "custom_urls": [
                {"id": 1, "album_id": 500, "url_name": "Label", "url": "https://label.example", "url_order": 0},
            ],
        },
        {
            "id": 501,
            "album_type": "Roon",
            "recordings": [recordings[2]],
            "images": [],
            "custom_urls": [],
        },
    ]
    return {
        "composers": composers,
        "compositions": compositions,
        "artists": [GOULD, AIMARD, RICHTER, PIATIGORSKY],
        "recordings": recordings,
        "albums": albums,
    }
