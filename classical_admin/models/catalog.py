"""Catalog data models, as returned by the REST backend."""

from dataclasses import dataclass, field


@dataclass
class Composer:
    """A person credited with composing one or more compositions."""

    id: int
    full_name: str
    name: str  # short display name used in tables and sorting
    birth_year: int | None = None
    death_year: int | None = None
    nationality: str | None = None
    image_url: str | None = None
    composition_count: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Composer":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            full_name=data.get("full_name") or "",
            name=data.get("name") or "",
            birth_year=data.get("birth_year"),
            death_year=data.get("death_year"),
            nationality=data.get("nationality"),
            image_url=data.get("image_url"),
            composition_count=data.get("composition_count") or 0,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "full_name": self.full_name,
            "name": self.name,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "nationality": self.nationality,
            "image_url": self.image_url,
            "composition_count": self.composition_count,
        }


@dataclass
class Composition:
    """A musical work belonging to exactly one composer."""

    id: int
    composer_id: int
    title: str
    catalog_number: str | None = None  # opus / BWV / K. number
    sort_order: int | None = None
    recording_count: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Composition":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            composer_id=data["composer_id"],
            title=data.get("title") or "",
            catalog_number=data.get("catalog_number"),
            sort_order=data.get("sort_order"),
            recording_count=data.get("recording_count") or 0,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "composer_id": self.composer_id,
            "catalog_number": self.catalog_number,
            "sort_order": self.sort_order,
            "title": self.title,
            "recording_count": self.recording_count,
        }


@dataclass
class Artist:
    """A performer, optionally tagged with an instrument."""

    id: int
    name: str
    birth_year: int | None = None
    death_year: int | None = None
    nationality: str | None = None
    instrument: str | None = None
    recording_count: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "Artist":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            birth_year=data.get("birth_year"),
            death_year=data.get("death_year"),
            nationality=data.get("nationality"),
            instrument=data.get("instrument"),
            recording_count=data.get("recording_count") or 0,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "name": self.name,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "nationality": self.nationality,
            "instrument": self.instrument,
            "recording_count": self.recording_count,
        }


@dataclass
class Recording:
    """A performance of one composition by one or more artists."""

    id: int
    composition_id: int
    year: int | None = None
    artists: list[Artist] = field(default_factory=list)  # credit order
    memo: str | None = None

    @property
    def artist_ids(self) -> list[int]:
        return [artist.id for artist in self.artists]

    @classmethod
    def from_dict(cls, data: dict) -> "Recording":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            composition_id=data["composition_id"],
            year=data.get("year"),
            artists=[Artist.from_dict(a) for a in data.get("artists") or []],
            memo=data.get("memo"),
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "composition_id": self.composition_id,
            "year": self.year,
            "artists": [artist.to_dict() for artist in self.artists],
            "memo": self.memo,
        }


@dataclass
class AlbumImage:
    """One cover/booklet image of an album."""

    id: int
    album_id: int
    image_url: str
    is_primary: int = 0  # 0/1 on the wire

    @property
    def primary(self) -> bool:
        return self.is_primary == 1

    @classmethod
    def from_dict(cls, data: dict) -> "AlbumImage":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            album_id=data["album_id"],
            image_url=data["image_url"],
            is_primary=int(data.get("is_primary") or 0),
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "album_id": self.album_id,
            "image_url": self.image_url,
            "is_primary": self.is_primary,
        }


@dataclass
class AlbumCustomUrl:
    """A named external link attached to an album."""

    id: int
    album_id: int
    url_name: str
    url: str
    url_order: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> "AlbumCustomUrl":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            album_id=data["album_id"],
            url_name=data.get("url_name") or "",
            url=data.get("url") or "",
            url_order=data.get("url_order") or 0,
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "album_id": self.album_id,
            "url_name": self.url_name,
            "url": self.url,
            "url_order": self.url_order,
        }


@dataclass
class Album:
    """A physical or streaming release bundling recordings."""

    id: int
    album_type: str  # comma-joined tags, e.g. "LP,CD"
    discogs_url: str | None = None
    goclassic_url: str | None = None
    memo: str | None = None
    recordings: list[Recording] = field(default_factory=list)  # track order
    images: list[AlbumImage] = field(default_factory=list)
    custom_urls: list[AlbumCustomUrl] = field(default_factory=list)

    @property
    def recording_ids(self) -> list[int]:
        return [recording.id for recording in self.recordings]

    @classmethod
    def from_dict(cls, data: dict) -> "Album":
        """Build from a JSON object."""
        return cls(
            id=data["id"],
            album_type=data.get("album_type") or "",
            discogs_url=data.get("discogs_url"),
            goclassic_url=data.get("goclassic_url"),
            memo=data.get("memo"),
            recordings=[Recording.from_dict(r) for r in data.get("recordings") or []],
            images=[AlbumImage.from_dict(i) for i in data.get("images") or []],
            custom_urls=[AlbumCustomUrl.from_dict(u) for u in data.get("custom_urls") or []],
        )

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "album_type": self.album_type,
            "discogs_url": self.discogs_url,
            "goclassic_url": self.goclassic_url,
            "memo": self.memo,
            "recordings": [recording.to_dict() for recording in self.recordings],
            "images": [image.to_dict() for image in self.images],
            "custom_urls": [custom_url.to_dict() for custom_url in self.custom_urls],
        }


@dataclass
class AlbumsPageData:
    """Combined payload of GET /api/albums/page-data."""

    albums: list[Album] = field(default_factory=list)
    recordings: list[Recording] = field(default_factory=list)
    composers: list[Composer] = field(default_factory=list)
    compositions: list[Composition] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "AlbumsPageData":
        """Build from a JSON object."""
        return cls(
            albums=[Album.from_dict(a) for a in data.get("albums") or []],
            recordings=[Recording.from_dict(r) for r in data.get("recordings") or []],
            composers=[Composer.from_dict(c) for c in data.get("composers") or []],
            compositions=[Composition.from_dict(c) for c in data.get("compositions") or []],
        )
