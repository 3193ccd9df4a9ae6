"""Request bodies for create/update calls."""

from dataclasses import dataclass, field


@dataclass
class ComposerPayload:
    full_name: str
    name: str
    birth_year: int | None = None
    death_year: int | None = None
    nationality: str | None = None
    image_url: str | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "full_name": self.full_name,
            "name": self.name,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "nationality": self.nationality,
            "image_url": self.image_url,
        }


@dataclass
class CompositionPayload:
    composer_id: int
    title: str
    catalog_number: str | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "composer_id": self.composer_id,
            "catalog_number": self.catalog_number,
            "title": self.title,
        }


@dataclass
class ArtistPayload:
    name: str
    birth_year: int | None = None
    death_year: int | None = None
    nationality: str | None = None
    instrument: str | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "name": self.name,
            "birth_year": self.birth_year,
            "death_year": self.death_year,
            "nationality": self.nationality,
            "instrument": self.instrument,
        }


@dataclass
class RecordingPayload:
    composition_id: int
    year: int | None = None
    artist_ids: list[int] = field(default_factory=list)  # credit order
    memo: str | None = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "composition_id": self.composition_id,
            "year": self.year,
            "artist_ids": list(self.artist_ids),
            "memo": self.memo,
        }


@dataclass
class CustomUrlPayload:
    url_name: str
    url: str
    url_order: int = 0

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {"url_name": self.url_name, "url": self.url, "url_order": self.url_order}


@dataclass
class AlbumPayload:
    album_type: str
    recording_ids: list[int] = field(default_factory=list)  # track order
    discogs_url: str | None = None
    goclassic_url: str | None = None
    memo: str | None = None
    image_urls: list[str] = field(default_factory=list)
    primary_image_index: int | None = None
    custom_urls: list[CustomUrlPayload] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dictionary."""
        return {
            "album_type": self.album_type,
            "discogs_url": self.discogs_url,
            "goclassic_url": self.goclassic_url,
            "memo": self.memo,
            "recording_ids": list(self.recording_ids),
            "image_urls": list(self.image_urls),
            "primary_image_index": self.primary_image_index,
            "custom_urls": [custom_url.to_dict() for custom_url in self.custom_urls],
        }
