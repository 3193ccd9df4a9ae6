"""Cross-referencing of independently fetched lists by id.

Lists are small (hundreds of records), so every lookup is a linear scan,
recomputed on demand. A missing reference yields a "-" placeholder instead
of an error.
"""

from typing import Iterable, Protocol, Sequence, TypeVar

from ..models.catalog import Album, Composer, Composition, Recording

PLACEHOLDER = "-"

# Display order of album type badges
ALBUM_TYPE_ORDER = ["lp", "cd", "roon"]


class _HasId(Protocol):
    id: int


T = TypeVar("T", bound=_HasId)


def find_by_id(items: Iterable[T], item_id: int | None) -> T | None:
    """First item with the given id, or None."""
    if item_id is None:
        return None
    return next((item for item in items if item.id == item_id), None)


def sort_composers(composers: Iterable[Composer]) -> list[Composer]:
    """Composers ordered by short name, case-insensitively."""
    return sorted(composers, key=lambda c: c.name.casefold())


def composer_name(
    composition_id: int, compositions: Sequence[Composition], composers: Sequence[Composer]
) -> str:
    """Composer name for a composition id, resolving composition -> composer."""
    composition = find_by_id(compositions, composition_id)
    if composition is None:
        return PLACEHOLDER
    composer = find_by_id(composers, composition.composer_id)
    return composer.name if composer and composer.name else PLACEHOLDER


def composition_display(
    composition_id: int, compositions: Sequence[Composition]
) -> tuple[str, str | None]:
    """(title, catalog number) for a composition id."""
    composition = find_by_id(compositions, composition_id)
    if composition is None:
        return PLACEHOLDER, None
    return composition.title, composition.catalog_number or None


def composition_label(composition: Composition | None) -> str:
    """"BWV 1046 - Brandenburg Concerto No. 1", or just the title."""
    if composition is None:
        return PLACEHOLDER
    if composition.catalog_number:
        return f"{composition.catalog_number} - {composition.title}"
    return composition.title


def recording_artist_names(recording: Recording) -> str:
    """Comma-joined performer names in credit order."""
    return ", ".join(artist.name for artist in recording.artists) or PLACEHOLDER


def recording_label(
    recording_id: int,
    recordings: Sequence[Recording],
    compositions: Sequence[Composition],
    composers: Sequence[Composer],
) -> str:
    """"Bach - BWV 988 - Goldberg Variations" for a recording id."""
    recording = find_by_id(recordings, recording_id)
    if recording is None:
        return PLACEHOLDER

    composition = find_by_id(compositions, recording.composition_id)
    if composition is None:
        return PLACEHOLDER

    name = composer_name(composition.id, compositions, composers)
    if composition.catalog_number:
        return f"{name} - {composition.catalog_number} - {composition.title}"
    return f"{name} - {composition.title}"


def albums_with_recording(albums: Iterable[Album], recording_id: int) -> list[Album]:
    return [album for album in albums if any(r.id == recording_id for r in album.recordings)]


def albums_with_composition(albums: Iterable[Album], composition_id: int) -> list[Album]:
    return [
        album
        for album in albums
        if any(r.composition_id == composition_id for r in album.recordings)
    ]


def album_count(recording_id: int, albums: Iterable[Album]) -> int:
    """Number of albums containing the recording."""
    return len(albums_with_recording(albums, recording_id))


def primary_image_url(album: Album) -> str | None:
    """The primary image, else the first image, else None."""
    for image in album.images:
        if image.primary:
            return image.image_url
    return album.images[0].image_url if album.images else None


def split_album_types(album_type: str | None) -> list[str]:
    """Split the comma-joined type string, keeping stored case and order."""
    if not album_type:
        return []
    return [t.strip() for t in album_type.split(",") if t.strip()]


def album_types(album: Album) -> list[str]:
    """Known type tags of an album as badges, in LP, CD, Roon order.

    Example: "Roon, lp" -> ["LP", "roon"]
    """
    types = {t.lower() for t in split_album_types(album.album_type)}
    return [
        t if t == "roon" else t.upper()
        for t in ALBUM_TYPE_ORDER
        if t in types
    ]
