#!/usr/bin/env python3
"""
Classical Catalog Admin Console

Lists, filters and deletes composers, compositions, artists, recordings and
albums on the catalog backend, and uploads composer/album images to the
configured image host.
"""

import argparse
import logging
from pathlib import Path
from typing import Any

from .config import Config, configure_logging
from .pages import AlbumsPage, ArtistsPage, ComposersPage, CompositionsPage, RecordingsPage
from .pages.base import ListPage
from .services.api_client import ApiClient, ApiError
from .services.cloudinary import CloudinaryService
from .services.images import IMAGE_KINDS, ImageUploader, ImageUploadError
from .services.page_state import PageStateStore
from .services.storage import StorageService

logger = logging.getLogger(__name__)

RESOURCES = ["composers", "compositions", "artists", "recordings", "albums"]


def prompt_confirm(message: str) -> bool:
    """Blocking yes/no question on the terminal; anything but yes declines."""
    answer = input(f"{message} [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def format_table(rows: list[dict[str, Any]]) -> str:
    """Render page rows as a plain-text table."""
    if not rows:
        return "(no rows)"

    columns = list(rows[0])
    cells = [[str(row.get(column, "")) for column in columns] for row in rows]
    widths = [
        max(len(column), *(len(line[i]) for line in cells)) for i, column in enumerate(columns)
    ]

    lines = [
        "  ".join(column.upper().ljust(width) for column, width in zip(columns, widths)),
        "  ".join("-" * width for width in widths),
    ]
    for line in cells:
        lines.append("  ".join(cell.ljust(width) for cell, width in zip(line, widths)).rstrip())
    return "\n".join(lines)


class AdminConsole:
    """Wires configuration to the page controllers for terminal use."""

    def __init__(self, config: Config, assume_yes: bool = False) -> None:
        self._config = config
        self._api = ApiClient(config.api.base_url, timeout=config.api.timeout)
        self._store = PageStateStore(config.state.state_file)
        self._confirm = (lambda message: True) if assume_yes else prompt_confirm

        # Image hosts other than the backend are optional
        cloudinary = (
            CloudinaryService(config.cloudinary, timeout=config.api.timeout)
            if config.cloudinary.is_configured
            else None
        )
        storage = StorageService(config.spaces) if config.spaces else None

        self._uploader = ImageUploader(
            config.image_host,
            api=self._api,
            cloudinary=cloudinary,
            storage=storage,
            folder=config.cloudinary.folder,
            max_workers=config.max_upload_workers,
        )

    def _navigate(self, route: str) -> None:
        print(f"State saved; run `classical-admin {route}` to continue there.")

    def page(self, resource: str) -> ListPage:
        common = dict(store=self._store, confirm=self._confirm, navigate=self._navigate)
        if resource == "composers":
            return ComposersPage(self._api, uploader=self._uploader, **common)
        if resource == "compositions":
            return CompositionsPage(self._api, **common)
        if resource == "artists":
            return ArtistsPage(self._api, **common)
        if resource == "recordings":
            return RecordingsPage(self._api, **common)
        if resource == "albums":
            return AlbumsPage(self._api, uploader=self._uploader, **common)
        raise ValueError(f"Unknown resource: {resource}")

    def _show(self, page: ListPage, filters: dict[str, Any] | None = None) -> int:
        if page.error:
            print(f"Error: {page.error}")
            return 1
        active = [f"{name} {value}" for name, value in (filters or {}).items() if value]
        if active:
            print(f"Filters: {', '.join(active)}")
        print(format_table(page.rows()))
        return 0

    def list_composers(self, search: str | None) -> int:
        page = self.page("composers")
        if search is not None:
            page.search(search)
        else:
            page.mount()
        return self._show(page)

    def list_compositions(self, composer_id: int | None, search: str | None) -> int:
        page = self.page("compositions")
        page.mount()
        # A saved search only applies when asked for again
        page.search_query = search.strip() if search else ""
        if composer_id is not None:
            page.filter_by_composer(composer_id)
        else:
            page.refresh()
        return self._show(page, {"composer": page.selected_composer_id})

    def list_artists(self, search: str | None) -> int:
        page = self.page("artists")
        page.search(search or "")
        return self._show(page)

    def list_recordings(
        self, composition_id: int | None, composer_id: int | None, artist_id: int | None
    ) -> int:
        page = self.page("recordings")
        page.mount()
        if page.error:
            return self._show(page)

        if composition_id or composer_id or artist_id:
            page.composition_filter.restore(composer_id, composition_id)
            page.artist_filter.select_id(artist_id)
            page.refresh()
        return self._show(
            page,
            {
                "composition": page.selected_composition_id,
                "composer": page.filter_composer_id,
                "artist": page.filter_artist_id,
            },
        )

    def list_albums(self, recording_id: int | None, composition_id: int | None) -> int:
        page = self.page("albums")
        page.mount()
        # Explicit filters replace the saved ones; without any, the saved ones stay
        if recording_id is not None or composition_id is not None:
            page.filter_by_recording(recording_id)
            page.filter_by_composition(composition_id)
        return self._show(
            page,
            {"recording": page.selected_recording_id, "composition": page.selected_composition_id},
        )

    def delete(self, resource: str, record_id: int) -> int:
        getters = {
            "composers": self._api.get_composer,
            "compositions": self._api.get_composition,
            "artists": self._api.get_artist,
            "recordings": self._api.get_recording,
            "albums": self._api.get_album,
        }
        try:
            record = getters[resource](record_id)
        except ApiError as e:
            print(f"Error: {e}")
            return 1

        page = self.page(resource)
        if page.delete(record):
            print(f"Deleted {page.entity} {record_id}")
            return 0
        if page.error:
            print(f"Error: {page.error}")
            return 1
        print("Cancelled")
        return 0

    def upload_images(self, kind: str, files: list[Path]) -> int:
        try:
            urls = self._uploader.upload_many(files, kind, show_progress=True)
        except ImageUploadError as e:
            print(f"Error: {e}")
            return 1

        for file_path, url in zip(files, urls):
            print(f"{file_path.name}: {url}")
        return 0


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Manage the classical music catalog"
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="Number of parallel image uploads (default: 4)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    composers = commands.add_parser("composers", help="List composers")
    composers.add_argument("--search", help="Filter by name")

    compositions = commands.add_parser("compositions", help="List a composer's compositions")
    compositions.add_argument("--composer", type=int, help="Composer id")
    compositions.add_argument("--search", help="Filter by title or catalog number")

    artists = commands.add_parser("artists", help="List artists")
    artists.add_argument("--search", help="Filter by name")

    recordings = commands.add_parser("recordings", help="List recordings")
    recordings.add_argument("--composition", type=int, help="Composition id")
    recordings.add_argument("--composer", type=int, help="Composer id")
    recordings.add_argument("--artist", type=int, help="Artist id")

    albums = commands.add_parser("albums", help="List albums")
    albums.add_argument("--recording", type=int, help="Only albums containing this recording")
    albums.add_argument("--composition", type=int, help="Only albums containing this composition")

    delete = commands.add_parser("delete", help="Delete a record")
    delete.add_argument("resource", choices=RESOURCES)
    delete.add_argument("id", type=int)
    delete.add_argument("--yes", "-y", action="store_true", help="Do not ask for confirmation")

    upload = commands.add_parser("upload-image", help="Upload images to the image host")
    upload.add_argument("kind", choices=sorted(IMAGE_KINDS))
    upload.add_argument("files", nargs="+", type=Path)

    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> int:
    """Execute a parsed command; returns the process exit code."""
    try:
        config = Config.from_environment()
        config.max_upload_workers = args.workers
        config.validate()
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    console = AdminConsole(config, assume_yes=getattr(args, "yes", False))

    if args.command == "composers":
        return console.list_composers(args.search)
    if args.command == "compositions":
        return console.list_compositions(args.composer, args.search)
    if args.command == "artists":
        return console.list_artists(args.search)
    if args.command == "recordings":
        return console.list_recordings(args.composition, args.composer, args.artist)
    if args.command == "albums":
        return console.list_albums(args.recording, args.composition)
    if args.command == "delete":
        return console.delete(args.resource, args.id)
    return console.upload_images(args.kind, args.files)


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = parse_args(argv)

    configure_logging(verbose=args.verbose)

    exit_code = run(args)
    if exit_code:
        raise SystemExit(exit_code)


if __name__ == "__main__":
    main()
