"""Image helpers: local previews, validation and host-independent uploads."""

from __future__ import annotations

import base64
import logging
import mimetypes
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING, Iterable

from botocore.exceptions import BotoCoreError, ClientError
from tqdm import tqdm

from .api_client import ApiError
from .cloudinary import CloudinaryError

if TYPE_CHECKING:
    from .api_client import ApiClient
    from .cloudinary import CloudinaryService
    from .storage import StorageService

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 5 * 1024 * 1024  # 5MB

# Upload targets, one per resource with images
IMAGE_KINDS = {"composers", "albums"}


class ImageUploadError(Exception):
    """An image could not be validated or stored."""


def guess_image_type(file_path: Path) -> str | None:
    """MIME type of an image file, or None if it is not an image."""
    content_type = mimetypes.guess_type(file_path.name)[0]
    if content_type and content_type.startswith("image/"):
        return content_type
    return None


def validate_image_file(file_path: Path, max_size: int = MAX_IMAGE_SIZE) -> None:
    """Reject non-images and files over the size limit.

    Raises:
        ImageUploadError describing the first problem found.
    """
    if guess_image_type(file_path) is None:
        raise ImageUploadError(f"Not an image file: {file_path.name}")

    try:
        size = file_path.stat().st_size
    except OSError as e:
        raise ImageUploadError(f"Cannot read {file_path.name}: {e}") from e

    if size > max_size:
        raise ImageUploadError(
            f"Image too large ({size} bytes, max {max_size // (1024 * 1024)}MB): {file_path.name}"
        )


def to_data_url(file_path: Path) -> str:
    """Inline an image as a data URL for local previews.

    Example: "data:image/png;base64,iVBORw0..."
    """
    content_type = guess_image_type(file_path)
    if content_type is None:
        raise ImageUploadError(f"Not an image file: {file_path.name}")
    try:
        encoded = base64.b64encode(file_path.read_bytes()).decode("ascii")
    except OSError as e:
        raise ImageUploadError(f"Cannot read {file_path.name}: {e}") from e
    return f"data:{content_type};base64,{encoded}"


class ImageUploader:
    """Stores images on the configured host and returns their references.

    Hosts:
        backend:    POST /api/{kind}/upload-image, returns a server path
        cloudinary: unsigned preset upload, returns a secure URL
        spaces:     public-read object in DigitalOcean Spaces, returns a CDN URL
    """

    def __init__(
        self,
        host: str,
        api: ApiClient | None = None,
        cloudinary: CloudinaryService | None = None,
        storage: StorageService | None = None,
        folder: str = "classical-albums",
        max_workers: int = 4,
    ) -> None:
        self._host = host
        self._api = api
        self._cloudinary = cloudinary
        self._storage = storage
        self._folder = folder
        self._max_workers = max_workers

    @property
    def host(self) -> str:
        return self._host

    def upload(self, file_path: Path, kind: str) -> str:
        """Upload one image for a composer portrait or an album cover."""
        if kind not in IMAGE_KINDS:
            raise ValueError(f"Unknown image kind: {kind}")

        file_path = Path(file_path)
        validate_image_file(file_path)

        try:
            if self._host == "cloudinary" and self._cloudinary is not None:
                return self._cloudinary.upload(file_path, f"{self._folder}/{kind}").secure_url
            if self._host == "spaces" and self._storage is not None:
                return self._storage.upload_image(file_path, kind)
            if self._host == "backend" and self._api is not None:
                if kind == "composers":
                    return self._api.upload_composer_image(file_path)
                return self._api.upload_album_image(file_path)
        except (ApiError, CloudinaryError) as e:
            raise ImageUploadError(str(e)) from e
        except (ClientError, BotoCoreError) as e:
            raise ImageUploadError(f"Upload failed: {e}") from e

        raise ImageUploadError(f"Image host '{self._host}' is not configured")

    def upload_many(
        self, file_paths: Iterable[Path], kind: str, show_progress: bool = False
    ) -> list[str]:
        """Upload several images in parallel, keeping input order.

        The first failure aborts the batch.
        """
        paths = [Path(p) for p in file_paths]
        if not paths:
            return []

        with ThreadPoolExecutor(max_workers=self._max_workers) as executor:
            results = executor.map(lambda p: self.upload(p, kind), paths)
            return list(
                tqdm(
                    results,
                    total=len(paths),
                    desc="Uploading",
                    unit="image",
                    disable=not show_progress,
                )
            )
