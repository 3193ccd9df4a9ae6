"""Cloudinary unsigned image uploads.

Setup:
1. Settings > Upload > Add upload preset
2. Set "Signing Mode" to "Unsigned"
3. Put the cloud name and preset in CLOUDINARY_CLOUD_NAME / CLOUDINARY_UPLOAD_PRESET
"""

from __future__ import annotations

import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path

import requests

from ..config import CloudinaryConfig

logger = logging.getLogger(__name__)

UPLOAD_URL = "https://api.cloudinary.com/v1_1/{cloud_name}/image/upload"
DELIVERY_URL = "https://res.cloudinary.com/{cloud_name}/image/upload"


class CloudinaryError(Exception):
    """Upload rejected by Cloudinary or not configured."""


@dataclass
class CloudinaryUpload:
    """Relevant fields of the Cloudinary upload response."""

    secure_url: str
    public_id: str
    width: int | None = None
    height: int | None = None
    format: str | None = None
    resource_type: str | None = None


class CloudinaryService:
    """Uploads images with an unsigned preset and builds delivery URLs."""

    def __init__(
        self,
        config: CloudinaryConfig,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._timeout = timeout

    def _require_configured(self) -> None:
        if not self._config.is_configured:
            raise CloudinaryError(
                "Cloudinary configuration missing. "
                "Please set CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET"
            )

    def upload(self, file_path: Path, folder: str | None = None) -> CloudinaryUpload:
        """Upload one image file.

        Args:
            file_path: Image on disk
            folder: Optional folder in Cloudinary (e.g. "classical-albums/composers")
        """
        self._require_configured()

        content_type = mimetypes.guess_type(file_path.name)[0] or ""
        if not content_type.startswith("image/"):
            raise CloudinaryError("File must be an image")

        form = {"upload_preset": self._config.upload_preset}
        if folder:
            form["folder"] = folder

        url = UPLOAD_URL.format(cloud_name=self._config.cloud_name)
        try:
            with open(file_path, "rb") as f:
                response = self._session.post(
                    url,
                    data=form,
                    files={"file": (file_path.name, f, content_type)},
                    timeout=self._timeout,
                )
        except requests.RequestException as e:
            raise CloudinaryError(f"Failed to upload image to Cloudinary: {e}") from e

        if not response.ok:
            raise CloudinaryError(self._error_message(response))

        data = response.json()
        logger.debug(f"Uploaded {file_path.name} to Cloudinary as {data.get('public_id')}")
        return CloudinaryUpload(
            secure_url=data["secure_url"],
            public_id=data.get("public_id", ""),
            width=data.get("width"),
            height=data.get("height"),
            format=data.get("format"),
            resource_type=data.get("resource_type"),
        )

    def _error_message(self, response: requests.Response) -> str:
        try:
            error = response.json().get("error") or {}
            message = error.get("message")
        except (ValueError, AttributeError):
            message = None
        return message or f"HTTP {response.status_code}"

    def build_url(
        self,
        public_id: str,
        width: int | None = None,
        height: int | None = None,
        quality: int | str | None = None,
        crop: str | None = None,
    ) -> str:
        """Delivery URL with optional transformations.

        Example: build_url("covers/abc", width=300, crop="fill")
            -> ".../image/upload/w_300,c_fill/covers/abc"
        """
        if not self._config.cloud_name:
            raise CloudinaryError("Cloudinary cloud name not configured")

        base_url = DELIVERY_URL.format(cloud_name=self._config.cloud_name)

        transforms = []
        if width:
            transforms.append(f"w_{width}")
        if height:
            transforms.append(f"h_{height}")
        if quality:
            transforms.append(f"q_{quality}")
        if crop:
            transforms.append(f"c_{crop}")

        if not transforms:
            return f"{base_url}/{public_id}"
        return f"{base_url}/{','.join(transforms)}/{public_id}"
