"""DigitalOcean Spaces image storage."""

import logging
import mimetypes
import uuid
from pathlib import Path

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..config import SpacesConfig
from ..utils.formatting import sanitize_key

logger = logging.getLogger(__name__)


class StorageService:
    """Uploads images to a public-read Spaces bucket."""

    def __init__(self, config: SpacesConfig) -> None:
        self._config = config
        self._client = None

    @property
    def client(self):
        """Lazy-initialize the S3 client."""
        if self._client is None:
            boto_config = BotoConfig(
                connect_timeout=60,
                read_timeout=300,
                retries={"max_attempts": 1},
            )
            self._client = boto3.client(
                "s3",
                region_name=self._config.region,
                endpoint_url=self._config.endpoint,
                aws_access_key_id=self._config.key,
                aws_secret_access_key=self._config.secret,
                config=boto_config,
            )
        return self._client

    def _prefixed_key(self, key: str) -> str:
        """Add configured prefix to an object key."""
        return f"{self._config.prefix}/{key}"

    def get_public_url(self, key: str) -> str:
        """Generate the public CDN URL for an object in Spaces."""
        return (
            f"https://{self._config.bucket}.{self._config.region}.cdn.digitaloceanspaces.com/"
            f"{self._config.prefix}/{key}"
        )

    def build_key(self, file_path: Path, folder: str) -> str:
        """Folder/unique-name key; the suffix keeps re-uploads of one file distinct."""
        stem = sanitize_key(file_path.stem, "image")
        suffix = file_path.suffix.lower() or ".jpg"
        return f"{sanitize_key(folder)}/{stem}-{uuid.uuid4().hex[:8]}{suffix}"

    def upload_image(self, file_path: Path, folder: str) -> str:
        """Upload an image file and return its public URL.

        Raises:
            ClientError / BotoCoreError from boto3 on failure.
        """
        key = self.build_key(file_path, folder)
        content_type = mimetypes.guess_type(file_path.name)[0] or "image/jpeg"

        try:
            with open(file_path, "rb") as f:
                self.client.put_object(
                    Bucket=self._config.bucket,
                    Key=self._prefixed_key(key),
                    Body=f,
                    ACL="public-read",
                    ContentType=content_type,
                )
        except (ClientError, BotoCoreError):
            logger.exception(f"S3 error uploading image {key}")
            raise

        return self.get_public_url(key)
