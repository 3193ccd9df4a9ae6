"""Configuration management for the catalog admin client."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_STATE_FILE = Path("~/.config/classical-admin/page_state.json")

# Where uploaded images end up
IMAGE_HOSTS = {"backend", "cloudinary", "spaces"}


@dataclass
class ApiConfig:
    """REST backend configuration."""

    base_url: str = DEFAULT_API_URL
    timeout: float | None = None  # None waits indefinitely, like the browser client

    def __post_init__(self) -> None:
        self.base_url = self.base_url.rstrip("/")


@dataclass
class CloudinaryConfig:
    """Cloudinary unsigned upload configuration."""

    cloud_name: str = ""
    upload_preset: str = ""
    folder: str = "classical-albums"

    @property
    def is_configured(self) -> bool:
        """Check if both the cloud name and the upload preset are set."""
        return bool(self.cloud_name) and bool(self.upload_preset)


@dataclass
class SpacesConfig:
    """DigitalOcean Spaces configuration."""

    key: str
    secret: str
    bucket: str
    region: str = "nyc3"
    endpoint: str | None = None
    prefix: str = "images"  # S3 path prefix for all uploaded images

    def __post_init__(self) -> None:
        if self.endpoint is None:
            self.endpoint = f"https://{self.region}.digitaloceanspaces.com"


@dataclass
class StateConfig:
    """Location of the persisted page state (the browser's local storage)."""

    state_file: Path = field(default_factory=lambda: DEFAULT_STATE_FILE.expanduser())


@dataclass
class Config:
    """Main configuration container."""

    api: ApiConfig
    cloudinary: CloudinaryConfig
    state: StateConfig
    spaces: SpacesConfig | None = None
    image_host: str = "backend"
    max_upload_workers: int = 4

    @classmethod
    def from_environment(cls, env_path: Path | None = None) -> "Config":
        """Load configuration from environment variables."""
        if env_path:
            load_dotenv(env_path)
        else:
            load_dotenv()

        timeout = os.getenv("CATALOG_API_TIMEOUT")
        try:
            api_timeout = float(timeout) if timeout else None
        except ValueError:
            raise ValueError(f"CATALOG_API_TIMEOUT must be a number, got {timeout!r}") from None

        spaces = None
        spaces_key = os.getenv("DO_SPACES_KEY")
        if spaces_key:
            spaces = SpacesConfig(
                key=spaces_key,
                secret=os.getenv("DO_SPACES_SECRET", ""),
                bucket=os.getenv("DO_SPACES_BUCKET", ""),
                region=os.getenv("DO_SPACES_REGION", "nyc3"),
                endpoint=os.getenv("DO_SPACES_ENDPOINT"),
                prefix=os.getenv("DO_SPACES_PREFIX", "images"),
            )

        state_file = os.getenv("CLASSICAL_ADMIN_STATE_FILE")

        return cls(
            api=ApiConfig(
                base_url=os.getenv("CATALOG_API_URL", DEFAULT_API_URL),
                timeout=api_timeout,
            ),
            cloudinary=CloudinaryConfig(
                cloud_name=os.getenv("CLOUDINARY_CLOUD_NAME", ""),
                upload_preset=os.getenv("CLOUDINARY_UPLOAD_PRESET", ""),
                folder=os.getenv("CLOUDINARY_FOLDER", "classical-albums"),
            ),
            state=StateConfig(
                state_file=Path(state_file).expanduser() if state_file else DEFAULT_STATE_FILE.expanduser(),
            ),
            spaces=spaces,
            image_host=os.getenv("IMAGE_HOST", "backend").strip().lower(),
        )

    def validate(self) -> None:
        """Validate the configuration."""
        if self.image_host not in IMAGE_HOSTS:
            raise ValueError(
                f"IMAGE_HOST must be one of {', '.join(sorted(IMAGE_HOSTS))}, got '{self.image_host}'"
            )
        if self.image_host == "cloudinary" and not self.cloudinary.is_configured:
            raise ValueError(
                "Cloudinary configuration missing. "
                "Please set CLOUDINARY_CLOUD_NAME and CLOUDINARY_UPLOAD_PRESET"
            )
        if self.image_host == "spaces":
            self._validate_spaces()

    def _validate_spaces(self) -> None:
        """Validate Spaces configuration."""
        logger = logging.getLogger(__name__)

        if self.spaces is None:
            raise ValueError("DO_SPACES_KEY is required when IMAGE_HOST=spaces")
        if not self.spaces.bucket:
            raise ValueError("DO_SPACES_BUCKET is required")
        if not self.spaces.secret:
            raise ValueError("DO_SPACES_SECRET is required")

        # Warn on unrecognized regions
        known_regions = {"nyc3", "sfo3", "ams3", "sgp1", "fra1", "syd1", "blr1"}
        if self.spaces.region not in known_regions:
            logger.warning(
                f"Unrecognized DO Spaces region '{self.spaces.region}'. "
                f"Known regions: {', '.join(sorted(known_regions))}"
            )


def configure_logging(verbose: bool = False) -> None:
    """Configure logging for the application."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
