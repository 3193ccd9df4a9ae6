"""Service modules for the REST backend, image hosts and page state."""

from .api_client import ApiClient, ApiError
from .cloudinary import CloudinaryError, CloudinaryService
from .images import ImageUploader, ImageUploadError
from .page_state import PageStateStore
from .storage import StorageService

__all__ = [
    "ApiClient",
    "ApiError",
    "CloudinaryError",
    "CloudinaryService",
    "ImageUploader",
    "ImageUploadError",
    "PageStateStore",
    "StorageService",
]
