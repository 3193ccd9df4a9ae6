"""Unit tests for classical_admin/services/images.py, cloudinary.py and storage.py."""

import base64
import sys
from pathlib import Path

import pytest
from botocore.exceptions import ClientError

# Add parent dir to path so classical_admin is importable as a package
sys.path.insert(0, str(Path(__file__).parent.parent))

from classical_admin.config import CloudinaryConfig, SpacesConfig
from classical_admin.services.cloudinary import CloudinaryError, CloudinaryService
from classical_admin.services.images import (
    ImageUploader,
    ImageUploadError,
    guess_image_type,
    to_data_url,
    validate_image_file,
)
from classical_admin.services.storage import StorageService

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 8


@pytest.fixture
def png(tmp_path):
    path = tmp_path / "Bach Portrait.png"
    path.write_bytes(PNG_BYTES)
    return path


class FakePostSession:
    """Minimal session for Cloudinary form posts."""

    def __init__(self, status_code=200, body=None) -> None:
        self.status_code = status_code
        self.body = body
        self.posts = []

    def post(self, url, data=None, files=None, timeout=None):
        self.posts.append({"url": url, "data": data, "file": files["file"][0]})
        response = type("Response", (), {})()
        response.status_code = self.status_code
        response.ok = 200 <= self.status_code < 400
        response.json = lambda: self.body
        return response


class TestImageChecks:
    """Tests for local image validation helpers."""

    def test_guess_image_type(self):
        assert guess_image_type(Path("cover.jpg")) == "image/jpeg"
        assert guess_image_type(Path("notes.pdf")) is None

    def test_validate_ok(self, png):
        validate_image_file(png)

    def test_validate_limit(self, png):
        with pytest.raises(ImageUploadError, match="too large"):
            validate_image_file(png, max_size=4)

    def test_validate_missing(self, tmp_path):
        with pytest.raises(ImageUploadError, match="Cannot read"):
            validate_image_file(tmp_path / "missing.png")

    def test_data_url(self, png):
        url = to_data_url(png)
        prefix = "data:image/png;base64,"
        assert url.startswith(prefix)
        assert base64.b64decode(url[len(prefix):]) == PNG_BYTES


class TestImageUploader:
    """Tests for host dispatch."""

    def test_backend_host(self, api, session, png):
        session.add("POST", "/api/composers/upload-image", {"image_url": "/uploads/composers/bach.png"})
        uploader = ImageUploader("backend", api=api)
        assert uploader.upload(png, "composers") == "/uploads/composers/bach.png"

    def test_backend_error(self, api, session, png):
        session.add("POST", "/api/albums/upload-image", {"detail": "Unsupported file"}, status=400)
        uploader = ImageUploader("backend", api=api)
        with pytest.raises(ImageUploadError, match="Unsupported file"):
            uploader.upload(png, "albums")

    def test_unconfigured_host(self, png):
        with pytest.raises(ImageUploadError, match="not configured"):
            ImageUploader("spaces").upload(png, "albums")

    def test_unknown_kind(self, png):
        with pytest.raises(ValueError):
            ImageUploader("backend").upload(png, "artists")

    def test_cloudinary_host(self, png):
        session = FakePostSession(body={"secure_url": "https://res.cloudinary.com/demo/a.png", "public_id": "a"})
        cloudinary = CloudinaryService(CloudinaryConfig("demo", "unsigned"), session=session)
        uploader = ImageUploader("cloudinary", cloudinary=cloudinary, folder="classical-albums")

        assert uploader.upload(png, "albums") == "https://res.cloudinary.com/demo/a.png"
        assert session.posts[0]["data"] == {"upload_preset": "unsigned", "folder": "classical-albums/albums"}

    def test_upload_many_keeps_order(self, api, session, tmp_path):
        session.add("POST", "/api/albums/upload-image", {"image_url": "/uploads/1.png"})
        paths = []
        for name in ("front.png", "back.png", "booklet.png"):
            path = tmp_path / name
            path.write_bytes(PNG_BYTES)
            paths.append(path)

        urls = ImageUploader("backend", api=api, max_workers=2).upload_many(paths, "albums")
        assert urls == ["/uploads/1.png"] * 3
        assert len(session.calls_to("POST")) == 3

    def test_upload_many_empty(self):
        assert ImageUploader("backend").upload_many([], "albums") == []


class TestCloudinaryService:
    """Tests for CloudinaryService."""

    def test_requires_configuration(self, png):
        with pytest.raises(CloudinaryError, match="configuration missing"):
            CloudinaryService(CloudinaryConfig()).upload(png)

    def test_error_message(self, png):
        session = FakePostSession(status_code=400, body={"error": {"message": "Upload preset not found"}})
        service = CloudinaryService(CloudinaryConfig("demo", "missing"), session=session)
        with pytest.raises(CloudinaryError, match="Upload preset not found"):
            service.upload(png)

    def test_build_url(self):
        service = CloudinaryService(CloudinaryConfig("demo", "unsigned"))
        url = service.build_url("covers/abc", width=300, crop="fill")
        assert url == "https://res.cloudinary.com/demo/image/upload/w_300,c_fill/covers/abc"

    def test_build_url_plain(self):
        service = CloudinaryService(CloudinaryConfig("demo", "unsigned"))
        assert service.build_url("covers/abc") == "https://res.cloudinary.com/demo/image/upload/covers/abc"


class FakeS3Client:
    """Records put_object calls; optionally fails them."""

    def __init__(self, error=None) -> None:
        self.error = error
        self.objects = []

    def put_object(self, **kwargs):
        if self.error is not None:
            raise self.error
        self.objects.append({**kwargs, "Body": kwargs["Body"].read()})


@pytest.fixture
def spaces_config():
    return SpacesConfig(key="key", secret="secret", bucket="covers")


class TestStorageService:
    """Tests for StorageService with a fake S3 client."""

    def test_build_key(self, spaces_config):
        key = StorageService(spaces_config).build_key(Path("Bach Portrait.PNG"), "composers")
        assert key.startswith("composers/Bach-Portrait-")
        assert key.endswith(".png")

    def test_upload_image(self, spaces_config, png):
        service = StorageService(spaces_config)
        service._client = FakeS3Client()

        url = service.upload_image(png, "albums")

        stored = service._client.objects[0]
        assert stored["Bucket"] == "covers"
        assert stored["Key"].startswith("images/albums/")
        assert stored["ACL"] == "public-read"
        assert stored["ContentType"] == "image/png"
        assert stored["Body"] == PNG_BYTES
        assert url == (
            "https://covers.nyc3.cdn.digitaloceanspaces.com/" + stored["Key"]
        )

    def test_uploader_wraps_client_error(self, spaces_config, png):
        service = StorageService(spaces_config)
        service._client = FakeS3Client(
            ClientError({"Error": {"Code": "AccessDenied", "Message": "Denied"}}, "PutObject")
        )
        uploader = ImageUploader("spaces", storage=service)

        with pytest.raises(ImageUploadError, match="Upload failed"):
            uploader.upload(png, "composers")
