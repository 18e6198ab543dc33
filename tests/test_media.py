"""Tests for the media host client."""

import io

import cloudinary.exceptions
import cloudinary.uploader
import pytest
from fastapi import UploadFile

from app.config import Settings
from app.core.exceptions import BadRequestException, MediaUploadException
from app.core.media import DEFAULT_IMAGE_TRANSFORMATION, MediaUploader, read_upload


def make_settings(**overrides) -> Settings:
    values = {
        "CLOUDINARY_CLOUD_NAME": "farm",
        "CLOUDINARY_API_KEY": "key-123",
        "CLOUDINARY_API_SECRET": "shh",
        "CLOUDINARY_FOLDER": "site-media",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def sdk_calls(monkeypatch) -> list[dict]:
    """Replace the SDK upload with a recorder returning a secure URL."""
    calls: list[dict] = []

    def fake_upload(file, **options):
        calls.append({"content": file.read(), **options})
        return {"secure_url": f"https://res.cloudinary.com/farm/v1/{options['filename']}"}

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls


@pytest.mark.asyncio
async def test_image_upload_passes_credentials_and_transformation(sdk_calls) -> None:
    """Images go up with per-call credentials, the folder and the size cap."""
    uploader = MediaUploader(make_settings())
    url = await uploader.upload(b"jpeg-bytes", "a.jpg", "image/jpeg")

    assert url == "https://res.cloudinary.com/farm/v1/a.jpg"
    call = sdk_calls[0]
    assert call["content"] == b"jpeg-bytes"
    assert call["cloud_name"] == "farm"
    assert call["api_key"] == "key-123"
    assert call["api_secret"] == "shh"
    assert call["folder"] == "site-media"
    assert call["resource_type"] == "image"
    assert call["transformation"] == DEFAULT_IMAGE_TRANSFORMATION


@pytest.mark.asyncio
async def test_video_upload_skips_image_transformation(sdk_calls) -> None:
    """Videos are uploaded as video without the image transformation."""
    uploader = MediaUploader(make_settings())
    await uploader.upload(b"mp4-bytes", "b.mp4", "video/mp4", resource_type="video")

    assert sdk_calls[0]["resource_type"] == "video"
    assert "transformation" not in sdk_calls[0]


@pytest.mark.asyncio
async def test_upload_rejected_by_host(monkeypatch) -> None:
    """SDK errors become a media upload error."""

    def failing_upload(file, **options):
        raise cloudinary.exceptions.AuthorizationRequired("bad key")

    monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)
    uploader = MediaUploader(make_settings())

    with pytest.raises(MediaUploadException) as exc_info:
        await uploader.upload(b"bytes", "a.jpg")
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_upload_without_secure_url(monkeypatch) -> None:
    """A response lacking the secure URL is treated as a failure."""
    monkeypatch.setattr(cloudinary.uploader, "upload", lambda file, **options: {"public_id": "x"})
    uploader = MediaUploader(make_settings())

    with pytest.raises(MediaUploadException):
        await uploader.upload(b"bytes", "a.jpg")


@pytest.mark.asyncio
async def test_upload_without_credentials(sdk_calls) -> None:
    """An unconfigured uploader refuses before calling the host."""
    uploader = MediaUploader(make_settings(CLOUDINARY_API_SECRET=""))

    assert uploader.is_configured is False
    with pytest.raises(MediaUploadException) as exc_info:
        await uploader.upload(b"bytes", "a.jpg")
    assert exc_info.value.status_code == 502
    assert sdk_calls == []


@pytest.mark.asyncio
async def test_read_upload_enforces_limit() -> None:
    """Files over the cap are rejected."""
    small = UploadFile(file=io.BytesIO(b"12345"), filename="small.txt")
    assert await read_upload(small, max_bytes=10) == b"12345"

    large = UploadFile(file=io.BytesIO(b"x" * 11), filename="large.txt")
    with pytest.raises(BadRequestException):
        await read_upload(large, max_bytes=10)
