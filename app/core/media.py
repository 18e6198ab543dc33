"""Media host client (Cloudinary SDK)."""

import io

import cloudinary.exceptions
import cloudinary.uploader
from fastapi import UploadFile
from fastapi.concurrency import run_in_threadpool
from structlog import get_logger

from app.config import Settings, settings
from app.core.exceptions import BadRequestException, MediaUploadException

logger = get_logger(__name__)

# Auto quality/format, longest side capped at 1600px
DEFAULT_IMAGE_TRANSFORMATION = [
    {"quality": "auto", "fetch_format": "auto"},
    {"width": 1600, "crop": "limit"},
]


class MediaUploader:
    """Relays uploaded files to the media host and returns their public URL."""

    def __init__(self, config: Settings):
        """Initialize uploader from settings."""
        self.cloud_name = config.cloudinary_cloud_name
        self.api_key = config.cloudinary_api_key
        self.api_secret = config.cloudinary_api_secret
        self.folder = config.cloudinary_folder
        self.timeout = config.cloudinary_timeout_seconds

    @property
    def is_configured(self) -> bool:
        """Whether media host credentials are present."""
        return bool(self.cloud_name and self.api_key and self.api_secret)

    def upload_options(self, filename: str, resource_type: str) -> dict:
        """Per-call SDK options; credentials are passed here rather than set globally."""
        options = {
            "cloud_name": self.cloud_name,
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "folder": self.folder,
            "resource_type": resource_type,
            "filename": filename,
            "timeout": self.timeout,
        }
        if resource_type == "image":
            options["transformation"] = DEFAULT_IMAGE_TRANSFORMATION
        return options

    async def upload(
        self,
        content: bytes,
        filename: str,
        content_type: str | None = None,
        resource_type: str = "image",
    ) -> str:
        """
        Upload a file to the media host.

        The SDK call blocks, so it runs in the threadpool.

        Args:
            content: Raw file bytes
            filename: Original filename
            content_type: MIME type reported by the client
            resource_type: ``image`` or ``video``

        Returns:
            Secure URL of the stored file

        Raises:
            MediaUploadException: If the host is not configured or rejects the upload
        """
        if not self.is_configured:
            raise MediaUploadException("Media host is not configured")

        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                **self.upload_options(filename, resource_type),
            )
        except cloudinary.exceptions.Error as e:
            logger.error(
                "media_upload_failed",
                error=str(e),
                resource_type=resource_type,
                content_type=content_type,
            )
            raise MediaUploadException("Upload failed") from e

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            logger.error("media_upload_missing_url", resource_type=resource_type)
            raise MediaUploadException("Upload failed")

        logger.info("media_uploaded", resource_type=resource_type, url=secure_url)
        return secure_url


async def read_upload(file: UploadFile, max_bytes: int | None = None) -> bytes:
    """Read an uploaded file, enforcing the configured size cap."""
    limit = max_bytes or settings.max_upload_bytes
    content = await file.read()
    if len(content) > limit:
        raise BadRequestException(f"File exceeds the {limit // (1024 * 1024)}MB upload limit")
    return content


async def upload_if_present(
    uploader: MediaUploader,
    file: UploadFile | None,
    resource_type: str = "image",
) -> str | None:
    """Upload ``file`` when one was sent, returning its URL (or None)."""
    if file is None or not file.filename:
        return None
    content = await read_upload(file)
    return await uploader.upload(content, file.filename, file.content_type, resource_type)


def get_media_uploader() -> MediaUploader:
    """Dependency returning a media uploader bound to current settings."""
    return MediaUploader(settings)
