"""Cloudinary image storage.

Uploads go through the official SDK (``cloudinary.uploader.upload``), which
signs each request. Credentials are passed with every call instead of being
set globally with ``cloudinary.config``.
"""

import asyncio
import io
from typing import Optional

import cloudinary.uploader
import structlog
from cloudinary.exceptions import Error as CloudinaryError
from fastapi.concurrency import run_in_threadpool

from app.config import get_settings
from app.core.exceptions import UploadFailedException
from app.domain.schemas.media import UploadedImage

settings = get_settings()
logger = structlog.get_logger(__name__)


class CloudinaryClient:
    """Forwards images to Cloudinary and returns their durable URL."""

    def __init__(
        self,
        cloud_name: Optional[str] = None,
        api_key: Optional[str] = None,
        api_secret: Optional[str] = None,
        folder: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.cloud_name = cloud_name if cloud_name is not None else settings.CLOUDINARY_CLOUD_NAME
        self.api_key = api_key if api_key is not None else settings.CLOUDINARY_API_KEY
        self.api_secret = api_secret if api_secret is not None else settings.CLOUDINARY_API_SECRET
        self.folder = folder if folder is not None else settings.CLOUDINARY_FOLDER
        self.timeout = timeout if timeout is not None else settings.CLOUDINARY_TIMEOUT_SECONDS

    def _upload(self, content: bytes, filename: str) -> dict:
        return cloudinary.uploader.upload(
            io.BytesIO(content),
            filename=filename,
            folder=self.folder,
            resource_type="image",
            cloud_name=self.cloud_name,
            api_key=self.api_key,
            api_secret=self.api_secret,
            secure=True,
            timeout=self.timeout,
            # Rejections come back as {"error": {..., "http_code": n}}
            return_error=True,
        )

    async def upload_image(self, content: bytes, filename: str, content_type: str) -> UploadedImage:
        """
        Upload one image.

        Raises UploadFailedException with the provider's HTTP status when
        Cloudinary rejects the file, or 500 when it cannot be reached.
        Cancellation propagates to the caller untouched.
        """
        if not (self.cloud_name and self.api_key and self.api_secret):
            raise UploadFailedException("Image storage is not configured")

        try:
            result = await run_in_threadpool(self._upload, content, filename)
        except asyncio.CancelledError:
            logger.warning("Cloudinary upload cancelled", filename=filename)
            raise
        except CloudinaryError as e:
            logger.error("Cloudinary connection error", error=str(e))
            raise UploadFailedException("Cloudinary upload failed (unknown error).") from e

        error = result.get("error")
        if error:
            message = error.get("message") or "Cloudinary upload failed"
            status_code = error.get("http_code")
            logger.warning("Cloudinary rejected upload", status_code=status_code, error=message)
            raise UploadFailedException(message, status_code)

        if "secure_url" not in result or "public_id" not in result:
            raise UploadFailedException("Cloudinary returned an unexpected response")

        logger.info(
            "Image uploaded",
            provider_id=result["public_id"],
            bytes=len(content),
            content_type=content_type,
        )
        return UploadedImage(url=result["secure_url"], provider_id=result["public_id"])
