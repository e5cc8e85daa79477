"""Media ingestion service — forwards property photos to object storage."""

from typing import Optional, Protocol

from app.config import get_settings
from app.core.exceptions import BadRequestException, PayloadTooLargeException
from app.domain.schemas.media import UploadedImage

settings = get_settings()

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class MediaStorage(Protocol):
    async def upload_image(self, content: bytes, filename: str, content_type: str) -> UploadedImage:
        ...


async def upload_image(
    storage: MediaStorage,
    content: Optional[bytes],
    filename: Optional[str],
    content_type: Optional[str],
    max_bytes: Optional[int] = None,
) -> UploadedImage:
    """Check the payload, then hand it to storage. Nothing is written locally."""
    if not content:
        raise BadRequestException("No file received")

    limit = max_bytes if max_bytes is not None else settings.MAX_UPLOAD_BYTES
    if len(content) > limit:
        raise PayloadTooLargeException(limit)

    return await storage.upload_image(
        content,
        filename or "upload",
        content_type or DEFAULT_CONTENT_TYPE,
    )
