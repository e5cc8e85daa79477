"""Upload API routes — property images to object storage."""

from typing import Optional

from fastapi import APIRouter, Depends, File, UploadFile

from app.config import get_settings
from app.application.services.media_service import MediaStorage, upload_image
from app.interfaces.deps import get_media_storage

settings = get_settings()
router = APIRouter(prefix="/api/uploads", tags=["Uploads"])


@router.post("/image")
async def upload(
    image: Optional[UploadFile] = File(None),
    storage: MediaStorage = Depends(get_media_storage),
):
    # Read at most one byte past the cap. The file is only held in memory,
    # so a request cancelled mid-flight leaves nothing behind on our side.
    if image is None:
        content, filename, content_type = None, None, None
    else:
        content = await image.read(settings.MAX_UPLOAD_BYTES + 1)
        filename, content_type = image.filename, image.content_type

    result = await upload_image(storage, content, filename, content_type)
    return {
        "success": True,
        "message": "Image uploaded successfully",
        "data": result,
    }
