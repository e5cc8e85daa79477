"""Unit tests for the Cloudinary upload client."""

import cloudinary.uploader
import pytest
from cloudinary.exceptions import Error as CloudinaryError

from app.core.exceptions import UploadFailedException
from app.infrastructure.cloudinary_client import CloudinaryClient


def make_client(**overrides):
    options = {
        "cloud_name": "demo-cloud",
        "api_key": "123456",
        "api_secret": "shh",
        "folder": "soudou_properties",
    }
    options.update(overrides)
    return CloudinaryClient(**options)


@pytest.fixture
def uploads(monkeypatch):
    """Replace the SDK upload call; tests set ``reply`` to shape its answer."""
    calls = []
    state = {"reply": None}

    def fake_upload(file, **options):
        calls.append({"content": file.read(), **options})
        reply = state["reply"]
        if isinstance(reply, Exception):
            raise reply
        return reply

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls, state


@pytest.mark.unit
@pytest.mark.asyncio
async def test_upload_image_returns_secure_url(uploads):
    calls, state = uploads
    state["reply"] = {
        "secure_url": "https://res.cloudinary.com/demo-cloud/image/upload/v1/soudou_properties/abc.jpg",
        "public_id": "soudou_properties/abc",
    }

    result = await make_client().upload_image(b"jpeg-bytes", "front.jpg", "image/jpeg")

    assert result.url.endswith("/soudou_properties/abc.jpg")
    assert result.provider_id == "soudou_properties/abc"
    call = calls[0]
    assert call["content"] == b"jpeg-bytes"
    assert call["folder"] == "soudou_properties"
    assert call["filename"] == "front.jpg"
    assert (call["cloud_name"], call["api_key"], call["api_secret"]) == ("demo-cloud", "123456", "shh")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_provider_rejection_keeps_status_and_message(uploads):
    _, state = uploads
    state["reply"] = {"error": {"message": "Invalid image file", "http_code": 400}}

    with pytest.raises(UploadFailedException) as exc_info:
        await make_client().upload_image(b"text", "notes.txt", "text/plain")

    assert exc_info.value.status_code == 400
    assert exc_info.value.message == "Invalid image file"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_connection_error_is_500(uploads):
    _, state = uploads
    state["reply"] = CloudinaryError("Unexpected error - ConnectTimeoutError()")

    with pytest.raises(UploadFailedException) as exc_info:
        await make_client().upload_image(b"jpeg", "a.jpg", "image/jpeg")

    assert exc_info.value.status_code == 500


@pytest.mark.unit
@pytest.mark.asyncio
async def test_missing_credentials(uploads):
    calls, _ = uploads

    with pytest.raises(UploadFailedException) as exc_info:
        await make_client(api_secret="").upload_image(b"jpeg", "a.jpg", "image/jpeg")

    assert exc_info.value.message == "Image storage is not configured"
    assert calls == []
