"""Uploads API - Direct photo upload for the mobile client.

The client uploads each photo here first and then submits the returned URLs
with check-in or completion.
"""
from fastapi import APIRouter, status
import logging

from app.api.deps import PhotoStoreDep
from app.config import settings
from app.exceptions import ValidationError
from app.schemas.errors import get_error_responses
from app.schemas.upload import UploadRequest, UploadResponse
from app.services.inspection_service import decode_photo

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
    responses=get_error_responses(422, 500, 502),
)
async def upload_photo(data: UploadRequest, photo_store: PhotoStoreDep):
    """Store one base64 encoded JPEG under the given filename."""
    if not data.filename or not data.base64:
        raise ValidationError("Missing filename or base64 data")
    if ".." in data.filename:
        raise ValidationError("Invalid filename")

    try:
        payload = decode_photo(data.base64)
    except ValidationError as e:
        raise ValidationError("Invalid base64 data") from e

    if len(payload) > settings.MAX_UPLOAD_BYTES:
        raise ValidationError("File too large (max 10MB)")

    filename = data.filename.lstrip("/")
    url = await photo_store.upload_blob(filename, payload, content_type="image/jpeg")
    logger.info(f"Uploaded {filename} ({len(payload)} bytes)")

    return UploadResponse(url=url, path=f"{photo_store.bucket}/{filename}")
