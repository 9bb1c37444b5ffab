"""
api/routes/uploads.py -- Image upload.

Routes:
  POST /upload-image  -- multipart/form-data with an "image" file field

The endpoint is public, as the front end calls it before a project exists.
Uploads are capped at MAX_UPLOAD_BYTES (default 5 MB).
"""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request, UploadFile
from fastapi.concurrency import run_in_threadpool

from api.models import ErrorDetail, ImageUploadResponse
from core.config import get_settings
from storage.blob import BlobStore

router = APIRouter()


@router.post("/upload-image", response_model=ImageUploadResponse)
async def upload_image(request: Request, image: UploadFile) -> ImageUploadResponse:
    """Store the uploaded file and return the URL it is served from."""
    max_bytes = get_settings().max_upload_bytes

    # Size guard -- read up to the limit + 1 byte; reject if over
    raw = await image.read(max_bytes + 1)
    if len(raw) > max_bytes:
        raise HTTPException(
            status_code=413,
            detail=ErrorDetail(
                code="file_too_large",
                message=f"Upload must be {max_bytes} bytes or smaller.",
            ).model_dump(),
        )

    blob_store: BlobStore = request.app.state.blob_store
    url = await run_in_threadpool(blob_store.store, raw, image.filename or "")
    return ImageUploadResponse(image_url=url)
