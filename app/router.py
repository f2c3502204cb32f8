"""
API endpoints for input validation.

POST /api/validate/url    — optional HTTPS profile link
POST /api/validate/image  — report/author image upload (+ optional title)
POST /api/validate/author — author profile body, LinkedIn URL included

Every rejection is a 400 carrying the validator's message.
"""

import logging
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse

from app import responses
from app.schemas import AuthorProfile, ImageCheckResult, UrlCheckRequest, UrlCheckResult
from app.validation import (
    FormUpload,
    InvalidInputError,
    validate_image,
    validate_title,
    validate_url,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/validate/url")
def check_url(payload: UrlCheckRequest) -> JSONResponse:
    """Validate a profile link. An empty value is accepted and echoed back as ""."""
    try:
        url = validate_url(payload.url)
    except InvalidInputError as exc:
        logger.info("Rejected URL: %s", exc)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)

    return responses.success(UrlCheckResult(url=url))


@router.post("/validate/image")
async def check_image(
    image: Optional[UploadFile] = File(None, description="Image file (max 10MB, allowed types: JPEG, PNG, WebP, GIF)"),
    title: Optional[str] = Form(None, description="Image title (optional, 2-255 chars)"),
) -> JSONResponse:
    """
    Validate an uploaded image without storing it.

    Size, extension and declared type are checked before the first 512 bytes
    are sniffed. The detected type is returned so the client can see what the
    server believes the file to be.
    """
    try:
        # Seeks and reads on the spooled file block, keep them off the event loop
        result = await run_in_threadpool(_inspect_image, image, title)
    except InvalidInputError as exc:
        logger.info(
            "Rejected image upload filename=%r: %s",
            image.filename if image is not None else None, exc,
        )
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)
    finally:
        if image is not None:
            await image.close()

    logger.debug("Accepted image %r as %s", result.filename, result.detected_type)
    return responses.success(result)


def _inspect_image(image: Optional[UploadFile], title: Optional[str]) -> ImageCheckResult:
    upload = FormUpload(image) if image is not None else None
    detected = validate_image(upload)
    clean_title = validate_title(title)
    return ImageCheckResult(
        filename=upload.filename,
        size=upload.size,
        content_type=upload.content_type,
        detected_type=detected.mime,
        title=clean_title or None,
    )


@router.post("/validate/author")
def check_author(profile: AuthorProfile) -> JSONResponse:
    """
    Validate an author profile. Field rules live on AuthorProfile; a failure
    surfaces as a request validation error and is rendered as a 400.
    """
    return responses.success(profile)
