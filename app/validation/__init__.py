"""
Input validation for the catalog API: profile URLs, uploaded images, titles.

Every validator is pure and raises InvalidInputError on rejection.
"""

from app.validation.errors import InvalidInputError
from app.validation.image import (
    ALLOWED_DETECTED_TYPES,
    ALLOWED_IMAGE_EXTENSIONS,
    ALLOWED_IMAGE_TYPES,
    MAX_IMAGE_SIZE,
    BytesUpload,
    FormUpload,
    Upload,
    validate_image,
)
from app.validation.signatures import ImageType, detect_image_type
from app.validation.text import validate_title
from app.validation.url import MAX_URL_LENGTH, validate_url

__all__ = [
    "ALLOWED_DETECTED_TYPES",
    "ALLOWED_IMAGE_EXTENSIONS",
    "ALLOWED_IMAGE_TYPES",
    "BytesUpload",
    "FormUpload",
    "ImageType",
    "InvalidInputError",
    "MAX_IMAGE_SIZE",
    "MAX_URL_LENGTH",
    "Upload",
    "detect_image_type",
    "validate_image",
    "validate_title",
    "validate_url",
]
