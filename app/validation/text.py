"""
Free-text fields attached to uploads (image titles).
"""

from typing import Optional

from app.validation.errors import InvalidInputError

MIN_TITLE_LENGTH = 2
MAX_TITLE_LENGTH = 255

_ASCII_WHITESPACE = " \t\n\r\v\f"


def validate_title(title: Optional[str]) -> str:
    """Optional title: empty is fine, otherwise 2-255 bytes after trimming."""
    if title is None:
        return ""
    title = title.strip(_ASCII_WHITESPACE)
    if not title:
        return ""
    if not MIN_TITLE_LENGTH <= len(title.encode("utf-8")) <= MAX_TITLE_LENGTH:
        raise InvalidInputError(
            f"Title must be between {MIN_TITLE_LENGTH} and {MAX_TITLE_LENGTH} characters"
        )
    return title
