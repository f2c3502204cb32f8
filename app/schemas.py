"""
Pydantic models for the validation API.
This is the source of truth for the JSON shapes.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.validation import validate_url

MAX_ROLE_LENGTH = 100
MAX_BIO_LENGTH = 1000


class ApiResponse(BaseModel):
    """Envelope shared by every endpoint."""
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None


class UrlCheckRequest(BaseModel):
    url: str = ""


class UrlCheckResult(BaseModel):
    url: str


class ImageCheckResult(BaseModel):
    filename: str
    size: int
    content_type: str = Field(serialization_alias="contentType")
    detected_type: str = Field(serialization_alias="detectedType")
    title: Optional[str] = None


class AuthorProfile(BaseModel):
    """
    Author fields a client may submit. Mirrors the catalog's author record:
    name is required, everything else is optional. Lengths are in bytes,
    matching the varchar limits of the record.
    """
    model_config = ConfigDict(populate_by_name=True)

    name: str
    role: Optional[str] = None
    bio: Optional[str] = None
    linkedin_url: Optional[str] = Field(default=None, alias="linkedinUrl")
    image_url: Optional[str] = Field(default=None, alias="imageUrl")

    @field_validator("name")
    @classmethod
    def _name_length(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Name is required")
        if len(value.encode("utf-8")) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value

    @field_validator("role")
    @classmethod
    def _role_length(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value.encode("utf-8")) > MAX_ROLE_LENGTH:
            raise ValueError(f"Role must not exceed {MAX_ROLE_LENGTH} characters")
        return value

    @field_validator("bio")
    @classmethod
    def _bio_length(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and len(value.encode("utf-8")) > MAX_BIO_LENGTH:
            raise ValueError(f"Bio must not exceed {MAX_BIO_LENGTH} characters")
        return value

    @field_validator("linkedin_url", "image_url")
    @classmethod
    def _https_link(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        # InvalidInputError is a ValueError, so pydantic reports it as a field error
        return validate_url(value) or None
