"""
Validation for uploaded report and author images.

An upload is checked against four independent whitelists, cheapest first:
declared size, filename extension, declared content type, and finally the
signature sniffed from the first SNIFF_LENGTH bytes of the file. The declared
type and the detected type are NOT required to agree; each only has to be on
its own list.
"""

import io
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from typing import BinaryIO, ContextManager, Iterator, Optional, Protocol

from app.validation.errors import InvalidInputError
from app.validation.signatures import SNIFF_LENGTH, ImageType, detect_image_type

MAX_IMAGE_SIZE = 10 * 1024 * 1024  # 10 MB

# Display order for error messages
_EXTENSIONS = (".jpg", ".jpeg", ".png", ".webp", ".gif")
_ADVERTISED_TYPES = ("image/jpeg", "image/png", "image/webp", "image/gif")

ALLOWED_IMAGE_EXTENSIONS = frozenset(_EXTENSIONS)

# Declared (client-asserted) content types. "image/jpg" is tolerated here even
# though the detector only ever reports image/jpeg.
ALLOWED_IMAGE_TYPES = frozenset(_ADVERTISED_TYPES + ("image/jpg",))

ALLOWED_DETECTED_TYPES = frozenset(
    {ImageType.JPEG, ImageType.PNG, ImageType.WEBP, ImageType.GIF}
)


class Upload(Protocol):
    """What the HTTP layer knows about one uploaded file."""

    @property
    def filename(self) -> str: ...

    @property
    def size(self) -> int: ...

    @property
    def content_type(self) -> str: ...

    def open(self) -> ContextManager[BinaryIO]: ...


@dataclass(frozen=True)
class BytesUpload:
    """An upload held in memory. declared_size defaults to len(content)."""

    filename: str
    content: bytes = b""
    content_type: str = ""
    declared_size: Optional[int] = None

    @property
    def size(self) -> int:
        if self.declared_size is None:
            return len(self.content)
        return self.declared_size

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        handle = io.BytesIO(self.content)
        try:
            yield handle
        finally:
            handle.close()


class FormUpload:
    """
    Adapts a FastAPI/Starlette UploadFile to the Upload protocol.

    open() hands out the spooled file rewound to the start and rewinds it
    again on release, so the request handler can still read the whole body
    afterwards. Closing the UploadFile stays the handler's job.
    """

    def __init__(self, upload_file) -> None:
        self._upload_file = upload_file
        self.filename = upload_file.filename or ""
        self.content_type = upload_file.content_type or ""
        if upload_file.size is not None:
            self.size = upload_file.size
        else:
            self.size = _measure(upload_file.file)

    @contextmanager
    def open(self) -> Iterator[BinaryIO]:
        handle = self._upload_file.file
        handle.seek(0)
        try:
            yield handle
        finally:
            handle.seek(0)


def _measure(handle: BinaryIO) -> int:
    position = handle.tell()
    try:
        return handle.seek(0, io.SEEK_END)
    finally:
        handle.seek(position)


def file_extension(filename: str) -> str:
    """
    Lowercased extension of the last path element, dot included.

    "photo.JPG" -> ".jpg", "archive.tar.gz" -> ".gz", "README" -> "".
    A leading dot counts: ".png" -> ".png".
    """
    name = filename.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot < 0:
        return ""
    return name[dot:].lower()


def validate_image(upload: Optional[Upload]) -> ImageType:
    """
    Validate an uploaded image file.

    Returns the ImageType detected from the file content.
    Raises InvalidInputError with a user-facing message on the first failed check.
    """
    if upload is None:
        raise InvalidInputError("no file provided")

    size = upload.size
    if size > MAX_IMAGE_SIZE:
        raise InvalidInputError(
            f"image size must be less than 10MB (current size: {size / (1024 * 1024):.2f} MB)"
        )
    if size == 0:
        raise InvalidInputError("image file is empty")

    ext = file_extension(upload.filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise InvalidInputError(
            f"invalid file extension: {ext} (allowed: {', '.join(_EXTENSIONS)})"
        )

    content_type = upload.content_type
    if content_type and content_type not in ALLOWED_IMAGE_TYPES:
        raise InvalidInputError(
            f"invalid file type: {content_type} (allowed: {', '.join(_ADVERTISED_TYPES)})"
        )

    detected = detect_image_type(_read_head(upload))
    if detected is ImageType.UNKNOWN:
        raise InvalidInputError("file does not appear to be a valid image")

    if detected not in ALLOWED_DETECTED_TYPES:
        raise InvalidInputError(f"invalid image type detected: {detected.mime}")

    return detected


def _read_head(upload: Upload) -> bytes:
    """Read at most SNIFF_LENGTH bytes. The handle is released on every path."""
    with ExitStack() as stack:
        try:
            handle = stack.enter_context(upload.open())
        except OSError as exc:
            raise InvalidInputError(f"failed to open file for validation: {exc}") from exc

        try:
            return handle.read(SNIFF_LENGTH)
        except OSError as exc:
            raise InvalidInputError(f"failed to read file content: {exc}") from exc
