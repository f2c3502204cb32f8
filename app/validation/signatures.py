"""
Magic-byte sniffing for the image container formats the catalog accepts.

Only the leading bytes are inspected. No decoding, no I/O.
"""

from enum import Enum

# How many leading bytes the image validator reads before sniffing
SNIFF_LENGTH = 512

_JPEG_MAGIC = b"\xff\xd8\xff"
_PNG_MAGIC = b"\x89PNG\r\n\x1a\n"
_GIF_MAGICS = (b"GIF87a", b"GIF89a")
_RIFF = b"RIFF"
_WEBP = b"WEBP"


class ImageType(str, Enum):
    JPEG = "image/jpeg"
    PNG = "image/png"
    GIF = "image/gif"
    WEBP = "image/webp"
    UNKNOWN = "unknown"

    @property
    def mime(self) -> str:
        return self.value


def detect_image_type(prefix: bytes) -> ImageType:
    """
    Map the leading bytes of a file to an ImageType.

    Total over all inputs: anything that is not one of the known signatures,
    including empty or very short input, is ImageType.UNKNOWN.
    The WebP chunk length (bytes 4..8) is not inspected.
    """
    data = bytes(prefix)
    if len(data) < 4:
        return ImageType.UNKNOWN

    # Any fourth byte: JFIF (E0), Exif (E1), ...
    if data[:3] == _JPEG_MAGIC:
        return ImageType.JPEG

    if len(data) >= 8 and data[:8] == _PNG_MAGIC:
        return ImageType.PNG

    if len(data) >= 6 and data[:6] in _GIF_MAGICS:
        return ImageType.GIF

    if len(data) >= 12 and data[:4] == _RIFF and data[8:12] == _WEBP:
        return ImageType.WEBP

    return ImageType.UNKNOWN
