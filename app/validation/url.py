"""
Validation for optional, user-supplied profile links (author LinkedIn and image URLs).

Policy: HTTPS only, a non-empty host, at most MAX_URL_LENGTH bytes once trimmed.
An empty or whitespace-only value is accepted because every URL field it guards
is optional.
"""

import re
import string
from urllib.parse import SplitResult, urlsplit

from app.validation.errors import InvalidInputError

MAX_URL_LENGTH = 500

_ASCII_WHITESPACE = " \t\n\r\v\f"

# ASCII characters a host may carry; any other ASCII character is rejected
_HOST_ALLOWED = frozenset(string.ascii_letters + string.digits + "-_.~!$&'()*+,;=:[]<>\"%")

# A '%' that is not followed by two hex digits
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")

_HOST_ESCAPE = re.compile(r"%([0-9A-Fa-f]{2})")

_PORT_DIGITS = re.compile(r"[0-9]*")


def validate_url(candidate: str) -> str:
    """
    Validate an optional HTTPS URL.

    Checks run in a fixed order so an input breaking several rules always gets
    the same message: length, structure, scheme, host.

    The length cap counts UTF-8 bytes of the trimmed value, not code points, so
    an internationalized host uses more of the budget than it appears to.
    No scheme is ever assumed: "example.com" is rejected, not upgraded.

    Returns the trimmed URL ("" for an empty value).
    Raises InvalidInputError when the URL is rejected.
    """
    url = candidate.strip(_ASCII_WHITESPACE)
    if not url:
        return ""

    length = len(url.encode("utf-8"))
    if length > MAX_URL_LENGTH:
        raise InvalidInputError(
            f"URL must be less than {MAX_URL_LENGTH} characters (current length: {length})"
        )

    try:
        parts = _parse(url)
    except ValueError as exc:
        raise InvalidInputError(f"invalid URL format: {exc}") from exc

    if parts.scheme != "https":
        raise InvalidInputError(f"URL must use HTTPS protocol (current: {parts.scheme})")

    if not _host(parts):
        raise InvalidInputError("URL must have a valid host")

    return url


def _host(parts: SplitResult) -> str:
    """Authority without userinfo. The port, if any, stays attached."""
    return parts.netloc.rpartition("@")[2]


def _parse(url: str) -> SplitResult:
    """
    Split a URL reference and reject the structural errors urlsplit tolerates.

    urlsplit silently drops tabs and newlines, accepts any character in the
    host and leaves the port unchecked; those are treated as malformed here.
    """
    for ch in url:
        if ord(ch) < 0x20 or ord(ch) == 0x7F:
            raise ValueError("invalid control character in URL")

    parts = urlsplit(url)
    host = _host(parts)

    for ch in host:
        if ch < "\x80" and ch not in _HOST_ALLOWED:
            raise ValueError(f"invalid character {ch!r} in host name")

    for component in (host, parts.path, parts.fragment):
        match = _BAD_ESCAPE.search(component)
        if match:
            raise ValueError(f"invalid URL escape {component[match.start():match.start() + 3]!r}")

    # A host may only escape non-ASCII bytes, or '%' itself
    for match in _HOST_ESCAPE.finditer(host):
        if match.group(1) != "25" and int(match.group(1)[0], 16) < 8:
            raise ValueError(f"invalid URL escape {match.group(0)!r}")

    _check_port(host)
    return parts


def _check_port(host: str) -> None:
    """The port, when present, is ':' followed by ASCII digits only (possibly none)."""
    if host.startswith("["):
        port = host[host.find("]") + 1:]
    else:
        colon = host.rfind(":")
        port = host[colon:] if colon >= 0 else ""

    if port and not (port[0] == ":" and _PORT_DIGITS.fullmatch(port[1:])):
        raise ValueError(f"invalid port {port!r} after host")
