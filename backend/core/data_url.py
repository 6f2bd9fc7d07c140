"""
Helpers for self-describing image URIs of the form
``data:<media type>;base64,<payload>``.
"""

import base64
from typing import Optional, Tuple

DEFAULT_MEDIA_TYPE = "image/png"
DEFAULT_EXTENSION = "png"


def build_data_url(media_type: str, payload: str) -> str:
    return f"data:{media_type};base64,{payload}"


def media_type_of(data_url: Optional[str], default: str = DEFAULT_MEDIA_TYPE) -> str:
    """
    Return the media type declared by a data URL.

    Args:
        data_url: e.g. "data:image/jpeg;base64,/9j/4AAQ..."
        default: Returned when the URL is missing or has no usable media type

    Returns:
        The declared media type, or the default
    """
    if not data_url or ":" not in data_url:
        return default

    header = data_url.split(";")[0]
    media_type = header.split(":", 1)[1].strip()
    return media_type or default


def extension_for(data_url: Optional[str]) -> str:
    """Derive a file extension from the data URL's media type ("image/jpeg" -> "jpeg")."""
    media_type = media_type_of(data_url)
    if "/" not in media_type:
        return DEFAULT_EXTENSION

    subtype = media_type.split("/", 1)[1].strip()
    return subtype or DEFAULT_EXTENSION


def decode_data_url(data_url: str) -> Tuple[str, bytes]:
    """Split a data URL into its media type and decoded bytes."""
    if "," not in data_url:
        raise ValueError("Invalid data URL format - missing payload separator")

    _, payload = data_url.split(",", 1)
    return media_type_of(data_url), base64.b64decode(payload)
