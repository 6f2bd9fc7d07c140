import base64
import inspect
from typing import Any, Optional, Tuple

from core.data_url import build_data_url, DEFAULT_MEDIA_TYPE

EMPTY_PAYLOAD_ERROR = "Failed to convert file to base64: result was empty."


async def _read_all(file: Any) -> bytes:
    # UploadFile.read() is a coroutine, BytesIO.read() is not
    content = file.read()
    if inspect.isawaitable(content):
        content = await content
    return content or b""


async def file_to_base64(file: Any) -> Tuple[bool, Optional[str], Optional[str]]:
    """Read a binary file handle and return its raw bytes as a base64 payload without the data URL prefix"""
    try:
        content = await _read_all(file)
    except Exception as error:
        print(f"❌ File read failed: {error}")
        return False, None, f"File could not be read: {error}"

    media_type = getattr(file, "content_type", None) or DEFAULT_MEDIA_TYPE
    data_url = build_data_url(media_type, base64.b64encode(content).decode("ascii"))

    # Strip "data:<mime>;base64," and keep only the payload
    payload = data_url.split(",", 1)[1]
    if not payload:
        return False, None, EMPTY_PAYLOAD_ERROR

    return True, payload, None
