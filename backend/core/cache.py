"""
In-memory caches for edit sessions and image previews.

Provides thread-safe TTL caches keyed by opaque tokens. Nothing is persisted;
entries disappear when released or when the TTL expires.
"""

from cachetools import TTLCache
from threading import Lock
from typing import Optional, Any, Tuple, Dict
import uuid

from config.settings import settings

# Cache configuration
CACHE_TTL_SECONDS = settings.SESSION_TTL_SECONDS
CACHE_MAX_SIZE = settings.MAX_SESSIONS

# Thread-safe cache instances
_session_cache: TTLCache = TTLCache(maxsize=CACHE_MAX_SIZE, ttl=CACHE_TTL_SECONDS)
_preview_cache: TTLCache = TTLCache(maxsize=CACHE_MAX_SIZE, ttl=CACHE_TTL_SECONDS)
_cache_lock = Lock()


def create_preview(content: bytes, content_type: str) -> str:
    """
    Register a preview of a locally selected image.

    Args:
        content: Raw image bytes
        content_type: Declared media type of the image

    Returns:
        Token identifying the preview until it is released
    """
    token = uuid.uuid4().hex
    with _cache_lock:
        _preview_cache[token] = (content_type, content)
    return token


def get_preview(token: str) -> Optional[Tuple[str, bytes]]:
    """
    Look up a preview.

    Returns:
        (content_type, content) if present and not expired, None otherwise
    """
    with _cache_lock:
        return _preview_cache.get(token)


def release_preview(token: str) -> bool:
    """
    Release a preview handle.

    Returns:
        True if the preview was found and removed, False otherwise
    """
    with _cache_lock:
        if token in _preview_cache:
            del _preview_cache[token]
            return True
        return False


def touch_preview(token: str) -> bool:
    """Restart a preview's TTL; returns False if it has already expired."""
    with _cache_lock:
        preview = _preview_cache.get(token)
        if preview is None:
            return False
        _preview_cache[token] = preview
        return True


def store_session(session_id: str, session: Any) -> None:
    with _cache_lock:
        _session_cache[session_id] = session


def touch_session(session_id: str) -> Optional[Any]:
    """
    Look up a session and restart its TTL.

    Returns:
        The session if present and not expired, None otherwise
    """
    with _cache_lock:
        session = _session_cache.get(session_id)
        if session is not None:
            _session_cache[session_id] = session
        return session


def drop_session(session_id: str) -> Optional[Any]:
    """Remove a session and return it so the caller can tear it down."""
    with _cache_lock:
        return _session_cache.pop(session_id, None)


def clear_all() -> int:
    """
    Clear every session and preview.

    Returns:
        Number of entries cleared
    """
    with _cache_lock:
        count = len(_session_cache) + len(_preview_cache)
        _session_cache.clear()
        _preview_cache.clear()
        return count


def get_cache_stats() -> Dict[str, Any]:
    """
    Get cache statistics for monitoring.

    Returns:
        Dictionary with cache stats (sizes, max_size, ttl)
    """
    with _cache_lock:
        return {
            "sessions": len(_session_cache),
            "previews": len(_preview_cache),
            "max_size": CACHE_MAX_SIZE,
            "ttl_seconds": CACHE_TTL_SECONDS
        }
