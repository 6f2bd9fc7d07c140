"""
Shared pytest fixtures and configuration for all tests
"""
import pytest
import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

# Add backend to Python path for imports
backend_dir = Path(__file__).parent.parent
sys.path.insert(0, str(backend_dir))

PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDRfake-image-content"

@pytest.fixture(autouse=True)
def clear_caches():
    """Start every test without sessions or previews"""
    from core import cache
    cache.clear_all()
    yield
    cache.clear_all()

@pytest.fixture
def png_bytes():
    return PNG_BYTES

@pytest.fixture
def gemini_service():
    """Provide a stand-in for GeminiImageService that succeeds by default"""
    service = MagicMock()
    service.edit_image = AsyncMock(return_value=(True, "data:image/png;base64,AAAA", None))
    service.is_configured.return_value = True
    return service

@pytest.fixture
def edit_session(gemini_service):
    """Provide an EditSession backed by the stand-in service"""
    from services.edit_session import EditSession
    return EditSession(gemini_service, session_id="test-session")
