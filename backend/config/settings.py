from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List

class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # API Settings
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Image Alchemist"
    VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Server Settings
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # External APIs
    GEMINI_API_KEY: str = ""
    GEMINI_MODEL: str = "gemini-2.5-flash-image"
    GEMINI_API_BASE: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT_SECONDS: Optional[float] = None  # None waits for the service

    # Sessions and previews (in memory only)
    SESSION_TTL_SECONDS: int = 60 * 60
    MAX_SESSIONS: int = 256

    # Uploads and downloads
    ALLOWED_IMAGE_PREFIX: str = "image/"
    DOWNLOAD_BASENAME: str = "alchemized-image"

    # CORS Settings
    ALLOWED_ORIGINS: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173"
    ]

    def missing_required_settings(self) -> List[str]:
        """Return the names of required settings that are not set."""
        required_fields = ["GEMINI_API_KEY"]
        return [field for field in required_fields if not getattr(self, field, None)]

# Global settings instance
settings = Settings()
