"""
Application configuration using Pydantic Settings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    ENVIRONMENT: str = "development"

    # API
    API_HOST: str = "0.0.0.0"
    API_PORT: int = 3000

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Uploads
    MAX_UPLOAD_BYTES: int = 150 * 1024 * 1024
    UPLOAD_TEMP_DIR: str = "/tmp/video_checker_uploads"
    TEMP_MAX_AGE_SECONDS: int = 300
    TEMP_SWEEP_INTERVAL_SECONDS: int = 60

    # ffprobe
    FFPROBE_CMD: str = "ffprobe"
    PROBE_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = ""
    LOG_DIR: str = "logs"
    LOG_TO_FILE: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.strip().lower() == "production"


settings = Settings()


def validate_runtime_settings() -> None:
    """Fail fast when limits or timeouts are configured to unusable values."""
    if int(settings.MAX_UPLOAD_BYTES) <= 0:
        raise ValueError("MAX_UPLOAD_BYTES must be a positive number of bytes.")
    if float(settings.PROBE_TIMEOUT_SECONDS) <= 0:
        raise ValueError("PROBE_TIMEOUT_SECONDS must be greater than zero.")
    if int(settings.TEMP_MAX_AGE_SECONDS) <= 0:
        raise ValueError("TEMP_MAX_AGE_SECONDS must be greater than zero.")
    if not (settings.FFPROBE_CMD or "").strip():
        raise ValueError("FFPROBE_CMD is not configured.")
