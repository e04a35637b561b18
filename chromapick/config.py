"""
Chromapick Configuration
Manages environment variables and defaults for the palette service.
"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for Chromapick services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("CHROMAPICK_MAX_FILE_MB", "10"))

    # Palette size bounds exposed to clients
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("CHROMAPICK_DEFAULT_COLOR_COUNT", "6"))
    MAX_COLOR_COUNT: int = int(os.environ.get("CHROMAPICK_MAX_COLOR_COUNT", "16"))

    # Swatch artifact
    SWATCH_CHIP_SIZE: int = int(os.environ.get("CHROMAPICK_SWATCH_CHIP_SIZE", "40"))

    # Logging
    LOG_LEVEL: str = os.environ.get("CHROMAPICK_LOG_LEVEL", "INFO")

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("CHROMAPICK_ALLOWED_ORIGINS", "")

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("CHROMAPICK_METRICS_ENABLED", "1")))

    # Any image/* upload is attempted; Pillow decides whether it can be decoded
    SUPPORTED_MIME_PREFIX = "image/"

    @classmethod
    def allowed_origins(cls) -> list:
        """Parse the CORS origin list; an empty setting allows all origins."""
        origins = [o.strip() for o in cls.ALLOWED_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]


# Global config instance
config = Config()
