"""
PaletteCut Configuration
Manages environment variables and defaults for the palette service.
"""
import os


class Config:
    """Configuration class for PaletteCut services."""

    # Upload limits
    MAX_FILE_MB: int = int(os.environ.get("PALETTECUT_MAX_FILE_MB", "10"))
    MAX_EDGE: int = int(os.environ.get("PALETTECUT_MAX_EDGE", "1024"))

    # Palette defaults
    DEFAULT_COLOR_COUNT: int = int(os.environ.get("PALETTECUT_DEFAULT_COLOR_COUNT", "10"))
    DEFAULT_QUALITY: int = int(os.environ.get("PALETTECUT_DEFAULT_QUALITY", "10"))
    IGNORE_WHITE: bool = bool(int(os.environ.get("PALETTECUT_IGNORE_WHITE", "1")))

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTECUT_LOG_LEVEL", "INFO")

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get("PALETTECUT_ALLOWED_ORIGINS", "")

    # Observability
    METRICS_ENABLED: bool = bool(int(os.environ.get("PALETTECUT_METRICS_ENABLED", "1")))

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png"]

    # Palette size bounds accepted by the quantizer
    MIN_COLOR_COUNT: int = 2
    MAX_COLOR_COUNT: int = 256

    @classmethod
    def validate_color_count(cls, color_count: int) -> bool:
        """Validate palette size parameter."""
        return cls.MIN_COLOR_COUNT <= color_count <= cls.MAX_COLOR_COUNT

    @classmethod
    def validate_quality(cls, quality: int) -> bool:
        """Validate sampling step (1 = every pixel)."""
        return quality >= 1

    @classmethod
    def allowed_origins(cls) -> list:
        """CORS origins as a list; empty means no cross-origin access."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
