"""
Tinte Configuration
Manages environment variables and defaults for the palette service and CLI.
"""
import os
from typing import Literal, Optional

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Configuration class for Tinte services."""

    # Upload limits (HTTP service)
    MAX_FILE_MB: int = int(os.environ.get("TINTE_MAX_FILE_MB", "20"))

    # Sampling defaults
    SAMPLE_COLORS: int = int(os.environ.get("TINTE_SAMPLE_COLORS", "24"))
    SAMPLE_SCALE: str = os.environ.get("TINTE_SAMPLE_SCALE", "800x600>")
    SAMPLE_BIT_DEPTH: int = 8
    SAMPLER_DEFAULT: Literal["auto", "imagemagick", "pillow"] = os.environ.get("TINTE_SAMPLER", "auto")
    SAMPLER_TIMEOUT_S: float = float(os.environ.get("TINTE_SAMPLER_TIMEOUT_S", "30"))

    # Logging
    LOG_LEVEL: str = os.environ.get("TINTE_LOG_LEVEL", "INFO")

    # Palette cache
    CACHE_ENABLED: bool = bool(int(os.environ.get("TINTE_CACHE_ENABLED", "1")))
    CACHE_DIR: Optional[str] = os.environ.get("TINTE_CACHE_DIR")
    CACHE_MAX_ENTRIES: int = int(os.environ.get("TINTE_CACHE_MAX_ENTRIES", "256"))

    # User config file override
    CONFIG_PATH: Optional[str] = os.environ.get("TINTE_CONFIG")

    # CORS
    ALLOWED_ORIGINS: str = os.environ.get("TINTE_ALLOWED_ORIGINS", "")

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/webp"]
    SUPPORTED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}

    @classmethod
    def validate_sampler(cls, sampler: str) -> bool:
        """Validate sampler engine parameter."""
        return sampler in ["auto", "imagemagick", "pillow"]

    @classmethod
    def validate_sample_colors(cls, colors: int) -> bool:
        """Validate the number of colors requested from the sampler."""
        return 2 <= colors <= 64


# Global config instance
config = Config()
