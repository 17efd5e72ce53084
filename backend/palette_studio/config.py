"""
Palette Studio Configuration
Manages environment variables and defaults for the color and palette services.
"""
import os


class Config:
    """Configuration class for Palette Studio services."""

    # Logging
    LOG_LEVEL: str = os.environ.get("PALETTE_STUDIO_LOG_LEVEL", "INFO")

    # Palette behaviour
    PALETTE_CAPACITY: int = int(os.environ.get("PALETTE_STUDIO_PALETTE_CAPACITY", "10"))  # 0 = unbounded
    DEFAULT_COLOR: str = os.environ.get("PALETTE_STUDIO_DEFAULT_COLOR", "#3B82F6")
    SEED_DEFAULTS: bool = bool(int(os.environ.get("PALETTE_STUDIO_SEED_DEFAULTS", "1")))
    ACCEPT_RGB_SYNTAX: bool = bool(int(os.environ.get("PALETTE_STUDIO_ACCEPT_RGB_SYNTAX", "0")))

    # Notifications (milliseconds)
    NOTIFICATION_TTL_MS: int = int(os.environ.get("PALETTE_STUDIO_NOTIFICATION_TTL_MS", "2000"))

    # Image extraction
    EXTRACT_COUNT: int = int(os.environ.get("PALETTE_STUDIO_EXTRACT_COUNT", "6"))
    EXTRACT_MAX_SAMPLES: int = int(os.environ.get("PALETTE_STUDIO_EXTRACT_MAX_SAMPLES", "20000"))
    EXTRACT_MAX_EDGE: int = int(os.environ.get("PALETTE_STUDIO_EXTRACT_MAX_EDGE", "256"))
    MAX_FILE_MB: int = int(os.environ.get("PALETTE_STUDIO_MAX_FILE_MB", "10"))

    # CORS settings
    ALLOWED_ORIGINS: str = os.environ.get(
        "PALETTE_STUDIO_ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173"
    )

    # Seed state shown to a fresh session
    DEFAULT_PALETTE = ["#3B82F6", "#EF4444", "#10B981", "#F59E0B", "#8B5CF6"]
    DEFAULT_SAVED_PALETTES = [
        ("Ocean Blues", ["#0EA5E9", "#0284C7", "#0369A1", "#075985", "#0C4A6E"]),
        ("Sunset Vibes", ["#F97316", "#EA580C", "#DC2626", "#BE123C", "#9F1239"]),
    ]

    # Supported image formats
    SUPPORTED_MIME_TYPES = ["image/jpeg", "image/png", "image/gif", "image/webp"]

    @classmethod
    def validate_capacity(cls, capacity: int) -> bool:
        """Validate palette capacity (0 disables the bound)."""
        return 0 <= capacity <= 64

    @classmethod
    def validate_extract_count(cls, count: int) -> bool:
        """Validate number of colors requested from an image."""
        return 1 <= count <= 16

    @classmethod
    def allowed_origins(cls) -> list:
        """Split the comma separated CORS origin list."""
        return [origin.strip() for origin in cls.ALLOWED_ORIGINS.split(",") if origin.strip()]


# Global config instance
config = Config()
