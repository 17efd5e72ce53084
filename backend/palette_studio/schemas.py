"""
Palette Studio API Schemas
Pydantic models for color, harmony and palette request/response validation.
"""
from typing import List, Optional
from pydantic import BaseModel, Field

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class HealthResponse(BaseModel):
    """Health check response."""
    ok: bool = Field(True, description="Service health status")
    version: str = Field(..., description="Service version")
    service: str = Field("palette-studio", description="Service name")


class ErrorResponse(BaseModel):
    """Error response."""
    detail: str = Field(..., description="Error message")


# ============================================================================
# COLOR SCHEMAS
# ============================================================================

class ColorInfo(BaseModel):
    """Everything shown about a single color."""
    hex: str = Field(..., pattern=HEX_PATTERN, description="Canonical hex code #RRGGBB")
    rgb: List[int] = Field(..., min_length=3, max_length=3, description="Red, green, blue (0-255)")
    hsl: List[int] = Field(
        ...,
        min_length=3,
        max_length=3,
        description="Hue in degrees, saturation and lightness in percent (rounded)"
    )
    luminance: float = Field(..., ge=0.0, le=1.0, description="WCAG relative luminance")
    text_color: str = Field(..., pattern=HEX_PATTERN, description="Black or white text for contrast")


class HarmonyResponse(BaseModel):
    """Colors derived from a base color by a harmony scheme."""
    base: str = Field(..., pattern=HEX_PATTERN)
    scheme: str = Field(..., description="Harmony scheme name")
    colors: List[str] = Field(..., description="Derived colors in scheme order")


# ============================================================================
# SESSION / PALETTE SCHEMAS
# ============================================================================

class SavedPaletteModel(BaseModel):
    """A named palette snapshot."""
    name: str = Field(..., min_length=1)
    colors: List[str] = Field(..., min_length=1)


class NotificationModel(BaseModel):
    message: str
    level: str
    code: Optional[str] = None


class SessionResponse(BaseModel):
    """Current session state."""
    current_color: str = Field(..., pattern=HEX_PATTERN)
    text_color: str = Field(..., pattern=HEX_PATTERN)
    palette: List[str] = Field(..., description="Current palette in insertion order")
    saved_palettes: List[SavedPaletteModel] = Field(default_factory=list)
    capacity: int = Field(..., ge=0, description="Palette capacity (0 = unbounded)")
    notification: Optional[NotificationModel] = None


class ColorInput(BaseModel):
    """Manual color entry."""
    value: str = Field(..., min_length=1, max_length=32, description="Hex code, with or without #")


class AddColorRequest(BaseModel):
    """Add a color to the palette; the current color when omitted."""
    color: Optional[str] = Field(None, max_length=32)


class ReplacePaletteRequest(BaseModel):
    colors: List[str] = Field(..., max_length=64)


class SavePaletteRequest(BaseModel):
    name: str = Field(..., max_length=100, description="Palette name (trimmed, must not be blank)")


class ExtractResponse(BaseModel):
    """Colors extracted from an uploaded image."""
    colors: List[str] = Field(..., description="Extracted colors ordered by dominance")
    applied: bool = Field(False, description="Whether the colors replaced the current palette")


class PixelResponse(BaseModel):
    color: str = Field(..., pattern=HEX_PATTERN)
    applied: bool = False
