"""
Palette Studio Color Model

Pure conversions between hex, RGB and HSL representations, plus luminance,
contrast text selection and random color sampling. A ``Color`` is an
immutable value whose canonical form is an uppercase ``#RRGGBB`` string.
"""

import colorsys
import random
import re
from dataclasses import dataclass
from typing import Dict, Any, Optional, Tuple, Union

from palette_studio.errors import InvalidColor


HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")
RGB_FUNC_RE = re.compile(r"^rgb\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*\)$", re.IGNORECASE)

# Luminance above this (0-1 scale) gets black text, otherwise white
CONTRAST_THRESHOLD = 0.5


@dataclass(frozen=True)
class Color:
    """A color in canonical ``#RRGGBB`` form."""
    hex: str

    def __post_init__(self):
        match = HEX_RE.match(self.hex) if isinstance(self.hex, str) else None
        if match is None:
            raise InvalidColor(self.hex)
        object.__setattr__(self, "hex", f"#{match.group(1).upper()}")

    def __str__(self) -> str:
        return self.hex

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return to_rgb(self)

    @property
    def hsl(self) -> Tuple[float, float, float]:
        return to_hsl(self)


ColorLike = Union[Color, str]


BLACK = Color("#000000")
WHITE = Color("#FFFFFF")


def parse(value: Any, allow_rgb: bool = False) -> Color:
    """
    Parse user input into a Color.

    Args:
        value: 6-digit hex string with or without a leading ``#``
            (case-insensitive), or an existing Color
        allow_rgb: Also accept CSS ``rgb(r, g, b)`` syntax

    Returns:
        Canonical Color

    Raises:
        InvalidColor: For any other shape
    """
    if isinstance(value, Color):
        return value
    if not isinstance(value, str):
        raise InvalidColor(value)

    text = value.strip()
    match = HEX_RE.match(text)
    if match:
        return Color(f"#{match.group(1)}")

    if allow_rgb:
        match = RGB_FUNC_RE.match(text)
        if match:
            channels = [int(part) for part in match.groups()]
            if all(0 <= c <= 255 for c in channels):
                return from_rgb(*channels)

    raise InvalidColor(value)


def is_valid(value: Any, allow_rgb: bool = False) -> bool:
    """Check whether ``value`` parses as a color."""
    try:
        parse(value, allow_rgb=allow_rgb)
    except InvalidColor:
        return False
    return True


def from_rgb(r: int, g: int, b: int) -> Color:
    """Build a Color from 0-255 channels, clamping and rounding."""
    r_int, g_int, b_int = (max(0, min(255, int(round(c)))) for c in (r, g, b))
    return Color(f"#{r_int:02X}{g_int:02X}{b_int:02X}")


def to_rgb(color: ColorLike) -> Tuple[int, int, int]:
    """Convert a color to an (r, g, b) tuple with values 0-255."""
    hex_clean = parse(color).hex.lstrip('#')
    return tuple(int(hex_clean[i:i+2], 16) for i in (0, 2, 4))


def to_hsl(color: ColorLike) -> Tuple[float, float, float]:
    """
    Convert a color to HSL.

    Returns:
        Tuple of (H, S, L) where H is in degrees [0, 360) and S, L in [0, 1]
    """
    r, g, b = to_rgb(color)
    # colorsys orders the triple as H, L, S with H in [0, 1)
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    return (h * 360.0) % 360.0, s, l


def from_hsl(h: float, s: float, l: float) -> Color:
    """
    Convert HSL to a Color.

    Args:
        h: Hue in degrees, wrapped into [0, 360)
        s: Saturation [0, 1]
        l: Lightness [0, 1]
    """
    h = (h % 360.0) / 360.0
    s = max(0.0, min(1.0, s))
    l = max(0.0, min(1.0, l))
    r, g, b = colorsys.hls_to_rgb(h, l, s)
    return from_rgb(r * 255, g * 255, b * 255)


def hsl_display(color: ColorLike) -> Tuple[int, int, int]:
    """HSL rounded for display: degrees, percent, percent."""
    h, s, l = to_hsl(color)
    return int(round(h)) % 360, int(round(s * 100)), int(round(l * 100))


def _linearize(channel: int) -> float:
    c = channel / 255.0
    return c / 12.92 if c <= 0.03928 else ((c + 0.055) / 1.055) ** 2.4


def luminance(color: ColorLike) -> float:
    """WCAG relative luminance on a 0-1 scale."""
    r, g, b = to_rgb(color)
    return 0.2126 * _linearize(r) + 0.7152 * _linearize(g) + 0.0722 * _linearize(b)


def contrast_text(color: ColorLike) -> Color:
    """Pick black or white text for display on top of ``color``."""
    return BLACK if luminance(color) > CONTRAST_THRESHOLD else WHITE


def contrast_ratio(first: ColorLike, second: ColorLike) -> float:
    """WCAG contrast ratio between two colors, in [1, 21]."""
    l1, l2 = sorted((luminance(first), luminance(second)), reverse=True)
    return (l1 + 0.05) / (l2 + 0.05)


def random_color(rng: Optional[random.Random] = None) -> Color:
    """Sample uniformly from the full 24-bit RGB cube."""
    value = (rng or random).randint(0, 0xFFFFFF)
    return Color(f"#{value:06X}")


def describe(color: ColorLike) -> Dict[str, Any]:
    """Everything the picker panel shows about a color."""
    color = parse(color)
    return {
        "hex": color.hex,
        "rgb": list(to_rgb(color)),
        "hsl": list(hsl_display(color)),
        "luminance": round(luminance(color), 4),
        "text_color": contrast_text(color).hex,
    }
