"""
Palette Studio Color Harmony Engine

This module implements color theory rules for deriving related colors from a
base color: hue rotations in HSL space for complementary, analogous, triadic,
split-complementary and tetradic schemes, and a lightness ramp in CIE LCh for
monochromatic palettes.
"""

from enum import Enum
from typing import Dict, List, Tuple, Union

from loguru import logger

from .lab import LIGHTNESS_STEP, to_lch, from_lch
from .model import Color, ColorLike, parse, to_hsl, from_hsl


class HarmonyScheme(str, Enum):
    """Named harmony rules."""
    COMPLEMENTARY = "complementary"
    ANALOGOUS = "analogous"
    TRIADIC = "triadic"
    SPLIT_COMPLEMENTARY = "split-complementary"
    TETRADIC = "tetradic"
    MONOCHROMATIC = "monochromatic"


# Hue offsets in degrees, in output order
HUE_OFFSETS: Dict[HarmonyScheme, Tuple[int, ...]] = {
    HarmonyScheme.COMPLEMENTARY: (0, 180),
    HarmonyScheme.ANALOGOUS: (-30, 0, 30),
    HarmonyScheme.TRIADIC: (0, 120, 240),
    HarmonyScheme.SPLIT_COMPLEMENTARY: (0, 150, 210),
    HarmonyScheme.TETRADIC: (0, 90, 180, 270),
}

MONOCHROMATIC_STEPS = 5
MONOCHROMATIC_SPREAD = 2  # darken/brighten amount at the ends of the ramp


def rotate_hue(h: float, degrees: float) -> float:
    """
    Rotate hue by specified degrees.

    Args:
        h: Original hue in degrees
        degrees: Rotation in degrees (can be negative)

    Returns:
        Rotated hue in [0, 360) with proper wraparound
    """
    return (h + degrees) % 360.0


def hue_separation(h1: float, h2: float) -> float:
    """
    Calculate the minimum angular separation between two hues.

    Returns:
        Minimum separation in degrees [0, 180]
    """
    diff = abs(h1 - h2) % 360.0
    return min(diff, 360.0 - diff)


def rotate_color(base: Color, degrees: float) -> Color:
    """Rotate a color's hue, holding saturation and lightness fixed."""
    if degrees % 360 == 0:
        return base
    h, s, l = to_hsl(base)
    return from_hsl(rotate_hue(h, degrees), s, l)


def lightness_ramp(base: Color, steps: int = MONOCHROMATIC_STEPS,
                   spread: float = MONOCHROMATIC_SPREAD) -> List[Color]:
    """
    Build a lightness ramp from ``base`` darkened to ``base`` brightened.

    Interpolates L* linearly in CIE LCh while chroma and hue stay constant.
    The ramp is symmetric around the base, so with an odd number of steps the
    middle element is the base itself.
    """
    if steps < 2:
        return [base]
    l, c, h = to_lch(base)
    start = l - LIGHTNESS_STEP * spread
    end = l + LIGHTNESS_STEP * spread
    middle = (steps - 1) / 2

    ramp = []
    for i in range(steps):
        if i == middle:
            ramp.append(base)
            continue
        t = i / (steps - 1)
        ramp.append(from_lch(start + (end - start) * t, c, h))
    return ramp


def harmony(base: ColorLike, scheme: Union[HarmonyScheme, str]) -> List[Color]:
    """
    Derive the colors of a harmony scheme.

    Args:
        base: Base color (parsed if given as text)
        scheme: Harmony scheme or its name

    Returns:
        Ordered list of colors, see HUE_OFFSETS

    Raises:
        InvalidColor: If the base color cannot be parsed
    """
    base_color = parse(base)

    try:
        scheme = HarmonyScheme(scheme)
    except ValueError:
        logger.warning(f"Unknown harmony scheme {scheme!r}, returning base color only")
        return [base_color]

    if scheme is HarmonyScheme.MONOCHROMATIC:
        colors = lightness_ramp(base_color)
    else:
        colors = [rotate_color(base_color, degrees) for degrees in HUE_OFFSETS[scheme]]

    logger.debug(f"Harmony {scheme.value} for {base_color.hex}: {[c.hex for c in colors]}")
    return colors


def generate_all_harmonies(base: ColorLike) -> Dict[str, List[Color]]:
    """Generate every harmony scheme for a base color."""
    base_color = parse(base)
    return {scheme.value: harmony(base_color, scheme) for scheme in HarmonyScheme}
