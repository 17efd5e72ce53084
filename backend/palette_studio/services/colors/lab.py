"""
CIE Lab / LCh conversions (D65 white point) used for perceptually uniform
lightness ramps.
"""

import math
from typing import Tuple

from .model import ColorLike, Color, to_rgb, from_rgb

REF_X, REF_Y, REF_Z = 95.047, 100.0, 108.883

# Lab lightness change per darken/brighten step
LIGHTNESS_STEP = 18.0

EPSILON = 216.0 / 24389.0
KAPPA = 24389.0 / 27.0

# Linear-light slack when testing sRGB gamut membership
GAMUT_TOLERANCE = 1e-4
CHROMA_SEARCH_STEPS = 24


def _srgb_to_linear(channel: int) -> float:
    c = channel / 255.0
    return c / 12.92 if c <= 0.04045 else ((c + 0.055) / 1.055) ** 2.4


def _linear_to_srgb(value: float) -> float:
    value = max(value, 0.0)
    return 12.92 * value if value <= 0.0031308 else 1.055 * (value ** (1 / 2.4)) - 0.055


def _f(t: float) -> float:
    return t ** (1.0 / 3.0) if t > EPSILON else (KAPPA * t + 16.0) / 116.0


def _f_inv(t: float) -> float:
    cube = t ** 3
    return cube if cube > EPSILON else (116.0 * t - 16.0) / KAPPA


def rgb_to_lab(r: int, g: int, b: int) -> Tuple[float, float, float]:
    r_lin, g_lin, b_lin = _srgb_to_linear(r), _srgb_to_linear(g), _srgb_to_linear(b)
    x = (r_lin * 0.4124564 + g_lin * 0.3575761 + b_lin * 0.1804375) * 100.0
    y = (r_lin * 0.2126729 + g_lin * 0.7151522 + b_lin * 0.0721750) * 100.0
    z = (r_lin * 0.0193339 + g_lin * 0.1191920 + b_lin * 0.9503041) * 100.0

    fx, fy, fz = _f(x / REF_X), _f(y / REF_Y), _f(z / REF_Z)
    return 116.0 * fy - 16.0, 500.0 * (fx - fy), 200.0 * (fy - fz)


def _lab_to_linear(l: float, a: float, b: float) -> Tuple[float, float, float]:
    """Lab to unclipped linear-light sRGB; values outside [0, 1] are out of gamut."""
    fy = (l + 16.0) / 116.0
    fx = fy + a / 500.0
    fz = fy - b / 200.0
    x = _f_inv(fx) * REF_X / 100.0
    y = _f_inv(fy) * REF_Y / 100.0
    z = _f_inv(fz) * REF_Z / 100.0

    r_lin = x * 3.2404542 + y * -1.5371385 + z * -0.4985314
    g_lin = x * -0.9692660 + y * 1.8760108 + z * 0.0415560
    b_lin = x * 0.0556434 + y * -0.2040259 + z * 1.0572252
    return r_lin, g_lin, b_lin


def lab_to_rgb(l: float, a: float, b: float) -> Tuple[float, float, float]:
    """Lab to 0-255 RGB floats, each channel clipped to [0, 255]."""
    return tuple(
        max(0.0, min(1.0, _linear_to_srgb(c))) * 255.0 for c in _lab_to_linear(l, a, b)
    )


def lab_to_lch(l: float, a: float, b: float) -> Tuple[float, float, float]:
    c = math.hypot(a, b)
    h = math.degrees(math.atan2(b, a)) % 360.0
    return l, c, h


def lch_to_lab(l: float, c: float, h: float) -> Tuple[float, float, float]:
    return l, c * math.cos(math.radians(h)), c * math.sin(math.radians(h))


def to_lch(color: ColorLike) -> Tuple[float, float, float]:
    return lab_to_lch(*rgb_to_lab(*to_rgb(color)))


def in_gamut(l: float, c: float, h: float) -> bool:
    """True if the LCh color is displayable in sRGB."""
    return all(
        -GAMUT_TOLERANCE <= v <= 1.0 + GAMUT_TOLERANCE for v in _lab_to_linear(*lch_to_lab(l, c, h))
    )


def max_chroma(l: float, c: float, h: float) -> float:
    """
    Largest chroma up to ``c`` that keeps (L*, h) inside the sRGB gamut.

    Binary search on chroma; lightness and hue are never changed.
    """
    if in_gamut(l, c, h):
        return c
    low, high = 0.0, c
    for _ in range(CHROMA_SEARCH_STEPS):
        mid = (low + high) / 2.0
        if in_gamut(l, mid, h):
            low = mid
        else:
            high = mid
    return low


def from_lch(l: float, c: float, h: float) -> Color:
    """
    LCh to the closest displayable color with the same L* and hue.

    L* is clamped to [0, 100]; out-of-gamut colors lose chroma until they fit.
    """
    l = max(0.0, min(100.0, l))
    c = max_chroma(l, max(c, 0.0), h)
    return from_rgb(*lab_to_rgb(*lch_to_lab(l, c, h)))
