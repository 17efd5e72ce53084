"""
Palette Studio Colors Module

Provides the color model (hex/RGB/HSL conversions, luminance, contrast),
harmony generation, and palette extraction from images.
"""

__version__ = "1.0.0"
