"""
Palette Studio

Color picking, harmony generation and palette management.
"""

__version__ = "1.0.0"
