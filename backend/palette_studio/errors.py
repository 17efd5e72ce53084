"""
Palette Studio Errors

Every failure in the color and palette core is local and recoverable. Each
error carries a stable ``code`` used by notifications and the HTTP layer.
"""


class PaletteError(Exception):
    """Base class for recoverable color/palette failures."""
    code = "palette_error"

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class InvalidColor(PaletteError, ValueError):
    """Input is not a recognised color."""
    code = "invalid_color"

    def __init__(self, value: object = None, message: str = ""):
        self.value = value
        super().__init__(message or f"Invalid color: {value!r}")


class EmptyName(PaletteError, ValueError):
    """Palette name must not be empty."""
    code = "empty_name"


class EmptyPalette(PaletteError, ValueError):
    """Palette has no colors."""
    code = "empty_palette"


class IndexOutOfRange(PaletteError, IndexError):
    """Index does not refer to an existing item."""
    code = "index_out_of_range"

    def __init__(self, index: int, size: int, what: str = "item"):
        self.index = index
        self.size = size
        super().__init__(f"{what} index {index} out of range [0, {size})")


class PaletteFull(PaletteError):
    """Palette has reached its configured capacity."""
    code = "palette_full"

    def __init__(self, capacity: int):
        self.capacity = capacity
        super().__init__(f"Palette is full ({capacity} colors)")


class ClipboardFailure(PaletteError):
    """Could not write to the clipboard."""
    code = "clipboard_failure"


class ImageLoadFailure(PaletteError):
    """Could not load a palette from the image."""
    code = "image_load_failure"
