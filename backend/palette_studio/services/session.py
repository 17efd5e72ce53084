"""
Palette Studio Session

Routes discrete user actions (clicks, key presses, image results) into the
color model and the palette store. Recoverable failures are turned into a
transient notification and leave the session state unchanged.
"""

import random
from functools import wraps
from typing import Dict, Iterable, List, Optional, Protocol

from loguru import logger

from palette_studio.config import config
from palette_studio.errors import ClipboardFailure, PaletteError
from palette_studio.services.colors.harmony import HarmonyScheme, harmony
from palette_studio.services.colors.model import (
    Color, ColorLike, contrast_text, parse, random_color
)
from palette_studio.services.notifications import NotificationLevel, Notifier
from palette_studio.services.palette_store import PaletteStore, SavedPalette


class Clipboard(Protocol):
    def write(self, text: str) -> None:
        ...


class MemoryClipboard:
    """Clipboard kept in process memory."""

    def __init__(self):
        self.text: Optional[str] = None

    def write(self, text: str) -> None:
        self.text = text


def notify_on_error(func):
    """
    Turn a PaletteError into an error notification and return None.

    Sessions created with ``raise_errors`` re-raise after posting, so callers
    such as the HTTP layer can report the failure themselves.
    """
    @wraps(func)
    def wrapper(self, *args, **kwargs):
        try:
            return func(self, *args, **kwargs)
        except PaletteError as e:
            logger.bind(error_code=e.code).warning(f"{func.__name__} failed: {e.message}")
            self.notifier.post(e.message, NotificationLevel.ERROR, e.code)
            if self.raise_errors:
                raise
            return None
    return wrapper


SCHEME_KEYS = {
    "1": HarmonyScheme.COMPLEMENTARY,
    "2": HarmonyScheme.ANALOGOUS,
    "3": HarmonyScheme.TRIADIC,
    "4": HarmonyScheme.SPLIT_COMPLEMENTARY,
    "5": HarmonyScheme.TETRADIC,
    "6": HarmonyScheme.MONOCHROMATIC,
}


class PaletteSession:
    """State and event handlers for one user session."""

    def __init__(self,
                 store: Optional[PaletteStore] = None,
                 clipboard: Optional[Clipboard] = None,
                 notifier: Optional[Notifier] = None,
                 rng: Optional[random.Random] = None,
                 accept_rgb_syntax: Optional[bool] = None,
                 raise_errors: bool = False):
        if store is None:
            store = PaletteStore.with_defaults() if config.SEED_DEFAULTS else PaletteStore()
        self.store = store
        self.clipboard = clipboard
        self.notifier = notifier or Notifier()
        self.rng = rng
        self.accept_rgb_syntax = config.ACCEPT_RGB_SYNTAX if accept_rgb_syntax is None else accept_rgb_syntax
        self.raise_errors = raise_errors

        self._key_bindings = {
            " ": self.randomize,
            "space": self.randomize,
            "r": self.randomize,
            "a": self.add_current_color,
            "c": self.copy_to_clipboard,
            "backspace": self.remove_last,
            "delete": self.remove_last,
        }

    @property
    def current_color(self) -> Color:
        return self.store.current_color

    @property
    def text_color(self) -> Color:
        return contrast_text(self.store.current_color)

    # ------------------------------------------------------------------
    # Current color
    # ------------------------------------------------------------------

    @notify_on_error
    def select_color(self, color: ColorLike) -> Color:
        """Picker change or palette-item click."""
        return self.store.select(color)

    @notify_on_error
    def enter_color(self, text: str) -> Color:
        """Manual entry; invalid text leaves the current color unchanged."""
        return self.store.select(parse(text, allow_rgb=self.accept_rgb_syntax))

    def randomize(self) -> Color:
        return self.store.select(random_color(self.rng))

    # ------------------------------------------------------------------
    # Current palette
    # ------------------------------------------------------------------

    @notify_on_error
    def add_current_color(self, color: Optional[ColorLike] = None) -> bool:
        """Add ``color`` (the current color by default) to the palette."""
        color = self.store.current_color if color is None else parse(color)
        added = self.store.add_current(color)
        if added:
            self.notifier.post(f"Added {color.hex}", NotificationLevel.SUCCESS)
        return added

    @notify_on_error
    def remove_color(self, index: int) -> Color:
        return self.store.remove_current(index)

    @notify_on_error
    def remove_last(self) -> Color:
        return self.store.remove_current(len(self.store.palette) - 1)

    @notify_on_error
    def apply_harmony(self, scheme: HarmonyScheme) -> List[Color]:
        """Replace the palette with a harmony of the current color."""
        colors = harmony(self.store.current_color, scheme)
        self.store.replace_current(colors)
        return colors

    @notify_on_error
    def on_palette_ready(self, colors: Iterable[str]) -> List[Color]:
        """
        Consume a batch from the image extractor.

        The whole batch is validated before the palette is touched; a
        non-empty batch also moves the current color to its first entry.
        """
        batch = [parse(c) for c in colors]
        self.store.replace_current(batch)
        if batch:
            self.store.select(batch[0])
        logger.info(f"Applied {len(batch)} extracted colors")
        return batch

    # ------------------------------------------------------------------
    # Saved palettes
    # ------------------------------------------------------------------

    @notify_on_error
    def save_palette(self, name: str) -> SavedPalette:
        saved = self.store.save(name)
        self.notifier.post(f"Saved {saved.name}", NotificationLevel.SUCCESS)
        return saved

    @notify_on_error
    def load_palette(self, index: int) -> Color:
        return self.store.load(self.store.get_saved(index))

    @notify_on_error
    def delete_palette(self, index: int) -> SavedPalette:
        return self.store.delete(index)

    # ------------------------------------------------------------------
    # Side effects
    # ------------------------------------------------------------------

    @notify_on_error
    def copy_to_clipboard(self, color: Optional[ColorLike] = None) -> str:
        """Copy a hex code (the current color by default)."""
        hex_code = parse(color).hex if color is not None else self.store.current_color.hex
        if self.clipboard is None:
            raise ClipboardFailure("Clipboard is not available")
        try:
            self.clipboard.write(hex_code)
        except (OSError, RuntimeError) as e:
            raise ClipboardFailure(f"Could not copy {hex_code}: {e}")
        self.notifier.post(f"Copied {hex_code}", NotificationLevel.SUCCESS)
        return hex_code

    def handle_key(self, key: str):
        """
        Dispatch a keyboard shortcut.

        Returns:
            The handler's result, or None for unbound keys
        """
        key = key if key == " " else key.strip().lower()
        if key in SCHEME_KEYS:
            return self.apply_harmony(SCHEME_KEYS[key])
        handler = self._key_bindings.get(key)
        if handler is None:
            return None
        return handler()

    def snapshot(self) -> Dict[str, object]:
        """Plain-data view of the session."""
        notification = self.notifier.current
        return {
            "current_color": self.store.current_color.hex,
            "text_color": self.text_color.hex,
            "palette": [c.hex for c in self.store.palette],
            "saved_palettes": [s.to_dict() for s in self.store.saved],
            "capacity": self.store.capacity,
            "notification": None if notification is None else {
                "message": notification.message,
                "level": notification.level.value,
                "code": notification.code,
            },
        }
