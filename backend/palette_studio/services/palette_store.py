"""
Palette Studio Palette Store

In-memory state for one session: the current color, the current palette
(ordered, no duplicate hex values) and the list of saved palettes (named,
immutable snapshots).
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from loguru import logger

from palette_studio.config import config
from palette_studio.errors import EmptyName, EmptyPalette, IndexOutOfRange, PaletteFull
from palette_studio.services.colors.model import Color, ColorLike, parse


@dataclass(frozen=True)
class SavedPalette:
    """A named snapshot of a palette."""
    name: str
    colors: Tuple[Color, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        return {"name": self.name, "colors": [c.hex for c in self.colors]}


def _snapshot(colors: Iterable[ColorLike]) -> Tuple[Color, ...]:
    return tuple(parse(c) for c in colors)


class PaletteStore:
    """Current color, current palette and saved palettes."""

    def __init__(self,
                 current_color: ColorLike = config.DEFAULT_COLOR,
                 palette: Iterable[ColorLike] = (),
                 saved: Iterable[SavedPalette] = (),
                 capacity: Optional[int] = None):
        """
        Args:
            current_color: Initial focal color
            palette: Initial current palette (duplicates are dropped)
            saved: Initial saved palettes
            capacity: Maximum palette size for ``add_current``; None uses
                the configured value, 0 disables the bound
        """
        self._current_color = parse(current_color)
        self._palette: List[Color] = []
        for color in palette:
            color = parse(color)
            if color not in self._palette:
                self._palette.append(color)
        self._saved: List[SavedPalette] = list(saved)
        self.capacity = config.PALETTE_CAPACITY if capacity is None else capacity
        if not config.validate_capacity(self.capacity):
            raise ValueError(f"capacity must be between 0 and 64, got {self.capacity}")

    @classmethod
    def with_defaults(cls, capacity: Optional[int] = None) -> "PaletteStore":
        """Store seeded with the default palette and saved palettes."""
        saved = [SavedPalette(name, _snapshot(colors)) for name, colors in config.DEFAULT_SAVED_PALETTES]
        return cls(config.DEFAULT_COLOR, config.DEFAULT_PALETTE, saved, capacity=capacity)

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def current_color(self) -> Color:
        return self._current_color

    @property
    def palette(self) -> Tuple[Color, ...]:
        return tuple(self._palette)

    @property
    def saved(self) -> Tuple[SavedPalette, ...]:
        return tuple(self._saved)

    @property
    def is_full(self) -> bool:
        return bool(self.capacity) and len(self._palette) >= self.capacity

    def select(self, color: ColorLike) -> Color:
        """Make ``color`` the current color."""
        self._current_color = parse(color)
        return self._current_color

    # ------------------------------------------------------------------
    # Current palette
    # ------------------------------------------------------------------

    def add_current(self, color: ColorLike) -> bool:
        """
        Append a color unless an equal hex value is already present.

        Returns:
            True if appended, False if it was a duplicate

        Raises:
            PaletteFull: If the palette is at capacity
        """
        color = parse(color)
        if color in self._palette:
            logger.debug(f"{color.hex} already in palette, skipping")
            return False
        if self.is_full:
            raise PaletteFull(self.capacity)
        self._palette.append(color)
        return True

    def remove_current(self, index: int) -> Color:
        """Remove and return the palette color at ``index``."""
        self._check_index(index, len(self._palette), "palette")
        return self._palette.pop(index)

    def replace_current(self, colors: Iterable[ColorLike]) -> Tuple[Color, ...]:
        """Replace the whole palette. Duplicates are kept as given."""
        self._palette = list(_snapshot(colors))
        return self.palette

    # ------------------------------------------------------------------
    # Saved palettes
    # ------------------------------------------------------------------

    def save(self, name: str, colors: Optional[Iterable[ColorLike]] = None) -> SavedPalette:
        """
        Save a named copy of ``colors`` (the current palette by default).

        Raises:
            EmptyName: If the trimmed name is empty
            EmptyPalette: If there are no colors to save
        """
        name = (name or "").strip()
        if not name:
            raise EmptyName()
        snapshot = _snapshot(self._palette if colors is None else colors)
        if not snapshot:
            raise EmptyPalette("Cannot save an empty palette")

        saved = SavedPalette(name, snapshot)
        self._saved.append(saved)
        logger.info(f"Saved palette {name!r} with {len(snapshot)} colors")
        return saved

    def get_saved(self, index: int) -> SavedPalette:
        self._check_index(index, len(self._saved), "saved palette")
        return self._saved[index]

    def load(self, saved: SavedPalette) -> Color:
        """
        Make a saved palette current; its first color becomes the current color.

        Raises:
            EmptyPalette: If the saved palette has no colors
        """
        if not saved.colors:
            raise EmptyPalette(f"Saved palette {saved.name!r} has no colors")
        self._palette = list(saved.colors)
        self._current_color = saved.colors[0]
        return self._current_color

    def delete(self, index: int) -> SavedPalette:
        """Remove and return the saved palette at ``index``."""
        self._check_index(index, len(self._saved), "saved palette")
        removed = self._saved.pop(index)
        logger.info(f"Deleted saved palette {removed.name!r}")
        return removed

    @staticmethod
    def _check_index(index: int, size: int, what: str) -> None:
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < size:
            raise IndexOutOfRange(index, size, what)
