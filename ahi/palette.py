from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

RGBA = Tuple[int, int, int, int]

PALETTE_SIZE = 16
BRIGHT = 255
HALF = 127


def _default_color(index: int) -> RGBA:
    # Bit 1 is brightness, bits 2/4/8 select red/green/blue.
    if index == 0:
        return (0, 0, 0, 0)
    level = BRIGHT if index & 1 else HALF
    if index == 1:
        return (0, 0, 0, 255)
    red = level if index & 2 else 0
    green = level if index & 4 else 0
    blue = level if index & 8 else 0
    return (red, green, blue, 255)


@dataclass(frozen=True)
class Palette:
    """Sixteen RGBA colors, one per palette index."""

    colors: Tuple[RGBA, ...]

    def __post_init__(self) -> None:
        if len(self.colors) != PALETTE_SIZE:
            raise ValueError(f"Palette must have {PALETTE_SIZE} colors, got {len(self.colors)}")
        for rgba in self.colors:
            if len(rgba) != 4 or any(not 0 <= channel <= 255 for channel in rgba):
                raise ValueError(f"Invalid RGBA color: {rgba!r}")

    def get(self, index: int) -> RGBA:
        if not 0 <= index < PALETTE_SIZE:
            raise IndexError(f"Palette index out of range: {index}")
        return self.colors[index]

    def with_color(self, index: int, rgba: RGBA) -> "Palette":
        if not 0 <= index < PALETTE_SIZE:
            raise IndexError(f"Palette index out of range: {index}")
        colors = list(self.colors)
        colors[index] = tuple(rgba)  # type: ignore[assignment]
        return Palette(tuple(colors))

    def nearest(self, rgba: RGBA) -> int:
        """Return the index whose color is closest to rgba.

        Mostly transparent input maps to index 0; otherwise only opaque
        entries are candidates.
        """
        r, g, b, a = rgba
        if a < 128:
            return 0
        best_index = 0
        best_distance = None
        for index, (pr, pg, pb, pa) in enumerate(self.colors):
            if pa < 128:
                continue
            distance = (r - pr) ** 2 + (g - pg) ** 2 + (b - pb) ** 2
            if best_distance is None or distance < best_distance:
                best_index = index
                best_distance = distance
        return best_index


DEFAULT_PALETTE = Palette(tuple(_default_color(index) for index in range(PALETTE_SIZE)))
