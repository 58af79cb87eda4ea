from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from ..palette import DEFAULT_PALETTE, Palette

TRANSPARENT = 0


@dataclass
class Image:
    """Row-major grid of palette indices (0-15)."""

    width: int
    height: int
    pixels: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError("Image dimensions must not be negative")
        if not self.pixels and self.width * self.height:
            self.pixels = [TRANSPARENT] * (self.width * self.height)
        if len(self.pixels) != self.width * self.height:
            raise ValueError(
                f"Pixels length must be width * height ({self.width * self.height}), got {len(self.pixels)}"
            )

    @classmethod
    def new(cls, width: int, height: int) -> "Image":
        """Create an image with every pixel set to index 0."""
        return cls(width, height, [TRANSPARENT] * (width * height))

    @classmethod
    def from_rows(cls, rows: List[List[int]]) -> "Image":
        height = len(rows)
        width = len(rows[0]) if rows else 0
        pixels: List[int] = []
        for row in rows:
            if len(row) != width:
                raise ValueError("All rows must have the same length")
            pixels.extend(row)
        return cls(width, height, pixels)

    def _offset(self, index: Tuple[int, int]) -> int:
        col, row = index
        if not (0 <= col < self.width and 0 <= row < self.height):
            raise IndexError(f"pixel ({col}, {row}) out of range for {self.width}x{self.height} image")
        return row * self.width + col

    def __getitem__(self, index: Tuple[int, int]) -> int:
        return self.pixels[self._offset(index)]

    def __setitem__(self, index: Tuple[int, int], color: int) -> None:
        self.pixels[self._offset(index)] = color

    def rows(self) -> List[List[int]]:
        return [self.pixels[row * self.width : (row + 1) * self.width] for row in range(self.height)]

    def copy(self) -> "Image":
        return Image(self.width, self.height, list(self.pixels))

    def rgba_data(self, palette: Optional[Palette] = None) -> bytes:
        """Return RGBA bytes for the pixels, in row-major order."""
        palette = palette or DEFAULT_PALETTE
        out = bytearray()
        for color in self.pixels:
            out.extend(palette.get(color))
        return bytes(out)

    def clear(self) -> None:
        self.pixels = [TRANSPARENT] * len(self.pixels)

    def fill_rect(self, x: int, y: int, w: int, h: int, color: int) -> None:
        """Set every pixel of the rectangle to color, clipped to the image."""
        start_row = min(max(0, y), self.height)
        end_row = min(max(0, y + h), self.height)
        start_col = min(max(0, x), self.width)
        end_col = min(max(0, x + w), self.width)
        for row in range(start_row, end_row):
            offset = row * self.width
            for col in range(start_col, end_col):
                self.pixels[offset + col] = color

    def draw(self, src: "Image", x: int, y: int) -> None:
        """Copy src onto this image with its top-left corner at (x, y).

        Index 0 pixels in src are treated as transparent and left alone.
        """
        src_start_row = min(max(0, -y), src.height)
        src_start_col = min(max(0, -x), src.width)
        dest_start_row = min(max(0, y), self.height)
        dest_start_col = min(max(0, x), self.width)
        num_rows = min(src.height - src_start_row, self.height - dest_start_row)
        num_cols = min(src.width - src_start_col, self.width - dest_start_col)
        for row in range(num_rows):
            for col in range(num_cols):
                color = src[(src_start_col + col, src_start_row + row)]
                if color != TRANSPARENT:
                    self[(dest_start_col + col, dest_start_row + row)] = color

    def flip_horz(self) -> "Image":
        pixels: List[int] = []
        for row in self.rows():
            pixels.extend(reversed(row))
        return Image(self.width, self.height, pixels)

    def flip_vert(self) -> "Image":
        pixels: List[int] = []
        for row in reversed(self.rows()):
            pixels.extend(row)
        return Image(self.width, self.height, pixels)

    def rotate_cw(self) -> "Image":
        pixels = []
        for row in range(self.width):
            for col in range(self.height):
                pixels.append(self.pixels[self.width * (self.height - col - 1) + row])
        return Image(self.height, self.width, pixels)

    def rotate_ccw(self) -> "Image":
        pixels = []
        for row in range(self.width):
            for col in range(self.height):
                pixels.append(self.pixels[self.width * col + (self.width - row - 1)])
        return Image(self.height, self.width, pixels)

    def crop(self, new_width: int, new_height: int) -> "Image":
        """Cut or pad (with index 0) on the right/bottom edges."""
        image = Image.new(new_width, new_height)
        image.draw(self, 0, 0)
        return image


@dataclass
class Collection:
    """Ordered list of images that all share one width and height."""

    images: List[Image] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.images)

    def __iter__(self) -> Iterator[Image]:
        return iter(self.images)

    def __getitem__(self, index: int) -> Image:
        return self.images[index]

    def append(self, image: Image) -> None:
        self.images.append(image)

    @property
    def width(self) -> int:
        return self.images[0].width if self.images else 0

    @property
    def height(self) -> int:
        return self.images[0].height if self.images else 0


@dataclass(frozen=True)
class Header:
    version: int
    width: int
    height: int
    count: int

    def render(self) -> str:
        return f"ahi{self.version} w{self.width} h{self.height} n{self.count}"
