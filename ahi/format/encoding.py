from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from ..settings import DEFAULT_SETTINGS, CodecSettings
from .errors import (
    DimensionMismatch,
    EmptyCollection,
    ImageCountMismatch,
    InvalidDimensions,
    InvalidPaletteIndex,
    InvalidPixelChar,
    MissingSeparator,
    RowLengthMismatch,
    TruncatedImage,
)
from .header import GRAMMARS, FormatVersion, Grammar
from .types import Collection, Header, Image

PALETTE_MAX = 15

NumberedLine = Tuple[int, str]


def split_lines(text: str, first_line: int) -> List[NumberedLine]:
    """Split text on newlines, keeping file line numbers."""
    if not text:
        return []
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    out = []
    for offset, line in enumerate(lines):
        if line.endswith("\r"):
            line = line[:-1]
        out.append((first_line + offset, line))
    return out


def is_blank(line: str) -> bool:
    return not line.strip()


def decode_row(text: str, width: int, grammar: Grammar, line: Optional[int] = None) -> List[int]:
    """Map one row of hex digits to palette indices."""
    if len(text) != width:
        raise RowLengthMismatch(width, len(text), line)
    row = []
    for column, char in enumerate(text, start=1):
        value = grammar.values.get(char)
        if value is None:
            raise InvalidPixelChar(char, column, line)
        row.append(value)
    return row


def encode_row(values: Sequence[int], grammar: Grammar) -> str:
    return "".join(grammar.pixel_symbol(value) for value in values)


def skip_blank(lines: List[NumberedLine], pos: int) -> int:
    while pos < len(lines) and is_blank(lines[pos][1]):
        pos += 1
    return pos


def _end_line(lines: List[NumberedLine], first_line: int) -> int:
    return lines[-1][0] + 1 if lines else first_line


def decode_images(
    text: str,
    width: int,
    height: int,
    count: int,
    grammar: Optional[Grammar] = None,
    first_line: int = 2,
) -> Collection:
    """Decode the body that follows a header into a Collection.

    `first_line` is the file line number of the first line of `text`, used
    in error messages.
    """
    grammar = grammar or GRAMMARS[FormatVersion.V0]
    lines = split_lines(text, first_line)
    pos = skip_blank(lines, 0)
    images: List[Image] = []
    for index in range(count):
        if index > 0:
            if pos < len(lines) and not is_blank(lines[pos][1]):
                raise MissingSeparator(
                    f"expected a blank line between image {index - 1} and image {index}",
                    lines[pos][0],
                )
            pos = skip_blank(lines, pos)
        if pos >= len(lines):
            raise ImageCountMismatch(
                f"header declares {count} images but only {index} found",
                count,
                index,
                _end_line(lines, first_line),
            )
        pixels: List[int] = []
        for row in range(height):
            if pos >= len(lines) or is_blank(lines[pos][1]):
                line_no = lines[pos][0] if pos < len(lines) else _end_line(lines, first_line)
                raise TruncatedImage(f"image {index} has {row} rows, expected {height}", line_no)
            line_no, line = lines[pos]
            pixels.extend(decode_row(line, width, grammar, line_no))
            pos += 1
        images.append(Image(width, height, pixels))
    pos = skip_blank(lines, pos)
    if pos < len(lines):
        raise ImageCountMismatch(
            f"unexpected content after the last of {count} images",
            count,
            count + 1,
            lines[pos][0],
        )
    return Collection(images)


def validate_collection(collection: Collection, settings: CodecSettings = DEFAULT_SETTINGS) -> Header:
    """Check encoder preconditions and return the header to write."""
    if not collection.images:
        raise EmptyCollection("cannot encode a collection with no images")
    if len(collection.images) > settings.max_count:
        raise InvalidDimensions(f"collection has {len(collection.images)} images, limit is {settings.max_count}")
    width = collection.images[0].width
    height = collection.images[0].height
    if not (0 < width <= settings.max_dimension and 0 < height <= settings.max_dimension):
        raise InvalidDimensions(f"image size {width}x{height} is outside 1..{settings.max_dimension}")
    for index, image in enumerate(collection.images):
        if image.width != width or image.height != height:
            raise DimensionMismatch(
                f"images must all have the same dimensions "
                f"(image {index} is {image.width}x{image.height} instead of {width}x{height})"
            )
        if len(image.pixels) != width * height:
            raise DimensionMismatch(f"image {index} has {len(image.pixels)} pixels, expected {width * height}")
        check_pixels(image, index)
    return Header(int(FormatVersion.V0), width, height, len(collection.images))


def check_pixels(image: Image, index: int = 0) -> None:
    for offset, value in enumerate(image.pixels):
        if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= PALETTE_MAX:
            col, row = offset % image.width, offset // image.width
            raise InvalidPaletteIndex(f"image {index} pixel ({col}, {row}) has invalid palette index {value!r}")


def encode_body(images: Sequence[Image], grammar: Grammar) -> List[str]:
    blocks = []
    for image in images:
        blocks.append("\n".join(encode_row(row, grammar) for row in image.rows()))
    return blocks


def encode_images(collection: Collection) -> str:
    """Render a collection in canonical form (header, blank, images)."""
    header = validate_collection(collection)
    grammar = GRAMMARS[FormatVersion(header.version)]
    body = "\n\n".join(encode_body(collection.images, grammar))
    return f"{header.render()}\n\n{body}\n"
