"""ASCII Hex Font (AHF): 16-color bitmap fonts in the AHI text style.

A font file has a header line ``ahf0 h<height> b<baseline> n<num_glyphs>``
followed by blank-line separated glyph blocks. Each block starts with a
subheader ``<char> w<width> l<left> r<right>`` where ``<char>`` is ``def``
for the default glyph (always first) or a single-quoted character literal,
then ``height`` rows of hex digits.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from ..settings import DEFAULT_SETTINGS, CodecSettings
from .encoding import (
    NumberedLine,
    check_pixels,
    decode_row,
    encode_row,
    is_blank,
    skip_blank,
    split_lines,
)
from .errors import (
    DimensionMismatch,
    ImageCountMismatch,
    InvalidDimensions,
    MalformedHeader,
    MissingSeparator,
    TruncatedImage,
)
from .header import HEADER_LINE, FormatVersion, GRAMMARS, Grammar, parse_field, parse_tag, split_fields, split_first_line
from .types import Image

AHF_TAG = "ahf"
DEFAULT_GLYPH_TAG = "def"

_SIMPLE_ESCAPES = {"\\": "\\", "'": "'", '"': '"', "n": "\n", "r": "\r", "t": "\t"}
_ESCAPE_NAMES = {value: key for key, value in _SIMPLE_ESCAPES.items()}
_UNICODE_ESCAPE_RE = re.compile(r"\{([0-9A-Fa-f]{1,6})\}")


@dataclass
class Glyph:
    """Image for one character plus its horizontal spacing.

    ``left`` is where the glyph starts relative to the image's left edge and
    ``right`` is where the next glyph starts; either may be negative.
    """

    image: Image
    left: int = 0
    right: int = 0


class Font:
    def __init__(
        self,
        glyph_height: int,
        baseline: Optional[int] = None,
        default_glyph: Optional[Glyph] = None,
    ) -> None:
        self._glyph_height = glyph_height
        self.baseline = glyph_height if baseline is None else baseline
        self._default_glyph = default_glyph or Glyph(Image.new(0, glyph_height))
        self._check_height(self._default_glyph)
        self._glyphs: Dict[str, Glyph] = {}

    @property
    def glyph_height(self) -> int:
        return self._glyph_height

    @property
    def default_glyph(self) -> Glyph:
        return self._default_glyph

    def set_default_glyph(self, glyph: Glyph) -> None:
        self._check_height(glyph)
        self._default_glyph = glyph

    def get_char_glyph(self, char: str) -> Optional[Glyph]:
        return self._glyphs.get(char)

    def set_char_glyph(self, char: str, glyph: Glyph) -> None:
        if len(char) != 1:
            raise ValueError(f"Glyph key must be a single character, got {char!r}")
        self._check_height(glyph)
        self._glyphs[char] = glyph

    def remove_char_glyph(self, char: str) -> None:
        self._glyphs.pop(char, None)

    def chars(self) -> List[str]:
        return sorted(self._glyphs)

    def __getitem__(self, char: str) -> Glyph:
        return self._glyphs.get(char, self._default_glyph)

    def __iter__(self) -> Iterator[Tuple[str, Glyph]]:
        for char in self.chars():
            yield char, self._glyphs[char]

    def __len__(self) -> int:
        return len(self._glyphs)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Font):
            return NotImplemented
        return (
            self._glyph_height == other._glyph_height
            and self.baseline == other.baseline
            and self._default_glyph == other._default_glyph
            and self._glyphs == other._glyphs
        )

    def _check_height(self, glyph: Glyph) -> None:
        if glyph.image.height != self._glyph_height:
            raise DimensionMismatch(
                f"glyph height {glyph.image.height} does not match font height {self._glyph_height}"
            )


def parse_char_literal(text: str, line: Optional[int] = None) -> Tuple[str, int]:
    """Parse a single-quoted character literal at the start of text.

    Returns the character and the index just past the closing quote.
    """
    if not text.startswith("'") or len(text) < 2:
        raise MalformedHeader(f"expected a quoted character, found {text!r}", line)
    char = text[1]
    pos = 2
    if char == "\\":
        escape = text[2:3]
        if escape in _SIMPLE_ESCAPES:
            char = _SIMPLE_ESCAPES[escape]
            pos = 3
        elif escape == "u":
            match = _UNICODE_ESCAPE_RE.match(text, 3)
            if not match:
                raise MalformedHeader(f"invalid unicode escape in {text!r}", line)
            value = int(match.group(1), 16)
            if value > 0x10FFFF or 0xD800 <= value <= 0xDFFF:
                raise MalformedHeader(f"invalid unicode value: {value:#x}", line)
            char = chr(value)
            pos = match.end()
        else:
            raise MalformedHeader(f"invalid char escape: {escape!r}", line)
    elif char == "'":
        raise MalformedHeader("empty char literal", line)
    elif not " " <= char <= "~":
        raise MalformedHeader(f"invalid char literal byte: {char!r}", line)
    if text[pos : pos + 1] != "'":
        raise MalformedHeader(f"unterminated char literal in {text!r}", line)
    return char, pos + 1


def escape_char(char: str) -> str:
    if char in _ESCAPE_NAMES:
        return "\\" + _ESCAPE_NAMES[char]
    if " " <= char <= "~":
        return char
    return f"\\u{{{ord(char):x}}}"


def _parse_subheader(
    text: str, line: int, settings: CodecSettings
) -> Tuple[Optional[str], int, int, int]:
    if text.startswith(DEFAULT_GLYPH_TAG + " "):
        char = None
        rest = text[len(DEFAULT_GLYPH_TAG) :]
    elif text.startswith("'"):
        char, end = parse_char_literal(text, line)
        rest = text[end:]
    else:
        raise MalformedHeader(f"expected a glyph subheader, found {text!r}", line)
    if not rest.startswith(" "):
        raise MalformedHeader(f"expected a space after the glyph key in {text!r}", line)
    limit = settings.max_dimension
    width_tok, left_tok, right_tok = split_fields(rest, ["w", "l", "r"], line)
    width = parse_field(width_tok, "w", line, 0, limit)
    left = parse_field(left_tok, "l", line, -limit, limit)
    right = parse_field(right_tok, "r", line, -limit, limit)
    return char, width, left, right


def _read_glyph(
    lines: List[NumberedLine],
    pos: int,
    height: int,
    grammar: Grammar,
    settings: CodecSettings,
) -> Tuple[Optional[str], Glyph, int]:
    line_no, text = lines[pos]
    char, width, left, right = _parse_subheader(text, line_no, settings)
    pos += 1
    pixels: List[int] = []
    for row in range(height):
        if pos >= len(lines) or (width and is_blank(lines[pos][1])):
            end = lines[pos][0] if pos < len(lines) else lines[-1][0] + 1
            raise TruncatedImage(f"glyph on line {line_no} has {row} rows, expected {height}", end)
        row_line, row_text = lines[pos]
        pixels.extend(decode_row(row_text, width, grammar, row_line))
        pos += 1
    return char, Glyph(Image(width, height, pixels), left, right), pos


def decode_font(text: str, settings: CodecSettings = DEFAULT_SETTINGS) -> Font:
    """Decode a complete AHF document."""
    header_line, remaining = split_first_line(text)
    tokens = header_line.split(None, 1)
    if not tokens:
        raise MalformedHeader("missing header line", HEADER_LINE)
    grammar = parse_tag(tokens[0], AHF_TAG, kind="AHF")
    rest = tokens[1] if len(tokens) > 1 else ""
    height_tok, baseline_tok, count_tok = split_fields(rest, ["h", "b", "n"], HEADER_LINE)
    limit = settings.max_dimension
    height = parse_field(height_tok, "h", HEADER_LINE, 1, limit)
    baseline = parse_field(baseline_tok, "b", HEADER_LINE, -limit, limit)
    count = parse_field(count_tok, "n", HEADER_LINE, 0, settings.max_count)

    lines = split_lines(remaining, HEADER_LINE + 1)
    pos = skip_blank(lines, 0)
    if pos >= len(lines):
        raise TruncatedImage("missing default glyph", HEADER_LINE + 1 + len(lines))
    if not lines[pos][1].startswith(DEFAULT_GLYPH_TAG + " "):
        raise MalformedHeader("the default glyph must come first", lines[pos][0])
    _, default_glyph, pos = _read_glyph(lines, pos, height, grammar, settings)
    font = Font(height, baseline, default_glyph)

    for index in range(count):
        if pos < len(lines) and not is_blank(lines[pos][1]):
            raise MissingSeparator("expected a blank line between glyphs", lines[pos][0])
        pos = skip_blank(lines, pos)
        if pos >= len(lines):
            end = lines[-1][0] + 1 if lines else HEADER_LINE + 1
            raise ImageCountMismatch(f"header declares {count} glyphs but only {index} found", count, index, end)
        line_no = lines[pos][0]
        char, glyph, pos = _read_glyph(lines, pos, height, grammar, settings)
        if char is None:
            raise MalformedHeader("duplicate default glyph", line_no)
        if font.get_char_glyph(char) is not None:
            raise MalformedHeader(f"duplicate glyph for {escape_char(char)!r}", line_no)
        font.set_char_glyph(char, glyph)

    pos = skip_blank(lines, pos)
    if pos < len(lines):
        raise ImageCountMismatch(
            f"unexpected content after the last of {count} glyphs", count, count + 1, lines[pos][0]
        )
    return font


def _encode_glyph(key: str, glyph: Glyph, grammar: Grammar, index: int) -> str:
    image = glyph.image
    if image.width > DEFAULT_SETTINGS.max_dimension:
        raise InvalidDimensions(f"glyph width {image.width} exceeds {DEFAULT_SETTINGS.max_dimension}")
    check_pixels(image, index)
    lines = [f"{key} w{image.width} l{glyph.left} r{glyph.right}"]
    lines.extend(encode_row(row, grammar) for row in image.rows())
    return "\n".join(lines)


def encode_font(font: Font) -> str:
    """Encode a font to canonical AHF text, glyphs sorted by character."""
    if not 0 < font.glyph_height <= DEFAULT_SETTINGS.max_dimension:
        raise InvalidDimensions(f"glyph height {font.glyph_height} is outside 1..{DEFAULT_SETTINGS.max_dimension}")
    grammar = GRAMMARS[FormatVersion.V0]
    header = f"{AHF_TAG}{int(FormatVersion.V0)} h{font.glyph_height} b{font.baseline} n{len(font)}"
    blocks = [_encode_glyph(DEFAULT_GLYPH_TAG, font.default_glyph, grammar, 0)]
    for index, (char, glyph) in enumerate(font, start=1):
        blocks.append(_encode_glyph(f"'{escape_char(char)}'", glyph, grammar, index))
    return header + "\n\n" + "\n\n".join(blocks) + "\n"
