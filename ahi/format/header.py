from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, List, Mapping, Tuple

from ..settings import DEFAULT_SETTINGS, CodecSettings
from .errors import MalformedHeader, UnsupportedVersion
from .types import Header

AHI_TAG = "ahi"
HEADER_LINE = 1

_INT_RE = re.compile(r"-?[0-9]+")
_TAG_RE = re.compile(r"([a-z]+)([0-9]*)")


class FormatVersion(IntEnum):
    """Format revisions this package can decode."""

    V0 = 0


@dataclass(frozen=True)
class Grammar:
    """Pixel alphabet for one format revision."""

    version: FormatVersion
    symbols: str
    values: Mapping[str, int]

    def pixel_value(self, char: str) -> int:
        return self.values[char]

    def pixel_symbol(self, value: int) -> str:
        return self.symbols[value]


def _hex_lookup(symbols: str) -> Dict[str, int]:
    table = {}
    for value, char in enumerate(symbols):
        table[char] = value
        table[char.lower()] = value
    return table


_V0_SYMBOLS = "0123456789ABCDEF"

GRAMMARS: Dict[FormatVersion, Grammar] = {
    FormatVersion.V0: Grammar(FormatVersion.V0, _V0_SYMBOLS, _hex_lookup(_V0_SYMBOLS)),
}


def grammar_for(version: int, kind: str = "AHI") -> Grammar:
    try:
        return GRAMMARS[FormatVersion(version)]
    except ValueError:
        raise UnsupportedVersion(version, kind) from None


def split_first_line(text: str) -> Tuple[str, str]:
    """Split off the first line, dropping its terminator."""
    line, newline, rest = text.partition("\n")
    if line.endswith("\r"):
        line = line[:-1]
    return line, rest


def parse_tag(token: str, tag: str, line: int = HEADER_LINE, kind: str = "AHI") -> Grammar:
    """Parse `<tag><digit>` and return the grammar for that version."""
    match = _TAG_RE.fullmatch(token)
    if not match or match.group(1) != tag:
        raise MalformedHeader(f"expected '{tag}<version>', found {token!r}", line)
    digits = match.group(2)
    if len(digits) != 1:
        raise MalformedHeader(f"version must be a single digit, found {digits!r}", line)
    return grammar_for(int(digits), kind)


def parse_field(token: str, prefix: str, line: int, minimum: int, maximum: int) -> int:
    """Parse a `<prefix><int>` header token within [minimum, maximum]."""
    if not token.startswith(prefix):
        raise MalformedHeader(f"expected '{prefix}<number>', found {token!r}", line)
    digits = token[len(prefix) :]
    if not _INT_RE.fullmatch(digits) or (digits.startswith("-") and minimum >= 0):
        raise MalformedHeader(f"invalid number in {token!r}", line)
    magnitude = digits.lstrip("-").lstrip("0")
    if len(magnitude) > len(str(max(abs(minimum), maximum))):
        raise MalformedHeader(f"'{prefix}' value with {len(magnitude)} digits is out of range", line)
    value = int(magnitude or "0")
    if digits.startswith("-"):
        value = -value
    if value < minimum:
        raise MalformedHeader(f"'{prefix}' must be at least {minimum}, found {value}", line)
    if value > maximum:
        raise MalformedHeader(f"'{prefix}' value {value} exceeds the limit of {maximum}", line)
    return value


def split_fields(line_text: str, prefixes: List[str], line: int) -> List[str]:
    tokens = line_text.split()
    if len(tokens) != len(prefixes):
        expected = " ".join(f"{prefix}<number>" for prefix in prefixes)
        raise MalformedHeader(f"expected fields '{expected}', found {line_text!r}", line)
    return tokens


def parse_header(text: str, settings: CodecSettings = DEFAULT_SETTINGS) -> Tuple[Header, str]:
    """Parse the `ahi<v> w<w> h<h> n<n>` line.

    Returns the header and the text that follows the header line.
    """
    line_text, remaining = split_first_line(text)
    tokens = line_text.split(None, 1)
    if not tokens:
        raise MalformedHeader("missing header line", HEADER_LINE)
    grammar = parse_tag(tokens[0], AHI_TAG)
    rest = tokens[1] if len(tokens) > 1 else ""
    width_tok, height_tok, count_tok = split_fields(rest, ["w", "h", "n"], HEADER_LINE)
    width = parse_field(width_tok, "w", HEADER_LINE, 1, settings.max_dimension)
    height = parse_field(height_tok, "h", HEADER_LINE, 1, settings.max_dimension)
    count = parse_field(count_tok, "n", HEADER_LINE, 1, settings.max_count)
    return Header(int(grammar.version), width, height, count), remaining


def render_header(version: int, width: int, height: int, count: int) -> str:
    return Header(version, width, height, count).render()
