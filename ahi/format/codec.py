from __future__ import annotations

from ..settings import DEFAULT_SETTINGS, CodecSettings
from .encoding import decode_images, encode_images
from .header import HEADER_LINE, grammar_for, parse_header
from .types import Collection


def decode(text: str, settings: CodecSettings = DEFAULT_SETTINGS) -> Collection:
    """Decode a complete AHI document."""
    header, remaining = parse_header(text, settings)
    return decode_images(
        remaining,
        header.width,
        header.height,
        header.count,
        grammar=grammar_for(header.version),
        first_line=HEADER_LINE + 1,
    )


def encode(collection: Collection) -> str:
    """Encode a collection to canonical AHI text."""
    return encode_images(collection)


def canonicalize(text: str, settings: CodecSettings = DEFAULT_SETTINGS) -> str:
    """Decode then re-encode, normalizing blank lines, case and line endings."""
    return encode(decode(text, settings))


def is_canonical(text: str, settings: CodecSettings = DEFAULT_SETTINGS) -> bool:
    return canonicalize(text, settings) == text
