"""Encoder/decoder for ASCII Hex Image (.ahi) and ASCII Hex Font (.ahf) files."""

from .format import (
    AhiContractError,
    AhiError,
    AhiFormatError,
    Collection,
    Font,
    Glyph,
    Header,
    Image,
    canonicalize,
    decode,
    decode_font,
    encode,
    encode_font,
    is_canonical,
    parse_header,
    render_header,
)
from .palette import DEFAULT_PALETTE, Palette
from .settings import DEFAULT_SETTINGS, CodecSettings

__version__ = "0.1.0"
__all__ = [
    "AhiContractError",
    "AhiError",
    "AhiFormatError",
    "canonicalize",
    "CodecSettings",
    "Collection",
    "decode",
    "decode_font",
    "DEFAULT_PALETTE",
    "DEFAULT_SETTINGS",
    "encode",
    "encode_font",
    "Font",
    "Glyph",
    "Header",
    "Image",
    "is_canonical",
    "Palette",
    "parse_header",
    "render_header",
]
