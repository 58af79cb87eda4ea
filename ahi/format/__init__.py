from .codec import canonicalize, decode, encode, is_canonical
from .encoding import decode_images, decode_row, encode_images, encode_row
from .errors import (
    AhiContractError,
    AhiError,
    AhiFormatError,
    DimensionMismatch,
    EmptyCollection,
    ImageCountMismatch,
    InvalidDimensions,
    InvalidPaletteIndex,
    InvalidPixelChar,
    MalformedHeader,
    MissingSeparator,
    RowLengthMismatch,
    TruncatedImage,
    UnsupportedVersion,
)
from .font import Font, Glyph, decode_font, encode_font
from .header import FormatVersion, Grammar, grammar_for, parse_header, render_header
from .types import Collection, Header, Image

__all__ = [
    "AhiContractError",
    "AhiError",
    "AhiFormatError",
    "canonicalize",
    "Collection",
    "decode",
    "decode_font",
    "decode_images",
    "decode_row",
    "DimensionMismatch",
    "EmptyCollection",
    "encode",
    "encode_font",
    "encode_images",
    "encode_row",
    "Font",
    "FormatVersion",
    "Glyph",
    "Grammar",
    "grammar_for",
    "Header",
    "Image",
    "ImageCountMismatch",
    "InvalidDimensions",
    "InvalidPaletteIndex",
    "InvalidPixelChar",
    "is_canonical",
    "MalformedHeader",
    "MissingSeparator",
    "parse_header",
    "render_header",
    "RowLengthMismatch",
    "TruncatedImage",
    "UnsupportedVersion",
]
