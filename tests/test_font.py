import pytest

from ahi import Font, Glyph, Image, decode_font, encode_font
from ahi.format import (
    DimensionMismatch,
    ImageCountMismatch,
    MalformedHeader,
    MissingSeparator,
    RowLengthMismatch,
    TruncatedImage,
    UnsupportedVersion,
)
from ahi.format.font import escape_char, parse_char_literal

FONT_TEXT = (
    "ahf0 h3 b2 n2\n"
    "\n"
    "def w3 l0 r4\n"
    "101\n"
    "010\n"
    "101\n"
    "\n"
    "'|' w1 l0 r2\n"
    "1\n"
    "1\n"
    "1\n"
    "\n"
    "'\\u{2603}' w2 l0 r4\n"
    "11\n"
    "11\n"
    "00\n"
)


def build_font():
    font = Font(3, baseline=2)
    default = Image.new(3, 3)
    for col, row in [(0, 0), (2, 0), (1, 1), (0, 2), (2, 2)]:
        default[(col, row)] = 1
    font.set_default_glyph(Glyph(default, 0, 4))
    snowman = Image.new(2, 3)
    snowman.fill_rect(0, 0, 2, 2, 1)
    font.set_char_glyph("☃", Glyph(snowman, 0, 4))
    font.set_char_glyph("|", Glyph(Image(1, 3, [1, 1, 1]), 0, 2))
    return font


def test_decode_font():
    font = decode_font(FONT_TEXT)
    assert font.glyph_height == 3
    assert font.baseline == 2
    assert font.default_glyph.image.width == 3
    assert font.default_glyph.left == 0
    assert font.default_glyph.right == 4
    assert font["|"].image.width == 1
    assert font["☃"].image.pixels == [1, 1, 1, 1, 0, 0]
    assert font["x"] is font.default_glyph
    assert font.chars() == ["|", "☃"]


def test_encode_font_sorts_glyphs():
    assert encode_font(build_font()) == FONT_TEXT


def test_font_round_trip_with_negative_edges_and_escapes():
    font = Font(2, baseline=-1)
    font.set_char_glyph("'", Glyph(Image(1, 2, [15, 0]), -2, 3))
    font.set_char_glyph(" ", Glyph(Image.new(0, 2), 0, 1))
    font.set_char_glyph("\n", Glyph(Image(2, 2, [1, 2, 3, 4]), 1, -1))
    text = encode_font(font)
    assert "'\\'' w1 l-2 r3" in text
    assert "'\\n' w2 l1 r-1" in text
    assert decode_font(text) == font


def test_new_font_defaults():
    font = Font(6)
    assert font.baseline == 6
    assert font.default_glyph.image.width == 0
    assert len(font) == 0
    assert decode_font(encode_font(font)) == font


def test_glyph_height_must_match():
    font = Font(3)
    with pytest.raises(DimensionMismatch):
        font.set_char_glyph("a", Glyph(Image.new(2, 2)))
    with pytest.raises(DimensionMismatch):
        font.set_default_glyph(Glyph(Image.new(2, 4)))


def test_remove_char_glyph():
    font = build_font()
    font.remove_char_glyph("|")
    assert font.get_char_glyph("|") is None
    assert font["|"] is font.default_glyph


@pytest.mark.parametrize(
    "literal, expected",
    [
        ("'a'", "a"),
        ("' '", " "),
        ("'\\\\'", "\\"),
        ("'\\''", "'"),
        ("'\\t'", "\t"),
        ("'\\u{1F600}'", "\U0001F600"),
    ],
)
def test_parse_char_literal(literal, expected):
    char, end = parse_char_literal(literal + " w1")
    assert char == expected
    assert end == len(literal)


@pytest.mark.parametrize("literal", ["''", "'ab'", "'\\q'", "'\\u{D800}'", "'\\u{}'", "a", "'é'"])
def test_parse_char_literal_rejects(literal):
    with pytest.raises(MalformedHeader):
        parse_char_literal(literal)


def test_escape_char():
    assert escape_char("a") == "a"
    assert escape_char('"') == '\\"'
    assert escape_char("é") == "\\u{e9}"


@pytest.mark.parametrize(
    "text",
    [
        "ahf0 h1 b-" + "9" * 5000 + " n0\n\ndef w1 l0 r1\n1\n",
        "ahf0 h" + "9" * 5000 + " b1 n0\n\ndef w1 l0 r1\n1\n",
        "ahf0 h1 b1 n0\n\ndef w1 l" + "9" * 5000 + " r1\n1\n",
        "ahf0 h1 b1 n0\n\ndef w1 l0 r-" + "9" * 5000 + "\n1\n",
    ],
)
def test_huge_font_numbers_are_malformed(text):
    with pytest.raises(MalformedHeader):
        decode_font(text)


def test_font_errors():
    with pytest.raises(UnsupportedVersion):
        decode_font("ahf3 h1 b1 n0\n")
    with pytest.raises(MalformedHeader):
        decode_font("ahi0 h1 b1 n0\n\ndef w1 l0 r1\n1\n")
    with pytest.raises(MalformedHeader):
        decode_font("ahf0 h1 b1 n1\n\n'a' w1 l0 r1\n1\n")
    with pytest.raises(TruncatedImage):
        decode_font("ahf0 h1 b1 n0\n")
    with pytest.raises(TruncatedImage):
        decode_font("ahf0 h2 b1 n0\n\ndef w1 l0 r1\n1\n")
    with pytest.raises(RowLengthMismatch):
        decode_font("ahf0 h1 b1 n0\n\ndef w2 l0 r1\n1\n")
    with pytest.raises(ImageCountMismatch):
        decode_font("ahf0 h1 b1 n1\n\ndef w1 l0 r1\n1\n")
    with pytest.raises(ImageCountMismatch):
        decode_font("ahf0 h1 b1 n0\n\ndef w1 l0 r1\n1\n\n'a' w1 l0 r1\n1\n")
    with pytest.raises(MissingSeparator):
        decode_font("ahf0 h1 b1 n1\n\ndef w1 l0 r1\n1\n'a' w1 l0 r1\n1\n")
    with pytest.raises(MalformedHeader, match="duplicate"):
        decode_font("ahf0 h1 b1 n2\n\ndef w1 l0 r1\n1\n\n'a' w1 l0 r1\n1\n\n'a' w1 l0 r1\n1\n")
