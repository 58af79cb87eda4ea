from __future__ import annotations

import argparse
import os
import sys
from typing import Callable, List, Optional, Sequence

from .format import AhiError, decode, decode_font, encode, encode_font
from .rendering import load_collection, save_collection_pngs
from .settings import DEFAULT_MAX_COUNT, DEFAULT_MAX_DIMENSION, CodecSettings

FONT_EXTENSION = ".ahf"


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="ahi",
        description="Inspect, normalize and convert ASCII Hex Image (.ahi) and Font (.ahf) files.",
    )
    parser.add_argument("--max-dimension", type=int, default=DEFAULT_MAX_DIMENSION, help="Largest accepted width/height")
    parser.add_argument("--max-count", type=int, default=DEFAULT_MAX_COUNT, help="Largest accepted image/glyph count")
    commands = parser.add_subparsers(dest="command", metavar="COMMAND")

    info = commands.add_parser("info", help="Print the header and a summary of each image")
    info.add_argument("path", help=".ahi or .ahf file")

    fmt = commands.add_parser("fmt", help="Rewrite a file in canonical form")
    fmt.add_argument("path", help=".ahi or .ahf file")
    fmt.add_argument("--check", action="store_true", help="Only report whether the file is canonical")

    to_png = commands.add_parser("ahi2png", help="Write each image of an .ahi file as a PNG")
    to_png.add_argument("path", help=".ahi file")

    from_png = commands.add_parser("png2ahi", help="Build an .ahi file from same-sized PNG images")
    from_png.add_argument("images", nargs="+", help="Input images, in collection order")
    from_png.add_argument("-o", "--output", required=True, help="Output .ahi path")

    args = parser.parse_args(argv)
    if args.command is None:
        parser.error("a command is required")
    return args


def read_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace", newline="") as handle:
        return handle.read()


def write_text(path: str, text: str) -> None:
    with open(path, "w", encoding="ascii", newline="") as handle:
        handle.write(text)


def _is_font(path: str) -> bool:
    return os.path.splitext(path)[1].lower() == FONT_EXTENSION


def _canonical_codec(path: str, settings: CodecSettings) -> Callable[[str], str]:
    if _is_font(path):
        return lambda text: encode_font(decode_font(text, settings))
    return lambda text: encode(decode(text, settings))


def show_info(path: str, settings: CodecSettings) -> int:
    text = read_text(path)
    if _is_font(path):
        font = decode_font(text, settings)
        print(f"ahf0 h{font.glyph_height} b{font.baseline} n{len(font)}")
        print(f"default: w{font.default_glyph.image.width} l{font.default_glyph.left} r{font.default_glyph.right}")
        for char, glyph in font:
            print(f"{char!r}: w{glyph.image.width} l{glyph.left} r{glyph.right}")
        return 0
    collection = decode(text, settings)
    print(text.partition("\n")[0].rstrip("\r"))
    for index, image in enumerate(collection):
        colors = "".join(f"{value:X}" for value in sorted(set(image.pixels)))
        print(f"image {index}: {image.width}x{image.height} colors {colors}")
    return 0


def format_file(path: str, check: bool, settings: CodecSettings) -> int:
    text = read_text(path)
    canonical = _canonical_codec(path, settings)(text)
    if canonical == text:
        return 0
    if check:
        print(f"{path}: not in canonical form", file=sys.stderr)
        return 1
    write_text(path, canonical)
    print(f"Reformatted {path}")
    return 0


def ahi_to_png(path: str, settings: CodecSettings) -> int:
    collection = decode(read_text(path), settings)
    for output in save_collection_pngs(collection, path):
        print(output)
    return 0


def png_to_ahi(images: List[str], output: str) -> int:
    collection = load_collection(images)
    write_text(output, encode(collection))
    print(output)
    return 0


def _settings(args: argparse.Namespace) -> CodecSettings:
    settings = CodecSettings(max_dimension=args.max_dimension, max_count=args.max_count)
    settings.validate()
    return settings


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    try:
        settings = _settings(args)
        if args.command == "info":
            return show_info(args.path, settings)
        if args.command == "fmt":
            return format_file(args.path, args.check, settings)
        if args.command == "ahi2png":
            return ahi_to_png(args.path, settings)
        if args.command == "png2ahi":
            return png_to_ahi(args.images, args.output)
    except (AhiError, OSError, ValueError) as exc:
        print(f"{getattr(args, 'path', args.command)}: {exc}", file=sys.stderr)
        return 2
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
