from __future__ import annotations

from typing import Iterable, List, Optional

from PIL import Image as PILImage
from PIL import ImageOps

from ..format.errors import DimensionMismatch
from ..format.types import Collection, Image
from ..palette import DEFAULT_PALETTE, Palette
from .renderer import PathLike


class ImageConverter:
    """Quantize raster files to palette-index images."""

    def __init__(self, palette: Optional[Palette] = None) -> None:
        self.palette = palette or DEFAULT_PALETTE

    def load(self, path: PathLike) -> Image:
        return self.from_pil(self._load_image(path))

    def from_pil(self, img: PILImage.Image) -> Image:
        img = self._normalize_image(img)
        cache = {}
        pixels = []
        data = img.tobytes()
        for offset in range(0, len(data), 4):
            rgba = tuple(data[offset : offset + 4])
            index = cache.get(rgba)
            if index is None:
                index = self.palette.nearest(rgba)
                cache[rgba] = index
            pixels.append(index)
        return Image(img.width, img.height, pixels)

    def load_collection(self, paths: Iterable[PathLike]) -> Collection:
        images: List[Image] = []
        for path in paths:
            image = self.load(path)
            if images and (image.width, image.height) != (images[0].width, images[0].height):
                raise DimensionMismatch(
                    f"{path} is {image.width}x{image.height}, expected {images[0].width}x{images[0].height}"
                )
            images.append(image)
        return Collection(images)

    @staticmethod
    def _load_image(path: PathLike) -> PILImage.Image:
        with PILImage.open(path) as img:
            img = ImageOps.exif_transpose(img)
            return img.copy()

    @staticmethod
    def _normalize_image(img: PILImage.Image) -> PILImage.Image:
        if img.mode != "RGBA":
            return img.convert("RGBA")
        return img


def image_from_pil(img: PILImage.Image, palette: Optional[Palette] = None) -> Image:
    return ImageConverter(palette).from_pil(img)


def load_collection(paths: Iterable[PathLike], palette: Optional[Palette] = None) -> Collection:
    return ImageConverter(palette).load_collection(paths)
