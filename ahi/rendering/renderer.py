from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from PIL import Image as PILImage

from ..format.types import Collection, Image
from ..palette import DEFAULT_PALETTE, Palette

PathLike = Union[str, Path]


def image_to_pil(image: Image, palette: Optional[Palette] = None) -> PILImage.Image:
    """Render an image to an RGBA Pillow image."""
    return PILImage.frombytes("RGBA", (image.width, image.height), image.rgba_data(palette or DEFAULT_PALETTE))


def png_output_paths(path: PathLike, count: int) -> List[Path]:
    """`sprites.ahi` -> `sprites.png`, or `sprites.0.png`... for several images."""
    path = Path(path)
    if count == 1:
        return [path.with_suffix(".png")]
    return [path.with_suffix(f".{index}.png") for index in range(count)]


def save_collection_pngs(collection: Collection, path: PathLike, palette: Optional[Palette] = None) -> List[Path]:
    outputs = png_output_paths(path, len(collection))
    for image, output in zip(collection, outputs):
        image_to_pil(image, palette).save(output, format="PNG")
    return outputs
