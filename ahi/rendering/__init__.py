from .converters import ImageConverter, image_from_pil, load_collection
from .renderer import image_to_pil, png_output_paths, save_collection_pngs

__all__ = [
    "image_from_pil",
    "image_to_pil",
    "ImageConverter",
    "load_collection",
    "png_output_paths",
    "save_collection_pngs",
]
