from __future__ import annotations

import logging
from collections.abc import Callable

from avghash.engine.models import GridImage, Image, Rectangle
from avghash.engine.pil_image import PilImage, to_pil

logger = logging.getLogger(__name__)

Resizer = Callable[[Image, int, int], Image]

PILLOW_FILTERS = ("box", "bilinear", "hamming", "bicubic", "lanczos")


def nearest_neighbor(image: Image, width: int, height: int) -> Image:
    """Centre-sampling nearest neighbour over any ``Image``; output starts at (0, 0)."""
    _check_target(width, height)
    source = image.bounds
    if source.is_empty:
        logger.debug("Nearest-neighbour resize of zero-area image %r", source)
        return GridImage.empty()
    columns = [source.min_x + ((2 * tx + 1) * source.width) // (2 * width) for tx in range(width)]
    rows = [source.min_y + ((2 * ty + 1) * source.height) // (2 * height) for ty in range(height)]
    return GridImage(
        bounds=Rectangle.of_size(width, height),
        pixels=tuple(image.at(x, y) for y in rows for x in columns),
    )


class PillowResizer:
    def __init__(self, resample: str = "lanczos") -> None:
        if resample not in PILLOW_FILTERS:
            raise ValueError(f"Unsupported Pillow resample filter: {resample!r}.")
        self.resample = resample

    def __call__(self, image: Image, width: int, height: int) -> Image:
        _check_target(width, height)
        if image.bounds.is_empty:
            logger.debug("Pillow resize of zero-area image %r", image.bounds)
            return GridImage.empty()
        resized = to_pil(image).resize((width, height), resample=_resample_filter(self.resample))
        return PilImage(resized)

    def __repr__(self) -> str:
        return f"PillowResizer(resample={self.resample!r})"


def resolve_resizer(name: str) -> Resizer:
    if name == "nearest":
        return nearest_neighbor
    if name in PILLOW_FILTERS:
        return PillowResizer(name)
    raise ValueError(f"Unknown resizer: {name!r}.")


def _check_target(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Resize target must be positive, got {width}x{height}.")


def _resample_filter(name: str) -> int:
    from PIL import Image

    return Image.Resampling[name.upper()]
