from __future__ import annotations

import logging

from avghash.engine.models import Color, Image, IntensitySource, ReducedImage, Rectangle
from avghash.engine.resize import Resizer

logger = logging.getLogger(__name__)

HASH_SIDE = 8


def intensity(color: Color, source: IntensitySource = "red") -> int:
    if source == "red":
        return color.red
    if source == "luma":
        return (19595 * color.red + 38470 * color.green + 7471 * color.blue + (1 << 15)) >> 16
    raise ValueError(f"Unknown intensity source: {source!r}.")


def reduce_image(
    image: Image,
    resizer: Resizer,
    intensity_source: IntensitySource = "red",
) -> ReducedImage:
    """Downsample to an 8x8 grid and collapse every pixel to one intensity.

    A zero-area result reduces to an empty grid. Any other size than 8x8
    breaks the resizer contract.
    """
    resized = resizer(image, HASH_SIDE, HASH_SIDE)
    rect = resized.bounds
    if rect.is_empty:
        logger.debug("Resized image has zero area; reducing to an empty grid")
        return ReducedImage(bounds=Rectangle.of_size(0, 0), intensities=())
    if rect.width != HASH_SIDE or rect.height != HASH_SIDE:
        raise ValueError(
            f"Resizer returned {rect.width}x{rect.height}, expected {HASH_SIDE}x{HASH_SIDE}."
        )
    return ReducedImage(
        bounds=rect,
        intensities=tuple(
            intensity(resized.at(x, y), intensity_source)
            for y in range(rect.min_y, rect.max_y)
            for x in range(rect.min_x, rect.max_x)
        ),
    )
