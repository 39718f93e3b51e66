"""Average hash ("aHash").

Fast and coarse: it survives re-encoding, resizing, aspect-ratio changes and
small brightness or contrast shifts, but not crops, rotations or spliced-in
content. Gamma or histogram adjustments move the mean non-linearly and can
flip bits near it.
"""

from __future__ import annotations

import logging
import string

from avghash.core.config import Settings
from avghash.engine.grayscale import reduce_image
from avghash.engine.models import INTENSITY_SOURCES, Image, IntensitySource, ReducedImage
from avghash.engine.resize import PillowResizer, Resizer, resolve_resizer

logger = logging.getLogger(__name__)

HASH_BITS = 64

_HEX_DIGITS = frozenset(string.hexdigits.lower())


class AverageHasher:
    def __init__(
        self,
        resizer: Resizer | None = None,
        intensity: IntensitySource = "red",
    ) -> None:
        if intensity not in INTENSITY_SOURCES:
            raise ValueError(f"Unknown intensity source: {intensity!r}.")
        self.resizer = resizer or PillowResizer("lanczos")
        self.intensity = intensity

    @classmethod
    def from_settings(cls, settings: Settings) -> AverageHasher:
        return cls(resizer=resolve_resizer(settings.resample), intensity=settings.intensity)

    def compute(self, image: Image) -> int:
        reduced = reduce_image(image, self.resizer, self.intensity)
        mean = compute_mean(reduced)
        value = compute_hash(reduced, mean)
        logger.debug("Computed average hash %s (mean=%d)", format_hash(value), mean)
        return value


def compute_ahash(
    image: Image,
    *,
    resizer: Resizer | None = None,
    intensity: IntensitySource = "red",
) -> int:
    return AverageHasher(resizer=resizer, intensity=intensity).compute(image)


def compute_mean(reduced: ReducedImage) -> int:
    count = len(reduced.intensities)
    if count == 0:
        return 0
    return sum(reduced.intensities) // count


def compute_hash(reduced: ReducedImage, mean: int) -> int:
    """Set bit ``i`` when the ``i``-th pixel in row-major order is strictly above ``mean``."""
    result = 0
    for bit, value in enumerate(reduced.intensities):
        if value > mean:
            result |= 1 << bit
    return result


def hamming_distance(left: int, right: int) -> int:
    return (left ^ right).bit_count()


def format_hash(value: int) -> str:
    return f"{value:016x}"


def parse_hash(text: str) -> int:
    cleaned = text.strip().lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]
    if not cleaned or len(cleaned) > HASH_BITS // 4 or not set(cleaned) <= _HEX_DIGITS:
        raise ValueError(f"Invalid average hash: {text!r}.")
    return int(cleaned, 16)
