from __future__ import annotations

from typing import TYPE_CHECKING

from avghash.engine.models import MAX_CHANNEL, Color, Image, Rectangle

if TYPE_CHECKING:
    from PIL import Image as PilImageModule

_SIXTEEN_BIT_MODES = frozenset({"I", "I;16", "I;16B", "I;16L", "I;16N"})


class PilImage:
    """Adapts an already-decoded Pillow image to the ``Image`` protocol.

    Sixteen-bit grayscale modes are read as-is; every other mode is converted
    to RGBA, each 8-bit channel is widened with ``value * 0x101`` and colour
    channels are premultiplied by alpha.
    """

    def __init__(self, source: PilImageModule.Image) -> None:
        if source.mode in _SIXTEEN_BIT_MODES:
            self._gray16 = True
            self.source = source
        else:
            self._gray16 = False
            self.source = source if source.mode == "RGBA" else source.convert("RGBA")
        self._bounds = Rectangle.of_size(*self.source.size)
        self._pixels = self.source.load() if not self._bounds.is_empty else None

    @property
    def bounds(self) -> Rectangle:
        return self._bounds

    def at(self, x: int, y: int) -> Color:
        if self._pixels is None or not self._bounds.contains(x, y):
            return Color(0, 0, 0, 0)
        value = self._pixels[x, y]
        if self._gray16:
            level = min(max(int(value), 0), MAX_CHANNEL)
            return Color(level, level, level, MAX_CHANNEL)
        red, green, blue, alpha = (channel * 0x101 for channel in value)
        return Color(
            red * alpha // MAX_CHANNEL,
            green * alpha // MAX_CHANNEL,
            blue * alpha // MAX_CHANNEL,
            alpha,
        )


def to_pil(image: Image) -> PilImageModule.Image:
    from PIL import Image as PilImageModule

    if isinstance(image, PilImage):
        return image.source
    rect = image.bounds
    rendered = PilImageModule.new("RGBA", (rect.width, rect.height))
    rendered.putdata(
        [
            _straight_rgba8(image.at(x, y))
            for y in range(rect.min_y, rect.max_y)
            for x in range(rect.min_x, rect.max_x)
        ]
    )
    return rendered


def _straight_rgba8(color: Color) -> tuple[int, int, int, int]:
    """Undo alpha premultiplication and keep the top 8 bits of each channel."""
    if color.alpha == 0:
        return (0, 0, 0, 0)
    red, green, blue = (
        min(channel * MAX_CHANNEL // color.alpha, MAX_CHANNEL)
        for channel in (color.red, color.green, color.blue)
    )
    return (red >> 8, green >> 8, blue >> 8, color.alpha >> 8)
