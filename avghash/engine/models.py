from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Literal, NamedTuple, Protocol, get_args

IntensitySource = Literal["red", "luma"]
INTENSITY_SOURCES: tuple[str, ...] = get_args(IntensitySource)

MAX_CHANNEL = 0xFFFF


class Color(NamedTuple):
    """Alpha-premultiplied RGBA, each channel on the 16-bit scale 0..65535.

    Colour channels never exceed ``alpha``; a fully transparent pixel reads as black.
    """

    red: int
    green: int
    blue: int
    alpha: int


TRANSPARENT = Color(0, 0, 0, 0)


@dataclass(frozen=True)
class Rectangle:
    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return max(self.max_x - self.min_x, 0)

    @property
    def height(self) -> int:
        return max(self.max_y - self.min_y, 0)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.area == 0

    def contains(self, x: int, y: int) -> bool:
        return self.min_x <= x < self.max_x and self.min_y <= y < self.max_y

    @classmethod
    def of_size(cls, width: int, height: int) -> Rectangle:
        return cls(0, 0, width, height)


class Image(Protocol):
    """Decoded raster image: a bounding rectangle plus a per-pixel reader."""

    @property
    def bounds(self) -> Rectangle: ...

    def at(self, x: int, y: int) -> Color: ...


@dataclass(frozen=True)
class GridImage:
    bounds: Rectangle
    pixels: tuple[Color, ...]

    def __post_init__(self) -> None:
        if len(self.pixels) != self.bounds.area:
            raise ValueError(
                f"Expected {self.bounds.area} pixels for "
                f"{self.bounds.width}x{self.bounds.height} bounds, got {len(self.pixels)}."
            )

    def at(self, x: int, y: int) -> Color:
        if not self.bounds.contains(x, y):
            return TRANSPARENT
        offset = (y - self.bounds.min_y) * self.bounds.width + (x - self.bounds.min_x)
        return self.pixels[offset]

    @classmethod
    def empty(cls) -> GridImage:
        return cls(bounds=Rectangle.of_size(0, 0), pixels=())

    @classmethod
    def filled(cls, width: int, height: int, color: Color) -> GridImage:
        bounds = Rectangle.of_size(width, height)
        return cls(bounds=bounds, pixels=(color,) * bounds.area)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Sequence[Color]],
        *,
        origin: tuple[int, int] = (0, 0),
    ) -> GridImage:
        width = len(rows[0]) if rows else 0
        if any(len(row) != width for row in rows):
            raise ValueError("All rows must have the same length.")
        min_x, min_y = origin
        return cls(
            bounds=Rectangle(min_x, min_y, min_x + width, min_y + len(rows)),
            pixels=tuple(Color(*pixel) for row in rows for pixel in row),
        )


@dataclass(frozen=True)
class ReducedImage:
    """Single-channel intensities in row-major order (min Y first, then min X)."""

    bounds: Rectangle
    intensities: tuple[int, ...]

    def __post_init__(self) -> None:
        if len(self.intensities) != self.bounds.area:
            raise ValueError(
                f"Expected {self.bounds.area} intensities, got {len(self.intensities)}."
            )
