from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Sequence

Pixel = Sequence[int]
PixelEncoder = Callable[[Pixel], bytes]


@dataclass(frozen=True)
class PixelFormatDetails:
    bytes_per_pixel: int
    channel_count: int
    pil_mode: str


def encode_rgb8(pixel: Pixel) -> bytes:
    """Encode a pixel as red, green, blue; any alpha channel is dropped."""
    return bytes((pixel[0], pixel[1], pixel[2]))


def encode_rgba8(pixel: Pixel) -> bytes:
    """Encode a pixel as red, green, blue, alpha."""
    return bytes((pixel[0], pixel[1], pixel[2], pixel[3]))


class PixelFormat(Enum):
    RGB8 = "rgb8"
    RGBA8 = "rgba8"

    @property
    def details(self) -> PixelFormatDetails:
        return _DETAILS[self]

    @property
    def bytes_per_pixel(self) -> int:
        return _DETAILS[self].bytes_per_pixel

    @property
    def encoder(self) -> PixelEncoder:
        return _ENCODERS[self]

    def encode(self, pixel: Pixel) -> bytes:
        return _ENCODERS[self](pixel)


_DETAILS = {
    PixelFormat.RGB8: PixelFormatDetails(bytes_per_pixel=3, channel_count=3, pil_mode="RGB"),
    PixelFormat.RGBA8: PixelFormatDetails(bytes_per_pixel=4, channel_count=4, pil_mode="RGBA"),
}

_ENCODERS = {
    PixelFormat.RGB8: encode_rgb8,
    PixelFormat.RGBA8: encode_rgba8,
}
