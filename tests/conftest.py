"""
Shared fixtures for pixelstream tests.

Images are built in memory with Pillow so each test controls the exact
pixel values it reads back.
"""

from typing import List, Sequence

import pytest
from PIL import Image

from pixelstream import AddressingMode, PixelFormat, PixelGrid, PixelGridByteStream


def make_image(mode: str, width: int, height: int, pixels: Sequence[tuple]) -> Image.Image:
    image = Image.new(mode, (width, height))
    if pixels:
        image.putdata(list(pixels))
    return image


def gradient_pixels(width: int, height: int) -> List[tuple]:
    """Distinct RGBA values per pixel so misaddressed reads are visible."""
    pixels = []
    for y in range(height):
        for x in range(width):
            index = y * width + x
            pixels.append((index % 256, (index * 7 + 1) % 256, (index * 13 + 2) % 256, (255 - index) % 256))
    return pixels


def expected_bytes(pixels: Sequence[tuple], pixel_format: PixelFormat) -> bytes:
    return b"".join(pixel_format.encode(pixel) for pixel in pixels)


@pytest.fixture
def two_pixel_image() -> Image.Image:
    return make_image("RGBA", 2, 1, [(1, 2, 3, 4), (5, 6, 7, 8)])


@pytest.fixture
def gradient_image() -> Image.Image:
    return make_image("RGBA", 5, 3, gradient_pixels(5, 3))


@pytest.fixture
def open_stream():
    """Factory building streams over images and closing them after the test."""
    streams = []

    def factory(image, pixel_format=PixelFormat.RGBA8, addressing=AddressingMode.BYTE):
        stream = PixelGridByteStream(PixelGrid(image), pixel_format, addressing)
        streams.append(stream)
        return stream

    yield factory
    for stream in streams:
        stream.close()
