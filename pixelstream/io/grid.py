from __future__ import annotations

import logging
from typing import BinaryIO, Optional, Tuple, Union

from PIL import Image

from ..formats import Pixel, PixelFormat

logger = logging.getLogger(__name__)


class PixelGrid:
    """Singly-owned handle around a decoded Pillow image.

    Whoever holds the grid is responsible for calling :meth:`release`;
    a :class:`~pixelstream.io.stream.PixelGridByteStream` takes that
    responsibility over when it is constructed with the grid.
    """

    def __init__(self, image: Image.Image) -> None:
        if image is None:
            raise ValueError("An image is required")
        self._image: Optional[Image.Image] = image
        self._pixels = None

    @classmethod
    def decode(cls, source: Union[str, BinaryIO], pixel_format: PixelFormat) -> "PixelGrid":
        """Decode an image file into a grid laid out as ``pixel_format``."""
        mode = pixel_format.details.pil_mode
        with Image.open(source) as img:
            logger.debug("Decoded %s image %dx%d (%s), converting to %s", img.format, img.width, img.height, img.mode, mode)
            converted = img.convert(mode)
        return cls(converted)

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            raise ValueError("Pixel grid has been released")
        return self._image

    @property
    def width(self) -> int:
        return self.image.width

    @property
    def height(self) -> int:
        return self.image.height

    @property
    def size(self) -> Tuple[int, int]:
        return self.image.size

    @property
    def bands(self) -> Tuple[str, ...]:
        return self.image.getbands()

    @property
    def released(self) -> bool:
        return self._image is None

    def pixel(self, x: int, y: int) -> Pixel:
        if self._pixels is None:
            self._pixels = self.image.load()
        return self._pixels[x, y]

    def release(self) -> None:
        if self._image is None:
            return
        image = self._image
        self._image = None
        self._pixels = None
        image.close()

    def __enter__(self) -> "PixelGrid":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()
