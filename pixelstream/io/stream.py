from __future__ import annotations

import io
import logging
from enum import Enum
from typing import Optional, Tuple

from ..formats import PixelFormat
from .grid import PixelGrid

logger = logging.getLogger(__name__)


class AddressingMode(Enum):
    BYTE = "byte"
    PIXEL = "pixel"


class AddressingError(ValueError):
    """Raised when a position or size is not pixel aligned in PIXEL mode."""


class PixelGridByteStream(io.RawIOBase):
    """Read-only byte stream over the pixels of a decoded image.

    Pixels are encoded one at a time as the cursor reaches them, so the
    full ``width * height * bytes_per_pixel`` payload is never built in
    memory. The cursor is kept as pixel coordinates plus an offset into
    the current pixel's encoding.

    The stream owns ``grid`` from construction on and releases it when
    closed, including when construction itself fails.
    """

    def __init__(
        self,
        grid: PixelGrid,
        pixel_format: PixelFormat,
        addressing: AddressingMode = AddressingMode.BYTE,
    ) -> None:
        super().__init__()
        self._grid = grid
        try:
            if grid is None:
                raise ValueError("A pixel grid is required")
            if grid.released:
                raise ValueError("Pixel grid has already been released")
            channels = pixel_format.details.channel_count
            if len(grid.bands) < channels:
                raise ValueError(
                    f"{pixel_format.name} needs {channels} channels, image has {''.join(grid.bands)}"
                )
            self._format = pixel_format
            self._encode = pixel_format.encoder
            self._bpp = pixel_format.bytes_per_pixel
            self._addressing = AddressingMode(addressing)
            self._width, self._height = grid.size
        except BaseException:
            self.close()
            raise
        self._x = 0
        self._y = 0 if self._width and self._height else self._height
        self._sub_offset = 0
        self._cached_xy: Optional[Tuple[int, int]] = None
        self._cached_bytes = b""
        logger.debug(
            "Opened %s stream over %dx%d grid (%s addressing)",
            pixel_format.name,
            self._width,
            self._height,
            self._addressing.value,
        )

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def pixel_format(self) -> PixelFormat:
        return self._format

    @property
    def addressing(self) -> AddressingMode:
        return self._addressing

    @property
    def bytes_per_pixel(self) -> int:
        return self._bpp

    @property
    def length(self) -> int:
        return self._width * self._height * self._bpp

    @property
    def cursor(self) -> Tuple[int, int, int]:
        """Return the cursor as ``(x, y, sub_offset)``; ``y == height`` at the end."""
        return self._x, self._y, self._sub_offset

    def readable(self) -> bool:
        return True

    def seekable(self) -> bool:
        return True

    def writable(self) -> bool:
        return False

    def tell(self) -> int:
        self._check_open()
        return (self._y * self._width + self._x) * self._bpp + self._sub_offset

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        self._check_open()
        if whence == io.SEEK_SET:
            target = offset
        elif whence == io.SEEK_CUR:
            target = self.tell() + offset
        elif whence == io.SEEK_END:
            # Offsets from the end count backwards.
            target = self.length - offset
        else:
            raise ValueError(f"Invalid whence ({whence})")
        self._move_to(target)
        return self.tell()

    def read(self, size: Optional[int] = -1) -> bytes:
        self._check_open()
        remaining = self.length - self.tell()
        if size is None or size == -1:
            size = remaining
        elif size < 0:
            raise ValueError(f"Read size must be non-negative, got {size}")
        self._check_aligned(size, "read size")
        buffer = bytearray(min(size, remaining))
        with memoryview(buffer) as view:
            count = self._fill(view)
        del buffer[count:]
        return bytes(buffer)

    def readall(self) -> bytes:
        return self.read(-1)

    def readinto(self, buffer) -> int:
        self._check_open()
        if buffer is None:
            raise ValueError("A buffer is required")
        with memoryview(buffer) as raw:
            view = raw.cast("B")
            try:
                self._check_aligned(len(view), "read size")
                return self._fill(view)
            finally:
                view.release()

    def write(self, data) -> int:
        raise io.UnsupportedOperation("write")

    def truncate(self, size: Optional[int] = None) -> int:
        raise io.UnsupportedOperation("truncate")

    def close(self) -> None:
        if self.closed:
            return
        try:
            grid = getattr(self, "_grid", None)
            if grid is not None:
                grid.release()
                self._grid = None
                logger.debug("Released pixel grid")
        finally:
            super().close()

    def _fill(self, view: memoryview) -> int:
        count = len(view)
        bpp = self._bpp
        written = 0
        while written < count and self._y < self._height:
            data = self._pixel_bytes(self._x, self._y)
            chunk = data[self._sub_offset : self._sub_offset + count - written]
            view[written : written + len(chunk)] = chunk
            written += len(chunk)
            self._sub_offset += len(chunk)
            if self._sub_offset >= bpp:
                self._sub_offset = 0
                self._x += 1
                if self._x >= self._width:
                    self._x = 0
                    self._y += 1
        return written

    def _pixel_bytes(self, x: int, y: int) -> bytes:
        if self._cached_xy != (x, y):
            self._cached_bytes = self._encode(self._grid.pixel(x, y))
            self._cached_xy = (x, y)
        return self._cached_bytes

    def _move_to(self, position: int) -> None:
        if position < 0:
            raise ValueError(f"Negative seek position {position}")
        self._check_aligned(position, "seek position")
        if position >= self.length:
            self._x, self._y, self._sub_offset = 0, self._height, 0
            return
        y, row_offset = divmod(position, self._width * self._bpp)
        x, sub_offset = divmod(row_offset, self._bpp)
        self._x, self._y, self._sub_offset = x, y, sub_offset

    def _check_aligned(self, value: int, what: str) -> None:
        if self._addressing is AddressingMode.PIXEL and value % self._bpp:
            raise AddressingError(f"{what} {value} is not a multiple of {self._bpp} bytes per pixel")

    def _check_open(self) -> None:
        if self.closed:
            raise ValueError("I/O operation on closed stream")
