from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import Optional

from ..formats import PixelFormat
from ..io import AddressingMode, PixelGridByteStream

DEFAULT_ADDRESSING = AddressingMode.BYTE


@dataclass
class TextureSettings:
    addressing: AddressingMode = DEFAULT_ADDRESSING
    alpha: Optional[bool] = None


@dataclass(frozen=True)
class Texture:
    """A decoded image exposed as a stream of packed pixel bytes."""

    width: int
    height: int
    pixel_format: PixelFormat
    stream: PixelGridByteStream = field(repr=False)

    @property
    def length(self) -> int:
        return self.stream.length

    def read_bytes(self) -> bytes:
        """Rewind the stream and return the whole pixel payload."""
        self.stream.seek(0, io.SEEK_SET)
        return self.stream.read(self.stream.length)

    def close(self) -> None:
        self.stream.close()

    def __enter__(self) -> "Texture":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
