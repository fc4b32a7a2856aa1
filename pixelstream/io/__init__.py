from .grid import PixelGrid
from .stream import AddressingError, AddressingMode, PixelGridByteStream

__all__ = [
    "AddressingError",
    "AddressingMode",
    "PixelGrid",
    "PixelGridByteStream",
]
