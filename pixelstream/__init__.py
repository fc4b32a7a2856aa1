from .formats import PixelFormat, PixelFormatDetails, encode_rgb8, encode_rgba8
from .io import AddressingError, AddressingMode, PixelGrid, PixelGridByteStream
from .texture import (
    Texture,
    TextureMaterializer,
    TextureSettings,
    format_for_extension,
    load_texture,
    load_texture_from_stream,
)

__all__ = [
    "AddressingError",
    "AddressingMode",
    "PixelFormat",
    "PixelFormatDetails",
    "PixelGrid",
    "PixelGridByteStream",
    "Texture",
    "TextureMaterializer",
    "TextureSettings",
    "encode_rgb8",
    "encode_rgba8",
    "format_for_extension",
    "load_texture",
    "load_texture_from_stream",
]
