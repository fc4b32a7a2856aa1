from __future__ import annotations

import logging
import os
from typing import BinaryIO, FrozenSet, Optional

from ..formats import PixelFormat
from ..io import PixelGrid, PixelGridByteStream
from .models import Texture, TextureSettings

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS: FrozenSet[str] = frozenset({".bmp", ".jpg", ".jpeg", ".png", ".tga"})
ALPHA_EXTENSIONS: FrozenSet[str] = frozenset({".png", ".tga"})


def normalize_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


def format_for_extension(extension: str) -> PixelFormat:
    """Return RGBA8 for alpha-capable extensions and RGB8 for the rest."""
    if normalize_extension(extension) in ALPHA_EXTENSIONS:
        return PixelFormat.RGBA8
    return PixelFormat.RGB8


class TextureMaterializer:
    def __init__(self, settings: Optional[TextureSettings] = None) -> None:
        self.settings = settings or TextureSettings()

    def load(self, path: str) -> Texture:
        extension = self._validate_input_path(path)
        with open(path, "rb") as handle:
            return self.load_stream(handle, extension)

    def load_stream(self, source: BinaryIO, extension: str) -> Texture:
        # The format is picked once here so the per-pixel encode never branches on alpha.
        extension = self._validate_extension(extension)
        pixel_format = self._select_format(extension)
        grid = PixelGrid.decode(source, pixel_format)
        stream = PixelGridByteStream(grid, pixel_format, self.settings.addressing)
        logger.info("Loaded %s texture %dx%d from %s image", pixel_format.name, stream.width, stream.height, extension)
        return Texture(stream.width, stream.height, pixel_format, stream)

    def _select_format(self, extension: str) -> PixelFormat:
        if self.settings.alpha is True:
            return PixelFormat.RGBA8
        if self.settings.alpha is False:
            return PixelFormat.RGB8
        return format_for_extension(extension)

    @staticmethod
    def _validate_extension(extension: str) -> str:
        extension = normalize_extension(extension)
        if extension not in SUPPORTED_EXTENSIONS:
            raise ValueError("Supported formats: " + ", ".join(sorted(SUPPORTED_EXTENSIONS)))
        return extension

    @classmethod
    def _validate_input_path(cls, path: str) -> str:
        extension = cls._validate_extension(os.path.splitext(path)[1])
        if not os.path.isfile(path):
            raise FileNotFoundError(f"File not found: {path}")
        return extension


def load_texture(path: str, settings: Optional[TextureSettings] = None) -> Texture:
    return TextureMaterializer(settings).load(path)


def load_texture_from_stream(
    source: BinaryIO, extension: str, settings: Optional[TextureSettings] = None
) -> Texture:
    return TextureMaterializer(settings).load_stream(source, extension)
