from .loader import (
    ALPHA_EXTENSIONS,
    SUPPORTED_EXTENSIONS,
    TextureMaterializer,
    format_for_extension,
    load_texture,
    load_texture_from_stream,
)
from .models import Texture, TextureSettings

__all__ = [
    "ALPHA_EXTENSIONS",
    "SUPPORTED_EXTENSIONS",
    "Texture",
    "TextureMaterializer",
    "TextureSettings",
    "format_for_extension",
    "load_texture",
    "load_texture_from_stream",
]
