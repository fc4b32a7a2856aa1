from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import BinaryIO, List, Optional

from ..io import AddressingMode
from ..texture import SUPPORTED_EXTENSIONS, Texture, TextureSettings, load_texture

ADDRESSING_ENV_VAR = "PIXELSTREAM_ADDRESSING"
DEFAULT_CHUNK_SIZE = 64 * 1024

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Decode an image and stream its pixels as packed RGB8/RGBA8 bytes."
    )
    parser.add_argument("path", help="Image to decode (" + "/".join(sorted(SUPPORTED_EXTENSIONS)) + ")")
    parser.add_argument("-o", "--output", metavar="FILE", help="Write pixel bytes to FILE (default: stdout)")
    parser.add_argument("--info", action="store_true", help="Print width, height, format and byte length and exit")
    parser.add_argument(
        "--chunk-size",
        type=int,
        default=DEFAULT_CHUNK_SIZE,
        help=f"Bytes per read from the pixel stream (default: {DEFAULT_CHUNK_SIZE})",
    )
    parser.add_argument(
        "--addressing",
        choices=[mode.value for mode in AddressingMode],
        default=os.environ.get(ADDRESSING_ENV_VAR, AddressingMode.BYTE.value),
        help=f"Stream addressing mode (default: ${ADDRESSING_ENV_VAR} or 'byte')",
    )
    alpha_group = parser.add_mutually_exclusive_group()
    alpha_group.add_argument("--alpha", dest="alpha", action="store_true", default=None, help="Force RGBA8 output")
    alpha_group.add_argument("--no-alpha", dest="alpha", action="store_false", help="Force RGB8 output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> TextureSettings:
    return TextureSettings(addressing=AddressingMode(args.addressing), alpha=args.alpha)


def describe(texture: Texture) -> str:
    return f"{texture.width}x{texture.height} {texture.pixel_format.name} {texture.length}"


def copy_pixels(texture: Texture, out: BinaryIO, chunk_size: int) -> int:
    total = 0
    while True:
        chunk = texture.stream.read(chunk_size)
        if not chunk:
            break
        out.write(chunk)
        total += len(chunk)
    return total


def _chunk_size(args: argparse.Namespace, texture: Texture) -> int:
    if args.chunk_size <= 0:
        raise ValueError("--chunk-size must be greater than zero")
    if texture.stream.addressing is AddressingMode.PIXEL:
        bpp = texture.pixel_format.bytes_per_pixel
        return max(bpp, args.chunk_size - args.chunk_size % bpp)
    return args.chunk_size


def run(args: argparse.Namespace) -> int:
    with load_texture(args.path, build_settings(args)) as texture:
        if args.info:
            print(describe(texture))
            return 0
        chunk_size = _chunk_size(args, texture)
        if args.output:
            with open(args.output, "wb") as handle:
                total = copy_pixels(texture, handle, chunk_size)
        else:
            total = copy_pixels(texture, sys.stdout.buffer, chunk_size)
            sys.stdout.buffer.flush()
    logger.info("Wrote %d bytes", total)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        return run(args)
    except Exception as exc:
        print(str(exc), file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
