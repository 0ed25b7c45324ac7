"""
Binary PPM (P6) input and PGM (P5) output.

Decoding and encoding go through pillow; this module only checks that the
file is the raster kind the pipeline expects and moves bytes in and out of
PixelBuffers.

Author: yuhezhang-ai
"""

from pathlib import Path

from PIL import Image, UnidentifiedImageError

from .buffer import PixelBuffer, Location
from .errors import ImageIOError


# Enough for magic, width, height and maxval plus a few comment lines
HEADER_READ_BYTES = 1024


def _header_fields(head: bytes, count: int = 4) -> list:
    """
    Split the leading whitespace-separated PNM header fields, skipping
    '#' comments. Returns fewer than `count` fields if the header is cut short.
    """
    fields = []
    token = b""
    in_comment = False
    for byte in head:
        ch = bytes((byte,))
        if in_comment:
            in_comment = ch not in (b"\n", b"\r")
            continue
        if ch == b"#":
            in_comment = True
        elif ch.isspace():
            if token:
                fields.append(token)
                token = b""
                if len(fields) == count:
                    break
        else:
            token += ch
    return fields


def read_ppm(path: str | Path) -> PixelBuffer:
    """
    Load a binary 8-bit RGB PPM file into a host buffer.

    Args:
        path: File to read

    Returns:
        Host buffer of shape (H, W, 3)

    Raises:
        ImageIOError: If the file is missing, unreadable, not a binary P6 PPM
                      with maxval 255, or truncated
    """
    path = Path(path)
    try:
        with open(path, 'rb') as fh:
            fields = _header_fields(fh.read(HEADER_READ_BYTES))
        if fields and fields[0] != b"P6":
            raise ImageIOError(
                f"{path}: expected a binary RGB PPM (P6), got magic {fields[0][:8]!r}"
            )
        if len(fields) == 4 and fields[3] != b"255":
            raise ImageIOError(
                f"{path}: expected maxval 255, got {fields[3][:8].decode('ascii', 'replace')}"
            )

        with Image.open(path) as img:
            if img.format != 'PPM' or img.mode != 'RGB':
                raise ImageIOError(
                    f"{path}: expected an 8-bit RGB PPM (P6), got format={img.format} mode={img.mode}"
                )
            img.load()
            width, height = img.size
            data = img.tobytes()
    except ImageIOError:
        raise
    except FileNotFoundError as e:
        raise ImageIOError(f"{path}: no such file") from e
    except UnidentifiedImageError as e:
        raise ImageIOError(f"{path}: not a recognizable image (bad magic or header)") from e
    except (OSError, SyntaxError, ValueError) as e:
        raise ImageIOError(f"{path}: failed to read image: {e}") from e

    return PixelBuffer.from_bytes(data, width, height, 3)


def write_pgm(image: PixelBuffer, path: str | Path) -> Path:
    """
    Write a 1-channel host buffer as a binary PGM (P5) file.

    Args:
        image: Host buffer of shape (H, W, 1)
        path: Destination file; its directory must already exist

    Returns:
        The path written

    Raises:
        ValueError: If the buffer is not a 1-channel host buffer
        ImageIOError: If the file cannot be written
    """
    if image.location != Location.HOST:
        raise ValueError("write_pgm needs a host buffer; call to_host() first")
    if image.channels != 1:
        raise ValueError(f"write_pgm needs a 1-channel buffer, got {image.channels} channels")

    path = Path(path)
    plane = image.tensor.reshape(image.height, image.width).numpy()
    try:
        Image.fromarray(plane).save(path, format='PPM')
    except OSError as e:
        raise ImageIOError(f"{path}: failed to write image: {e}") from e

    return path


__all__ = [
    'read_ppm',
    'write_pgm',
]
