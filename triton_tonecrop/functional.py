"""
Functional API for the Triton-accelerated tonecrop kernels.

This module provides functional interfaces that wrap the raw Triton kernels
with input validation and output allocation. Every function takes and returns
device-resident PixelBuffers.

Author: yuhezhang-ai
"""

from . import config
from .buffer import PixelBuffer, Rectangle, Location
from .kernels.luminance_kernel import rgb_to_luminance_kernel
from .kernels.geometric_kernel import crop_kernel
from .kernels.tone_kernel import tone_adjust_kernel
from .utils import tile_grid


# Tone lift constants. The shadow branch includes the threshold itself.
# Gains are integer percentages (x1.10 and x1.05) applied in exact int32 math.
TONE_THRESHOLD = 128
SHADOW_GAIN_PERCENT = 110
HIGHLIGHT_GAIN_PERCENT = 105


def _validate_device_buffer(buffer: PixelBuffer, channels: int, name: str = "buffer") -> None:
    """
    Validate that the input is a live device buffer with the expected channel count.

    Args:
        buffer: Buffer to validate
        channels: Required channel count
        name: Name of the buffer for error messages

    Raises:
        TypeError: If buffer is not a PixelBuffer
        ValueError: If buffer is released, on the host, or has the wrong channel count
    """
    if not isinstance(buffer, PixelBuffer):
        raise TypeError(f"{name} must be a PixelBuffer, got {type(buffer)}")

    if buffer.released:
        raise ValueError(f"{name} has been released")

    if buffer.location != Location.DEVICE:
        raise ValueError(f"{name} must be on CUDA device")

    if buffer.channels != channels:
        raise ValueError(f"{name} must have {channels} channel(s), got {buffer.channels}")

    if buffer.tensor.numel() != buffer.nbytes:
        raise ValueError(
            f"{name} storage holds {buffer.tensor.numel()} bytes, "
            f"expected {buffer.width}x{buffer.height}x{buffer.channels}={buffer.nbytes}"
        )


def rgb_to_luminance(image: PixelBuffer) -> PixelBuffer:
    """
    Reduce a 3-channel image to a new 1-channel luminance image.

    Uses weights: 0.299*R + 0.587*G + 0.114*B, computed exactly and rounded half-up.

    Args:
        image: Device buffer of shape (H, W, 3)

    Returns:
        New device buffer of shape (H, W, 1)

    Example:
        ```python
        with rgb.to_device() as d_rgb, F.rgb_to_luminance(d_rgb) as d_gray:
            d_gray.tensor.shape  # (H, W, 1)
        ```
    """
    _validate_device_buffer(image, 3, "image")

    height, width = image.height, image.width
    output = PixelBuffer.empty(width, height, 1, device=image.tensor.device)

    grid = tile_grid(height, width, config.BLOCK_H, config.BLOCK_W)
    rgb_to_luminance_kernel[grid](
        image.tensor,
        output.tensor,
        height,
        width,
        BLOCK_H=config.BLOCK_H,
        BLOCK_W=config.BLOCK_W,
    )

    return output


def crop(image: PixelBuffer, rect: Rectangle) -> PixelBuffer:
    """
    Copy a rectangular region of a 1-channel image into a new buffer.

    Args:
        image: Device buffer of shape (H, W, 1)
        rect: Crop window; must lie entirely inside the image

    Returns:
        New device buffer of shape (rect.height, rect.width, 1)

    Raises:
        ValueError: If the rectangle is empty or falls outside the image. Out of
                    bounds windows are a caller defect and are never clamped.

    Example:
        ```python
        cropped = crop(d_gray, Rectangle(left=1, top=0, width=2, height=2))
        ```
    """
    _validate_device_buffer(image, 1, "image")

    if rect.width <= 0 or rect.height <= 0:
        raise ValueError(f"Crop size must be positive, got width={rect.width}, height={rect.height}")

    if not rect.fits(image.width, image.height):
        raise ValueError(
            f"Crop window {rect} exceeds image size ({image.width}, {image.height})"
        )

    output = PixelBuffer.empty(rect.width, rect.height, 1, device=image.tensor.device)

    grid = tile_grid(rect.height, rect.width, config.BLOCK_H, config.BLOCK_W)
    crop_kernel[grid](
        image.tensor,
        output.tensor,
        image.width,
        rect.height,
        rect.width,
        rect.top,
        rect.left,
        BLOCK_H=config.BLOCK_H,
        BLOCK_W=config.BLOCK_W,
    )

    return output


def adjust_tone_(image: PixelBuffer) -> PixelBuffer:
    """
    Brighten a 1-channel image in place.

    Pixels <= 128 are multiplied by 1.10, pixels > 128 by 1.05; products are
    floored and saturated to 255 (e.g. 180 -> 189, 255 -> 255). Both gains
    are >= 1, so no pixel ever gets darker. Applying it twice brightens twice.

    Args:
        image: Device buffer of shape (H, W, 1); modified in place

    Returns:
        The same buffer
    """
    _validate_device_buffer(image, 1, "image")

    grid = tile_grid(image.height, image.width, config.BLOCK_H, config.BLOCK_W)
    tone_adjust_kernel[grid](
        image.tensor,
        image.height,
        image.width,
        TONE_THRESHOLD,
        SHADOW_GAIN_PERCENT,
        HIGHLIGHT_GAIN_PERCENT,
        BLOCK_H=config.BLOCK_H,
        BLOCK_W=config.BLOCK_W,
    )

    return image


__all__ = [
    'TONE_THRESHOLD',
    'SHADOW_GAIN_PERCENT',
    'HIGHLIGHT_GAIN_PERCENT',
    'rgb_to_luminance',
    'crop',
    'adjust_tone_',
]
