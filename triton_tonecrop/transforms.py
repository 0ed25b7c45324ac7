"""
Transform classes for the tonecrop pipeline.

Each stage is an nn.Module that accepts a device PixelBuffer and returns a
device PixelBuffer, so stages can be swapped or reordered without changing the
orchestrator. The numeric behaviour lives in the functional API.

Author: yuhezhang-ai
"""

from typing import Callable, Optional

import torch.nn as nn

from . import functional as F
from .buffer import PixelBuffer, Rectangle, center_square


class PixelTransform(nn.Module):
    """
    Base class for pipeline stages.

    Subclasses set `in_channels` / `out_channels` and implement
    `forward(buffer) -> buffer`.
    """

    in_channels: int = 1
    out_channels: int = 1

    def accepts(self, buffer: PixelBuffer) -> bool:
        """True if the buffer has the channel count this stage consumes."""
        return buffer.channels == self.in_channels

    def __repr__(self):
        return f"{self.__class__.__name__}()"


class ColorReducer(PixelTransform):
    """
    Reduce a 3-channel image to 1-channel luminance.

    Uses weights: 0.299*R + 0.587*G + 0.114*B

    Example:
        ```python
        reducer = ColorReducer()
        d_gray = reducer(d_rgb)  # new buffer, (H, W, 1)
        ```
    """

    in_channels = 3
    out_channels = 1

    def forward(self, image: PixelBuffer) -> PixelBuffer:
        return F.rgb_to_luminance(image)


class RectangularCropper(PixelTransform):
    """
    Crop a rectangle out of a 1-channel image.

    Args:
        window: Function (width, height) -> Rectangle used when forward() is
                called without an explicit rectangle. Defaults to the centered
                square.

    Example:
        ```python
        cropper = RectangularCropper()
        square = cropper(d_gray)  # centered min(W, H) square
        patch = cropper(d_gray, Rectangle(left=0, top=0, width=8, height=8))
        ```
    """

    def __init__(self, window: Optional[Callable[[int, int], Rectangle]] = None):
        super().__init__()
        self.window = window if window is not None else center_square

    def forward(self, image: PixelBuffer, rect: Optional[Rectangle] = None) -> PixelBuffer:
        if rect is None:
            rect = self.window(image.width, image.height)
        return F.crop(image, rect)

    def __repr__(self):
        return f"{self.__class__.__name__}(window={getattr(self.window, '__name__', self.window)})"


class ToneAdjuster(PixelTransform):
    """
    Brighten a 1-channel image in place (x1.10 for pixels <= 128, x1.05 above).

    Returns the same buffer it was given.
    """

    def forward(self, image: PixelBuffer) -> PixelBuffer:
        return F.adjust_tone_(image)


__all__ = [
    'PixelTransform',
    'ColorReducer',
    'RectangularCropper',
    'ToneAdjuster',
]
