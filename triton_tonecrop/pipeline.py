"""
Per-image orchestration: reduce -> crop -> tone, with the host/device copies
in between.

Author: yuhezhang-ai
"""

from contextlib import ExitStack
from typing import Optional

import torch

from . import config
from .buffer import PixelBuffer, Location, center_square
from .transforms import PixelTransform, ColorReducer, RectangularCropper, ToneAdjuster
from .utils import log


class ImagePipeline:
    """
    Run the three stages on one host image and return the host result.

    Every buffer acquired while processing an image (device copies,
    intermediate planes, the host round-trip copy) is released when
    process() returns or raises. Nothing is carried over between images.

    Args:
        reducer: 3 -> 1 channel stage (default: ColorReducer)
        cropper: 1 -> 1 channel cropping stage (default: RectangularCropper)
        adjuster: in-place 1-channel stage (default: ToneAdjuster)
        device: CUDA device to run on (default: current CUDA device)
        host_round_trip: Copy the grayscale plane to the host and back before
                         cropping. None means use config.HOST_ROUND_TRIP.

    Example:
        ```python
        pipeline = ImagePipeline()
        with read_ppm("cat.ppm") as rgb, pipeline.process(rgb) as out:
            write_pgm(out, "out/cat_tonecrop.pgm")
        ```
    """

    def __init__(
        self,
        reducer: Optional[PixelTransform] = None,
        cropper: Optional[RectangularCropper] = None,
        adjuster: Optional[PixelTransform] = None,
        device: torch.device | str | None = None,
        host_round_trip: Optional[bool] = None,
    ):
        self.reducer = reducer if reducer is not None else ColorReducer()
        self.cropper = cropper if cropper is not None else RectangularCropper()
        self.adjuster = adjuster if adjuster is not None else ToneAdjuster()
        self.device = torch.device(device) if device is not None else torch.device('cuda')
        self.host_round_trip = host_round_trip

    @property
    def round_trip_enabled(self) -> bool:
        if self.host_round_trip is None:
            return config.HOST_ROUND_TRIP
        return self.host_round_trip

    def process(self, image: PixelBuffer) -> PixelBuffer:
        """
        Args:
            image: Host buffer of shape (H, W, 3)

        Returns:
            New host buffer of shape (S, S, 1) with S = min(H, W). The caller owns it.

        Raises:
            ValueError: If image is not a 3-channel host buffer
            DeviceResourceError: If a device allocation or transfer fails
        """
        if image.location != Location.HOST:
            raise ValueError("image must be a host buffer")
        if not self.reducer.accepts(image):
            raise ValueError(
                f"{self.reducer!r} expects {self.reducer.in_channels} channel(s), got {image.channels}"
            )

        with ExitStack() as stack:
            d_rgb = stack.enter_context(image.to_device(self.device))
            d_gray = stack.enter_context(self.reducer(d_rgb))
            d_rgb.release()

            if self.round_trip_enabled:
                h_gray = stack.enter_context(d_gray.to_host())
                d_gray.release()
                d_gray = stack.enter_context(h_gray.to_device(self.device))
                h_gray.release()
            else:
                # Join point before the next stage reads the plane
                torch.cuda.synchronize(self.device)

            rect = center_square(d_gray.width, d_gray.height)
            log(f"crop {d_gray.width}x{d_gray.height} -> {rect.width}x{rect.height} "
                f"at ({rect.left}, {rect.top})")

            d_out = stack.enter_context(self.cropper(d_gray, rect))
            d_gray.release()

            adjusted = self.adjuster(d_out)
            if adjusted is not d_out:
                stack.enter_context(adjusted)
            return adjusted.to_host()

    def __call__(self, image: PixelBuffer) -> PixelBuffer:
        return self.process(image)

    def __repr__(self):
        return (
            f"{self.__class__.__name__}(reducer={self.reducer!r}, cropper={self.cropper!r}, "
            f"adjuster={self.adjuster!r}, device={self.device}, "
            f"host_round_trip={self.round_trip_enabled})"
        )


__all__ = [
    'ImagePipeline',
]
