"""
Pixel buffers and crop rectangles.

A PixelBuffer owns one rectangular 8-bit plane, either in host memory or on a
CUDA device. Host and device copies are separate buffers linked only by an
explicit to_device() / to_host() copy. Buffers are context managers: leaving
the `with` block releases the storage, including when an exception is raised.

Author: yuhezhang-ai
"""

from dataclasses import dataclass

import torch

from .errors import DeviceResourceError


class Location:
    """Where a buffer's storage lives."""
    HOST = "host"
    DEVICE = "device"


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned crop window: (left, top) offset plus size."""
    left: int
    top: int
    width: int
    height: int

    def __post_init__(self):
        if min(self.left, self.top, self.width, self.height) < 0:
            raise ValueError(f"Rectangle fields must be non-negative, got {self}")

    def fits(self, width: int, height: int) -> bool:
        """True if the rectangle lies inside a width x height plane."""
        return self.left + self.width <= width and self.top + self.height <= height


def center_square(width: int, height: int) -> Rectangle:
    """
    Largest square centered along the longer axis of a width x height plane.

    Example:
        ```python
        center_square(4, 2)  # Rectangle(left=1, top=0, width=2, height=2)
        center_square(3, 5)  # Rectangle(left=0, top=1, width=3, height=3)
        ```
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Plane size must be positive, got width={width}, height={height}")

    side = min(width, height)
    return Rectangle(
        left=(width - side) // 2,
        top=(height - side) // 2,
        width=side,
        height=side,
    )


class PixelBuffer:
    """
    An owned uint8 plane of shape (height, width, channels).

    Args:
        tensor: Contiguous torch.uint8 tensor of shape (H, W, C) with C in {1, 3}

    Raises:
        TypeError: If tensor is not a uint8 torch.Tensor
        ValueError: If the shape or storage length does not describe a valid plane

    Example:
        ```python
        with PixelBuffer(torch.zeros(2, 4, 3, dtype=torch.uint8)) as host:
            with host.to_device() as dev:
                ...
        ```
    """

    def __init__(self, tensor: torch.Tensor):
        if not isinstance(tensor, torch.Tensor):
            raise TypeError(f"PixelBuffer storage must be a torch.Tensor, got {type(tensor)}")
        if tensor.dtype != torch.uint8:
            raise TypeError(f"PixelBuffer storage must be torch.uint8, got {tensor.dtype}")
        if tensor.ndim != 3:
            raise ValueError(
                f"PixelBuffer storage must have shape (H, W, C), got shape {tuple(tensor.shape)}"
            )

        height, width, channels = tensor.shape
        if channels not in (1, 3):
            raise ValueError(f"PixelBuffer channel count must be 1 or 3, got {channels}")
        if height <= 0 or width <= 0:
            raise ValueError(f"PixelBuffer size must be positive, got {width}x{height}")
        if not tensor.is_contiguous():
            raise ValueError("PixelBuffer storage must be contiguous")

        self.width = int(width)
        self.height = int(height)
        self.channels = int(channels)
        self._tensor = tensor

    @classmethod
    def from_bytes(cls, data: bytes, width: int, height: int, channels: int) -> "PixelBuffer":
        """Build a host buffer from raw row-major, interleaved-channel bytes."""
        expected = width * height * channels
        if len(data) != expected:
            raise ValueError(
                f"Expected {expected} bytes for a {width}x{height}x{channels} plane, got {len(data)}"
            )
        tensor = torch.frombuffer(bytearray(data), dtype=torch.uint8)
        return cls(tensor.reshape(height, width, channels))

    @classmethod
    def empty(
        cls,
        width: int,
        height: int,
        channels: int,
        device: torch.device | str | None = None,
    ) -> "PixelBuffer":
        """
        Allocate an uninitialized buffer.

        Callers must fully overwrite it (a kernel launch covering every pixel)
        before reading from it.
        """
        try:
            tensor = torch.empty(height, width, channels, dtype=torch.uint8, device=device)
        except RuntimeError as e:
            raise DeviceResourceError(
                f"Failed to allocate {width}x{height}x{channels} buffer on {device}: {e}"
            ) from e
        return cls(tensor)

    @property
    def tensor(self) -> torch.Tensor:
        """The underlying (H, W, C) storage."""
        if self._tensor is None:
            raise RuntimeError("PixelBuffer has been released")
        return self._tensor

    @property
    def location(self) -> str:
        return Location.DEVICE if self.tensor.is_cuda else Location.HOST

    @property
    def released(self) -> bool:
        return self._tensor is None

    @property
    def nbytes(self) -> int:
        return self.width * self.height * self.channels

    def to_device(self, device: torch.device | str | None = None) -> "PixelBuffer":
        """
        Copy into a new device buffer.

        Raises:
            DeviceResourceError: If allocation or the transfer fails
        """
        if device is None:
            device = torch.device('cuda')
        try:
            copied = self.tensor.to(device=device, copy=True)
        except RuntimeError as e:
            raise DeviceResourceError(
                f"Host-to-device copy of {self.width}x{self.height}x{self.channels} buffer failed: {e}"
            ) from e
        return PixelBuffer(copied)

    def to_host(self) -> "PixelBuffer":
        """
        Copy into a new host buffer.

        Blocks until all work queued on the source buffer's stream has finished.

        Raises:
            DeviceResourceError: If the transfer fails
        """
        try:
            copied = self.tensor.to(device='cpu', copy=True)
        except RuntimeError as e:
            raise DeviceResourceError(
                f"Device-to-host copy of {self.width}x{self.height}x{self.channels} buffer failed: {e}"
            ) from e
        return PixelBuffer(copied)

    def release(self):
        """Drop the storage. Safe to call more than once."""
        self._tensor = None

    def __enter__(self) -> "PixelBuffer":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def __repr__(self):
        if self.released:
            state = "released"
        else:
            state = self.location
        return (
            f"{self.__class__.__name__}(width={self.width}, height={self.height}, "
            f"channels={self.channels}, location={state})"
        )


__all__ = [
    'Location',
    'Rectangle',
    'center_square',
    'PixelBuffer',
]
