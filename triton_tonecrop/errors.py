"""
Exception types for Triton-Tonecrop.

Precondition violations (bad rectangles, malformed buffers) are reported with
the builtin ValueError / TypeError and are not part of this hierarchy: they
indicate a caller defect and are never caught by the batch runner.

Author: yuhezhang-ai
"""


class TonecropError(Exception):
    """Base class for errors that abort a batch."""


class ImageIOError(TonecropError, OSError):
    """Input unreadable, header/magic mismatch, or output path unwritable."""


class DeviceResourceError(TonecropError, RuntimeError):
    """Device memory allocation or host/device transfer failure."""


__all__ = [
    'TonecropError',
    'ImageIOError',
    'DeviceResourceError',
]
