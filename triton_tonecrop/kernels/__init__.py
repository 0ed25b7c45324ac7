"""
Triton kernel implementations for the tonecrop pipeline.

This package contains the raw Triton JIT-compiled kernels used by the
functional API. Every kernel is launched over a 2-D grid of pixel tiles.

Author: yuhezhang-ai
"""

from .luminance_kernel import rgb_to_luminance_kernel
from .geometric_kernel import crop_kernel
from .tone_kernel import tone_adjust_kernel

__all__ = [
    'rgb_to_luminance_kernel',
    'crop_kernel',
    'tone_adjust_kernel',
]
