"""
Utility functions for Triton-Tonecrop.

Author: yuhezhang-ai
"""

import sys
from typing import Tuple

import triton


def log(message: str):
    """Print a progress message to stderr when verbose output is enabled."""
    from . import config

    if config.VERBOSE:
        print(f"[Triton-Tonecrop] {message}", file=sys.stderr)


def tile_grid(height: int, width: int, block_h: int, block_w: int) -> Tuple[int, int]:
    """
    Launch grid covering a height x width plane with block_h x block_w tiles.

    The last tile in each direction may overshoot the plane; kernels mask
    those work items.
    """
    return (triton.cdiv(height, block_h), triton.cdiv(width, block_w))


__all__ = [
    'log',
    'tile_grid',
]
