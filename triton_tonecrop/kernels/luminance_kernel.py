"""
Triton kernel for color-to-luminance reduction.

Converts an interleaved 8-bit RGB plane (H, W, 3) into a single-channel
8-bit luminance plane (H, W). The launch grid is 2-D: each program owns a
BLOCK_H x BLOCK_W tile of output pixels.

Author: yuhezhang-ai
"""

import triton
import triton.language as tl


@triton.jit
def rgb_to_luminance_kernel(
    input_ptr,
    output_ptr,
    height,
    width,
    BLOCK_H: tl.constexpr,
    BLOCK_W: tl.constexpr,
):
    """
    Reduce RGB to luminance: gray = 0.299*R + 0.587*G + 0.114*B

    Weights are applied as integer thousandths, so the sum is exact in int32
    and rounds half-up: (299*R + 587*G + 114*B + 500) // 1000. The result
    never exceeds 255 since the weights sum to 1000.

    Memory Layout: HWC uint8 (row-major, interleaved channels)

    Args:
        input_ptr: Pointer to input plane [H, W, 3] (uint8)
        output_ptr: Pointer to output plane [H, W] (uint8)
        height, width: Plane dimensions
        BLOCK_H, BLOCK_W: Tile shape handled by one program

    Work items with y >= height or x >= width (tile overshoot) are masked
    out and neither load nor store.
    """
    pid_y = tl.program_id(axis=0)
    pid_x = tl.program_id(axis=1)

    ys = pid_y * BLOCK_H + tl.arange(0, BLOCK_H)
    xs = pid_x * BLOCK_W + tl.arange(0, BLOCK_W)
    ys = ys[:, None]
    xs = xs[None, :]
    mask = (ys < height) & (xs < width)

    pixel_idx = ys * width + xs
    rgb_offset = pixel_idx * 3

    r = tl.load(input_ptr + rgb_offset + 0, mask=mask, other=0).to(tl.int32)
    g = tl.load(input_ptr + rgb_offset + 1, mask=mask, other=0).to(tl.int32)
    b = tl.load(input_ptr + rgb_offset + 2, mask=mask, other=0).to(tl.int32)

    gray = (299 * r + 587 * g + 114 * b + 500) // 1000

    tl.store(output_ptr + pixel_idx, gray.to(tl.uint8), mask=mask)
