"""
Triton kernel for rectangular cropping of single-channel planes.

Operations modify memory indexing rather than pixel values.

Author: yuhezhang-ai
"""

import triton
import triton.language as tl


@triton.jit
def crop_kernel(
    input_ptr,
    output_ptr,
    input_width,
    output_height,
    output_width,
    top,
    left,
    BLOCK_H: tl.constexpr,
    BLOCK_W: tl.constexpr,
):
    """
    Copy the rectangle [top, top+output_height) x [left, left+output_width)
    of the input plane into a new output plane.

    Memory Layout: HW uint8 (row-major)

    Args:
        input_ptr: Pointer to source plane [input_H, input_W]
        output_ptr: Pointer to destination plane [output_H, output_W]
        input_width: Source row stride in pixels
        output_height, output_width: Destination (cropped) dimensions
        top, left: Crop offsets into the source
        BLOCK_H, BLOCK_W: Tile shape handled by one program

    Processing Strategy:
        - One work item per destination pixel
        - dst(y, x) = src(y + top, x + left)
        - Destination coordinates past (output_H, output_W) are masked no-ops

    The caller guarantees the rectangle lies inside the source; the kernel
    performs no clamping of its own.
    """
    pid_y = tl.program_id(axis=0)
    pid_x = tl.program_id(axis=1)

    ys = pid_y * BLOCK_H + tl.arange(0, BLOCK_H)
    xs = pid_x * BLOCK_W + tl.arange(0, BLOCK_W)
    ys = ys[:, None]
    xs = xs[None, :]
    mask = (ys < output_height) & (xs < output_width)

    # Corresponding input position (apply crop offset)
    input_offset = (ys + top) * input_width + (xs + left)
    output_offset = ys * output_width + xs

    pixel = tl.load(input_ptr + input_offset, mask=mask, other=0)
    tl.store(output_ptr + output_offset, pixel, mask=mask)
