"""
Triton kernel for the in-place tone lift.

Author: yuhezhang-ai
"""

import triton
import triton.language as tl


@triton.jit
def tone_adjust_kernel(
    image_ptr,
    height,
    width,
    threshold,
    shadow_percent,
    highlight_percent,
    BLOCK_H: tl.constexpr,
    BLOCK_W: tl.constexpr,
):
    """
    Two-branch multiplicative gain, applied in place.

        pixel <= threshold: pixel * shadow_percent / 100
        pixel >  threshold: pixel * highlight_percent / 100

    Gains are integer percentages so the product is exact in int32
    (1.05 has no exact float representation). The branch is a select, not
    control flow. The quotient is floored and saturated to 255 before the store.
    """
    pid_y = tl.program_id(axis=0)
    pid_x = tl.program_id(axis=1)

    ys = pid_y * BLOCK_H + tl.arange(0, BLOCK_H)
    xs = pid_x * BLOCK_W + tl.arange(0, BLOCK_W)
    ys = ys[:, None]
    xs = xs[None, :]
    mask = (ys < height) & (xs < width)

    offsets = ys * width + xs

    pixel = tl.load(image_ptr + offsets, mask=mask, other=0).to(tl.int32)
    percent = tl.where(pixel <= threshold, shadow_percent, highlight_percent)
    pixel = (pixel * percent) // 100
    pixel = tl.minimum(pixel, 255)

    tl.store(image_ptr + offsets, pixel.to(tl.uint8), mask=mask)
