"""
Triton-Tonecrop: GPU batch conversion of color photos to cropped, tone-lifted grayscale

Each image goes through three Triton kernels on the GPU:
- Luminance reduction (0.299*R + 0.587*G + 0.114*B)
- Centered square crop (side = min(width, height))
- In-place tone lift (x1.10 for pixels <= 128, x1.05 above, saturated)

Example:
    ```python
    import triton_tonecrop as tc

    batch = tc.Batch(identifiers=("a.ppm", "b.ppm"), output_dir="output")
    tc.run_batch(batch)  # writes output/a_tonecrop.pgm, output/b_tonecrop.pgm
    ```
"""

from . import functional
from . import transforms
from . import utils
from . import config

from .config import (
    enable_host_round_trip,
    disable_host_round_trip,
    is_host_round_trip_enabled,
    set_verbose,
)
from .errors import TonecropError, ImageIOError, DeviceResourceError
from .buffer import Location, Rectangle, PixelBuffer, center_square
from .codec import read_ppm, write_pgm

# Pipeline stages
from .transforms import (
    PixelTransform,
    ColorReducer,
    RectangularCropper,
    ToneAdjuster,
)

# Functional operations
from .functional import (
    rgb_to_luminance,
    crop,
    adjust_tone_,
)

from .pipeline import ImagePipeline
from .batch import Batch, output_name, run_batch

__version__ = "0.1.0"

__all__ = [
    # Submodules
    'functional',
    'transforms',
    'utils',
    'config',

    # Configuration
    'enable_host_round_trip',
    'disable_host_round_trip',
    'is_host_round_trip_enabled',
    'set_verbose',

    # Errors
    'TonecropError',
    'ImageIOError',
    'DeviceResourceError',

    # Data model
    'Location',
    'Rectangle',
    'PixelBuffer',
    'center_square',

    # Codec
    'read_ppm',
    'write_pgm',

    # Stages
    'PixelTransform',
    'ColorReducer',
    'RectangularCropper',
    'ToneAdjuster',

    # Functional API
    'rgb_to_luminance',
    'crop',
    'adjust_tone_',

    # Orchestration
    'ImagePipeline',
    'Batch',
    'output_name',
    'run_batch',
]
