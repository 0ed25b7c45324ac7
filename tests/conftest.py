"""
Shared pytest configuration and fixtures for Triton-Tonecrop tests.

Tests marked `cuda` need a GPU and are skipped without one; host-only tests
(buffers, rectangles, codec, naming) always run.
"""

import pytest
import torch
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from PIL import Image

import triton_tonecrop as tc


def pytest_configure(config):
    config.addinivalue_line("markers", "cuda: test needs a CUDA device")


# Skip GPU tests if CUDA is not available
def pytest_collection_modifyitems(config, items):
    """Add skip markers to CUDA tests if no device is present."""
    if torch.cuda.is_available():
        return
    skip_cuda = pytest.mark.skip(reason="CUDA not available")
    for item in items:
        if item.get_closest_marker("cuda") is not None:
            item.add_marker(skip_cuda)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep progress messages out of test output."""
    tc.set_verbose(False)
    yield
    tc.set_verbose(True)


@pytest.fixture
def device():
    """Return CUDA device."""
    return torch.device('cuda')


@pytest.fixture
def write_ppm(tmp_path):
    """Write an (H, W, 3) uint8 tensor as a binary PPM and return its path."""
    def _write(tensor, name="image.ppm"):
        path = tmp_path / name
        Image.fromarray(tensor.numpy()).save(path, format='PPM')
        return path
    return _write


def uniform_rgb(width, height, value):
    """Host (H, W, 3) uint8 tensor filled with one value."""
    return torch.full((height, width, 3), value, dtype=torch.uint8)


def reference_luminance(rgb):
    """Exact luminance of an (H, W, 3) uint8 tensor: round(0.299R + 0.587G + 0.114B)."""
    rgb = rgb.to(torch.int32)
    gray = (299 * rgb[..., 0] + 587 * rgb[..., 1] + 114 * rgb[..., 2] + 500) // 1000
    return gray.to(torch.uint8).unsqueeze(-1)


def reference_tone(gray):
    """Exact tone lift of a uint8 tensor (not in place): floor(p * 1.10) or floor(p * 1.05)."""
    pixel = gray.to(torch.int32)
    lifted = torch.where(pixel <= 128, pixel * 110 // 100, pixel * 105 // 100)
    return lifted.clamp(max=255).to(torch.uint8)
