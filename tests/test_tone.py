"""
Tests for the in-place tone lift (functional + ToneAdjuster stage).
"""

import pytest
import torch
import triton_tonecrop as tc
import triton_tonecrop.functional as F

from conftest import reference_tone


pytestmark = pytest.mark.cuda


def tone(values):
    """Tone-lift a 1-row plane of the given values and return them."""
    plane = torch.tensor(values, dtype=torch.uint8).view(1, len(values), 1).contiguous()
    with tc.PixelBuffer(plane).to_device() as d_plane:
        F.adjust_tone_(d_plane)
        return d_plane.tensor.cpu().flatten().tolist()


class TestToneCorrectness:

    def test_boundary_belongs_to_shadow_branch(self):
        """128 uses the 1.10 gain, 129 the 1.05 gain."""
        assert tone([128, 129]) == [140, 135]

    def test_highlight_saturates(self):
        """255 * 1.05 clamps to 255 instead of wrapping."""
        assert tone([255, 250, 243, 242]) == [255, 255, 255, 254]

    def test_whole_number_products_are_exact(self):
        """Products that land on a whole number are not truncated one unit low."""
        assert tone([180, 200, 220, 240]) == [189, 210, 231, 252]
        assert tone([10, 20, 50, 120]) == [11, 22, 55, 132]

    def test_shadow_values(self):
        assert tone([0, 1, 10, 100, 127]) == [0, 1, 11, 110, 139]

    def test_never_darkens(self):
        values = list(range(256))
        result = tone(values)
        assert all(after >= before for before, after in zip(values, result))

    def test_full_range_matches_reference(self):
        values = torch.arange(256, dtype=torch.uint8).view(16, 16, 1).contiguous()

        with tc.PixelBuffer(values).to_device() as d_plane:
            F.adjust_tone_(d_plane)
            result = d_plane.tensor.cpu()

        assert torch.equal(result, reference_tone(values))

    def test_not_idempotent(self):
        """A second application brightens further."""
        plane = torch.full((3, 3, 1), 100, dtype=torch.uint8)

        with tc.PixelBuffer(plane).to_device() as d_plane:
            F.adjust_tone_(d_plane)
            once = d_plane.tensor.cpu().clone()
            F.adjust_tone_(d_plane)
            twice = d_plane.tensor.cpu()

        assert torch.all(once == 110)
        assert torch.all(twice == 121)
        assert not torch.equal(once, twice)


class TestToneInPlace:

    def test_returns_same_buffer(self):
        plane = torch.randint(0, 256, (33, 47, 1), dtype=torch.uint8)

        with tc.PixelBuffer(plane).to_device() as d_plane:
            storage = d_plane.tensor.data_ptr()
            result = F.adjust_tone_(d_plane)

            assert result is d_plane
            assert result.tensor.data_ptr() == storage
            assert torch.equal(result.tensor.cpu(), reference_tone(plane))

    def test_rejects_rgb(self):
        with tc.PixelBuffer(torch.zeros(2, 2, 3, dtype=torch.uint8)).to_device() as d_rgb:
            with pytest.raises(ValueError):
                F.adjust_tone_(d_rgb)

    def test_stage_is_in_place(self):
        adjuster = tc.ToneAdjuster()
        plane = torch.full((2, 5, 1), 129, dtype=torch.uint8)

        with tc.PixelBuffer(plane).to_device() as d_plane:
            assert adjuster(d_plane) is d_plane
            assert torch.all(d_plane.tensor.cpu() == 135)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
