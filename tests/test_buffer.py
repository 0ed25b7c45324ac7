"""
Tests for PixelBuffer, Rectangle and center_square. Host only, no GPU needed.
"""

import pytest
import torch
import triton_tonecrop as tc


class TestCenterSquare:

    @pytest.mark.parametrize("width,height,expected", [
        (4, 2, (1, 0, 2, 2)),
        (3, 5, (0, 1, 3, 3)),
        (10, 10, (0, 0, 10, 10)),
        (7, 4, (1, 0, 4, 4)),       # Odd difference rounds the offset down
        (1, 100, (0, 49, 1, 1)),
        (640, 480, (80, 0, 480, 480)),
    ])
    def test_window(self, width, height, expected):
        rect = tc.center_square(width, height)
        assert (rect.left, rect.top, rect.width, rect.height) == expected
        assert rect.fits(width, height)

    def test_rejects_empty_plane(self):
        with pytest.raises(ValueError):
            tc.center_square(0, 5)


class TestRectangle:

    def test_fits(self):
        rect = tc.Rectangle(left=2, top=1, width=3, height=3)
        assert rect.fits(5, 4)
        assert not rect.fits(4, 4)
        assert not rect.fits(5, 3)

    def test_negative_fields_rejected(self):
        with pytest.raises(ValueError):
            tc.Rectangle(left=-1, top=0, width=1, height=1)


class TestPixelBuffer:

    def test_shape_fields(self):
        buf = tc.PixelBuffer(torch.zeros(2, 4, 3, dtype=torch.uint8))
        assert (buf.width, buf.height, buf.channels) == (4, 2, 3)
        assert buf.nbytes == 24
        assert buf.location == tc.Location.HOST

    def test_from_bytes_row_major(self):
        data = bytes(range(12))
        buf = tc.PixelBuffer.from_bytes(data, width=2, height=2, channels=3)
        assert buf.tensor[0, 1].tolist() == [3, 4, 5]
        assert buf.tensor[1, 0].tolist() == [6, 7, 8]

    def test_from_bytes_length_mismatch(self):
        with pytest.raises(ValueError, match="Expected 12 bytes"):
            tc.PixelBuffer.from_bytes(bytes(11), width=2, height=2, channels=3)

    @pytest.mark.parametrize("tensor", [
        torch.zeros(2, 2, 2, dtype=torch.uint8),      # Bad channel count
        torch.zeros(4, 3, dtype=torch.uint8),         # Missing channel axis
        torch.zeros(0, 3, 1, dtype=torch.uint8),      # Empty plane
    ])
    def test_invalid_shapes(self, tensor):
        with pytest.raises(ValueError):
            tc.PixelBuffer(tensor)

    def test_invalid_dtype(self):
        with pytest.raises(TypeError):
            tc.PixelBuffer(torch.zeros(2, 2, 1, dtype=torch.float32))

    def test_non_contiguous_rejected(self):
        tensor = torch.zeros(4, 6, 3, dtype=torch.uint8)[:, ::2]
        with pytest.raises(ValueError, match="contiguous"):
            tc.PixelBuffer(tensor)

    def test_context_manager_releases(self):
        with tc.PixelBuffer(torch.zeros(2, 2, 1, dtype=torch.uint8)) as buf:
            assert not buf.released
        assert buf.released
        with pytest.raises(RuntimeError, match="released"):
            buf.tensor

    def test_released_on_exception(self):
        with pytest.raises(KeyError):
            with tc.PixelBuffer(torch.zeros(2, 2, 1, dtype=torch.uint8)) as buf:
                raise KeyError("boom")
        assert buf.released

    def test_release_is_idempotent(self):
        buf = tc.PixelBuffer(torch.zeros(2, 2, 1, dtype=torch.uint8))
        buf.release()
        buf.release()
        assert "released" in repr(buf)

    def test_to_host_is_a_copy(self):
        buf = tc.PixelBuffer(torch.zeros(2, 2, 1, dtype=torch.uint8))
        copy = buf.to_host()
        copy.tensor.fill_(7)
        assert torch.all(buf.tensor == 0)


@pytest.mark.cuda
class TestDeviceTransfer:

    def test_round_trip(self):
        data = torch.randint(0, 256, (5, 7, 3), dtype=torch.uint8)
        with tc.PixelBuffer(data) as host, host.to_device() as dev, dev.to_host() as back:
            assert dev.location == tc.Location.DEVICE
            assert back.location == tc.Location.HOST
            assert torch.equal(back.tensor, data)

    def test_no_implicit_sync(self):
        """Writes to the device copy do not reach the host copy."""
        with tc.PixelBuffer(torch.zeros(2, 2, 1, dtype=torch.uint8)) as host:
            with host.to_device() as dev:
                dev.tensor.fill_(9)
                assert torch.all(host.tensor == 0)

    def test_allocation_failure_is_resource_error(self, device):
        with pytest.raises(tc.DeviceResourceError):
            tc.PixelBuffer.empty(1 << 20, 1 << 20, 3, device=device)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
