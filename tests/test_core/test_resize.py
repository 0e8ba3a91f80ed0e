"""Tests for nearest-neighbor resizing."""

import numpy as np
import pytest

from spritekit.core.buffer import PixelBuffer
from spritekit.core.resize import FitMode, contain_box, resize

PAD = (255, 0, 255, 255)


def checkerboard(width: int, height: int) -> PixelBuffer:
    buffer = PixelBuffer.new(width, height, (0, 0, 0, 255))
    for y in range(height):
        for x in range(width):
            if (x + y) % 2:
                buffer.set_pixel(x, y, (255, 255, 255, 255))
    return buffer


class TestContainBox:
    """Tests for contain_box()."""

    def test_square_to_square(self):
        assert contain_box(10, 10, 32, 32) == (0, 0, 32, 32)

    def test_wide_source_pads_vertically(self):
        assert contain_box(20, 10, 32, 32) == (0, 8, 32, 16)

    def test_tall_source_pads_horizontally(self):
        assert contain_box(10, 40, 32, 32) == (12, 0, 8, 32)

    def test_odd_remainder_goes_right(self):
        # 3 / 2 leaves 1 column on the left and 2 on the right
        offset_x, _, width, _ = contain_box(5, 10, 8, 10)
        assert width == 5
        assert offset_x == 1
        assert 8 - offset_x - width == 2

    def test_never_below_one_pixel(self):
        assert contain_box(1000, 1, 10, 10) == (0, 4, 10, 1)


class TestResize:
    """Tests for resize()."""

    def test_upscale_square(self):
        buffer = PixelBuffer.new(10, 10, (10, 200, 10, 255))
        result = resize(buffer, 32, 32)

        assert result.size == (32, 32)
        assert (result.pixels == (10, 200, 10, 255)).all()

    @pytest.mark.parametrize("source,target", [
        ((10, 10), (32, 32)),
        ((1024, 1024), (32, 32)),
        ((1024, 1024), (128, 240)),
        ((1792, 1024), (512, 128)),
        ((7, 3), (1, 1)),
        ((1, 1), (33, 17)),
        ((333, 77), (96, 32)),
    ])
    def test_output_is_always_target_size(self, source, target):
        result = resize(PixelBuffer.new(*source, (1, 2, 3, 255)), *target)
        assert result.size == target
        assert result.pixels.dtype == np.uint8

    def test_contain_pads_with_key(self):
        buffer = PixelBuffer.new(20, 10, (10, 200, 10, 255))
        result = resize(buffer, 32, 32)

        assert (result.pixels[0:8] == PAD).all()
        assert (result.pixels[24:] == PAD).all()
        assert (result.pixels[8:24] == (10, 200, 10, 255)).all()

    def test_custom_pad_color(self):
        result = resize(PixelBuffer.new(4, 2, (9, 9, 9, 255)), 4, 4, pad_color=(0, 255, 0, 255))
        assert result.pixel(0, 0) == (0, 255, 0, 255)
        assert result.pixel(0, 1) == (9, 9, 9, 255)

    def test_no_new_colors(self):
        """Nearest neighbor never blends: every output color exists in the source."""
        buffer = checkerboard(9, 7)
        result = resize(buffer, 40, 23)

        source_colors = {tuple(c) for c in buffer.pixels.reshape(-1, 4)}
        result_colors = {tuple(c) for c in result.pixels.reshape(-1, 4)}
        assert result_colors <= source_colors | {PAD}

    def test_integer_upscale_repeats_pixels(self):
        buffer = checkerboard(2, 2)
        result = resize(buffer, 4, 4)

        expected = np.repeat(np.repeat(buffer.pixels, 2, axis=0), 2, axis=1)
        np.testing.assert_array_equal(result.pixels, expected)

    def test_stretch_fills_target(self):
        buffer = PixelBuffer.new(20, 10, (10, 200, 10, 255))
        result = resize(buffer, 32, 32, fit_mode=FitMode.STRETCH)

        assert result.size == (32, 32)
        assert (result.pixels == (10, 200, 10, 255)).all()

    def test_fit_mode_accepts_string(self):
        result = resize(PixelBuffer.new(2, 1), 4, 4, fit_mode="stretch")
        assert result.size == (4, 4)

    def test_source_untouched(self):
        buffer = checkerboard(5, 5)
        before = buffer.pixels.copy()
        resize(buffer, 16, 16)
        np.testing.assert_array_equal(buffer.pixels, before)

    @pytest.mark.parametrize("target", [(0, 10), (10, 0), (-1, 5)])
    def test_rejects_empty_target(self, target):
        with pytest.raises(ValueError):
            resize(PixelBuffer.new(4, 4), *target)
