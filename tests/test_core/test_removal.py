"""Tests for multi-pass background removal."""

import numpy as np

from spritekit.core.buffer import PixelBuffer
from spritekit.core.chroma import KeyColorConfig
from spritekit.core.removal import remove_background


class TestRemoveBackground:
    """Tests for remove_background()."""

    def test_clears_key_pixels(self, mixed_buffer):
        """Key pixels go transparent; green and black are untouched."""
        stats = remove_background(mixed_buffer)

        assert stats.changed == 2
        assert stats.total == 4
        assert mixed_buffer.pixel(0, 0) == (255, 0, 255, 0)
        assert mixed_buffer.pixel(1, 0) == (10, 200, 10, 255)
        assert mixed_buffer.pixel(0, 1) == (255, 0, 255, 0)
        assert mixed_buffer.pixel(1, 1) == (0, 0, 0, 255)

    def test_only_alpha_changes(self, sprite_buffer):
        before = sprite_buffer.pixels.copy()
        remove_background(sprite_buffer, passes=7)

        np.testing.assert_array_equal(sprite_buffer.pixels[..., :3], before[..., :3])

    def test_sprite_survives(self, sprite_buffer):
        remove_background(sprite_buffer)

        alpha = sprite_buffer.alpha
        assert (alpha[4:12, 4:12] == 255).all()
        assert alpha[0:4, :].max() == 0
        assert alpha[12:, :].max() == 0

    def test_idempotent(self, mixed_buffer):
        """A second run finds nothing left to remove."""
        remove_background(mixed_buffer)
        after_first = mixed_buffer.pixels.copy()

        stats = remove_background(mixed_buffer)

        assert stats.changed == 0
        np.testing.assert_array_equal(mixed_buffer.pixels, after_first)

    def test_transparent_pixels_are_skipped(self):
        buffer = PixelBuffer.new(3, 1, (255, 0, 255, 0))
        stats = remove_background(buffer)
        assert stats.changed == 0

    def test_more_passes_remove_more(self):
        """Deeper passes catch muted pinks the primary pass leaves."""
        muted = PixelBuffer.new(2, 2, (150, 60, 110, 255))

        shallow = remove_background(muted.copy(), passes=1)
        deep = remove_background(muted.copy(), passes=4)

        assert shallow.changed == 0
        assert deep.changed == 4

    def test_passes_are_clamped(self, mixed_buffer):
        stats = remove_background(mixed_buffer, passes=50)
        assert stats.passes == 7

    def test_custom_key_color(self):
        buffer = PixelBuffer.new(2, 1, (0, 255, 0, 255))
        buffer.set_pixel(1, 0, (200, 30, 30, 255))
        key = KeyColorConfig(color=(0, 255, 0), tolerance=30)

        stats = remove_background(buffer, key, passes=1)

        assert stats.changed == 1
        assert buffer.pixel(0, 0)[3] == 0
        assert buffer.pixel(1, 0)[3] == 255

    def test_ratio(self, mixed_buffer):
        stats = remove_background(mixed_buffer)
        assert stats.ratio == 0.5
