"""Unit tests for the image buffer and color quantization.

Tests cover:
- Image construction and validation
- Pixel addressing (y = 0 is the bottom row)
- Conversion to top-row-first arrays
- Gamma encoding and 8-bit quantization, including non-finite values
"""

import math

import numpy as np
import pytest
import taichi as ti


def _quantize(values):
    from tracer.core.image import quantize_channel

    n = len(values)
    inputs = ti.field(dtype=ti.f32, shape=n)
    outputs = ti.field(dtype=ti.u8, shape=n)
    inputs.from_numpy(np.asarray(values, dtype=np.float32))

    @ti.kernel
    def test_kernel():
        for i in range(n):
            outputs[i] = quantize_channel(inputs[i])

    test_kernel()
    return outputs.to_numpy().tolist()


class TestImage:
    """Tests for the Image container."""

    def test_blank(self):
        from tracer.core.image import Image

        image = Image.blank(4, 3)
        assert image.pixels.shape == (12, 3)
        assert image.pixels.dtype == np.uint8
        assert not image.pixels.any()

    def test_set_and_get_pixel(self):
        from tracer.core.image import Image

        image = Image.blank(4, 3)
        image.set_pixel(2, 1, (10, 20, 30))
        assert image.get_pixel(2, 1) == (10, 20, 30)
        assert image.pixels[1 * 4 + 2].tolist() == [10, 20, 30]

    def test_out_of_bounds(self):
        from tracer.core.image import Image

        image = Image.blank(4, 3)
        with pytest.raises(IndexError):
            image.get_pixel(4, 0)
        with pytest.raises(IndexError):
            image.set_pixel(0, -1, (0, 0, 0))

    def test_rejects_mismatched_buffer(self):
        from tracer.core.image import Image

        with pytest.raises(ValueError):
            Image(width=4, height=3, pixels=np.zeros((11, 3), dtype=np.uint8))
        with pytest.raises(ValueError):
            Image(width=4, height=3, pixels=np.zeros((12, 3), dtype=np.float32))
        with pytest.raises(ValueError):
            Image(width=0, height=3, pixels=np.zeros((0, 3), dtype=np.uint8))

    def test_to_array_puts_top_row_first(self):
        from tracer.core.image import Image

        image = Image.blank(2, 2)
        image.set_pixel(0, 0, (255, 0, 0))  # bottom-left
        image.set_pixel(1, 1, (0, 255, 0))  # top-right
        array = image.to_array()
        assert array.shape == (2, 2, 3)
        assert array[1, 0].tolist() == [255, 0, 0]
        assert array[0, 1].tolist() == [0, 255, 0]

    def test_to_array_is_a_copy(self):
        from tracer.core.image import Image

        image = Image.blank(2, 2)
        array = image.to_array()
        array[0, 0] = 99
        assert not image.pixels.any()

    def test_tobytes_length(self):
        from tracer.core.image import Image

        assert len(Image.blank(5, 4).tobytes()) == 5 * 4 * 3


class TestQuantizeChannel:
    """Tests for quantize_channel()."""

    def test_black_and_white(self):
        assert _quantize([0.0, 1.0]) == [0, 255]

    @pytest.mark.parametrize("value", [0.0001, 0.01, 0.18, 0.5, 0.9])
    def test_gamma_encoding(self, value):
        expected = math.floor(255.0 * value ** (1.0 / 2.2) + 0.5)
        assert _quantize([value])[0] == pytest.approx(expected, abs=1)

    def test_values_above_one_clamp(self):
        assert _quantize([1.5, 12.0, 1e30]) == [255, 255, 255]

    def test_negative_values_clamp(self):
        assert _quantize([-0.5, -1e30]) == [0, 0]

    def test_non_finite_values_are_black(self):
        assert _quantize([float("nan"), float("inf"), float("-inf")]) == [0, 0, 0]
