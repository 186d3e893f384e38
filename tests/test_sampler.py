"""Unit tests for the per-pixel sampler.

Tests cover:
- Device draws match the host reference generator exactly
- Draws lie in [0, 1)
- Seeding depends only on the pixel coordinate
"""

import pytest
import taichi as ti


def _device_sequence(x, y, count):
    from tracer.core.sampler import make_sampler, next_uniform

    values = ti.field(dtype=ti.f32, shape=count)

    @ti.kernel
    def test_kernel(px: ti.i32, py: ti.i32):
        state = make_sampler(px, py)
        for i in ti.static(range(count)):
            new_state, value = next_uniform(state)
            state = new_state
            values[i] = value

    test_kernel(x, y)
    return [float(values[i]) for i in range(count)]


class TestReferenceSequence:
    """Tests for the host-side generator."""

    def test_first_draw_from_known_seed(self):
        """Hand-computed first draw for pixel (1, 1)."""
        from tracer.core.sampler import reference_sequence

        # s1 = 36969, s2 = 18000, bits = 36969 << 16 + 18000
        bits = ((36969 << 16) + 18000) & 0xFFFFFFFF
        expected = (bits & 0x7FFFFF) / 2**23
        assert reference_sequence(1, 1, 1) == [expected]

    def test_values_in_unit_interval(self):
        from tracer.core.sampler import reference_sequence

        values = reference_sequence(123, 456, 1000)
        assert all(0.0 <= v < 1.0 for v in values)

    def test_same_seed_same_sequence(self):
        from tracer.core.sampler import reference_sequence

        assert reference_sequence(7, 9, 50) == reference_sequence(7, 9, 50)
        assert reference_sequence(7, 9, 50) != reference_sequence(9, 7, 50)

    def test_origin_pixel_is_degenerate(self):
        """Pixel (0, 0) seeds both counters with zero and never leaves it."""
        from tracer.core.sampler import reference_sequence

        assert reference_sequence(0, 0, 5) == [0.0] * 5

    def test_mean_is_roughly_one_half(self):
        from tracer.core.sampler import reference_sequence

        values = reference_sequence(321, 654, 20000)
        assert sum(values) / len(values) == pytest.approx(0.5, abs=0.02)


class TestDeviceSampler:
    """Tests for make_sampler() and next_uniform()."""

    @pytest.mark.parametrize("pixel", [(1, 1), (17, 3), (640, 480), (5, 0)])
    def test_device_matches_reference(self, pixel):
        from tracer.core.sampler import reference_sequence

        count = 16
        device = _device_sequence(*pixel, count)
        # Both sides are exact: 23-bit integers scaled by a power of two
        assert device == reference_sequence(*pixel, count)

    def test_state_advances(self):
        """Consecutive draws differ for a non-degenerate seed."""
        values = _device_sequence(31, 47, 8)
        assert len(set(values)) == len(values)
