"""Deterministic per-pixel pseudorandom sampler.

Every pixel owns one sampler state, seeded purely from its (x, y) coordinate.
The state is two 32-bit words that each draw advances with a multiply-with-carry
style hash; bits of both words are combined and the low 23 bits become the
mantissa of a uniform float on [0, 1).

Because the seed depends only on the pixel coordinate, re-rendering the same
scene with the same camera, sample count and resolution reproduces the same
image bit-for-bit, regardless of how pixels are spread over workers.

The state is passed explicitly and returned updated; it is never stored in a
field and never shared between pixels.

Example:
    >>> @ti.kernel
    ... def draw(x: ti.i32, y: ti.i32) -> ti.f32:
    ...     state = make_sampler(x, y)
    ...     state, value = next_uniform(state)
    ...     return value
"""

import taichi as ti

# Two unsigned 32-bit counters
SamplerState = ti.types.vector(2, ti.u32)

_MULTIPLIER_1 = 36969
_MULTIPLIER_2 = 18000
_LOW_16_MASK = 0xFFFF
_MANTISSA_MASK = 0x007FFFFF
_MANTISSA_SCALE = 1.0 / 8388608.0  # 2^-23
_U32_MASK = 0xFFFFFFFF


@ti.func
def make_sampler(x: ti.i32, y: ti.i32):
    """Create the sampler state for pixel (x, y)."""
    return SamplerState(ti.cast(x, ti.u32), ti.cast(y, ti.u32))


@ti.func
def next_uniform(state):
    """Advance the sampler and draw a uniform float on [0, 1).

    Args:
        state: The current SamplerState of the pixel.

    Returns:
        A tuple (new_state, value). The caller must keep new_state for the
        next draw.
    """
    low_mask = ti.cast(_LOW_16_MASK, ti.u32)
    shift = ti.cast(16, ti.u32)

    s1 = ti.cast(_MULTIPLIER_1, ti.u32) * (state[0] & low_mask) + (state[0] >> shift)
    s2 = ti.cast(_MULTIPLIER_2, ti.u32) * (state[1] & low_mask) + (state[1] >> shift)
    bits = (s1 << shift) + s2

    mantissa = bits & ti.cast(_MANTISSA_MASK, ti.u32)
    value = ti.cast(mantissa, ti.f32) * _MANTISSA_SCALE
    return SamplerState(s1, s2), value


def reference_sequence(x: int, y: int, count: int) -> list[float]:
    """Generate the first ``count`` draws of pixel (x, y) on the host.

    Mirrors next_uniform() with Python integers so device output can be
    checked against it exactly.

    Args:
        x: Pixel x-coordinate.
        y: Pixel y-coordinate.
        count: Number of draws to produce.

    Returns:
        The draws, in order.
    """
    s1 = x & _U32_MASK
    s2 = y & _U32_MASK
    values = []
    for _ in range(count):
        s1 = (_MULTIPLIER_1 * (s1 & _LOW_16_MASK) + (s1 >> 16)) & _U32_MASK
        s2 = (_MULTIPLIER_2 * (s2 & _LOW_16_MASK) + (s2 >> 16)) & _U32_MASK
        bits = ((s1 << 16) + s2) & _U32_MASK
        values.append((bits & _MANTISSA_MASK) * _MANTISSA_SCALE)
    return values
