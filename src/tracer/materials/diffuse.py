"""Ideal diffuse material.

Diffuse surfaces scatter light into the hemisphere around the surface normal
with a cosine-weighted distribution. With that distribution the cosine term
and the pdf cancel, so the scatter weight is always one and the surface
albedo is the only attenuation (applied by the integrator).

Key formulas:
    - phi = 2 * pi * u1
    - r = sqrt(u2)
    - direction = r*cos(phi) * tangent + r*sin(phi) * bitangent + sqrt(1 - u2) * normal
"""

import taichi as ti
import taichi.math as tm

from tracer.core.ray import build_onb_from_normal, local_to_world, normalize
from tracer.core.sampler import next_uniform

# Type alias for 3D vectors
vec3 = tm.vec3


@ti.func
def scatter_diffuse(facing_normal: vec3, state):
    """Sample a cosine-weighted direction around the facing normal.

    Draws exactly two numbers from the sampler, in the order angle then
    radius.

    Args:
        facing_normal: The unit normal on the side the ray arrived from.
        state: The pixel's SamplerState.

    Returns:
        A tuple of (direction, state) where direction is normalized and
        satisfies dot(direction, facing_normal) >= 0 up to rounding.
    """
    s = state
    u1 = 0.0
    u2 = 0.0
    s, u1 = next_uniform(s)
    s, u2 = next_uniform(s)

    phi = 2.0 * tm.pi * u1
    r = ti.sqrt(u2)

    tangent, bitangent, normal = build_onb_from_normal(facing_normal)
    local_dir = vec3(r * ti.cos(phi), r * ti.sin(phi), ti.sqrt(1.0 - u2))
    direction = normalize(local_to_world(local_dir, tangent, bitangent, normal))
    return direction, s
