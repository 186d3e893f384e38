"""Perfect mirror material.

Mirrors reflect the incoming direction about the surface normal. The result
is the same whichever side of the surface the normal faces, and no random
numbers are consumed.
"""

import taichi as ti
import taichi.math as tm

from tracer.core.ray import reflect

vec3 = tm.vec3


@ti.func
def scatter_specular(direction: vec3, normal: vec3) -> vec3:
    """Return the mirror reflection d - 2(d . n)n of direction about normal."""
    return reflect(direction, normal)
