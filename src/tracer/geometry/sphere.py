"""Sphere primitive with ray-sphere intersection.

This module provides the device-side Sphere and Intersection dataclasses, the
ray-sphere intersection routine, and the host-side SphereInfo description used
when building scenes.

The intersection solves |origin + t * direction - center|^2 = radius^2 using
the robust quadratic formula from Ray Tracing Gems, then keeps the nearest
root beyond EPSILON. The epsilon is deliberately large: rays leave a surface
from the exact hit point, so roots closer than EPSILON are treated as the
surface the ray just left.

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from tracer.geometry.sphere import Sphere, intersect_sphere
    >>> sphere = Sphere(center=ti.math.vec3(0, 0, -1), radius=0.5)
    >>> # Use intersect_sphere within a Taichi kernel
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

# Type alias for 3D vectors using Taichi's math module
vec3 = tm.vec3

# Minimum accepted hit distance; suppresses self-intersection at grazing bounces
EPSILON = 1.5e-2

# Tolerance used when comparing two hits
INTERSECTION_TOLERANCE = 1e-4


@ti.dataclass
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere (vec3).
        radius: The radius of the sphere (positive float).
    """

    center: vec3
    radius: ti.f32


@ti.dataclass
class Intersection:
    """Record of a ray-primitive intersection.

    Attributes:
        hit: 1 if the ray intersected the primitive, 0 for the
            no-intersection sentinel.
        distance: Distance along the ray to the hit. +inf for the sentinel.
        normal: Outward unit surface normal at the hit point. Only meaningful
            if hit == 1.
        position: The hit point. Only meaningful if hit == 1.
    """

    hit: ti.i32
    distance: ti.f32
    normal: vec3
    position: vec3


@ti.func
def no_intersection() -> Intersection:
    """Create the sentinel meaning "the ray hit nothing"."""
    return Intersection(
        hit=0,
        distance=tm.inf,
        normal=vec3(0.0, 0.0, 0.0),
        position=vec3(0.0, 0.0, 0.0),
    )


@ti.func
def _vectors_close(a: vec3, b: vec3) -> ti.i32:
    close = 1
    for c in ti.static(range(3)):
        if ti.abs(a[c] - b[c]) >= INTERSECTION_TOLERANCE:
            close = 0
    return close


@ti.func
def intersections_equal(a: Intersection, b: Intersection) -> ti.i32:
    """Compare two intersections.

    Any two no-intersection sentinels are equal regardless of their unused
    normal and position fields. Otherwise the distance, normal and position
    must all agree within INTERSECTION_TOLERANCE.

    Returns:
        1 if equal, 0 otherwise.
    """
    result = 0
    if a.hit == 0 and b.hit == 0:
        result = 1
    elif a.hit == 1 and b.hit == 1:
        if ti.abs(a.distance - b.distance) < INTERSECTION_TOLERANCE:
            result = _vectors_close(a.normal, b.normal) * _vectors_close(a.position, b.position)
    return result


@ti.func
def _solve_quadratic_robust(h: ti.f32, a: ti.f32, c: ti.f32, sqrt_d: ti.f32):
    """Solve a*t^2 + 2*h*t + c = 0 using a numerically stable method.

    Args:
        h: Half of the linear coefficient.
        a: Quadratic coefficient.
        c: Constant term.
        sqrt_d: Square root of discriminant (h^2 - a*c).

    Returns:
        Tuple of (t0, t1) where t0 <= t1.
    """
    # q = -(h + sign(h) * sqrt(discriminant)) avoids catastrophic cancellation
    sign_h = ti.select(h < 0.0, -1.0, 1.0)
    q = -(h + sign_h * sqrt_d)

    t0 = 0.0
    t1 = 0.0

    if ti.abs(q) < 1e-10:
        # Tangent ray through the origin; fall back to the textbook formula
        t0 = (-h - sqrt_d) / a
        t1 = (-h + sqrt_d) / a
    else:
        t0 = q / a
        t1 = c / q

    if t0 > t1:
        temp = t0
        t0 = t1
        t1 = temp

    return t0, t1


@ti.func
def intersect_sphere(ray_origin: vec3, ray_direction: vec3, sphere: Sphere) -> Intersection:
    """Test for ray-sphere intersection.

    Expanding |ray_origin + t * ray_direction - center|^2 = radius^2 gives

        a*t^2 + 2*h*t + c = 0

    with a = d.d, h = d.oc, c = oc.oc - radius^2 and oc = origin - center.
    A negative discriminant is a miss. Otherwise the smaller root is used if
    it exceeds EPSILON, then the larger one; if neither does the ray missed.

    Args:
        ray_origin: The starting point of the ray.
        ray_direction: The direction vector of the ray.
        sphere: The sphere to test intersection against.

    Returns:
        The intersection, or the no-intersection sentinel.
    """
    oc = ray_origin - sphere.center

    a = tm.dot(ray_direction, ray_direction)
    h = tm.dot(ray_direction, oc)
    c = tm.dot(oc, oc) - sphere.radius * sphere.radius

    discriminant = h * h - a * c

    result = no_intersection()

    if discriminant >= 0.0:
        sqrt_d = ti.sqrt(discriminant)
        t0, t1 = _solve_quadratic_robust(h, a, c, sqrt_d)

        t = t0
        valid = t > EPSILON
        if not valid:
            t = t1
            valid = t > EPSILON

        if valid:
            hit_point = ray_origin + t * ray_direction
            # Outward normal: points from center to hit point
            outward_normal = (hit_point - sphere.center) / sphere.radius
            result = Intersection(
                hit=1,
                distance=t,
                normal=outward_normal,
                position=hit_point,
            )

    return result


# =============================================================================
# Host-side description
# =============================================================================


@dataclass(frozen=True)
class SphereInfo:
    """Host-side description of a sphere.

    Attributes:
        center: The center of the sphere as (x, y, z).
        radius: The radius of the sphere.
    """

    center: tuple[float, float, float]
    radius: float

    def __post_init__(self) -> None:
        if len(self.center) != 3:
            raise ValueError(f"Sphere center must have 3 components, got {len(self.center)}")
        if not all(math.isfinite(component) for component in self.center):
            raise ValueError(f"Sphere center must be finite, got {self.center}")
        if not (math.isfinite(self.radius) and self.radius > 0.0):
            raise ValueError(f"Sphere radius must be a positive finite number, got {self.radius}")
