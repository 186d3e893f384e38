"""Scene-level ray intersection.

intersect_scene() tests a ray against every primitive stored in a
SceneBuffers, in insertion order, and keeps the closest hit. A later hit only
replaces the current one if it is strictly closer, so exact ties resolve to
the primitive that was added first.

There is no acceleration structure; the scan is linear in the number of
primitives.

Example:
    >>> buffers = SceneBuffers()
    >>> buffers.upload(scene)
    >>> # Within a Taichi kernel:
    >>> # hit, index = intersect_scene(buffers, origin, direction)
"""

import taichi as ti
import taichi.math as tm

from tracer.geometry.primitive import PrimitiveKind
from tracer.geometry.sphere import Intersection, Sphere, intersect_sphere, no_intersection

vec3 = tm.vec3


@ti.func
def intersect_primitive(scene: ti.template(), index: ti.i32, ray_origin: vec3, ray_direction: vec3) -> Intersection:
    """Intersect a ray with primitive index of the scene.

    Dispatches on the primitive's kind tag. Adding a PrimitiveKind without a
    branch here fails to compile.

    Args:
        scene: The SceneBuffers holding the uploaded scene.
        index: The primitive index.
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        The intersection, or the no-intersection sentinel.
    """
    ti.static_assert(len(PrimitiveKind) == 1, "intersect_primitive() must handle every PrimitiveKind")

    result = no_intersection()
    kind = scene.primitive_kinds[index]
    payload = scene.primitive_payloads[index]
    if kind == int(PrimitiveKind.SPHERE):
        sphere = Sphere(center=scene.sphere_centers[payload], radius=scene.sphere_radii[payload])
        result = intersect_sphere(ray_origin, ray_direction, sphere)
    return result


@ti.func
def intersect_scene(scene: ti.template(), ray_origin: vec3, ray_direction: vec3):
    """Find the closest primitive hit by a ray.

    Args:
        scene: The SceneBuffers holding the uploaded scene.
        ray_origin: The starting point of the ray.
        ray_direction: The unit direction of the ray.

    Returns:
        A tuple (intersection, primitive_index). On a miss the intersection
        is the sentinel and the index is -1.
    """
    closest = no_intersection()
    closest_index = -1

    n_primitives = scene.primitive_count[None]
    for i in range(n_primitives):
        rec = intersect_primitive(scene, i, ray_origin, ray_direction)
        if rec.hit == 1:
            if closest.hit == 0 or rec.distance < closest.distance:
                closest = rec
                closest_index = i

    return closest, closest_index
