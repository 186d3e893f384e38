"""Path tracing integrator.

This module estimates the radiance arriving along a single camera ray by
following one light path through the scene:

    radiance    = sum over bounces of reflectance * emission
    reflectance = product of albedo * scatter weight along the path

A path ends when the ray escapes the scene (the background is black) or when
it reaches the bounce limit. The limit is a hard cut rather than Russian
roulette, so paths longer than MAX_DEPTH bounces are lost; the estimator is
slightly biased towards darker images in highly reflective scenes.

Example:
    >>> # Within a Taichi kernel:
    >>> # state = make_sampler(x, y)
    >>> # radiance, bounces, state = trace_path(scene_buffers, ray, state)
"""

import taichi as ti
import taichi.math as tm

from tracer.core.ray import Ray, multiply
from tracer.materials.material import scatter
from tracer.scene.intersection import intersect_scene

# Type alias for 3D vectors
vec3 = tm.vec3

# Maximum number of surface interactions contributing to a path
MAX_DEPTH = 7


@ti.func
def facing_normal(normal: vec3, direction: vec3) -> vec3:
    """Flip the normal, if needed, so it faces against direction."""
    result = normal
    if tm.dot(normal, direction) >= 0.0:
        result = -normal
    return result


@ti.func
def trace_path(scene: ti.template(), ray: Ray, state):
    """Trace a single path from a ray through the scene.

    Each surface hit adds its emission weighted by the reflectance
    accumulated so far, then multiplies the reflectance by its albedo and the
    scatter weight. The next ray starts exactly at the hit point; the
    intersection epsilon prevents it from hitting the same surface again.

    Args:
        scene: The SceneBuffers holding the uploaded scene.
        ray: The initial ray (normalized direction).
        state: The pixel's SamplerState.

    Returns:
        A tuple (radiance, bounces, state) where bounces is the number of
        surfaces that contributed to the path (at most MAX_DEPTH).
    """
    origin = ray.origin
    direction = ray.direction
    s = state

    radiance = vec3(0.0, 0.0, 0.0)
    reflectance = vec3(1.0, 1.0, 1.0)
    bounces = 0

    # Active flag for path continuation (Taichi doesn't support break in ti.func loops)
    active = 1

    # One extra iteration: the ray leaving the last counted bounce is still
    # intersected, and a hit beyond the limit ends the path without contributing
    for _ in range(MAX_DEPTH + 1):
        if active == 1:
            hit, index = intersect_scene(scene, origin, direction)

            if hit.hit == 0:
                active = 0
            elif bounces >= MAX_DEPTH:
                active = 0
            else:
                bounces += 1

                material = scene.primitive_materials[index]
                nl = facing_normal(hit.normal, direction)

                radiance += multiply(reflectance, scene.material_emissions[material])
                reflectance = multiply(reflectance, scene.material_albedos[material])

                new_direction = direction
                weight = 1.0
                new_direction, weight, s = scatter(
                    scene.material_kinds[material], direction, hit.normal, nl, s
                )
                reflectance *= weight

                origin = hit.position
                direction = new_direction

    return radiance, bounces, s
