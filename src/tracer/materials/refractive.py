"""Refractive (glass) material.

Glass both reflects and transmits. Which of the two a path follows is
chosen at random, and the path weight is corrected so that the estimator
stays unbiased:

    P  = 0.25 + 0.5 * Re          probability of following the reflection
    RP = Re / P                   weight of a reflected path
    TP = (1 - Re) / (1 - P)       weight of a transmitted path

so that P * RP = Re and (1 - P) * TP = 1 - Re. Re is Schlick's approximation
of the Fresnel reflectance. Biasing P towards 0.5 keeps both branches
sampled even when Re is tiny.

Key physics:
    - Outside index 1.0, inside index 1.5
    - Snell's law: n1 * sin(theta1) = n2 * sin(theta2)
    - Total internal reflection when the transmitted cosine would be imaginary
"""

import taichi as ti
import taichi.math as tm

from tracer.core.ray import normalize, reflect, refract, schlick_fresnel
from tracer.core.sampler import next_uniform

vec3 = tm.vec3

# Refractive index outside the medium (air)
OUTSIDE_IOR = 1.0

# Refractive index inside the medium (glass)
INSIDE_IOR = 1.5

# Reflection probability is REFLECT_PROBABILITY_BASE + REFLECT_PROBABILITY_SCALE * Re
REFLECT_PROBABILITY_BASE = 0.25
REFLECT_PROBABILITY_SCALE = 0.5


@ti.func
def reflection_probability(reflectance: ti.f32) -> ti.f32:
    """Probability of following the reflected branch for a given Re."""
    return REFLECT_PROBABILITY_BASE + REFLECT_PROBABILITY_SCALE * reflectance


@ti.func
def scatter_refractive(direction: vec3, normal: vec3, facing_normal: vec3, state):
    """Choose between Fresnel reflection and refraction at a glass surface.

    Args:
        direction: The incoming unit ray direction.
        normal: The outward geometric unit normal.
        facing_normal: The normal flipped to face the incoming ray.
        state: The pixel's SamplerState.

    Returns:
        A tuple of (direction, weight, state). On total internal reflection
        the mirror direction is returned with weight 1 and no number is
        drawn; otherwise exactly one number is drawn.
    """
    s = state
    into = tm.dot(normal, facing_normal) > 0.0
    eta = OUTSIDE_IOR / INSIDE_IOR
    if not into:
        eta = INSIDE_IOR / OUTSIDE_IOR

    ddn = tm.dot(direction, facing_normal)
    cos2t = 1.0 - eta * eta * (1.0 - ddn * ddn)

    reflected = reflect(direction, normal)
    out_direction = reflected
    weight = 1.0

    if cos2t >= 0.0:
        transmitted = normalize(refract(direction, facing_normal, eta))

        # Cosine on the air side of the interface
        cosine = -ddn
        if not into:
            cosine = tm.dot(transmitted, normal)
        reflectance = schlick_fresnel(cosine, INSIDE_IOR / OUTSIDE_IOR)
        transmittance = 1.0 - reflectance

        p = reflection_probability(reflectance)
        u = 0.0
        s, u = next_uniform(s)
        if u < p:
            out_direction = reflected
            weight = reflectance / p
        else:
            out_direction = transmitted
            weight = transmittance / (1.0 - p)

    return out_direction, weight, s
