"""Geometry module for shape primitives.

Components:
    sphere: Sphere shape and ray-sphere intersection
    primitive: Primitive kinds and host-side primitive records
"""

from .primitive import HANDLED_PRIMITIVE_KINDS, Primitive, PrimitiveKind
from .sphere import (
    EPSILON,
    Intersection,
    Sphere,
    SphereInfo,
    intersect_sphere,
    intersections_equal,
    no_intersection,
)

__all__ = [
    "Sphere",
    "SphereInfo",
    "Intersection",
    "EPSILON",
    "intersect_sphere",
    "intersections_equal",
    "no_intersection",
    "Primitive",
    "PrimitiveKind",
    "HANDLED_PRIMITIVE_KINDS",
]
