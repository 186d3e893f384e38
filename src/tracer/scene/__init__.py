"""Scene module for scene description and ray-scene queries.

Components:
    scene: Host-side container of primitives and materials
    buffers: Fixed-capacity device storage for an uploaded scene
    intersection: Closest-hit queries against the uploaded scene
    cornell_box: Sphere-only Cornell box preset
"""

from .buffers import MAX_MATERIALS, MAX_PRIMITIVES, MAX_SPHERES, SceneBuffers
from .cornell_box import CornellBoxParams, create_cornell_box_scene
from .intersection import intersect_primitive, intersect_scene
from .scene import Scene

__all__ = [
    "Scene",
    "SceneBuffers",
    "MAX_PRIMITIVES",
    "MAX_SPHERES",
    "MAX_MATERIALS",
    "intersect_primitive",
    "intersect_scene",
    "CornellBoxParams",
    "create_cornell_box_scene",
]
