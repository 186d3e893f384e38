"""Pinhole camera with an explicit image plane.

The camera is described by an eye point, a look-at point, an up vector, the
distance from the eye to the image plane (focal length) and the extent of the
image plane in camera units: (left, bottom, right, top).

It builds an orthonormal basis (u, v, w):
- w: points from look toward eye (opposite the view direction)
- u: points right in the image plane
- v: points up in the image plane

Pixel (x, y) maps linearly onto the image plane, with x = 0 at the left bound,
x = width - 1 at the right bound, y = 0 at the bottom bound and
y = height - 1 at the top bound. Primary rays start on the image plane and
point away from the eye.

Example:
    >>> camera = Camera(
    ...     up=(0.0, 1.0, 0.0),
    ...     look=(0.0, 0.0, 0.0),
    ...     eye=(0.0, 0.0, 3.0),
    ...     focal_length=1.0,
    ...     image_plane_bounds=(-0.5, -0.5, 0.5, 0.5),
    ... )
    >>> buffers = CameraBuffers()
    >>> buffers.upload(camera)
    >>> # Use generate_ray(buffers, x, y, width, height) within a Taichi kernel
"""

import math
from dataclasses import dataclass

import numpy as np
import taichi as ti
import taichi.math as tm

from tracer.core.ray import Ray, make_ray, vec3

# Below this |up x w| the up vector is treated as parallel to the view axis
_PARALLEL_TOLERANCE = 1e-8

# =============================================================================
# Camera Data Structures
# =============================================================================


@dataclass(frozen=True)
class Camera:
    """Configuration for a pinhole camera.

    Attributes:
        up: Up direction for camera orientation.
        look: Point the camera is looking at.
        eye: Camera position.
        focal_length: Distance from the eye to the image plane (> 0).
        image_plane_bounds: (left, bottom, right, top) of the image plane.
    """

    up: tuple[float, float, float]
    look: tuple[float, float, float]
    eye: tuple[float, float, float]
    focal_length: float
    image_plane_bounds: tuple[float, float, float, float]

    def __post_init__(self) -> None:
        for name in ("up", "look", "eye"):
            value = getattr(self, name)
            if len(value) != 3 or not all(math.isfinite(c) for c in value):
                raise ValueError(f"Camera {name} must be 3 finite components, got {value}")
        if not (math.isfinite(self.focal_length) and self.focal_length > 0.0):
            raise ValueError(f"Focal length must be positive, got {self.focal_length}")
        if len(self.image_plane_bounds) != 4:
            raise ValueError(
                f"Image plane bounds must be (left, bottom, right, top), got {self.image_plane_bounds}"
            )
        left, bottom, right, top = self.image_plane_bounds
        if not (left < right and bottom < top):
            raise ValueError(f"Image plane bounds are empty: {self.image_plane_bounds}")

        view = np.asarray(self.eye, dtype=np.float64) - np.asarray(self.look, dtype=np.float64)
        view_length = np.linalg.norm(view)
        if view_length == 0.0:
            raise ValueError("Camera eye and look must differ")
        side = np.cross(np.asarray(self.up, dtype=np.float64), view / view_length)
        if np.linalg.norm(side) < _PARALLEL_TOLERANCE:
            raise ValueError("Camera up must not be parallel to the view direction")

    def frame(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Compute the camera's orthonormal basis.

        Returns:
            A tuple (u, v, w) of unit float64 vectors.
        """
        eye = np.asarray(self.eye, dtype=np.float64)
        look = np.asarray(self.look, dtype=np.float64)
        up = np.asarray(self.up, dtype=np.float64)

        w = eye - look
        w = w / np.linalg.norm(w)

        u = np.cross(up, w)
        u = u / np.linalg.norm(u)

        v = np.cross(w, u)
        v = v / np.linalg.norm(v)
        return u, v, w


# =============================================================================
# Device Storage
# =============================================================================


@ti.data_oriented
class CameraBuffers:
    """Device-side copy of a Camera, read by generate_ray()."""

    def __init__(self):
        self.eye = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.u = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.v = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.w = ti.Vector.field(3, dtype=ti.f32, shape=())
        self.focal_length = ti.field(dtype=ti.f32, shape=())
        # (left, bottom, right, top)
        self.bounds = ti.Vector.field(4, dtype=ti.f32, shape=())

    def upload(self, camera: Camera) -> None:
        """Copy the camera and its derived frame to the device."""
        u, v, w = camera.frame()
        self.eye[None] = [float(c) for c in camera.eye]
        self.u[None] = u.tolist()
        self.v[None] = v.tolist()
        self.w[None] = w.tolist()
        self.focal_length[None] = float(camera.focal_length)
        self.bounds[None] = [float(b) for b in camera.image_plane_bounds]


# =============================================================================
# Ray Generation (Taichi-compatible, GPU-callable)
# =============================================================================


@ti.func
def image_plane_point(camera: ti.template(), x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> vec3:
    """World-space point on the image plane for pixel (x, y)."""
    bounds = camera.bounds[None]
    px = ti.cast(x, ti.f32) / ti.cast(width - 1, ti.f32) * (bounds[2] - bounds[0]) + bounds[0]
    py = ti.cast(y, ti.f32) / ti.cast(height - 1, ti.f32) * (bounds[3] - bounds[1]) + bounds[1]
    return (
        camera.eye[None]
        - camera.w[None] * camera.focal_length[None]
        + camera.u[None] * px
        + camera.v[None] * py
    )


@ti.func
def generate_ray(camera: ti.template(), x: ti.i32, y: ti.i32, width: ti.i32, height: ti.i32) -> Ray:
    """Generate the primary ray for pixel (x, y).

    Args:
        camera: The CameraBuffers holding the uploaded camera.
        x: Pixel column, 0 at the left.
        y: Pixel row, 0 at the bottom.
        width: Image width (>= 2).
        height: Image height (>= 2).

    Returns:
        A ray starting on the image plane with normalized direction
        pointing away from the eye.
    """
    origin = image_plane_point(camera, x, y, width, height)
    direction = tm.normalize(origin - camera.eye[None])
    return make_ray(origin, direction)
