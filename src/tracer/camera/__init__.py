"""Camera module for primary ray generation.

Components:
    pinhole: Pinhole camera with an explicit image plane

Pixel coordinates map onto the image plane bounds:
    x in [0, width - 1]: left to right
    y in [0, height - 1]: bottom to top
"""

from .pinhole import Camera, CameraBuffers, generate_ray, image_plane_point

__all__ = [
    "Camera",
    "CameraBuffers",
    "generate_ray",
    "image_plane_point",
]
