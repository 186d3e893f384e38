"""Sphere-only Cornell box scene.

This module provides a factory for the classic Cornell box built entirely
from spheres, as in smallpt: each wall is a very large sphere whose surface
is nearly flat across the visible region.

The box consists of:
- 5 walls forming an open box (left, right, back, floor, ceiling)
- Left wall: red diffuse
- Right wall: blue diffuse
- Back, floor, ceiling: white diffuse
- A mirror sphere and a glass sphere resting on the floor
- An emissive sphere poking through the ceiling as the light

The box spans [-1, 1] on every axis with the open side facing +z, where the
camera sits.

Example:
    >>> from tracer.scene.cornell_box import create_cornell_box_scene
    >>> scene, camera = create_cornell_box_scene()
    >>> image = renderer.render(scene, camera, samples_per_pixel=16, width=128, height=128)
"""

from dataclasses import dataclass

from tracer.camera.pinhole import Camera
from tracer.materials.material import Material, MaterialKind
from tracer.scene.scene import Scene

# =============================================================================
# Cornell Box Parameters
# =============================================================================


@dataclass
class CornellBoxParams:
    """Parameters for configuring a Cornell box scene.

    Attributes:
        light_emission: Emitted radiance of the ceiling light.
        left_wall_color: RGB albedo of the left wall.
        right_wall_color: RGB albedo of the right wall.
        white_wall_color: RGB albedo of the back wall, floor and ceiling.

    Example:
        >>> params = CornellBoxParams(light_emission=(6.0, 6.0, 6.0))
    """

    light_emission: tuple[float, float, float] = (12.0, 12.0, 12.0)
    left_wall_color: tuple[float, float, float] = (0.75, 0.25, 0.25)
    right_wall_color: tuple[float, float, float] = (0.25, 0.25, 0.75)
    white_wall_color: tuple[float, float, float] = (0.75, 0.75, 0.75)


# =============================================================================
# Cornell Box Constants
# =============================================================================

# Half extent of the box along each axis
BOX_HALF_SIZE = 1.0

# Radius of the wall spheres. Large enough to look flat, small enough that
# single-precision intersection stays accurate near the box.
WALL_RADIUS = 1.0e3

# Ceiling light: a unit sphere sunk 0.1 below the ceiling
LIGHT_RADIUS = 1.0
LIGHT_CENTER = (0.0, BOX_HALF_SIZE + LIGHT_RADIUS - 0.1, 0.0)

# Spheres on the floor
SPHERE_RADIUS = 0.35
MIRROR_SPHERE_CENTER = (-0.45, -BOX_HALF_SIZE + SPHERE_RADIUS, -0.3)
GLASS_SPHERE_CENTER = (0.45, -BOX_HALF_SIZE + SPHERE_RADIUS, 0.3)
SPHERE_COLOR = (0.999, 0.999, 0.999)

# Camera in front of the open side, looking at the box center
CAMERA_EYE = (0.0, 0.0, 3.5)
CAMERA_LOOK = (0.0, 0.0, 0.0)
CAMERA_UP = (0.0, 1.0, 0.0)
CAMERA_FOCAL_LENGTH = 1.0
CAMERA_BOUNDS = (-0.35, -0.35, 0.35, 0.35)


# =============================================================================
# Cornell Box Factory
# =============================================================================


def create_cornell_box_scene(params: CornellBoxParams | None = None) -> tuple[Scene, Camera]:
    """Create the sphere-only Cornell box scene.

    Materials are registered under the names "left", "right", "white",
    "light", "mirror" and "glass".

    Args:
        params: Optional colors and light emission. Defaults to
            CornellBoxParams().

    Returns:
        A tuple (scene, camera).
    """
    if params is None:
        params = CornellBoxParams()

    scene = Scene()
    scene.add_material(Material(color=params.left_wall_color), name="left")
    scene.add_material(Material(color=params.right_wall_color), name="right")
    scene.add_material(Material(color=params.white_wall_color), name="white")
    scene.add_material(Material(emission=params.light_emission), name="light")
    scene.add_material(Material(color=SPHERE_COLOR, kind=MaterialKind.SPECULAR), name="mirror")
    scene.add_material(Material(color=SPHERE_COLOR, kind=MaterialKind.REFRACTIVE), name="glass")

    offset = WALL_RADIUS + BOX_HALF_SIZE
    scene.add_sphere(center=(-offset, 0.0, 0.0), radius=WALL_RADIUS, material="left")
    scene.add_sphere(center=(offset, 0.0, 0.0), radius=WALL_RADIUS, material="right")
    scene.add_sphere(center=(0.0, 0.0, -offset), radius=WALL_RADIUS, material="white")  # back
    scene.add_sphere(center=(0.0, -offset, 0.0), radius=WALL_RADIUS, material="white")  # floor
    scene.add_sphere(center=(0.0, offset, 0.0), radius=WALL_RADIUS, material="white")  # ceiling

    scene.add_sphere(center=MIRROR_SPHERE_CENTER, radius=SPHERE_RADIUS, material="mirror")
    scene.add_sphere(center=GLASS_SPHERE_CENTER, radius=SPHERE_RADIUS, material="glass")
    scene.add_sphere(center=LIGHT_CENTER, radius=LIGHT_RADIUS, material="light")

    camera = Camera(
        up=CAMERA_UP,
        look=CAMERA_LOOK,
        eye=CAMERA_EYE,
        focal_length=CAMERA_FOCAL_LENGTH,
        image_plane_bounds=CAMERA_BOUNDS,
    )
    return scene, camera
