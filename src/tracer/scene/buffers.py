"""Device-side storage for a scene.

Scene data is stored in Structure-of-Arrays layout with fixed capacities:

- primitive_kinds[i]      PrimitiveKind tag of primitive i
- primitive_payloads[i]   index of primitive i in its kind's shape arrays
- primitive_materials[i]  material index of primitive i
- sphere_centers/radii    sphere shapes
- material_kinds/emissions/albedos

upload() snapshots a host Scene into these fields, so later changes to the
Scene do not affect a render that has already been dispatched.
"""

import logging

import numpy as np
import taichi as ti

from tracer.geometry.primitive import PrimitiveKind

logger = logging.getLogger(__name__)

# Maximum number of primitives in a scene
MAX_PRIMITIVES = 1024

# Maximum number of spheres in a scene
MAX_SPHERES = 1024

# Maximum number of materials in a scene
MAX_MATERIALS = 1024


@ti.data_oriented
class SceneBuffers:
    """Fixed-capacity device fields holding one scene at a time."""

    def __init__(self):
        self.primitive_kinds = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
        self.primitive_payloads = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
        self.primitive_materials = ti.field(dtype=ti.i32, shape=MAX_PRIMITIVES)
        self.primitive_count = ti.field(dtype=ti.i32, shape=())

        self.sphere_centers = ti.Vector.field(3, dtype=ti.f32, shape=MAX_SPHERES)
        self.sphere_radii = ti.field(dtype=ti.f32, shape=MAX_SPHERES)

        self.material_kinds = ti.field(dtype=ti.i32, shape=MAX_MATERIALS)
        self.material_emissions = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)
        self.material_albedos = ti.Vector.field(3, dtype=ti.f32, shape=MAX_MATERIALS)

    def upload(self, scene) -> None:
        """Copy a host Scene into the device fields.

        Raises:
            RuntimeError: If the scene exceeds a capacity.
        """
        primitives = scene.primitives
        materials = list(scene.materials)

        if len(primitives) > MAX_PRIMITIVES:
            raise RuntimeError(f"Maximum number of primitives ({MAX_PRIMITIVES}) exceeded")
        if len(materials) > MAX_MATERIALS:
            raise RuntimeError(f"Maximum number of materials ({MAX_MATERIALS}) exceeded")

        kinds = np.zeros(MAX_PRIMITIVES, dtype=np.int32)
        payloads = np.zeros(MAX_PRIMITIVES, dtype=np.int32)
        material_indices = np.zeros(MAX_PRIMITIVES, dtype=np.int32)
        centers = np.zeros((MAX_SPHERES, 3), dtype=np.float32)
        radii = np.zeros(MAX_SPHERES, dtype=np.float32)

        sphere_count = 0
        for i, primitive in enumerate(primitives):
            if primitive.material_index >= len(materials):
                raise ValueError(
                    f"Primitive {i} references material {primitive.material_index}, "
                    f"but the scene has {len(materials)} materials"
                )
            kinds[i] = int(primitive.kind)
            material_indices[i] = primitive.material_index
            if primitive.kind == PrimitiveKind.SPHERE:
                if sphere_count >= MAX_SPHERES:
                    raise RuntimeError(f"Maximum number of spheres ({MAX_SPHERES}) exceeded")
                centers[sphere_count] = primitive.shape.center
                radii[sphere_count] = primitive.shape.radius
                payloads[i] = sphere_count
                sphere_count += 1

        material_kinds = np.zeros(MAX_MATERIALS, dtype=np.int32)
        emissions = np.zeros((MAX_MATERIALS, 3), dtype=np.float32)
        albedos = np.zeros((MAX_MATERIALS, 3), dtype=np.float32)
        for i, material in enumerate(materials):
            material_kinds[i] = int(material.kind)
            emissions[i] = material.emission
            albedos[i] = material.color

        self.primitive_kinds.from_numpy(kinds)
        self.primitive_payloads.from_numpy(payloads)
        self.primitive_materials.from_numpy(material_indices)
        self.sphere_centers.from_numpy(centers)
        self.sphere_radii.from_numpy(radii)
        self.material_kinds.from_numpy(material_kinds)
        self.material_emissions.from_numpy(emissions)
        self.material_albedos.from_numpy(albedos)
        self.primitive_count[None] = len(primitives)

        logger.debug(
            "Uploaded scene: %d primitives (%d spheres), %d materials",
            len(primitives),
            sphere_count,
            len(materials),
        )

    @property
    def count(self) -> int:
        return int(self.primitive_count[None])
