"""Primitive kinds and host-side primitive records.

A primitive pairs a shape with the index of the material it is made of. The
set of shape kinds is closed: every kind declared in PrimitiveKind must be
handled by the intersection dispatch, which checks this at compile time.
"""

from dataclasses import dataclass
from enum import IntEnum

from tracer.geometry.sphere import SphereInfo


class PrimitiveKind(IntEnum):
    """Enumeration of supported shape kinds.

    Used as the tag of the primitive variant stored on the device.
    """

    SPHERE = 0


# Kinds the device-side intersection dispatch knows how to intersect
HANDLED_PRIMITIVE_KINDS = frozenset({PrimitiveKind.SPHERE})

# Host-side shape description for each kind
SHAPE_TYPES = {
    PrimitiveKind.SPHERE: SphereInfo,
}


@dataclass(frozen=True)
class Primitive:
    """A shape together with its material.

    Attributes:
        kind: The shape kind.
        shape: The shape description; its type must match kind.
        material_index: Index of the material in the scene's material store.
    """

    kind: PrimitiveKind
    shape: SphereInfo
    material_index: int

    def __post_init__(self) -> None:
        expected = SHAPE_TYPES[self.kind]
        if not isinstance(self.shape, expected):
            raise ValueError(
                f"{self.kind.name} primitive needs a {expected.__name__}, "
                f"got {type(self.shape).__name__}"
            )
        if self.material_index < 0:
            raise ValueError(f"Material index must be non-negative, got {self.material_index}")

    @classmethod
    def sphere(cls, center, radius: float, material_index: int) -> "Primitive":
        """Create a sphere primitive."""
        shape = SphereInfo(center=tuple(float(c) for c in center), radius=float(radius))
        return cls(kind=PrimitiveKind.SPHERE, shape=shape, material_index=material_index)
