"""Material descriptions, the material store and scatter dispatch.

A Material is a plain host-side value: an emission color, a surface color
(albedo) and a kind selecting the light-transport rule. Materials live in a
MaterialStore that primitives refer to by index; optional names give a
stable handle for scene builders.

On the device, scatter() dispatches on the material kind to the matching
transport rule and returns the next direction, a scalar path weight and the
advanced sampler state.

Example:
    >>> store = MaterialStore()
    >>> red = store.add(Material(color=(0.75, 0.25, 0.25)), name="red")
    >>> store.index_of("red")
    0
"""

import math
from dataclasses import dataclass
from enum import IntEnum

import taichi as ti
import taichi.math as tm

from tracer.materials.diffuse import scatter_diffuse
from tracer.materials.refractive import scatter_refractive
from tracer.materials.specular import scatter_specular

vec3 = tm.vec3


class MaterialKind(IntEnum):
    """Enumeration of supported light-transport rules."""

    DIFFUSE = 0
    SPECULAR = 1
    REFRACTIVE = 2


class MaterialNotFoundError(KeyError):
    """Raised when a material name is not registered in the store."""


def _validate_rgb(name: str, value, upper: float | None) -> tuple[float, float, float]:
    if len(value) != 3:
        raise ValueError(f"Material {name} must have 3 components, got {len(value)}")
    components = tuple(float(c) for c in value)
    for c in components:
        if not math.isfinite(c) or c < 0.0 or (upper is not None and c > upper):
            bound = f"[0, {upper}]" if upper is not None else ">= 0"
            raise ValueError(f"Material {name} components must be in {bound}, got {value}")
    return components


@dataclass(frozen=True)
class Material:
    """Surface description.

    Attributes:
        emission: Emitted radiance per channel, each >= 0.
        color: Albedo per channel, each in [0, 1].
        kind: The light-transport rule.
    """

    emission: tuple[float, float, float] = (0.0, 0.0, 0.0)
    color: tuple[float, float, float] = (0.0, 0.0, 0.0)
    kind: MaterialKind = MaterialKind.DIFFUSE

    def __post_init__(self) -> None:
        object.__setattr__(self, "emission", _validate_rgb("emission", self.emission, None))
        object.__setattr__(self, "color", _validate_rgb("color", self.color, 1.0))
        object.__setattr__(self, "kind", MaterialKind(self.kind))

    @property
    def is_emissive(self) -> bool:
        return any(c > 0.0 for c in self.emission)


class MaterialStore:
    """Ordered, append-only collection of materials with optional names.

    Indices are assigned in insertion order and never change.
    """

    def __init__(self):
        self._materials: list[Material] = []
        self._names: dict[str, int] = {}

    def add(self, material: Material, name: str | None = None) -> int:
        """Append a material and return its index.

        Raises:
            ValueError: If name is already registered.
        """
        if not isinstance(material, Material):
            raise TypeError(f"Expected a Material, got {type(material).__name__}")
        if name is not None and name in self._names:
            raise ValueError(f"Material name {name!r} is already registered")
        index = len(self._materials)
        self._materials.append(material)
        if name is not None:
            self._names[name] = index
        return index

    def get(self, index: int) -> Material:
        """Return the material at index.

        Raises:
            IndexError: If index is out of range.
        """
        if not 0 <= index < len(self._materials):
            raise IndexError(f"Material index {index} out of range (have {len(self._materials)})")
        return self._materials[index]

    def index_of(self, name: str) -> int:
        """Return the index registered for name.

        Raises:
            MaterialNotFoundError: If no material has that name.
        """
        try:
            return self._names[name]
        except KeyError:
            raise MaterialNotFoundError(name) from None

    def names(self) -> dict[str, int]:
        return dict(self._names)

    def __contains__(self, name) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._materials)

    def __iter__(self):
        return iter(self._materials)


@ti.func
def scatter(kind: ti.i32, direction: vec3, normal: vec3, facing_normal: vec3, state):
    """Scatter a ray according to the material kind.

    Args:
        kind: The MaterialKind as an integer.
        direction: The incoming unit ray direction.
        normal: The outward geometric unit normal at the hit.
        facing_normal: The normal flipped to face the incoming ray.
        state: The pixel's SamplerState.

    Returns:
        A tuple of (direction, weight, state).
    """
    ti.static_assert(len(MaterialKind) == 3, "scatter() must handle every MaterialKind")

    s = state
    out_direction = direction
    weight = 1.0

    if kind == int(MaterialKind.DIFFUSE):
        out_direction, s = scatter_diffuse(facing_normal, s)
    elif kind == int(MaterialKind.SPECULAR):
        out_direction = scatter_specular(direction, normal)
    else:
        out_direction, weight, s = scatter_refractive(direction, normal, facing_normal, s)

    return out_direction, weight, s
