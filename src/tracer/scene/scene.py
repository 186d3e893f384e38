"""Host-side scene container.

A Scene is an ordered list of primitives plus the material store they index
into. Primitive order matters: when two primitives are hit at exactly the
same distance, the one added first wins.

Example:
    >>> from tracer.materials.material import Material, MaterialKind
    >>> from tracer.scene.scene import Scene
    >>> scene = Scene()
    >>> white = scene.add_material(Material(color=(0.75, 0.75, 0.75)), name="white")
    >>> scene.add_sphere(center=(0, 0, -5), radius=1.0, material="white")
    0
    >>> scene.add_sphere(center=(2, 0, -5), radius=0.5,
    ...                  material=Material(color=(0.999, 0.999, 0.999), kind=MaterialKind.SPECULAR))
    1
"""

from tracer.geometry.primitive import Primitive
from tracer.materials.material import Material, MaterialStore


class Scene:
    """Ordered primitives and the materials they reference."""

    def __init__(self):
        self.materials = MaterialStore()
        self._primitives: list[Primitive] = []

    @property
    def primitives(self) -> tuple[Primitive, ...]:
        return tuple(self._primitives)

    def add_material(self, material: Material, name: str | None = None) -> int:
        """Register a material and return its index."""
        return self.materials.add(material, name=name)

    def resolve_material(self, material) -> int:
        """Turn a material reference into an index.

        Args:
            material: An index into the store, a registered name, or a
                Material (which is registered on the fly, unnamed).

        Raises:
            ValueError: If an index is out of range.
            MaterialNotFoundError: If a name is not registered.
        """
        if isinstance(material, Material):
            return self.add_material(material)
        if isinstance(material, str):
            return self.materials.index_of(material)
        if isinstance(material, bool) or not isinstance(material, int):
            raise TypeError(f"Material reference must be an int, str or Material, got {material!r}")
        if not 0 <= material < len(self.materials):
            raise ValueError(
                f"Material index {material} out of range (scene has {len(self.materials)} materials)"
            )
        return material

    def add_primitive(self, primitive: Primitive) -> int:
        """Append a primitive and return its index.

        Raises:
            ValueError: If its material index does not exist.
        """
        if primitive.material_index >= len(self.materials):
            raise ValueError(
                f"Material index {primitive.material_index} out of range "
                f"(scene has {len(self.materials)} materials)"
            )
        self._primitives.append(primitive)
        return len(self._primitives) - 1

    def add_sphere(self, center, radius: float, material) -> int:
        """Add a sphere and return its primitive index."""
        material_index = self.resolve_material(material)
        return self.add_primitive(Primitive.sphere(center, radius, material_index))

    def __len__(self) -> int:
        return len(self._primitives)

    def __iter__(self):
        return iter(self._primitives)
