"""Unit tests for primitive kinds and records.

Tests cover:
- Every declared primitive kind is handled by the intersection dispatch
- Primitive validation
"""

import pytest


class TestPrimitiveKind:
    """Tests for the closed set of primitive kinds."""

    def test_every_kind_is_handled(self):
        from tracer.geometry.primitive import HANDLED_PRIMITIVE_KINDS, SHAPE_TYPES, PrimitiveKind

        assert set(PrimitiveKind) == set(HANDLED_PRIMITIVE_KINDS)
        assert set(PrimitiveKind) == set(SHAPE_TYPES)

    def test_sphere_tag_value(self):
        from tracer.geometry.primitive import PrimitiveKind

        assert int(PrimitiveKind.SPHERE) == 0


class TestPrimitive:
    """Tests for the Primitive record."""

    def test_sphere_factory(self):
        from tracer.geometry.primitive import Primitive, PrimitiveKind
        from tracer.geometry.sphere import SphereInfo

        p = Primitive.sphere((1, 2, 3), 2, material_index=4)
        assert p.kind == PrimitiveKind.SPHERE
        assert p.shape == SphereInfo(center=(1.0, 2.0, 3.0), radius=2.0)
        assert p.material_index == 4

    def test_negative_material_index(self):
        from tracer.geometry.primitive import Primitive

        with pytest.raises(ValueError):
            Primitive.sphere((0, 0, 0), 1.0, material_index=-1)

    def test_shape_must_match_kind(self):
        from tracer.geometry.primitive import Primitive, PrimitiveKind

        with pytest.raises(ValueError):
            Primitive(kind=PrimitiveKind.SPHERE, shape=(0.0, 0.0, 0.0), material_index=0)

    def test_invalid_radius(self):
        from tracer.geometry.primitive import Primitive

        with pytest.raises(ValueError):
            Primitive.sphere((0, 0, 0), 0.0, material_index=0)
