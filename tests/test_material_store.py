"""Unit tests for materials and the material store.

Tests cover:
- Material validation
- Index assignment and name lookup
- Error types for unknown and duplicate names
- Device-side kind dispatch
"""

import numpy as np
import pytest
import taichi as ti


@pytest.fixture
def store():
    """Create a fresh MaterialStore for each test."""
    from tracer.materials.material import MaterialStore

    return MaterialStore()


class TestMaterial:
    """Tests for Material validation."""

    def test_defaults(self):
        from tracer.materials.material import Material, MaterialKind

        m = Material()
        assert m.emission == (0.0, 0.0, 0.0)
        assert m.color == (0.0, 0.0, 0.0)
        assert m.kind == MaterialKind.DIFFUSE
        assert not m.is_emissive

    def test_components_are_floats(self):
        from tracer.materials.material import Material

        m = Material(emission=(1, 2, 3), color=(1, 0, 0), kind=2)
        assert m.emission == (1.0, 2.0, 3.0)
        assert m.color == (1.0, 0.0, 0.0)
        assert m.is_emissive

    @pytest.mark.parametrize("color", [(1.5, 0.0, 0.0), (-0.1, 0.5, 0.5), (0.5, 0.5), (float("nan"), 0.0, 0.0)])
    def test_invalid_color(self, color):
        from tracer.materials.material import Material

        with pytest.raises(ValueError):
            Material(color=color)

    def test_negative_emission(self):
        from tracer.materials.material import Material

        with pytest.raises(ValueError):
            Material(emission=(-1.0, 0.0, 0.0))

    def test_emission_may_exceed_one(self):
        from tracer.materials.material import Material

        assert Material(emission=(12.0, 12.0, 12.0)).emission == (12.0, 12.0, 12.0)

    def test_invalid_kind(self):
        from tracer.materials.material import Material

        with pytest.raises(ValueError):
            Material(kind=7)

    def test_material_is_frozen(self):
        import dataclasses

        from tracer.materials.material import Material

        with pytest.raises(dataclasses.FrozenInstanceError):
            Material().color = (1.0, 1.0, 1.0)


class TestMaterialStore:
    """Tests for MaterialStore."""

    def test_indices_in_insertion_order(self, store):
        from tracer.materials.material import Material

        assert store.add(Material(color=(0.1, 0.1, 0.1))) == 0
        assert store.add(Material(color=(0.2, 0.2, 0.2)), name="grey") == 1
        assert store.add(Material(color=(0.3, 0.3, 0.3))) == 2
        assert len(store) == 3
        assert [m.color[0] for m in store] == [0.1, 0.2, 0.3]

    def test_get_by_index(self, store):
        from tracer.materials.material import Material

        red = Material(color=(0.75, 0.25, 0.25))
        index = store.add(red)
        assert store.get(index) == red

    def test_get_out_of_range(self, store):
        with pytest.raises(IndexError):
            store.get(0)

    def test_index_of(self, store):
        from tracer.materials.material import Material

        store.add(Material())
        store.add(Material(), name="mirror")
        assert store.index_of("mirror") == 1
        assert "mirror" in store
        assert store.names() == {"mirror": 1}

    def test_unknown_name(self, store):
        from tracer.materials.material import MaterialNotFoundError

        with pytest.raises(MaterialNotFoundError):
            store.index_of("missing")

    def test_unknown_name_is_key_error(self, store):
        with pytest.raises(KeyError):
            store.index_of("missing")

    def test_duplicate_name(self, store):
        from tracer.materials.material import Material

        store.add(Material(), name="white")
        with pytest.raises(ValueError):
            store.add(Material(), name="white")
        assert len(store) == 1

    def test_rejects_non_material(self, store):
        with pytest.raises(TypeError):
            store.add((0.5, 0.5, 0.5))


class TestScatterDispatch:
    """Tests for the device-side scatter() dispatch."""

    def _scatter(self, kind, direction, normal):
        from tracer.core.sampler import make_sampler
        from tracer.materials.material import scatter

        out_dir = ti.Vector.field(3, dtype=ti.f32, shape=())
        out_weight = ti.field(dtype=ti.f32, shape=())
        out_state = ti.Vector.field(2, dtype=ti.u32, shape=())

        @ti.kernel
        def test_kernel(k: ti.i32, d: ti.math.vec3, n: ti.math.vec3):
            dn = ti.math.normalize(d)
            nl = n
            if ti.math.dot(n, dn) >= 0.0:
                nl = -n
            new_dir, weight, state = scatter(k, dn, n, nl, make_sampler(2, 3))
            out_dir[None] = new_dir
            out_weight[None] = weight
            out_state[None] = state

        test_kernel(kind, ti.math.vec3(*direction), ti.math.vec3(*normal))
        return out_dir[None].to_numpy(), float(out_weight[None]), out_state[None].to_numpy().tolist()

    def test_specular_dispatch(self):
        from tracer.materials.material import MaterialKind

        d, weight, state = self._scatter(int(MaterialKind.SPECULAR), (1.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        s = 1.0 / np.sqrt(2.0)
        assert d == pytest.approx([s, s, 0.0], abs=1e-6)
        assert weight == 1.0
        assert state == [2, 3]

    def test_diffuse_dispatch(self):
        from tracer.materials.material import MaterialKind

        d, weight, state = self._scatter(int(MaterialKind.DIFFUSE), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert d[1] >= 0.0
        assert weight == 1.0
        assert state != [2, 3]

    def test_diffuse_uses_facing_normal_from_inside(self):
        """A ray hitting the inside of a surface scatters back inside."""
        from tracer.materials.material import MaterialKind

        d, _, _ = self._scatter(int(MaterialKind.DIFFUSE), (0.0, 1.0, 0.0), (0.0, 1.0, 0.0))
        assert d[1] <= 0.0

    def test_refractive_dispatch(self):
        from tracer.materials.material import MaterialKind

        _, weight, state = self._scatter(int(MaterialKind.REFRACTIVE), (0.0, -1.0, 0.0), (0.0, 1.0, 0.0))
        assert weight > 0.0
        assert state != [2, 3]
