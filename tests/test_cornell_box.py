"""Tests for the sphere-only Cornell box preset."""

import numpy as np
import pytest


class TestCornellBoxScene:
    """Tests for create_cornell_box_scene()."""

    def test_contents(self):
        from tracer.materials.material import MaterialKind
        from tracer.scene.cornell_box import create_cornell_box_scene

        scene, camera = create_cornell_box_scene()
        assert len(scene) == 8
        assert len(scene.materials) == 6
        kinds = {scene.materials.get(p.material_index).kind for p in scene}
        assert kinds == {MaterialKind.DIFFUSE, MaterialKind.SPECULAR, MaterialKind.REFRACTIVE}
        assert scene.materials.get(scene.materials.index_of("light")).is_emissive
        assert camera.eye == (0.0, 0.0, 3.5)

    def test_custom_params(self):
        from tracer.scene.cornell_box import CornellBoxParams, create_cornell_box_scene

        params = CornellBoxParams(light_emission=(3.0, 2.0, 1.0), left_wall_color=(0.1, 0.8, 0.1))
        scene, _ = create_cornell_box_scene(params)
        assert scene.materials.get(scene.materials.index_of("light")).emission == (3.0, 2.0, 1.0)
        assert scene.materials.get(scene.materials.index_of("left")).color == pytest.approx((0.1, 0.8, 0.1))

    def test_camera_sees_only_inside_of_box(self):
        """Corner rays pass through the open front of the box, not beside it."""
        from tracer.scene.cornell_box import BOX_HALF_SIZE, create_cornell_box_scene

        _, camera = create_cornell_box_scene()
        u, v, w = camera.frame()
        left, bottom, right, top = camera.image_plane_bounds
        eye = np.array(camera.eye)
        corner = eye - w * camera.focal_length + u * right + v * top
        direction = (corner - eye) / np.linalg.norm(corner - eye)
        # Where the corner ray crosses the plane of the open front
        t = (eye[2] - BOX_HALF_SIZE) / -direction[2]
        hit = eye + t * direction
        assert abs(hit[0]) < BOX_HALF_SIZE
        assert abs(hit[1]) < BOX_HALF_SIZE


class TestCornellBoxRender:
    """Low sample count render of the preset."""

    def test_render_is_lit_and_not_saturated(self, renderer):
        from tracer.scene.cornell_box import create_cornell_box_scene

        scene, camera = create_cornell_box_scene()
        image = renderer.render(scene, camera, 8, 32, 32)
        mean = image.pixels.mean()
        assert 10.0 < mean < 250.0

    def test_left_wall_is_red_and_right_wall_is_blue(self, renderer):
        from tracer.scene.cornell_box import create_cornell_box_scene

        scene, camera = create_cornell_box_scene()
        image = renderer.render(scene, camera, 16, 32, 32).to_array().astype(float)
        left_strip = image[8:24, :3].reshape(-1, 3).mean(axis=0)
        right_strip = image[8:24, -3:].reshape(-1, 3).mean(axis=0)
        assert left_strip[0] > left_strip[2]
        assert right_strip[2] > right_strip[0]
