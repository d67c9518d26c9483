"""Tests for materials, lights, the camera and the demo scene."""

import dataclasses
import math

import numpy as np
import pytest

from voxel_raytracer import Box, Camera, Light, Material, Scene, sun_light
from voxel_raytracer.scene import MATERIAL_LIBRARY, build_demo_scene, build_materials, load_material_textures
from voxel_raytracer.shading import TextureManager
from voxel_raytracer.shading.light import DAY_COLOR, NIGHT_COLOR


class TestMaterial:
    """Tests for Material validation."""

    def test_defaults(self):
        material = Material()
        np.testing.assert_array_equal(material.diffuse, np.ones(3))
        assert material.albedo == (1.0, 0.0)
        assert not material.is_emissive
        assert material.emission_strength == 0.0

    def test_emissive(self):
        material = Material(emission=(3.0, 4.0, 0.0))
        assert material.is_emissive
        assert math.isclose(material.emission_strength, 5.0)

    def test_immutable(self):
        """Test that materials can be shared without being modified."""
        material = Material(diffuse=(0.5, 0.5, 0.5))
        with pytest.raises(dataclasses.FrozenInstanceError):
            material.specular = 3.0
        with pytest.raises(ValueError):
            material.diffuse[0] = 1.0

    @pytest.mark.parametrize("kwargs", [
        {"albedo": (1.0,)},
        {"albedo": (-0.1, 0.0)},
        {"specular": -1.0},
        {"reflectivity": 1.5},
        {"transparency": -0.1},
        {"refractive_index": 0.0},
        {"emission": (-1.0, 0.0, 0.0)},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            Material(**kwargs)


class TestLights:
    """Tests for the primary sun light."""

    def test_negative_intensity_rejected(self):
        with pytest.raises(ValueError):
            Light((0.0, 0.0, 0.0), (1.0, 1.0, 1.0), -1.0)

    def test_noon(self):
        light = sun_light(math.pi / 2.0)
        np.testing.assert_allclose(light.position, [0.0, 20.0, 10.0], atol=1e-12)
        assert math.isclose(light.intensity, 1.0)
        np.testing.assert_allclose(light.color, DAY_COLOR)

    def test_night_floor(self):
        """Test that the sun never drops below 20% intensity."""
        light = sun_light(3.0 * math.pi / 2.0)
        assert math.isclose(light.intensity, 0.2)
        np.testing.assert_allclose(light.color, NIGHT_COLOR)

    def test_dawn(self):
        light = sun_light(0.0)
        np.testing.assert_allclose(light.position, [20.0, 5.0, 0.0])
        assert math.isclose(light.intensity, 0.5)
        np.testing.assert_allclose(light.color, NIGHT_COLOR)


class TestCamera:
    """Tests for the look-at basis."""

    def test_orthonormal(self):
        camera = Camera((3.0, 5.0, 7.0), (0.0, 1.0, 0.0))
        basis = np.stack([camera.right, camera.up, camera.forward])
        np.testing.assert_allclose(basis @ basis.T, np.eye(3), atol=1e-12)

    def test_forward_points_at_center(self):
        camera = Camera((0.0, 10.0, 13.0), (0.0, 2.0, 0.0))
        expected = np.array([0.0, -8.0, -13.0]) / math.sqrt(64.0 + 169.0)
        np.testing.assert_allclose(camera.forward, expected)
        np.testing.assert_allclose(camera.basis_change(np.array([0.0, 0.0, -1.0])), expected)

    def test_up_stays_up(self):
        camera = Camera((0.0, 0.0, 5.0), (0.0, 0.0, 0.0))
        np.testing.assert_allclose(camera.up, [0.0, 1.0, 0.0])
        np.testing.assert_allclose(camera.right, [1.0, 0.0, 0.0])

    def test_looking_straight_down(self):
        camera = Camera((0.0, 5.0, 0.0), (0.0, 0.0, 0.0))
        np.testing.assert_allclose(camera.forward, [0.0, -1.0, 0.0])
        assert math.isclose(np.linalg.norm(camera.right), 1.0)
        assert abs(np.dot(camera.right, camera.forward)) < 1e-12

    def test_update_basis_after_move(self):
        camera = Camera((0.0, 0.0, 5.0), (0.0, 0.0, 0.0))
        camera.eye = np.array([5.0, 0.0, 0.0])
        camera.update_basis()
        np.testing.assert_allclose(camera.forward, [-1.0, 0.0, 0.0])

    def test_coincident_eye_and_center(self):
        with pytest.raises(ValueError):
            Camera((1.0, 1.0, 1.0), (1.0, 1.0, 1.0))


class TestScene:
    """Tests for Scene construction and the demo landscape."""

    def test_emissive_subset(self):
        glow = Material(emission=(1.0, 0.0, 0.0))
        boxes = [Box.cube((float(i), 0.0, 0.0), 1.0, glow if i % 3 == 0 else Material())
                 for i in range(10)]
        scene = Scene(boxes)

        assert len(scene) == 10
        assert len(scene.emissive) == 4
        assert all(box.material.is_emissive for box in scene.emissive)
        order = [scene.primitives.index(box) for box in scene.emissive]
        assert order == sorted(order)

    def test_default_textures(self):
        scene = Scene([])
        assert isinstance(scene.textures, TextureManager)
        assert len(scene) == 0

    def test_demo_scene(self):
        scene = Scene(build_demo_scene())
        assert len(scene) == 488
        assert len(scene.emissive) == 9

    def test_materials_without_textures(self):
        materials = build_materials()
        assert set(materials) == set(MATERIAL_LIBRARY)
        assert all(m.texture is None for m in materials.values())

    def test_material_texture_paths(self, tmp_path):
        materials = build_materials(tmp_path)
        assert materials["torch"].texture is None
        assert materials["stone"].texture == str(tmp_path / "stone.png")
        assert materials["glass"].transparency == 0.85

    def test_load_material_textures(self, tmp_path):
        from PIL import Image

        materials = build_materials(tmp_path)
        for name in MATERIAL_LIBRARY:
            Image.new("RGB", (2, 2), (10, 20, 30)).save(tmp_path / f"{name}.png")
        textures = TextureManager()

        n_loaded = load_material_textures(materials, textures)

        assert n_loaded == len(MATERIAL_LIBRARY) - 1
        assert materials["grass"].texture in textures
