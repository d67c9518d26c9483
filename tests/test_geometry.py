"""Tests for the box primitive and vector helpers."""

import numpy as np
import pytest

from voxel_raytracer.geometry import (
    Box,
    Intersect,
    normalize,
    reflect,
    refract,
    slab_interval,
)
from voxel_raytracer.shading import Material


@pytest.fixture
def unit_box():
    """Box spanning [0, 1]^3."""
    return Box((0, 0, 0), (1, 1, 1), Material())


class TestBoxConstruction:
    """Tests for Box validation and helpers."""

    def test_cube_from_center(self):
        """Test cube bounds from center and size."""
        box = Box.cube((1.0, 2.0, 3.0), 2.0, Material())
        np.testing.assert_allclose(box.min_bounds, [0.0, 1.0, 2.0])
        np.testing.assert_allclose(box.max_bounds, [2.0, 3.0, 4.0])
        np.testing.assert_allclose(box.center, [1.0, 2.0, 3.0])

    def test_inverted_box_rejected(self):
        """Test that inverted bounds are rejected."""
        with pytest.raises(ValueError):
            Box((1, 0, 0), (0, 1, 1), Material())

    def test_zero_extent_rejected(self):
        """Test that flat boxes are rejected."""
        with pytest.raises(ValueError):
            Box((0, 0, 0), (1, 0, 1), Material())

    def test_bounds_are_read_only(self, unit_box):
        """Test that bounds cannot be modified after construction."""
        with pytest.raises(ValueError):
            unit_box.min_bounds[0] = 5.0


class TestRayIntersect:
    """Tests for the slab intersection."""

    @pytest.mark.parametrize("axis", [0, 1, 2])
    @pytest.mark.parametrize("sign", [1.0, -1.0])
    def test_axis_aligned_hit(self, axis, sign):
        """Test rays aimed at the center along each axis."""
        box = Box.cube((0.5, -2.0, 3.0), 1.0, Material())
        direction = np.zeros(3)
        direction[axis] = sign
        origin = box.center - direction * 5.0

        hit = box.ray_intersect(origin, direction)

        assert hit.is_intersecting
        assert hit.distance > 0
        assert np.isclose(hit.distance, 4.5)
        expected_normal = np.zeros(3)
        expected_normal[axis] = -sign
        np.testing.assert_array_equal(hit.normal, expected_normal)
        np.testing.assert_allclose(hit.point, box.center - direction * 0.5)

    def test_uv_on_top_face(self, unit_box):
        """Test face-local texture coordinates on the +Y face."""
        hit = unit_box.ray_intersect(np.array([0.25, 5.0, 0.75]), np.array([0.0, -1.0, 0.0]))

        assert hit.is_intersecting
        np.testing.assert_array_equal(hit.normal, [0.0, 1.0, 0.0])
        assert np.isclose(hit.u, 0.25)
        assert np.isclose(hit.v, 0.75)

    def test_uv_on_side_face(self):
        """Test texture coordinates are normalized by the box span."""
        box = Box((0, 0, 0), (2, 4, 8), Material())
        hit = box.ray_intersect(np.array([-3.0, 1.0, 2.0]), np.array([1.0, 0.0, 0.0]))

        assert hit.is_intersecting
        np.testing.assert_array_equal(hit.normal, [-1.0, 0.0, 0.0])
        assert np.isclose(hit.u, 0.25)   # y / 4
        assert np.isclose(hit.v, 0.25)   # z / 8

    def test_oblique_hit_normal(self, unit_box):
        """Test that the normal comes from the face actually entered."""
        direction = normalize(np.array([1.0, 0.1, 0.0]))
        hit = unit_box.ray_intersect(np.array([-1.0, 0.5, 0.5]), direction)

        assert hit.is_intersecting
        np.testing.assert_array_equal(hit.normal, [-1.0, 0.0, 0.0])
        assert 0.0 <= hit.u <= 1.0 and 0.0 <= hit.v <= 1.0

    def test_parallel_ray_outside_slab_misses(self, unit_box):
        """Test that a ray parallel to a slab it is outside of misses."""
        hit = unit_box.ray_intersect(np.array([5.0, 0.5, -3.0]), np.array([0.0, 0.0, 1.0]))
        assert not hit.is_intersecting

    def test_ray_pointing_away_misses(self, unit_box):
        """Test that a box behind the ray is not hit."""
        hit = unit_box.ray_intersect(np.array([0.5, 0.5, 3.0]), np.array([0.0, 0.0, 1.0]))
        assert not hit.is_intersecting

    def test_ray_from_inside_misses(self, unit_box):
        """Test that a ray starting inside the box does not hit it."""
        hit = unit_box.ray_intersect(np.array([0.5, 0.5, 0.5]), np.array([0.0, 1.0, 0.0]))
        assert not hit.is_intersecting

    def test_hit_at_origin_rejected(self, unit_box):
        """Test that hits closer than epsilon are rejected."""
        hit = unit_box.ray_intersect(np.array([0.5, 1.0, 0.5]), np.array([0.0, -1.0, 0.0]))
        assert not hit.is_intersecting

    def test_zero_direction_is_finite(self, unit_box):
        """Test that a zero direction yields a miss, not NaN."""
        hit = unit_box.ray_intersect(np.array([0.5, 3.0, 0.5]), np.zeros(3))
        assert not hit.is_intersecting

    def test_empty_intersect(self):
        """Test the miss record."""
        miss = Intersect.empty()
        assert not miss.is_intersecting
        assert miss.distance == np.inf
        assert miss.material is None


class TestSlabInterval:
    """Tests for the shared slab kernel."""

    def test_zero_component_inside_slab(self):
        """Test that a zero component inside its slab leaves the interval open."""
        t_near, t_far, axis = slab_interval(
            np.array([0.5, 0.5, -2.0]), np.array([0.0, 0.0, 1.0]),
            np.zeros(3), np.ones(3)
        )
        assert np.isclose(t_near, 2.0)
        assert np.isclose(t_far, 3.0)
        assert axis == 2

    def test_zero_component_outside_slab(self):
        """Test that a zero component outside its slab empties the interval."""
        t_near, t_far, axis = slab_interval(
            np.array([2.0, 0.5, -2.0]), np.array([0.0, 0.0, 1.0]),
            np.zeros(3), np.ones(3)
        )
        assert t_near > t_far
        assert axis == -1


class TestVectors:
    """Tests for reflect/refract."""

    def test_reflect(self):
        """Test mirror reflection about a normal."""
        r = reflect(np.array([1.0, -1.0, 0.0]), np.array([0.0, 1.0, 0.0]))
        np.testing.assert_allclose(r, [1.0, 1.0, 0.0])

    def test_normalize_zero(self):
        """Test that normalizing the zero vector stays finite."""
        np.testing.assert_array_equal(normalize(np.zeros(3)), np.zeros(3))

    def test_refract_normal_incidence(self):
        """Test that normal incidence passes straight through."""
        t = refract(np.array([0.0, -1.0, 0.0]), np.array([0.0, 1.0, 0.0]), 1.5)
        np.testing.assert_allclose(t, [0.0, -1.0, 0.0], atol=1e-12)

    def test_refract_bends_towards_normal(self):
        """Test Snell's law when entering a denser medium."""
        incident = normalize(np.array([1.0, -1.0, 0.0]))
        t = refract(incident, np.array([0.0, 1.0, 0.0]), 1.5)

        sin_i = np.sqrt(0.5)
        sin_t = abs(t[0])
        assert np.isclose(sin_i / sin_t, 1.5)
        assert t[1] < 0
        assert np.isclose(np.linalg.norm(t), 1.0)

    def test_total_internal_reflection(self):
        """Test that grazing exit from a dense medium gives no refraction."""
        incident = normalize(np.array([1.0, 0.2, 0.0]))
        assert refract(incident, np.array([0.0, 1.0, 0.0]), 1.5) is None

    def test_non_physical_index(self):
        """Test that a non-positive index gives no refraction."""
        assert refract(np.array([0.0, -1.0, 0.0]), np.array([0.0, 1.0, 0.0]), 0.0) is None
