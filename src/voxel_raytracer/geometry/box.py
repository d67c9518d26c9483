"""Axis-aligned box primitive and its intersection record."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .vectors import vec3, slab_interval
from ..shading.material import Material

# Smallest accepted entry distance; rejects hits at the ray origin
HIT_EPSILON = 1e-4

# Face-local UV axes keyed by the axis the face is perpendicular to
# (0=X: Y=u, Z=v; 1=Y: X=u, Z=v; 2=Z: X=u, Y=v)
FACE_UV_AXES = {
    0: (1, 2),
    1: (0, 2),
    2: (0, 1),
}


@dataclass
class Intersect:
    """Result of one ray/primitive query.

    Attributes:
        is_intersecting: Whether the ray hit the primitive
        point: World-space hit point (3,)
        normal: Outward unit face normal (3,)
        distance: Ray parameter of the hit (>= 0)
        material: Material of the hit primitive
        u: Face-local texture coordinate in [0, 1]
        v: Face-local texture coordinate in [0, 1]
    """
    is_intersecting: bool = False
    point: np.ndarray = field(default_factory=lambda: np.zeros(3))
    normal: np.ndarray = field(default_factory=lambda: np.zeros(3))
    distance: float = np.inf
    material: Optional[Material] = None
    u: float = 0.0
    v: float = 0.0

    @classmethod
    def empty(cls) -> "Intersect":
        """A miss."""
        return cls()


class Box:
    """Axis-aligned box with an attached material.

    Args:
        min_bounds: Minimum corner (3,)
        max_bounds: Maximum corner (3,)
        material: Surface material (shared, immutable)

    Raises:
        ValueError: If the box is inverted or has zero extent on any axis
    """

    __slots__ = ("min_bounds", "max_bounds", "material")

    def __init__(self, min_bounds, max_bounds, material: Material):
        min_bounds = vec3(min_bounds)
        max_bounds = vec3(max_bounds)
        if not np.all(np.isfinite(min_bounds)) or not np.all(np.isfinite(max_bounds)):
            raise ValueError("Box bounds must be finite")
        if np.any(max_bounds <= min_bounds):
            raise ValueError(
                f"Box must have positive extent on every axis, "
                f"got min={min_bounds.tolist()} max={max_bounds.tolist()}"
            )
        min_bounds.flags.writeable = False
        max_bounds.flags.writeable = False
        self.min_bounds = min_bounds
        self.max_bounds = max_bounds
        self.material = material

    @classmethod
    def cube(cls, center, size: float, material: Material) -> "Box":
        """Build a cube from its center and edge length."""
        center = vec3(center)
        half = size * 0.5
        return cls(center - half, center + half, material)

    @property
    def center(self) -> np.ndarray:
        """Bounding-box center."""
        return (self.min_bounds + self.max_bounds) * 0.5

    @property
    def extent(self) -> np.ndarray:
        return self.max_bounds - self.min_bounds

    def ray_intersect(self, origin: np.ndarray, direction: np.ndarray,
                      epsilon: float = HIT_EPSILON) -> Intersect:
        """Intersect a ray with the box using the slab method.

        Args:
            origin: Ray origin (3,)
            direction: Unit ray direction (3,)
            epsilon: Minimum accepted entry distance

        Returns:
            Intersect describing the entry hit, or an empty Intersect
        """
        origin = np.asarray(origin, dtype=np.float64)
        direction = np.asarray(direction, dtype=np.float64)

        t_near, t_far, axis = slab_interval(origin, direction, self.min_bounds, self.max_bounds)
        if t_near > t_far or t_near < epsilon or axis < 0:
            return Intersect.empty()

        point = origin + direction * t_near
        normal = np.zeros(3, dtype=np.float64)
        normal[axis] = -1.0 if direction[axis] > 0 else 1.0

        u_axis, v_axis = FACE_UV_AXES[axis]
        extent = self.extent
        u = (point[u_axis] - self.min_bounds[u_axis]) / extent[u_axis]
        v = (point[v_axis] - self.min_bounds[v_axis]) / extent[v_axis]

        return Intersect(
            is_intersecting=True,
            point=point,
            normal=normal,
            distance=float(t_near),
            material=self.material,
            u=min(max(float(u), 0.0), 1.0),
            v=min(max(float(v), 0.0), 1.0),
        )

    def __repr__(self) -> str:
        return f"Box(min={self.min_bounds.tolist()}, max={self.max_bounds.tolist()})"
