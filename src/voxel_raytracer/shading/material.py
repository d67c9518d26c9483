"""Surface materials for box primitives."""

from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np


def _frozen_vec3(values) -> np.ndarray:
    arr = np.array(values, dtype=np.float64).reshape(3)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Material:
    """Optical parameters of a surface.

    Materials are immutable and shared by reference between every box that
    uses the same finish.

    Attributes:
        diffuse: Flat diffuse RGB color, used when no texture is set
        albedo: (diffuse_weight, specular_weight), both non-negative
        specular: Phong exponent (>= 0)
        reflectivity: Mirror reflection weight in [0, 1]
        transparency: Refraction weight in [0, 1]
        refractive_index: Index of refraction (> 0)
        texture: Texture identifier resolved by the texture provider
        normal_map: Normal map identifier (carried, not applied to shading)
        emission: Emitted RGB radiance; the zero vector means non-emissive

    Example:
        >>> glass = Material(diffuse=(0.9, 0.95, 1.0), albedo=(0.1, 5.0),
        ...                  specular=125.0, reflectivity=0.15,
        ...                  transparency=0.85, refractive_index=1.5)
        >>> glass.is_emissive
        False
    """
    diffuse: np.ndarray = field(default_factory=lambda: np.ones(3))
    albedo: Tuple[float, float] = (1.0, 0.0)
    specular: float = 0.0
    reflectivity: float = 0.0
    transparency: float = 0.0
    refractive_index: float = 1.0
    texture: Optional[str] = None
    normal_map: Optional[str] = None
    emission: np.ndarray = field(default_factory=lambda: np.zeros(3))

    def __post_init__(self):
        """Validate ranges and freeze vector fields."""
        object.__setattr__(self, "diffuse", _frozen_vec3(self.diffuse))
        object.__setattr__(self, "emission", _frozen_vec3(self.emission))

        if len(self.albedo) != 2:
            raise ValueError(f"albedo must have 2 components, got {len(self.albedo)}")
        albedo = (float(self.albedo[0]), float(self.albedo[1]))
        if albedo[0] < 0 or albedo[1] < 0:
            raise ValueError(f"albedo weights must be non-negative, got {albedo}")
        object.__setattr__(self, "albedo", albedo)

        if self.specular < 0:
            raise ValueError(f"specular must be non-negative, got {self.specular}")
        if not 0.0 <= self.reflectivity <= 1.0:
            raise ValueError(f"reflectivity must be in [0, 1], got {self.reflectivity}")
        if not 0.0 <= self.transparency <= 1.0:
            raise ValueError(f"transparency must be in [0, 1], got {self.transparency}")
        if not self.refractive_index > 0:
            raise ValueError(f"refractive_index must be positive, got {self.refractive_index}")
        if np.any(self.emission < 0):
            raise ValueError(f"emission must be non-negative, got {self.emission}")

    @property
    def emission_strength(self) -> float:
        """Magnitude of the emission vector."""
        return float(np.linalg.norm(self.emission))

    @property
    def is_emissive(self) -> bool:
        """True when the material emits light."""
        return float(np.dot(self.emission, self.emission)) > 0.0
