"""Configuration for rendering a frame."""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass
class RenderConfig:
    """Configuration for the ray tracer and frame renderer.

    Attributes:
        width: Frame width in pixels
        height: Frame height in pixels
        fov_degrees: Vertical field of view in degrees (default: 60)
        max_depth: Last recursion depth that is shaded; deeper rays return
            the environment color (default: 1, one bounce)
        shadow_attenuation: Light attenuation when a shadow ray is blocked
            (default: 0.7, blocked lights keep 30% of their intensity)
        max_emissive_lights: Emissive boxes turned into point lights per
            shading point, taken in scene order (default: 5)
        min_light_distance_sq: Emissive boxes closer than this squared
            distance to the shading point are skipped (default: 0.01)
        origin_bias: Offset along the normal for secondary ray origins
        hit_epsilon: Minimum entry distance accepted as a hit
        workers: Render processes; None uses every CPU, 1 renders in-process
        rows_per_task: Image rows handed to a worker at once
        show_progress: Show a progress bar while rendering
        output_path: Where the CLI writes the image
    """

    width: int = 640
    height: int = 480
    fov_degrees: float = 60.0
    max_depth: int = 1
    shadow_attenuation: float = 0.7
    max_emissive_lights: int = 5
    min_light_distance_sq: float = 0.01
    origin_bias: float = 1e-4
    hit_epsilon: float = 1e-4
    workers: Optional[int] = None
    rows_per_task: int = 8
    show_progress: bool = True
    output_path: Path = Path("render.png")

    def __post_init__(self):
        """Validate configuration."""
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Frame size must be positive, got {self.width}x{self.height}")
        if not 0.0 < self.fov_degrees < 180.0:
            raise ValueError(f"fov_degrees must be in (0, 180), got {self.fov_degrees}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if not 0.0 <= self.shadow_attenuation <= 1.0:
            raise ValueError(f"shadow_attenuation must be in [0, 1], got {self.shadow_attenuation}")
        if self.max_emissive_lights < 0:
            raise ValueError(f"max_emissive_lights must be non-negative, got {self.max_emissive_lights}")
        if self.origin_bias <= 0 or self.hit_epsilon <= 0:
            raise ValueError("origin_bias and hit_epsilon must be positive")
        if self.workers is not None and self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        if self.rows_per_task < 1:
            raise ValueError(f"rows_per_task must be >= 1, got {self.rows_per_task}")

        self.output_path = Path(self.output_path)

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def perspective_scale(self) -> float:
        """tan(fov / 2)."""
        return math.tan(math.radians(self.fov_degrees) * 0.5)

    @property
    def num_pixels(self) -> int:
        return self.width * self.height
