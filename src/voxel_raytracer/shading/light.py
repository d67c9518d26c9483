"""Point lights: the primary sun and secondary lights from emissive boxes."""

import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ..geometry.vectors import vec3, normalize

DAY_COLOR = (1.0, 0.95, 0.8)
NIGHT_COLOR = (0.4, 0.4, 0.8)


@dataclass(eq=False)
class Light:
    """A point light.

    Attributes:
        position: World-space position (3,)
        color: RGB color (3,)
        intensity: Scalar intensity (>= 0)
    """
    position: np.ndarray
    color: np.ndarray
    intensity: float = 1.0

    def __post_init__(self):
        self.position = vec3(self.position)
        self.color = vec3(self.color)
        self.intensity = float(self.intensity)
        if self.intensity < 0:
            raise ValueError(f"intensity must be non-negative, got {self.intensity}")


def emissive_lights(
    emissive_boxes: Sequence,
    point: np.ndarray,
    max_lights: int = 5,
    min_distance_sq: float = 0.01
) -> List[Light]:
    """Synthesize secondary point lights from emissive boxes.

    The first ``max_lights`` boxes are taken in iteration order; a box whose
    center sits on top of the shading point is skipped but still counts
    against the cap.

    Args:
        emissive_boxes: Boxes with emissive materials, in scene order
        point: Shading point (3,)
        max_lights: Number of boxes considered
        min_distance_sq: Squared distance below which a box is skipped

    Returns:
        Lights at box centers, colored by the normalized emission and with
        the emission magnitude as intensity
    """
    lights = []
    for box in emissive_boxes[:max_lights]:
        center = box.center
        diff = center - point
        if float(np.dot(diff, diff)) < min_distance_sq:
            continue
        emission = box.material.emission
        lights.append(Light(center, normalize(emission), float(np.linalg.norm(emission))))
    return lights


def sun_light(time_of_day: float) -> Light:
    """Primary light for a point on the day/night clock.

    Args:
        time_of_day: Sun angle in radians; one full cycle is 2*pi

    Returns:
        The sun as a point light orbiting the scene
    """
    s = math.sin(time_of_day)
    c = math.cos(time_of_day)
    sun_distance = 20.0
    position = (c * sun_distance, s * 15.0 + 5.0, s * sun_distance * 0.5)
    intensity = max(s * 0.5 + 0.5, 0.2)
    color = DAY_COLOR if s > 0.0 else NIGHT_COLOR
    return Light(position, color, intensity)
