"""Box primitive and vector math."""

from .box import Box, Intersect, HIT_EPSILON, FACE_UV_AXES
from .vectors import vec3, normalize, reflect, refract, slab_interval

__all__ = [
    "Box",
    "Intersect",
    "HIT_EPSILON",
    "FACE_UV_AXES",
    "vec3",
    "normalize",
    "reflect",
    "refract",
    "slab_interval",
]
