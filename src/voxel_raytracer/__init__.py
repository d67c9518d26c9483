"""Recursive ray tracer for scenes built from axis-aligned boxes."""

from .geometry.box import Box, Intersect
from .acceleration.bvh import BVH
from .shading.material import Material
from .shading.light import Light, sun_light
from .shading.textures import TextureManager, SkyboxTextures
from .scene.camera import Camera
from .scene.scene import Scene
from .tracing.tracer import RayTracer
from .tracing.renderer import FrameRenderer
from .utils.config import RenderConfig

__version__ = "0.1.0"
__all__ = [
    "Box",
    "Intersect",
    "BVH",
    "Material",
    "Light",
    "sun_light",
    "TextureManager",
    "SkyboxTextures",
    "Camera",
    "Scene",
    "RayTracer",
    "FrameRenderer",
    "RenderConfig",
]
