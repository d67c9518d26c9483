"""Camera, frozen scene and the demo landscape."""

from .camera import Camera
from .scene import Scene
from .presets import build_materials, build_demo_scene, load_material_textures, MATERIAL_LIBRARY

__all__ = [
    "Camera",
    "Scene",
    "build_materials",
    "build_demo_scene",
    "load_material_textures",
    "MATERIAL_LIBRARY",
]
