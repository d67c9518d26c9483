"""Materials, lights, textures and environment sampling.

Example:
    >>> import numpy as np
    >>> from voxel_raytracer.shading import TextureManager
    >>> textures = TextureManager()
    >>> textures.sample_skybox(np.array([0.0, 1.0, 0.0]))  # procedural sky
    array([0.3, 0.5, 1. ])
"""

from .material import Material
from .light import Light, emissive_lights, sun_light
from .textures import TextureManager, SkyboxTextures, procedural_sky

__all__ = [
    "Material",
    "Light",
    "emissive_lights",
    "sun_light",
    "TextureManager",
    "SkyboxTextures",
    "procedural_sky",
]
