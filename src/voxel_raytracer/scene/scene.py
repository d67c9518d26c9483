"""Frozen scene: primitives, their hierarchy, emissive subset and textures."""

from typing import Iterable, Optional

from ..acceleration.bvh import BVH, MAX_LEAF_SIZE
from ..shading.textures import TextureManager


class Scene:
    """Read-only scene shared by every ray of a render.

    Building a scene consumes the primitive list: the hierarchy is built
    once, the emissive boxes are collected in scene order, and nothing is
    mutated afterwards.

    Args:
        primitives: Boxes making up the scene
        textures: Texture provider (a new empty one if not given)
        max_leaf_size: Hierarchy leaf size
    """

    def __init__(
        self,
        primitives: Iterable,
        textures: Optional[TextureManager] = None,
        max_leaf_size: int = MAX_LEAF_SIZE
    ):
        primitives = list(primitives)
        self.bvh = BVH.build(primitives, max_leaf_size=max_leaf_size)
        self.primitives = self.bvh.primitives
        self.emissive = tuple(p for p in self.primitives if p.material.is_emissive)
        self.textures = textures or TextureManager()

    def __len__(self) -> int:
        return len(self.primitives)

    def __repr__(self) -> str:
        return (f"Scene(primitives={len(self.primitives)}, emissive={len(self.emissive)}, "
                f"bvh_nodes={self.bvh.num_nodes})")
