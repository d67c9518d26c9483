"""Block materials and the demo voxel landscape."""

import math
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..geometry.box import Box
from ..shading.material import Material
from ..shading.textures import TextureManager

ZERO = (0.0, 0.0, 0.0)

# name -> material parameters; texture files are looked up as <name>.png
MATERIAL_LIBRARY = {
    "glass": dict(diffuse=(0.9, 0.95, 1.0), albedo=(0.1, 5.0), specular=125.0,
                  reflectivity=0.15, transparency=0.85, refractive_index=1.5),
    "water": dict(diffuse=(0.0, 0.4, 0.8), albedo=(0.5, 0.5), specular=40.0,
                  reflectivity=0.2, transparency=0.7, refractive_index=1.33),
    "diamond_ore": dict(diffuse=(0.4, 0.6, 0.7), albedo=(0.6, 0.4), specular=80.0,
                        reflectivity=0.3, refractive_index=2.4),
    "obsidian": dict(diffuse=(0.1, 0.05, 0.15), albedo=(0.7, 0.3), specular=50.0,
                     reflectivity=0.25),
    "magma": dict(diffuse=(1.0, 0.3, 0.0), albedo=(0.9, 0.1), specular=50.0,
                  emission=(1.5, 0.5, 0.1)),
    "dirt": dict(diffuse=(0.4, 0.26, 0.13), albedo=(0.9, 0.1), specular=1.0),
    "grass": dict(diffuse=(0.2, 0.6, 0.2), albedo=(0.8, 0.2), specular=2.0),
    "leaves": dict(diffuse=(0.1, 0.5, 0.1), albedo=(0.7, 0.3), specular=3.0,
                   refractive_index=1.2),
    "oak": dict(diffuse=(0.6, 0.4, 0.2), albedo=(0.85, 0.15), specular=5.0),
    "wood_planks": dict(diffuse=(0.6, 0.4, 0.2), albedo=(0.85, 0.15), specular=5.0),
    "stone": dict(diffuse=(0.5, 0.5, 0.5), albedo=(0.8, 0.2), specular=8.0,
                  refractive_index=0.5),
    # Torches have no texture
    "torch": dict(diffuse=(1.0, 0.8, 0.3), albedo=(0.3, 0.1), specular=10.0,
                  emission=(2.0, 1.5, 0.5)),
}

UNTEXTURED = {"torch"}

TREE_POSITIONS = [(7.0, 6.0), (7.0, 2.0), (-6.0, 6.0), (2.0, 7.0)]

TORCH_POSITIONS = [
    (-3.0, 1.0, -3.0), (-3.0, 1.0, -8.0),
    (5.0, 1.0, -3.0), (5.0, 5.0, -5.0),
    (-7.0, 1.0, 1.0), (-7.0, 1.0, 5.0),
]


def build_materials(texture_dir: Optional[Union[str, Path]] = None) -> Dict[str, Material]:
    """Instantiate the block materials.

    Args:
        texture_dir: Directory holding ``<name>.png`` textures. When None the
            materials use their flat diffuse colors.

    Returns:
        Mapping from block name to material
    """
    materials = {}
    for name, params in MATERIAL_LIBRARY.items():
        texture = None
        if texture_dir is not None and name not in UNTEXTURED:
            texture = str(Path(texture_dir) / f"{name}.png")
        materials[name] = Material(texture=texture, **params)
    return materials


def load_material_textures(materials: Dict[str, Material], textures: TextureManager) -> int:
    """Load every texture referenced by ``materials``; returns how many were loaded."""
    texture_ids = sorted({m.texture for m in materials.values() if m.texture is not None})
    for texture_id in texture_ids:
        textures.load_texture(texture_id)
    return len(texture_ids)


def build_demo_scene(materials: Optional[Dict[str, Material]] = None) -> List[Box]:
    """Lay out the demo landscape.

    A ground disc of grass, dirt and stone; a stone and plank house with two
    glass windows and an oak roof; a stone tower topped with diamond ore; an
    obsidian portal filled with magma; a water pool ringed with small glass
    blocks; four trees; six torches and two showcase blocks.

    Args:
        materials: Block materials (defaults to untextured ``build_materials()``)

    Returns:
        Boxes in placement order
    """
    m = materials or build_materials()
    boxes = []

    def block(x, y, z, name, size=1.0):
        boxes.append(Box.cube((x, y, z), size, m[name]))

    # Ground
    for x in range(-8, 9):
        for z in range(-8, 9):
            dist_sq = x * x + z * z
            name = "grass" if dist_sq < 16 else ("dirt" if dist_sq < 49 else "stone")
            block(x, -1.0, z, name)

    # House walls and floor
    for x in range(-5, -1):
        for z in range(-7, -3):
            for y in range(0, 4):
                if y == 0 or x in (-5, -2) or z in (-7, -4):
                    block(x, y, z, "stone" if y == 0 else "wood_planks")

    # Windows
    block(-3.0, 2.0, -7.0, "glass")
    block(-4.0, 2.0, -4.0, "glass")

    # Roof
    for x in range(-6, 1):
        for z in range(-8, -2):
            block(x, 4.0, z, "oak")

    # Tower
    for y in range(0, 7):
        block(5.0, y, -5.0, "stone")
    block(5.0, 7.0, -5.0, "diamond_ore")

    # Portal frame
    for y in range(0, 4):
        block(-8.0, y, 2.0, "obsidian")
        block(-8.0, y, 4.0, "obsidian")
    for z in range(2, 5):
        block(-8.0, 0.0, z, "obsidian")
        block(-8.0, 3.0, z, "obsidian")
    for y in range(1, 3):
        block(-8.0, y, 3.0, "magma")

    # Pool
    for x in range(0, 3):
        for z in range(0, 3):
            block(x, 0.0, z, "stone")
    block(1.0, 1.0, 1.0, "water")
    block(1.0, 2.0, 1.0, "water")

    for step in range(8):
        angle = step * math.pi / 4.0
        block(1.0 + math.cos(angle) * 1.5, 3.0, 1.0 + math.sin(angle) * 1.5, "glass", size=0.5)

    # Trees
    for tx, tz in TREE_POSITIONS:
        for y in range(0, 4):
            block(tx, y, tz, "oak")
        for dx in (-1, 0, 1):
            for dz in (-1, 0, 1):
                block(tx + dx, 4.0, tz + dz, "leaves")

    for tx, ty, tz in TORCH_POSITIONS:
        block(tx, ty, tz, "torch", size=0.3)

    # Showcase blocks
    block(-1.0, 0.0, 7.0, "diamond_ore")
    block(-1.0, 0.0, -2.0, "magma")

    return boxes
