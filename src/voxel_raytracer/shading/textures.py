"""Texture provider and skybox environment sampling.

Images are decoded once with Pillow into normalized float32 RGB arrays of
shape (H, W, 3) and looked up by integer pixel coordinates on the CPU.
"""

import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

import numpy as np
from PIL import Image

WHITE = np.ones(3, dtype=np.float64)

# Procedural sky gradient colors
SKY_GREEN = np.array([0.1, 0.6, 0.2])
SKY_WHITE = np.array([1.0, 1.0, 1.0])
SKY_BLUE = np.array([0.3, 0.5, 1.0])


@dataclass
class SkyboxTextures:
    """Texture identifiers of the six skybox faces."""
    front: str
    back: str
    left: str
    right: str
    top: str
    bottom: str

    @classmethod
    def from_directory(cls, directory: Union[str, Path], extension: str = ".png") -> "SkyboxTextures":
        """Faces named ``front.png``, ``back.png``, ... inside one directory."""
        directory = Path(directory)
        return cls(**{
            face: str(directory / f"{face}{extension}")
            for face in ("front", "back", "left", "right", "top", "bottom")
        })

    def faces(self) -> Tuple[str, ...]:
        return (self.front, self.back, self.left, self.right, self.top, self.bottom)


def procedural_sky(direction: np.ndarray) -> np.ndarray:
    """Vertical green -> white -> blue gradient used when no skybox is set."""
    length = float(np.linalg.norm(direction))
    y = direction[1] / length if length > 0.0 else 0.0
    t = (y + 1.0) * 0.5

    if t < 0.54:
        k = t / 0.55
        return SKY_GREEN * (1.0 - k) + SKY_WHITE * k
    elif t < 0.55:
        return SKY_WHITE.copy()
    elif t < 0.8:
        k = (t - 0.55) / 0.25
        return SKY_WHITE * (1.0 - k) + SKY_BLUE * k
    return SKY_BLUE.copy()


class TextureManager:
    """Keeps decoded textures and the optional skybox.

    Textures are registered once before rendering and only read afterwards,
    so a manager can be shared by every render worker.

    Example:
        >>> textures = TextureManager()
        >>> textures.add_texture("checker", np.array([[[1, 1, 1], [0, 0, 0]]]))
        >>> textures.get_pixel_color("checker", 1, 0)
        array([0., 0., 0.])
    """

    def __init__(self):
        self._textures: Dict[str, np.ndarray] = {}
        self._warned_missing = set()
        self.skybox: Optional[SkyboxTextures] = None

    def __getstate__(self):
        state = self.__dict__.copy()
        state["_warned_missing"] = set()
        return state

    def __contains__(self, texture_id: str) -> bool:
        return texture_id in self._textures

    def load_texture(self, path: Union[str, Path], texture_id: Optional[str] = None) -> str:
        """Decode an image file and register it.

        Args:
            path: Image file path
            texture_id: Identifier to register under (defaults to the path string)

        Returns:
            The identifier the texture was registered under

        Raises:
            FileNotFoundError: If the file doesn't exist
            ValueError: If the file cannot be decoded as an image
        """
        path = Path(path)
        texture_id = texture_id or str(path)
        if texture_id in self._textures:
            return texture_id

        if not path.exists():
            raise FileNotFoundError(f"Texture file not found: {path}")

        try:
            with Image.open(path) as image:
                pixels = np.asarray(image.convert("RGB"), dtype=np.float32) / 255.0
        except OSError as e:
            raise ValueError(f"Failed to load texture from {path}: {e}")

        self._textures[texture_id] = pixels
        return texture_id

    def add_texture(self, texture_id: str, pixels: np.ndarray) -> None:
        """Register already decoded RGB pixels of shape (H, W, 3) in [0, 1]."""
        pixels = np.asarray(pixels, dtype=np.float32)
        if pixels.ndim != 3 or pixels.shape[2] != 3 or pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError(f"Texture pixels must have shape (H, W, 3), got {pixels.shape}")
        self._textures[texture_id] = pixels

    def texture_size(self, texture_id: str) -> Optional[Tuple[int, int]]:
        """(width, height) of a texture, or None if unknown."""
        pixels = self._textures.get(texture_id)
        if pixels is None:
            return None
        return pixels.shape[1], pixels.shape[0]

    def _warn_missing(self, texture_id: str) -> None:
        if texture_id not in self._warned_missing:
            self._warned_missing.add(texture_id)
            warnings.warn(f"Texture '{texture_id}' is not loaded, using white", UserWarning)

    def get_pixel_color(self, texture_id: str, tx: int, ty: int) -> np.ndarray:
        """RGB color of one texel; coordinates are clamped, misses are white."""
        pixels = self._textures.get(texture_id)
        if pixels is None:
            self._warn_missing(texture_id)
            return WHITE.copy()

        height, width = pixels.shape[:2]
        x = min(max(int(tx), 0), width - 1)
        y = min(max(int(ty), 0), height - 1)
        return pixels[y, x].astype(np.float64)

    def sample(self, texture_id: str, u: float, v: float) -> np.ndarray:
        """Nearest-texel lookup at texture coordinates (u, v) in [0, 1]."""
        size = self.texture_size(texture_id)
        if size is None:
            self._warn_missing(texture_id)
            return WHITE.copy()
        width, height = size
        return self.get_pixel_color(texture_id, int(u * width), int(v * height))

    def get_normal_from_map(self, texture_id: str, tx: int, ty: int) -> Optional[np.ndarray]:
        """Decode a tangent-space normal (2r-1, 2g-1, b) from a normal map."""
        pixels = self._textures.get(texture_id)
        if pixels is None:
            return None

        height, width = pixels.shape[:2]
        x = min(max(int(tx), 0), width - 1)
        y = min(max(int(ty), 0), height - 1)
        r, g, b = pixels[y, x].astype(np.float64)
        normal = np.array([r * 2.0 - 1.0, g * 2.0 - 1.0, b])
        length = np.linalg.norm(normal)
        if length == 0.0:
            return None
        return normal / length

    def load_skybox(self, skybox: SkyboxTextures) -> None:
        """Load all six faces and enable cube-map sampling."""
        for face in skybox.faces():
            self.load_texture(face)
        self.skybox = skybox

    def sample_skybox(self, direction: np.ndarray) -> np.ndarray:
        """Environment color seen along a direction that hits nothing.

        With a skybox the dominant axis of the direction picks the face and
        the other two components, divided by the dominant one, give the
        face-local (u, v). Without one the procedural gradient is used.
        """
        if self.skybox is None:
            return procedural_sky(direction)

        x, y, z = float(direction[0]), float(direction[1]), float(direction[2])
        abs_x, abs_y, abs_z = abs(x), abs(y), abs(z)
        skybox = self.skybox

        if abs_x > abs_y and abs_x > abs_z:
            if x > 0.0:
                u, v, face = -z / abs_x, -y / abs_x, skybox.right
            else:
                u, v, face = z / abs_x, -y / abs_x, skybox.left
        elif abs_y > abs_z:
            if y > 0.0:
                u, v, face = x / abs_y, -z / abs_y, skybox.top
            else:
                u, v, face = x / abs_y, z / abs_y, skybox.bottom
        else:
            if abs_z == 0.0:
                # Zero direction; no face can be selected
                return WHITE.copy()
            if z > 0.0:
                u, v, face = x / abs_z, -y / abs_z, skybox.front
            else:
                u, v, face = -x / abs_z, -y / abs_z, skybox.back

        u = min(max(u * 0.5 + 0.5, 0.0), 1.0)
        v = min(max(v * 0.5 + 0.5, 0.0), 1.0)

        pixels = self._textures.get(face)
        if pixels is None:
            return WHITE.copy()

        height, width = pixels.shape[:2]
        tx = int(u * (width - 1))
        ty = int(v * (height - 1))
        return pixels[ty, tx].astype(np.float64)
