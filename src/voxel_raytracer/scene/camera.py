"""Look-at camera supplying the eye position and the view basis."""

import numpy as np

from ..geometry.vectors import vec3, normalize


class Camera:
    """Pinhole camera looking from ``eye`` towards ``center``.

    The basis maps camera space (x right, y up, -z forward) to world space.
    It is recomputed by ``update_basis`` whenever the eye or center move and
    is only read while a frame renders.

    Args:
        eye: Camera position
        center: Point the camera looks at
        up: Approximate world up direction
    """

    def __init__(self, eye, center, up=(0.0, 1.0, 0.0)):
        self.eye = vec3(eye)
        self.center = vec3(center)
        self.up = vec3(up)
        self.update_basis()

    def update_basis(self) -> None:
        """Recompute the orthonormal (right, up, forward) basis."""
        forward = self.center - self.eye
        if np.linalg.norm(forward) < 1e-12:
            raise ValueError("Camera eye and center must not coincide")
        forward = normalize(forward)

        right = np.cross(forward, self.up)
        if np.linalg.norm(right) < 1e-8:
            # Looking straight along up; pick any perpendicular axis
            fallback = np.array([1.0, 0.0, 0.0]) if abs(forward[0]) < 0.9 else np.array([0.0, 0.0, 1.0])
            right = np.cross(forward, fallback)
        right = normalize(right)

        self.forward = forward
        self.right = right
        self.up = np.cross(right, forward)

    def basis_change(self, direction: np.ndarray) -> np.ndarray:
        """Transform a camera-space direction into world space."""
        return direction[0] * self.right + direction[1] * self.up - direction[2] * self.forward

    def __repr__(self) -> str:
        return f"Camera(eye={self.eye.tolist()}, center={self.center.tolist()})"
