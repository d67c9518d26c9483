"""Small vector helpers shared by the tracer.

Vectors are float64 numpy arrays of shape (3,). The hot slab test lives in a
numba kernel so that both the primitive intersection and the BVH traversal
use the same arithmetic.
"""

import numpy as np
from typing import Optional, Tuple
from numba import njit


def vec3(x, y=None, z=None) -> np.ndarray:
    """Build a float64 (3,) vector from three scalars or any 3-sequence."""
    if y is None:
        return np.asarray(x, dtype=np.float64).reshape(3)
    return np.array([x, y, z], dtype=np.float64)


def normalize(v: np.ndarray) -> np.ndarray:
    """Return v / |v|, or the zero vector when |v| is negligible."""
    length = float(np.sqrt(np.dot(v, v)))
    if length < 1e-12:
        return np.zeros(3, dtype=np.float64)
    return v / length


def reflect(incident: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """Reflect an incident direction about a unit normal."""
    return incident - 2.0 * np.dot(incident, normal) * normal


def refract(incident: np.ndarray, normal: np.ndarray, refractive_index: float) -> Optional[np.ndarray]:
    """Refract an incident direction through a surface using Snell's law.

    The normal is the outward surface normal. When the incident direction
    points along the normal the ray is leaving the medium and the indices
    are swapped.

    Args:
        incident: Unit incident direction
        normal: Unit outward surface normal
        refractive_index: Index of the medium behind the surface (> 0)

    Returns:
        Unit refracted direction, or None for total internal reflection or a
        non-physical index
    """
    if not refractive_index > 0.0 or not np.isfinite(refractive_index):
        return None

    cos_i = float(np.clip(np.dot(incident, normal), -1.0, 1.0))
    eta_i, eta_t = 1.0, refractive_index
    n = normal
    if cos_i < 0.0:
        cos_i = -cos_i
    else:
        eta_i, eta_t = eta_t, eta_i
        n = -normal

    eta = eta_i / eta_t
    k = 1.0 - eta * eta * (1.0 - cos_i * cos_i)
    if k < 0.0:
        return None

    return normalize(eta * incident + (eta * cos_i - np.sqrt(k)) * n)


@njit(cache=True)
def slab_interval(
    origin: np.ndarray,
    direction: np.ndarray,
    bmin: np.ndarray,
    bmax: np.ndarray
) -> Tuple[float, float, int]:
    """Slab test of a ray against an axis-aligned box.

    An axis with a zero direction component constrains nothing while the
    origin lies inside that slab, and rejects the ray otherwise, so no
    division by zero ever happens.

    Returns:
        (t_near, t_far, near_axis). near_axis is the axis that produced the
        tightest entry bound, or -1 when no axis constrained the entry.
        An empty interval is reported as t_near > t_far.
    """
    t_near = -np.inf
    t_far = np.inf
    near_axis = -1

    for axis in range(3):
        d = direction[axis]
        o = origin[axis]
        if d == 0.0:
            if o < bmin[axis] or o > bmax[axis]:
                return np.inf, -np.inf, -1
            continue

        inv_d = 1.0 / d
        t0 = (bmin[axis] - o) * inv_d
        t1 = (bmax[axis] - o) * inv_d
        if t0 > t1:
            t0, t1 = t1, t0

        if t0 > t_near:
            t_near = t0
            near_axis = axis
        if t1 < t_far:
            t_far = t1

    return t_near, t_far, near_axis
