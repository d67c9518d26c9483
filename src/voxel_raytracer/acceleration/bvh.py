"""Bounding volume hierarchy over box primitives.

The hierarchy is built once from the frozen primitive list and flattened into
numpy arrays so that traversal runs inside a numba kernel. Traversal is
conservative: it may return primitives the ray misses, but never drops one
whose bounds the ray enters.
"""

from typing import List, Sequence

import numpy as np
from numba import njit

from ..geometry.vectors import slab_interval

MAX_LEAF_SIZE = 4


@njit(cache=True)
def _traverse_bvh(
    origin: np.ndarray,
    direction: np.ndarray,
    node_min: np.ndarray,
    node_max: np.ndarray,
    node_left: np.ndarray,
    node_right: np.ndarray,
    node_start: np.ndarray,
    node_count: np.ndarray,
    n_primitives: int
) -> np.ndarray:
    """Stack-based walk returning indices of candidate primitives."""
    out = np.empty(n_primitives, dtype=np.int64)
    n_out = 0
    n_nodes = node_min.shape[0]
    if n_nodes == 0:
        return out[:0]

    stack = np.empty(n_nodes, dtype=np.int64)
    stack[0] = 0
    sp = 1

    while sp > 0:
        sp -= 1
        node = stack[sp]

        t_near, t_far, _ = slab_interval(origin, direction, node_min[node], node_max[node])
        if t_near > t_far or t_far < 0.0:
            continue

        if node_count[node] > 0:
            start = node_start[node]
            for i in range(start, start + node_count[node]):
                out[n_out] = i
                n_out += 1
        else:
            stack[sp] = node_left[node]
            sp += 1
            stack[sp] = node_right[node]
            sp += 1

    return out[:n_out]


class BVH:
    """Immutable bounding volume hierarchy.

    Use ``BVH.build`` to construct one; the constructor only wraps arrays.

    Attributes:
        primitives: Primitives in leaf order
        node_min: Node bounds minimum corners, shape (N, 3)
        node_max: Node bounds maximum corners, shape (N, 3)
        node_left: Left child index, -1 for leaves
        node_right: Right child index, -1 for leaves
        node_start: First primitive index of a leaf
        node_count: Primitive count of a leaf, 0 for interior nodes

    Example:
        >>> boxes = [Box.cube((x, 0, 0), 1.0, Material()) for x in range(16)]
        >>> bvh = BVH.build(boxes)
        >>> candidates = bvh.traverse(np.array([5.0, 5.0, 0.0]), np.array([0.0, -1.0, 0.0]))
    """

    def __init__(self, primitives, node_min, node_max, node_left, node_right,
                 node_start, node_count):
        self.primitives = tuple(primitives)
        self.node_min = node_min
        self.node_max = node_max
        self.node_left = node_left
        self.node_right = node_right
        self.node_start = node_start
        self.node_count = node_count
        for arr in (node_min, node_max, node_left, node_right, node_start, node_count):
            arr.flags.writeable = False

    @classmethod
    def build(cls, primitives: List, max_leaf_size: int = MAX_LEAF_SIZE) -> "BVH":
        """Build a hierarchy by recursive median splits.

        Each node splits its primitives at the median centroid along the
        longest axis of the centroid bounds, down to leaves of at most
        ``max_leaf_size`` primitives.

        Args:
            primitives: Mutable list of boxes; reordered in place to leaf order
            max_leaf_size: Maximum primitives per leaf

        Returns:
            The built hierarchy
        """
        if max_leaf_size < 1:
            raise ValueError(f"max_leaf_size must be >= 1, got {max_leaf_size}")

        n = len(primitives)
        if n == 0:
            return cls(
                [], np.zeros((0, 3)), np.zeros((0, 3)),
                *(np.zeros(0, dtype=np.int64) for _ in range(4))
            )

        mins = np.array([p.min_bounds for p in primitives], dtype=np.float64)
        maxs = np.array([p.max_bounds for p in primitives], dtype=np.float64)
        centroids = (mins + maxs) * 0.5
        order = np.arange(n)

        node_min, node_max = [], []
        node_left, node_right, node_start, node_count = [], [], [], []

        def build_node(lo: int, hi: int) -> int:
            ids = order[lo:hi]
            idx = len(node_min)
            node_min.append(mins[ids].min(axis=0))
            node_max.append(maxs[ids].max(axis=0))
            node_left.append(-1)
            node_right.append(-1)
            node_start.append(lo)
            node_count.append(hi - lo)

            if hi - lo <= max_leaf_size:
                return idx

            c = centroids[ids]
            axis = int(np.argmax(c.max(axis=0) - c.min(axis=0)))
            order[lo:hi] = ids[np.argsort(c[:, axis], kind="stable")]

            mid = (lo + hi) // 2
            left = build_node(lo, mid)
            right = build_node(mid, hi)
            node_left[idx] = left
            node_right[idx] = right
            node_start[idx] = -1
            node_count[idx] = 0
            return idx

        build_node(0, n)

        primitives[:] = [primitives[i] for i in order]

        return cls(
            primitives,
            np.array(node_min, dtype=np.float64),
            np.array(node_max, dtype=np.float64),
            np.array(node_left, dtype=np.int64),
            np.array(node_right, dtype=np.int64),
            np.array(node_start, dtype=np.int64),
            np.array(node_count, dtype=np.int64),
        )

    @property
    def num_nodes(self) -> int:
        return self.node_min.shape[0]

    def __len__(self) -> int:
        return len(self.primitives)

    def traverse_indices(self, origin: np.ndarray, direction: np.ndarray) -> np.ndarray:
        """Indices into ``primitives`` of every leaf whose bounds the ray enters."""
        return _traverse_bvh(
            np.ascontiguousarray(origin, dtype=np.float64),
            np.ascontiguousarray(direction, dtype=np.float64),
            self.node_min, self.node_max,
            self.node_left, self.node_right,
            self.node_start, self.node_count,
            len(self.primitives),
        )

    def traverse(self, origin: np.ndarray, direction: np.ndarray) -> Sequence:
        """Candidate primitives for a ray, in no particular order."""
        primitives = self.primitives
        return [primitives[i] for i in self.traverse_indices(origin, direction)]
