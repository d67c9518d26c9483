"""Spatial acceleration structures."""

from .bvh import BVH, MAX_LEAF_SIZE

__all__ = ["BVH", "MAX_LEAF_SIZE"]
