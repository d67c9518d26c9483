"""Ray evaluation and frame rendering."""

from .tracer import RayTracer
from .renderer import FrameRenderer, render_rows, to_rgb8, save_image

__all__ = ["RayTracer", "FrameRenderer", "render_rows", "to_rgb8", "save_image"]
